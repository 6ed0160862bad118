#!/usr/bin/env python3
"""
Example script showing how to use the ui5-version-check library.
"""

from pathlib import Path

from ui5_version_check import (
    UI5VersionCheck,
    ValidationOptions,
    fetch_maintained_versions,
    latest_version,
    validate_versions,
)
from ui5_version_check.reporting import format_summary


def example_validate_versions():
    """Example: Validate a list of versions against the version overview."""
    print("="*60)
    print("Example 1: Validate Versions")
    print("="*60)

    catalogue = fetch_maintained_versions()
    options = ValidationOptions(allowed_days_before_eocp=60, eom_allowed=False)

    for result in validate_versions(["1.120.*", "1.71.50", "1.96.x"], catalogue, options):
        state = "valid" if result.valid else "invalid"
        print(f"\n{result.version}: {state}")
        for message in result.messages:
            print(f"  [{message.type}] {message.msg}")


def example_latest_version():
    """Example: Determine the latest maintained (LTS) version."""
    print("\n" + "="*60)
    print("Example 2: Latest Versions")
    print("="*60)

    catalogue = fetch_maintained_versions()
    print(f"\nLatest version: {latest_version(catalogue)}")
    print(f"Latest LTS version: {latest_version(catalogue, lts=True)}")


def example_check_project(base_path: Path):
    """Example: Check all manifests of a project without modifying them."""
    print("\n" + "="*60)
    print("Example 3: Check Project")
    print("="*60)

    manifest_paths = sorted(
        p.relative_to(base_path).as_posix() for p in base_path.glob("**/manifest.json")
    )
    version_check = UI5VersionCheck(
        base_path=base_path,
        manifest_paths=manifest_paths,
        eom_allowed=True,
        use_lts=False,
    )
    version_check.run()

    print(format_summary(version_check.summary))
    print(f"\nErrors detected: {version_check.has_errors}")


if __name__ == "__main__":
    import sys

    print("UI5 Version Check - Example Usage")
    print("="*60)
    print("\nNOTE: These examples require network access.")

    try:
        example_validate_versions()
        example_latest_version()
        example_check_project(Path(sys.argv[1]) if len(sys.argv) > 1 else Path("."))

        print("\n" + "="*60)
        print("Examples completed successfully!")
        print("="*60)

    except Exception as e:
        print(f"\nError running examples: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)
