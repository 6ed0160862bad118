"""
UI5 Version Check

A tool for checking and fixing the UI5 versions declared in application manifests
against the maintained SAPUI5 versions.
"""

__version__ = "0.1.0"

from .cli import main
from .lifecycle import LifecycleCache, compute_lifecycle
from .manifest import UI5AppManifest
from .models import (
    Catalogue,
    ManifestCheckSummary,
    MinorVersionLine,
    PatchEntry,
    ValidationOptions,
    ValidationResult,
)
from .validation import (
    VersionValidator,
    fetch_and_validate_versions,
    parse_version,
    validate_version,
    validate_versions,
)
from .version_api import (
    CatalogueError,
    NoValidVersionError,
    fetch_latest_version,
    fetch_maintained_versions,
    latest_version,
)
from .version_check import UI5VersionCheck

__all__ = [
    "main",
    "Catalogue",
    "CatalogueError",
    "LifecycleCache",
    "ManifestCheckSummary",
    "MinorVersionLine",
    "NoValidVersionError",
    "PatchEntry",
    "UI5AppManifest",
    "UI5VersionCheck",
    "ValidationOptions",
    "ValidationResult",
    "VersionValidator",
    "compute_lifecycle",
    "fetch_and_validate_versions",
    "fetch_latest_version",
    "fetch_maintained_versions",
    "latest_version",
    "parse_version",
    "validate_version",
    "validate_versions",
]
