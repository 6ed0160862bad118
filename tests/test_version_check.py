"""End-to-end tests of the manifest version check against a version overview snapshot."""

import copy
import json
from pathlib import Path

import pytest

from ui5_version_check.manifest import UI5AppManifest
from ui5_version_check.version_api import NoValidVersionError, build_catalogue
from ui5_version_check.version_check import UI5VersionCheck


def statuses(version_check):
    return [row.status for row in version_check.summary]


def read_version(project: Path, rel_path: str) -> str:
    content = json.loads((project / rel_path).read_text(encoding="utf-8"))
    return content["sap.platform.cf"]["ui5VersionNumber"]


def test_check_with_eom_allowed(manifest_paths, sample_project, catalogue):
    version_check = UI5VersionCheck(
        base_path=sample_project,
        manifest_paths=manifest_paths,
        use_lts=False,
        eom_allowed=True,
        catalogue_source=lambda: catalogue,
    )

    version_check.run()

    assert version_check.has_errors
    assert statuses(version_check) == ["ok", "warn", "error", "error", "error"]
    assert version_check.updated_files == []
    assert version_check.summary[2].status_text == (
        "Version 1.132.* is invalid or reached end of cloud provisioning!"
    )
    assert version_check.summary[3].status_text == (
        "Version reached end of maintenance!<br/>"
        "End of cloud provisioning for version imminent (16 days remaining)!"
    )


def test_check_with_eom_not_allowed(manifest_paths, sample_project, catalogue):
    version_check = UI5VersionCheck(
        base_path=sample_project,
        manifest_paths=manifest_paths,
        use_lts=True,
        eom_allowed=False,
        catalogue_source=lambda: catalogue,
    )

    version_check.run()

    assert version_check.has_errors
    assert statuses(version_check).count("ok") == 1
    assert statuses(version_check).count("warn") == 0
    assert statuses(version_check).count("error") == 4


def test_manifest_without_version_is_skipped(manifest_paths, sample_project, catalogue):
    version_check = UI5VersionCheck(
        base_path=sample_project,
        manifest_paths=["app/legacy/webapp/manifest.json", manifest_paths[0]],
        catalogue_source=lambda: catalogue,
    )

    version_check.run()

    assert [row.rel_path for row in version_check.summary] == [manifest_paths[0]]
    assert not version_check.has_errors


def test_fix_outdated_versions(manifest_paths, sample_project, catalogue):
    version_check = UI5VersionCheck(
        base_path=sample_project,
        manifest_paths=manifest_paths,
        fix_outdated=True,
        use_lts=False,
        eom_allowed=True,
        catalogue_source=lambda: catalogue,
    )

    version_check.run()

    assert not version_check.has_errors
    assert version_check.updated_files == manifest_paths[2:]
    assert statuses(version_check) == ["ok", "warn", "ok", "ok", "ok"]
    for rel_path in manifest_paths[2:]:
        assert read_version(sample_project, rel_path) == "1.134.*"
    assert read_version(sample_project, manifest_paths[1]) == "1.133.*"

    row = version_check.summary[4]
    assert row.old_version == "1.120.*"
    assert row.new_version == "1.134.*"
    assert row.status_text == "Version has been updated to latest version"


def test_fix_outdated_versions_with_lts(manifest_paths, sample_project, catalogue):
    version_check = UI5VersionCheck(
        base_path=sample_project,
        manifest_paths=manifest_paths,
        fix_outdated=True,
        catalogue_source=lambda: catalogue,
    )

    version_check.run()

    assert {row.new_version for row in version_check.summary[2:]} == {"1.130.*"}
    assert version_check.summary[2].status_text == "Version has been updated to latest LTS version"


def test_fix_without_lts_candidate_aborts(manifest_paths, sample_project, overview_payload, lifecycle_cache):
    payload = copy.deepcopy(overview_payload)
    for version in payload["versions"]:
        version["lts"] = False
    catalogue = build_catalogue(payload, lifecycle_cache)

    version_check = UI5VersionCheck(
        base_path=sample_project,
        manifest_paths=manifest_paths,
        fix_outdated=True,
        catalogue_source=lambda: catalogue,
    )

    with pytest.raises(NoValidVersionError, match="No valid LTS UI5 version found"):
        version_check.run()
    # processing stops at the first manifest that needed a fix
    assert len(version_check.summary) == 2


def test_fix_without_candidate_aborts(manifest_paths, sample_project, overview_payload, lifecycle_cache):
    payload = copy.deepcopy(overview_payload)
    for version in payload["versions"]:
        version["support"] = "Out of maintenance"
    catalogue = build_catalogue(payload, lifecycle_cache)

    version_check = UI5VersionCheck(
        base_path=sample_project,
        manifest_paths=manifest_paths,
        fix_outdated=True,
        use_lts=False,
        catalogue_source=lambda: catalogue,
    )

    with pytest.raises(NoValidVersionError, match="^No valid UI5 version found$"):
        version_check.run()


def test_replacement_is_selected_once_per_run(manifest_paths, sample_project, catalogue, monkeypatch):
    from ui5_version_check import version_check as module

    calls = []
    original = module.latest_version

    def counting_latest_version(cat, lts=False):
        calls.append(lts)
        return original(cat, lts)

    monkeypatch.setattr(module, "latest_version", counting_latest_version)
    version_check = UI5VersionCheck(
        base_path=sample_project,
        manifest_paths=manifest_paths,
        fix_outdated=True,
        use_lts=False,
        catalogue_source=lambda: catalogue,
    )

    originals = {p: (sample_project / p).read_text(encoding="utf-8") for p in manifest_paths}

    version_check.run()
    assert calls == [False]

    for rel_path, content in originals.items():
        (sample_project / rel_path).write_text(content, encoding="utf-8")
    version_check.run()
    assert calls == [False, False]


def test_run_resets_previous_results(manifest_paths, sample_project, catalogue):
    version_check = UI5VersionCheck(
        base_path=sample_project,
        manifest_paths=manifest_paths,
        use_lts=False,
        catalogue_source=lambda: catalogue,
    )

    version_check.run()
    version_check.run()

    assert len(version_check.summary) == 5


def test_check_with_preloaded_manifests(manifest_paths, sample_project, catalogue):
    manifests = [UI5AppManifest.load(sample_project, p) for p in manifest_paths[:2]]
    version_check = UI5VersionCheck(base_path=sample_project, manifest_paths=[])

    summary = version_check.check(manifests, catalogue)

    assert [row.status for row in summary] == ["ok", "warn"]


def test_check_resets_previous_results(manifest_paths, sample_project, catalogue):
    manifests = [UI5AppManifest.load(sample_project, p) for p in manifest_paths]
    version_check = UI5VersionCheck(base_path=sample_project, manifest_paths=[], use_lts=False)

    version_check.check(manifests, catalogue)
    summary = version_check.check(manifests, catalogue)

    assert len(summary) == 5
    assert statuses(version_check).count("error") == 3
    assert version_check._error_count == 3


def test_missing_manifest_aborts_run(manifest_paths, sample_project, catalogue):
    version_check = UI5VersionCheck(
        base_path=sample_project,
        manifest_paths=manifest_paths + ["app/missing/webapp/manifest.json"],
        catalogue_source=lambda: catalogue,
    )

    with pytest.raises(FileNotFoundError):
        version_check.run()
