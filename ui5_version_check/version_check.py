"""
Check (and optionally fix) the UI5 versions of a set of application manifests.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from tqdm import tqdm

from .interfaces import CatalogueSource, ManifestRecord
from .manifest import UI5AppManifest
from .models import Catalogue, ManifestCheckSummary, ValidationOptions, ValidationResult
from .validation import VersionValidator
from .version_api import fetch_maintained_versions, latest_version


logger = logging.getLogger(__name__)


class UI5VersionCheck:
    """Validate the UI5 versions declared in manifest files."""

    def __init__(
        self,
        base_path: Path,
        manifest_paths: Iterable[str],
        fix_outdated: bool = False,
        use_lts: bool = True,
        eom_allowed: bool = True,
        allowed_days_before_eocp: int = 30,
        catalogue_source: Optional[CatalogueSource] = None,
        show_progress: bool = False,
    ):
        """Initialize the version check.

        Args:
            base_path: Root folder the manifest paths are relative to
            manifest_paths: Relative paths of the ``manifest.json`` files
            fix_outdated: Replace invalid versions with the latest valid one
            use_lts: Only consider LTS versions as replacement
            eom_allowed: Treat versions out of maintenance as warning instead of error
            allowed_days_before_eocp: Days before EOCP from which on a version is invalid
            catalogue_source: Provider of the version catalogue (default: version overview fetch)
            show_progress: Show a progress bar while checking manifests
        """
        self.base_path = Path(base_path)
        self.manifest_paths = list(manifest_paths)
        self.fix_outdated = fix_outdated
        self.use_lts = use_lts
        self.options = ValidationOptions(
            allowed_days_before_eocp=allowed_days_before_eocp,
            eom_allowed=eom_allowed,
        )
        self.catalogue_source = catalogue_source or fetch_maintained_versions
        self.show_progress = show_progress

        self._reset()

    def _reset(self) -> None:
        self._summary: List[ManifestCheckSummary] = []
        self._updated_files: List[str] = []
        self._error_count = 0
        self._new_version: Optional[str] = None
        self._catalogue: Optional[Catalogue] = None

    @property
    def has_errors(self) -> bool:
        return self._error_count > 0

    @property
    def summary(self) -> List[ManifestCheckSummary]:
        return self._summary

    @property
    def updated_files(self) -> List[str]:
        return self._updated_files

    def run(self) -> List[ManifestCheckSummary]:
        """Fetch the version catalogue and check all manifests."""
        self._reset()
        catalogue = self.catalogue_source()
        manifests = [UI5AppManifest.load(self.base_path, p) for p in self.manifest_paths]
        return self.check(manifests, catalogue)

    def check(
        self, manifests: Iterable[ManifestRecord], catalogue: Catalogue
    ) -> List[ManifestCheckSummary]:
        """Check the given manifests against an already available catalogue."""
        self._reset()
        self._catalogue = catalogue

        for manifest in tqdm(manifests, desc="Checking manifests", disable=not self.show_progress):
            if manifest.version is None:
                logger.info(
                    "No section 'sap.platform.cf/ui5VersionNumber' found in %s. Skipping check",
                    manifest.rel_path,
                )
                continue
            self._check_manifest(manifest)
            self._summary.append(manifest.get_check_summary())

        return self._summary

    @property
    def new_version(self) -> str:
        """Replacement version for invalid versions, determined once per run."""
        if self._new_version is None:
            if self._catalogue is None:
                raise RuntimeError("No version catalogue available")
            self._new_version = latest_version(self._catalogue, self.use_lts)
            logger.info("Using %s as replacement version", self._new_version)
        return self._new_version

    def _check_manifest(self, manifest: ManifestRecord) -> None:
        result = self._validate_version(manifest)

        if self.fix_outdated:
            if not result.valid:
                manifest.update_version(self.new_version, self.use_lts)
                self._updated_files.append(manifest.rel_path)
            else:
                manifest.set_no_change_status(result.messages)
        else:
            if result.valid:
                manifest.set_no_change_status(result.messages)
            else:
                self._error_count += 1
                manifest.set_error_status(result.messages)

    def _validate_version(self, manifest: ManifestRecord) -> ValidationResult:
        return VersionValidator(manifest.version, self._catalogue, self.options).validate()
