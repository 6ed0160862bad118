"""
Reading and updating the UI5 version of ``manifest.json`` files.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import List, Optional

from .models import ManifestCheckSummary, ValidationMessage, VersionSpecifier
from .validation import parse_version


logger = logging.getLogger(__name__)

STATUS_ICONS = {"ok": "✅", "warn": "⚠️", "error": "❌"}
STATUS_TEXT_SEPARATOR = "<br/>"

# Only the value is replaced so that the formatting of the file stays untouched
_UI5_VERSION_NUMBER = re.compile(
    r'("sap\.platform\.cf"\s*:\s*\{[^{}]*?"ui5VersionNumber"\s*:\s*")([^"]*)(")'
)


class UI5AppManifest:
    """A UI5 application manifest and the check status of its UI5 version."""

    def __init__(self, rel_path: str, full_path: Path, content: str) -> None:
        self.rel_path = rel_path
        self.full_path = Path(full_path)
        self.content = content
        self.new_version = "-"
        self.version_status = "ok"
        self.version_status_text = "-"
        self.version = self._determine_version()

    @classmethod
    def load(cls, base_path: Path, rel_path: str) -> "UI5AppManifest":
        full_path = Path(base_path) / rel_path
        with open(full_path, 'r', encoding='utf-8') as f:
            content = f.read()
        return cls(rel_path, full_path, content)

    def _determine_version(self) -> Optional[VersionSpecifier]:
        manifest_json = json.loads(self.content)
        platform = manifest_json.get("sap.platform.cf") if isinstance(manifest_json, dict) else None
        version_str = platform.get("ui5VersionNumber") if isinstance(platform, dict) else None
        if not isinstance(version_str, str) or not version_str.strip():
            self.version_status_text = "No section 'sap.platform.cf/ui5VersionNumber' found. Skipping check"
            return None
        return parse_version(version_str)

    def update_version(self, version: str, is_lts: bool) -> None:
        """Write the given version into the ``sap.platform.cf`` section of the manifest."""
        content, count = _UI5_VERSION_NUMBER.subn(
            lambda m: f"{m.group(1)}{version}{m.group(3)}", self.content, count=1
        )
        if count == 0:
            raise ValueError(f"Could not locate 'sap.platform.cf/ui5VersionNumber' in {self.full_path}")

        with open(self.full_path, 'w', encoding='utf-8') as f:
            f.write(content)
        logger.info("Updated UI5 version in %s to %s", self.rel_path, version)

        self.content = content
        self.new_version = version
        self.version_status = "ok"
        self.version_status_text = (
            "Version has been updated to latest LTS version"
            if is_lts
            else "Version has been updated to latest version"
        )

    def set_no_change_status(self, messages: List[ValidationMessage]) -> None:
        if messages:
            self.version_status = "warn"
            self.version_status_text = STATUS_TEXT_SEPARATOR.join(m.msg for m in messages)
        else:
            self.version_status = "ok"
            self.version_status_text = "No change required"

    def set_error_status(self, messages: List[ValidationMessage]) -> None:
        self.version_status = "error"
        self.version_status_text = STATUS_TEXT_SEPARATOR.join(m.msg for m in messages)

    def get_check_summary(self) -> ManifestCheckSummary:
        return ManifestCheckSummary(
            rel_path=self.rel_path,
            old_version=self.version.raw_string if self.version else "-",
            new_version=self.new_version,
            status=self.version_status,
            status_icon=STATUS_ICONS[self.version_status],
            status_text=self.version_status_text,
        )
