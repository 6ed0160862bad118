"""
Interfaces for catalogue sources and manifest records.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from .models import Catalogue, ManifestCheckSummary, ValidationMessage, VersionSpecifier


class CatalogueSource(Protocol):
    """Produce a catalogue of maintained UI5 versions and patches."""

    def __call__(self) -> Catalogue:
        ...


class ManifestRecord(Protocol):
    """A manifest with its declared UI5 version and a way to persist a new one."""

    rel_path: str
    version: Optional[VersionSpecifier]

    def update_version(self, version: str, is_lts: bool) -> None:
        ...

    def set_no_change_status(self, messages: List[ValidationMessage]) -> None:
        ...

    def set_error_status(self, messages: List[ValidationMessage]) -> None:
        ...

    def get_check_summary(self) -> ManifestCheckSummary:
        ...
