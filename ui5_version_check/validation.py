"""
Validation of declared UI5 versions against the version overview.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Union

from packaging.version import Version

from .interfaces import CatalogueSource
from .models import (
    Catalogue,
    MinorVersionLine,
    PatchEntry,
    ValidationMessage,
    ValidationOptions,
    ValidationResult,
    VersionSpecifier,
)
from .version_api import fetch_maintained_versions


logger = logging.getLogger(__name__)

_PATCH_PLACEHOLDER = re.compile(r"[xX]")
_WILDCARD_PATCH = re.compile(r"^\d+\.\d+\.\*$")
_COERCE = re.compile(r"(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def _coerce(value: str) -> Version:
    match = _COERCE.search(value)
    if not match:
        return Version("0.0.0")
    parts = [int(part) if part else 0 for part in match.groups()]
    return Version("{}.{}.{}".format(*parts))


def parse_version(value: str) -> VersionSpecifier:
    """Parse a declared UI5 version.

    ``x``/``X`` as patch placeholder is accepted as synonym for ``*``. Parsing
    never fails: unknown formats are coerced to ``0.0.0`` and will be reported
    as invalid during validation.

    Args:
        value: version string (e.g. 1.71.1, 1.120.*, 1.120.x)

    Returns:
        parsed version specifier
    """
    normalized = _PATCH_PLACEHOLDER.sub("*", value.strip(), count=1)
    return VersionSpecifier(
        raw_string=normalized,
        semantic_version=_coerce(normalized),
        is_wildcard_patch=bool(_WILDCARD_PATCH.match(normalized)),
    )


class VersionValidator:
    """Validate a single UI5 version against a catalogue."""

    def __init__(
        self,
        version: VersionSpecifier,
        catalogue: Catalogue,
        options: Optional[ValidationOptions] = None,
    ) -> None:
        self.version = version
        self.catalogue = catalogue
        self.options = options or ValidationOptions()
        self._valid = False
        self._messages: List[ValidationMessage] = []

    def validate(self) -> ValidationResult:
        self._valid = False
        self._messages = []
        if self.version.is_wildcard_patch:
            self._validate_patch_update_version()
        else:
            self._validate_specific_version()
        return ValidationResult(
            version=self.version.raw_string,
            valid=self._valid,
            messages=list(self._messages),
        )

    def _validate_specific_version(self) -> None:
        line = self.catalogue.minor_lines.get(self.version.major_minor_key)
        if line is None or line.eocp:
            self._add_invalid_msg()
            return
        if not self._check_eom(line):
            return

        patch = self.catalogue.patches.get(self.version.raw_string)
        if patch is None:
            semver = self.version.semantic_version
            self._messages.append(ValidationMessage(
                msg=f"Patch {semver.micro} of version {semver.major}.{semver.minor} is not available",
                type="error",
            ))
            return

        self._valid = self._check_remaining_days(patch)

    def _validate_patch_update_version(self) -> None:
        line = self.catalogue.minor_lines.get(self.version.raw_string)
        if line is None or line.eocp:
            self._add_invalid_msg()
            return
        if not self._check_eom(line):
            return

        self._valid = self._check_remaining_days(line)

    def _check_eom(self, line: MinorVersionLine) -> bool:
        if not line.eom:
            return True

        severity = "warn" if self.options.eom_allowed else "error"
        self._messages.append(ValidationMessage(msg="Version reached end of maintenance!", type=severity))
        return severity != "error"

    def _add_invalid_msg(self) -> None:
        self._messages.append(ValidationMessage(
            msg=f"Version {self.version.raw_string} is invalid or reached end of cloud provisioning!",
            type="error",
        ))

    def _check_remaining_days(self, entry: Union[MinorVersionLine, PatchEntry]) -> bool:
        remaining = entry.remaining_days_to_eocp
        # 0 remaining days is treated like "not in EOCP quarter"
        if not (entry.is_in_eocp_quarter and remaining):
            return True

        if remaining < self.options.allowed_days_before_eocp:
            self._messages.append(ValidationMessage(
                msg=f"End of cloud provisioning for version imminent ({remaining} days remaining)!",
                type="error",
            ))
            return False

        self._messages.append(ValidationMessage(
            msg=f"Version is near the end of cloud provisioning ({remaining} days remaining)!",
            type="warn",
        ))
        return True


def validate_version(
    version: str,
    catalogue: Catalogue,
    options: Optional[ValidationOptions] = None,
) -> ValidationResult:
    """Verify that the given version is still a valid UI5 version."""
    return VersionValidator(parse_version(version), catalogue, options).validate()


def validate_versions(
    versions: Iterable[str],
    catalogue: Catalogue,
    options: Optional[ValidationOptions] = None,
) -> List[ValidationResult]:
    return [validate_version(v, catalogue, options) for v in versions]


def fetch_and_validate_versions(
    versions: Iterable[str],
    options: Optional[ValidationOptions] = None,
    source: CatalogueSource = fetch_maintained_versions,
) -> List[ValidationResult]:
    """Fetch the version overview and validate all given versions against it."""
    catalogue = source()
    results = validate_versions(versions, catalogue, options)
    logger.info(
        "Validated %d versions, %d invalid",
        len(results),
        sum(1 for r in results if not r.valid),
    )
    return results
