"""
Core data models for UI5 version checks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Dict, List, Optional

from packaging.version import Version

if TYPE_CHECKING:
    from .lifecycle import LifecycleCache


# Remaining days value for a quarter that has not started yet or is already over
NOT_APPLICABLE = -1


@dataclass(frozen=True)
class LifecycleFact:
    """EOCP state of an end of cloud provisioning quarter at a point in time."""

    quarter_key: str
    determined: bool
    has_reached_eocp: bool
    is_in_final_quarter: bool
    days_remaining: int
    quarter_start: Optional[datetime]
    quarter_end: Optional[datetime]


class _LifecycleMixin:
    """Lifecycle accessors shared by version lines and patches."""

    eocp_quarter: str
    lifecycle_cache: "LifecycleCache"

    @property
    def lifecycle(self) -> LifecycleFact:
        return self.lifecycle_cache.lookup(self.eocp_quarter)

    @property
    def eocp(self) -> bool:
        """``True`` if the version has reached end of cloud provisioning."""
        return self.lifecycle.has_reached_eocp

    @property
    def eocp_date(self) -> Optional[datetime]:
        # NOTE: the actual removal happens roughly one week after this date
        return self.lifecycle.quarter_end

    @property
    def is_in_eocp_quarter(self) -> bool:
        return self.lifecycle.is_in_final_quarter

    @property
    def remaining_days_to_eocp(self) -> int:
        """Remaining days until EOCP, ``-1`` if the EOCP quarter is not the current one."""
        return self.lifecycle.days_remaining


@dataclass(frozen=True)
class MinorVersionLine(_LifecycleMixin):
    """A UI5 version line (e.g. ``1.120.*``) from the version overview."""

    version: str
    eocp_quarter: str
    lts: bool
    eom: bool
    lifecycle_cache: "LifecycleCache" = field(repr=False, compare=False)


@dataclass(frozen=True)
class PatchEntry(_LifecycleMixin):
    """A concrete UI5 patch (e.g. ``1.120.1``) from the version overview."""

    version: str
    eocp_quarter: str
    lifecycle_cache: "LifecycleCache" = field(repr=False, compare=False)


@dataclass(frozen=True)
class Catalogue:
    """Maintained UI5 versions and their patches.

    ``minor_lines`` is keyed by ``<major>.<minor>.*`` and ``patches`` by the
    exact patch version. Both keep the order of the version overview, which
    lists the newest versions first.
    """

    minor_lines: Dict[str, MinorVersionLine]
    patches: Dict[str, PatchEntry]


@dataclass(frozen=True)
class VersionSpecifier:
    """A declared UI5 version (e.g. ``1.120.1`` or ``1.120.*``)."""

    raw_string: str
    semantic_version: Version
    is_wildcard_patch: bool

    @property
    def major_minor_key(self) -> str:
        return f"{self.semantic_version.major}.{self.semantic_version.minor}.*"


@dataclass(frozen=True)
class ValidationMessage:
    """Message that occurred during version validation."""

    msg: str
    type: str  # "warn" | "error"


@dataclass(frozen=True)
class ValidationResult:
    """Validation result for a UI5 version."""

    version: str
    valid: bool
    messages: List[ValidationMessage] = field(default_factory=list)


@dataclass(frozen=True)
class ValidationOptions:
    """Configurable options for version validation."""

    allowed_days_before_eocp: int = 30
    eom_allowed: bool = True


@dataclass(frozen=True)
class ManifestCheckSummary:
    """Check outcome of a single manifest."""

    rel_path: str
    old_version: str
    new_version: str
    status: str
    status_icon: str
    status_text: str
