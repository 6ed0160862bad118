"""
Access to the SAPUI5 version overview.

See https://ui5.sap.com/versionoverview.html
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

import requests

from .interfaces import CatalogueSource
from .lifecycle import LifecycleCache
from .models import Catalogue, MinorVersionLine, PatchEntry


logger = logging.getLogger(__name__)

VERSION_OVERVIEW_URL = "https://ui5.sap.com/versionoverview.json"
REQUEST_TIMEOUT = 30


class CatalogueError(ValueError):
    """The version overview could not be turned into a catalogue."""


class NoValidVersionError(LookupError):
    """No version line qualifies as replacement."""


def build_catalogue(payload: Dict, cache: Optional[LifecycleCache] = None) -> Catalogue:
    """Build a catalogue from a version overview payload.

    Args:
        payload: Parsed ``versionoverview.json`` with ``versions`` and ``patches``
        cache: Lifecycle cache shared by all entries. A new one is created if omitted.

    Returns:
        Catalogue of version lines and patches in the order of the payload
    """
    if not isinstance(payload, dict):
        raise CatalogueError("Unexpected version overview format")
    if cache is None:
        cache = LifecycleCache()

    patch_entries = payload.get("patches") or []
    versions = payload.get("versions") or []
    if not isinstance(patch_entries, list) or not isinstance(versions, list):
        raise CatalogueError("Unexpected version overview format")

    patches: Dict[str, PatchEntry] = {}
    try:
        for patch in patch_entries:
            if patch.get("removed") or patch.get("hidden"):
                continue
            patches[patch["version"]] = PatchEntry(
                version=patch["version"],
                eocp_quarter=patch.get("eocp", ""),
                lifecycle_cache=cache,
            )
    except (AttributeError, KeyError, TypeError) as e:
        raise CatalogueError(f"Malformed patch entry in version overview: {e!r}") from e

    if not versions:
        raise CatalogueError("No UI5 versions found in response")

    minor_lines: Dict[str, MinorVersionLine] = {}
    try:
        for entry in versions:
            minor_lines[entry["version"]] = MinorVersionLine(
                version=entry["version"],
                eocp_quarter=entry.get("eocp", ""),
                lts=bool(entry.get("lts")),
                eom=entry.get("support") != "Maintenance",
                lifecycle_cache=cache,
            )
    except (AttributeError, KeyError, TypeError) as e:
        raise CatalogueError(f"Malformed version entry in version overview: {e!r}") from e

    return Catalogue(minor_lines=minor_lines, patches=patches)


def fetch_maintained_versions(
    session: Optional[requests.Session] = None,
    url: str = VERSION_OVERVIEW_URL,
    cache: Optional[LifecycleCache] = None,
) -> Catalogue:
    """Fetch the list of maintained SAPUI5 versions including all valid patches."""
    session = session or requests.Session()
    logger.info("Fetching UI5 version overview from %s", url)
    with session.get(url, timeout=REQUEST_TIMEOUT) as response:
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as e:
            raise CatalogueError(f"Invalid version overview received from {url}") from e

    catalogue = build_catalogue(payload, cache)
    logger.info(
        "Found %d UI5 versions and %d patches",
        len(catalogue.minor_lines),
        len(catalogue.patches),
    )
    return catalogue


def latest_version(catalogue: Catalogue, lts: bool = False) -> str:
    """Return the newest version line that is neither out of maintenance nor deprovisioned.

    Args:
        catalogue: Catalogue to pick from, in version overview order
        lts: if ``True`` only LTS versions are considered

    Returns:
        Key of the version line (e.g. ``1.120.*``)
    """
    for version_id, line in catalogue.minor_lines.items():
        if line.eocp or line.eom:
            continue
        if lts and not line.lts:
            continue
        return version_id

    if lts:
        raise NoValidVersionError("No valid LTS UI5 version found")
    raise NoValidVersionError("No valid UI5 version found")


def fetch_latest_version(
    lts: bool = False,
    source: CatalogueSource = fetch_maintained_versions,
) -> str:
    """Fetch the version overview and return the latest valid version."""
    return latest_version(source(), lts)
