import json
import shutil
from datetime import datetime, timezone
from pathlib import Path

import pytest

from ui5_version_check.lifecycle import LifecycleCache
from ui5_version_check.version_api import build_catalogue


FIXTURES_DIR = Path(__file__).parent / "fixtures"

MANIFEST_PATHS = [
    "app/rating/webapp/manifest.json",
    "app/chatbot/webapp/manifest.json",
    "app/catalog/webapp/manifest.json",
    "app/admin/webapp/manifest.json",
    "app/apitester/webapp/manifest.json",
]


def fixed_clock(*args):
    now = datetime(*args, tzinfo=timezone.utc)
    return lambda: now


@pytest.fixture
def clock_at():
    return fixed_clock


@pytest.fixture
def overview_payload():
    with open(FIXTURES_DIR / "versionoverview.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def lifecycle_cache():
    return LifecycleCache(clock=fixed_clock(2025, 3, 15))


@pytest.fixture
def catalogue(overview_payload, lifecycle_cache):
    return build_catalogue(overview_payload, lifecycle_cache)


@pytest.fixture
def manifest_paths():
    return list(MANIFEST_PATHS)


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    project = tmp_path / "sample-project"
    shutil.copytree(FIXTURES_DIR / "sample-project", project)
    return project
