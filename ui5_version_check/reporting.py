"""
Reporting and export utilities.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Iterable

import pandas as pd

from .models import ManifestCheckSummary


logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = [
    "rel_path",
    "old_version",
    "new_version",
    "status",
    "status_icon",
    "status_text",
]

_COLUMN_TITLES = {
    "rel_path": "Manifest",
    "old_version": "Version",
    "new_version": "New Version",
    "status_icon": "Status",
    "status_text": "Info",
}


def summary_to_frame(rows: Iterable[ManifestCheckSummary]) -> pd.DataFrame:
    return pd.DataFrame([asdict(r) for r in rows], columns=SUMMARY_COLUMNS)


def format_summary(rows: Iterable[ManifestCheckSummary]) -> str:
    df = summary_to_frame(rows)
    if df.empty:
        return "No manifests checked"
    table = df.drop(columns=["status"]).rename(columns=_COLUMN_TITLES)
    return table.to_string(index=False)


def print_summary(rows: Iterable[ManifestCheckSummary]) -> None:
    rows = list(rows)
    logger.info("=" * 60)
    logger.info("UI5 VERSION CHECK")
    logger.info("=" * 60)
    for line in format_summary(rows).splitlines():
        logger.info(line)
    logger.info("-" * 60)
    df = summary_to_frame(rows)
    for status, count in df["status"].value_counts().items():
        logger.info("%s: %d", status, count)
    logger.info("=" * 60)


def export_summary_csv(rows: Iterable[ManifestCheckSummary], summary_file: Path) -> Path:
    summary_file = Path(summary_file)
    summary_file.parent.mkdir(parents=True, exist_ok=True)
    summary_to_frame(rows).to_csv(summary_file, index=False)
    return summary_file


def save_summary_json(rows: Iterable[ManifestCheckSummary], results_file: Path) -> Path:
    results_file = Path(results_file)
    results_file.parent.mkdir(parents=True, exist_ok=True)
    with open(results_file, 'w', encoding='utf-8') as f:
        json.dump([asdict(r) for r in rows], f, indent=2, ensure_ascii=False)
    return results_file
