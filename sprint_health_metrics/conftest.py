"""Test configuration and fixtures for Sprint Health Metrics."""

import openpyxl
import pytest

from .calculators.records import normalize_records
from .common_constants import DATA_SHEET, REQUIRED_COLUMNS, WINDOW_SHEET
from .config import create_default_options
from .test_classes import FauxSource, make_row


@pytest.fixture(name="base_settings")
def default_settings():
    """Default settings, as produced by an empty configuration."""
    return create_default_options()["settings"]


@pytest.fixture(name="sprint_rows")
def sample_sprint_rows():
    """Three sprints of raw rows, oldest first.

    * S1: 5 committed and accepted, 2 added -> predictability 100%
    * S2: 10 committed, 6 accepted, one 4 point item unfinished, one 3 point
      item removed -> predictability 60%
    * S3: 8 committed, 8 accepted -> predictability 100%
    """
    return [
        make_row("S1", 5, 5, "Accepted", "Committed", item_id="A-1"),
        make_row("S1", 0, 2, "New", "Added", item_id="A-2"),
        make_row("S2", 6, 6, "Accepted", "Committed", item_id="B-1"),
        make_row("S2", 4, 4, "In Progress", "Committed", item_id="B-2"),
        make_row("S2", 0, 3, "New", "Removed", item_id="B-3"),
        make_row("S3", 8, 8, "Accepted", "Committed", item_id="C-1"),
    ]


@pytest.fixture(name="sprint_source")
def sample_sprint_source(sprint_rows):
    """A fake source over `sprint_rows`."""
    return FauxSource(sprint_rows)


@pytest.fixture(name="sprint_records")
def sample_sprint_records(sprint_source):
    """Normalized records for `sprint_rows`."""
    return normalize_records(sprint_source.rows())


@pytest.fixture(name="workbook_path")
def sample_workbook_path(tmp_path, sprint_rows):
    """An .xlsx file with a Data sheet holding `sprint_rows`, with the
    points stored as text, plus an empty Window sheet.
    """
    workbook = openpyxl.Workbook()
    data = workbook.active
    data.title = DATA_SHEET
    headers = list(REQUIRED_COLUMNS)
    data.append(headers)
    for row in sprint_rows:
        values = dict(row)
        values["Story Points Committed"] = str(values["Story Points Committed"])
        values["Story Points"] = str(values["Story Points"])
        data.append([values[header] for header in headers])

    window = workbook.create_sheet(WINDOW_SHEET)
    window.append(["Sprint"])

    path = tmp_path / "metrics.xlsx"
    workbook.save(path)
    return path
