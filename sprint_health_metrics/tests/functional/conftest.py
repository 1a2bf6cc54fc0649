"""Pytest fixtures for functional tests."""

import openpyxl
import pytest

from sprint_health_metrics.common_constants import REQUIRED_COLUMNS
from sprint_health_metrics.config import create_default_options

NBSP = "\u00a0"

# (Sprint, Story Points Committed, Story Points, State, Outcome, Item ID),
# as they might arrive from a tracker export
TEAM_ROWS = [
    ("2025.S1", 5, 5, "Accepted", "Committed", "X-1"),
    ("2025.S2", "8", "8", "Accepted", "Committed", "P-1"),
    ("2025.S2", "5", "5", "In Progress", "Committed", "P-2"),
    ("2025.S2", None, "3", "New", "Added", "P-3"),
    ("", "13", "13", "Accepted", "Committed", "P-4"),
    ("2025.S2", 0, 2, "New", "Removed", "P-5"),
    ("2025.S3", 10, 10, "accepted ", "committed", "Q-1"),
    ("2025.S3" + NBSP, "3", "3", "Accepted", "Committed", "Q-2"),
    ("2025.S3", 0, "n/a", "New", "Added", "Q-3"),
]


def _write_team_workbook(path):
    workbook = openpyxl.Workbook()
    data = workbook.active
    data.title = "Data"

    # Exported headers sometimes carry trailing non-breaking spaces
    data.append([header + NBSP for header in REQUIRED_COLUMNS])
    for sprint, committed, points, state, outcome, item_id in TEAM_ROWS:
        data.append(
            [
                "Team A",
                sprint,
                "2025-01-01",
                "2025-01-14",
                "Story",
                item_id,
                committed,
                points,
                state,
                outcome,
            ]
        )

    window = workbook.create_sheet("Window")
    window.append(["Sprint"])
    for sprint in ("2025.S2", "2025.S3", "2025.s2"):
        window.append([sprint])

    workbook.save(path)


@pytest.fixture()
def team_workbook(tmp_path):
    """Path to a workbook of two analysed sprints plus one older sprint."""
    path = tmp_path / "team.xlsx"
    _write_team_workbook(path)
    return path


@pytest.fixture()
def functional_settings():
    """Default settings."""
    return create_default_options()["settings"]
