"""Tests for the sprint health classifier in Sprint Health Metrics."""

import os

import pandas as pd
import pytest

from ..columns import ITEM_COLUMNS, SPRINT_HEALTH_COLUMNS
from ..common_constants import (
    REASON_COMMITTED_NOT_ACCEPTED,
    REASON_SCOPE_ADDED,
    REASON_SCOPE_REMOVED,
)
from ..test_classes import FauxSource, make_row
from ..utils import extend_dict
from .health import (
    SprintHealthCalculator,
    classify_sprints,
    contribution_reasons,
    item_contributions,
    row_highlights,
)
from .records import RecordsCalculator, normalize_records
from .sprints import SprintMetricsCalculator, calculate_sprint_metrics


@pytest.fixture(name="health_results")
def fixture_health_results(sprint_records):
    """Results of the calculators the health classifier depends on."""
    return {
        RecordsCalculator: sprint_records,
        SprintMetricsCalculator: calculate_sprint_metrics(
            sprint_records, ["S1", "S2", "S3"]
        ),
    }


def run_health(records, window, threshold):
    sprint_metrics = calculate_sprint_metrics(records, window)
    summary = classify_sprints(sprint_metrics, threshold)
    not_good, good = item_contributions(records, sprint_metrics, summary)
    return summary, not_good, good, row_highlights(records, summary)


def test_columns(sprint_source, base_settings, health_results):
    """The result carries the summary, both item reports and the highlights."""
    result = SprintHealthCalculator(sprint_source, base_settings, health_results).run()

    assert list(result["summary"].columns) == SPRINT_HEALTH_COLUMNS
    assert list(result["not_good_items"].columns) == ITEM_COLUMNS
    assert list(result["good_items"].columns) == ITEM_COLUMNS
    assert isinstance(result["highlights"], dict)


def test_sample_sprints(sprint_source, base_settings, health_results):
    """At the default threshold only the 60% sprint is Not Good."""
    result = SprintHealthCalculator(sprint_source, base_settings, health_results).run()

    summary = result["summary"]
    assert list(summary["Sprint"]) == ["S1", "S2", "S3"]
    assert list(summary["Status"]) == ["Good", "Not Good", "Good"]
    assert summary.loc[1, "CountRemoved"] == 1
    assert summary.loc[1, "PtsUnfinishedCommitted"] == 4

    not_good = result["not_good_items"]
    assert list(not_good["ItemID"]) == ["B-2", "B-3"]
    assert list(not_good["Reason"]) == [
        REASON_COMMITTED_NOT_ACCEPTED,
        REASON_SCOPE_REMOVED,
    ]
    assert list(not_good["ContributionPct"]) == pytest.approx([0.4, 0.3])

    good = result["good_items"]
    assert list(good["ItemID"]) == ["A-2"]
    assert good.loc[0, "Reason"] == REASON_SCOPE_ADDED
    assert good.loc[0, "ContributionPct"] == pytest.approx(0.4)

    assert result["highlights"] == {5: "unfinished", 6: "removed"}


def test_threshold_is_inclusive(sprint_records):
    """A sprint exactly at the threshold is Good."""
    summary, not_good, good, highlights = run_health(
        sprint_records, ["S1", "S2", "S3"], 0.6
    )

    assert list(summary["Status"]) == ["Good", "Good", "Good"]
    assert not_good.empty
    assert list(good["ItemID"]) == ["A-2", "B-2", "B-3"]
    assert highlights == {}


def test_threshold_outside_unit_range(sprint_records):
    """Thresholds are not validated: above 1 nothing is Good, below 0
    everything is.
    """
    summary, not_good, good, _ = run_health(sprint_records, ["S1", "S2", "S3"], 1.5)
    assert (summary["Status"] == "Not Good").all()
    assert good.empty
    assert list(not_good["ItemID"]) == ["A-2", "B-2", "B-3"]

    summary, not_good, _, _ = run_health(sprint_records, ["S1", "S2", "S3"], -1)
    assert (summary["Status"] == "Good").all()
    assert not_good.empty


def test_reports_are_disjoint(sprint_records):
    """Every contributing item appears in exactly one report."""
    _, not_good, good, _ = run_health(sprint_records, ["S1", "S2", "S3"], 0.9)

    assert not set(not_good["ItemID"]) & set(good["ItemID"])
    assert len(not_good.index) + len(good.index) == 3


def test_only_window_sprints_contribute(sprint_records):
    """Items of sprints outside the window appear in neither report."""
    summary, not_good, good, highlights = run_health(sprint_records, ["S2"], 0.9)

    assert list(summary["Sprint"]) == ["S2"]
    assert list(not_good["ItemID"]) == ["B-2", "B-3"]
    assert good.empty
    assert set(highlights) == {5, 6}


def test_removed_beats_unfinished():
    """An item matching several rules gets the first rule's reason and
    numerator.
    """
    records = normalize_records(
        FauxSource(
            [
                make_row("S1", 5, 5, "Accepted", "Committed", item_id="X-1"),
                make_row("S1", 3, 2, "New", "Removed", item_id="X-2"),
                make_row("S1", 4, 1, "New", "added", item_id="X-3"),
            ]
        ).rows()
    )

    reason, numerator = contribution_reasons(records)

    assert pd.isna(reason[0])
    assert reason[1] == REASON_SCOPE_REMOVED
    assert numerator[1] == 2
    assert reason[2] == REASON_SCOPE_ADDED
    assert numerator[2] == 1

    _, not_good, _, highlights = run_health(records, ["S1"], 1.5)
    assert list(not_good["ContributionPct"]) == pytest.approx([0.4, 0.2])
    assert highlights == {3: "removed", 4: "added"}


def test_accepted_removed_item_is_removed_scope():
    """An accepted item that was removed mid-sprint counts as removed scope."""
    records = normalize_records(
        FauxSource([make_row("S1", 3, 3, "Accepted", "Removed", item_id="Z-1")]).rows()
    )

    reason, numerator = contribution_reasons(records)

    assert list(reason) == [REASON_SCOPE_REMOVED]
    assert list(numerator) == [3]


def test_zero_commitment_contribution():
    """Contributions in a sprint with no committed points are 0."""
    records = normalize_records(
        FauxSource([make_row("S1", 0, 3, "New", "Added", item_id="Y-1")]).rows()
    )

    summary, not_good, _, _ = run_health(records, ["S1"], 0.9)

    assert summary.loc[0, "PerSprintPredictability"] == 0
    assert summary.loc[0, "Status"] == "Not Good"
    assert list(not_good["ContributionPct"]) == [0.0]


def test_write_data_files(sprint_source, base_settings, health_results, tmp_path):
    """The summary and both item reports go to their data files."""
    settings = extend_dict(
        base_settings,
        {
            "sprint_health_data": [str(tmp_path / "health.csv")],
            "not_good_items_data": [str(tmp_path / "not-good.json")],
            "good_items_data": [str(tmp_path / "good.csv")],
        },
    )
    calculator = SprintHealthCalculator(sprint_source, settings, health_results)
    health_results[SprintHealthCalculator] = calculator.run()

    calculator.write()

    health = pd.read_csv(tmp_path / "health.csv")
    assert list(health["Status"]) == ["Good", "Not Good", "Good"]

    not_good = pd.read_json(tmp_path / "not-good.json", orient="records")
    assert list(not_good["ItemID"]) == ["B-2", "B-3"]

    good = pd.read_csv(tmp_path / "good.csv")
    assert list(good["ItemID"]) == ["A-2"]


def test_write_chart(sprint_source, base_settings, health_results, tmp_path):
    """Test writing the predictability chart."""
    output_file = str(tmp_path / "predictability.png")
    settings = extend_dict(
        base_settings,
        {
            "predictability_chart": output_file,
            "predictability_chart_title": "Predictability",
        },
    )
    calculator = SprintHealthCalculator(sprint_source, settings, health_results)
    health_results[SprintHealthCalculator] = calculator.run()

    calculator.write()

    assert os.path.exists(output_file)


def test_no_chart_for_empty_window(base_settings, tmp_path):
    """No chart is drawn without sprints."""
    output_file = str(tmp_path / "predictability.png")
    settings = extend_dict(base_settings, {"predictability_chart": output_file})
    calculator = SprintHealthCalculator(None, settings, {})

    calculator.write_chart(
        pd.DataFrame(columns=SPRINT_HEALTH_COLUMNS), output_file
    )

    assert not os.path.exists(output_file)
