"""Per-sprint metrics for Sprint Health Metrics.

This module groups work-item records by sprint and computes the point sums,
ratios and counters of every sprint in the analysis window.
"""

import logging

import pandas as pd

from ..calculator import Calculator
from ..columns import COUNT_COLUMNS, SPRINT_METRICS_COLUMNS
from ..common_constants import (
    OUTCOME_ADDED,
    OUTCOME_COMMITTED,
    OUTCOME_REMOVED,
    STATE_ACCEPTED,
)
from ..utils import text_key, write_data_files
from .records import RecordsCalculator
from .window import SprintWindowCalculator

logger = logging.getLogger(__name__)


class SprintMetricsCalculator(Calculator):
    """Build a DataFrame indexed by `Sprint`, one row per window sprint, with
    the columns in `SPRINT_METRICS_COLUMNS`.
    """

    def run(self):
        records = self.get_result(RecordsCalculator)
        window = self.get_result(SprintWindowCalculator)

        logger.debug("Aggregating %d sprints", len(window))
        return calculate_sprint_metrics(records, window)

    def write(self):
        output_files = self.settings.get("sprint_metrics_data")
        if not output_files:
            logger.debug("No output file specified for sprint metrics data")
            return

        write_data_files(
            self.get_result().reset_index(), output_files, "SprintCalc", "sprint metrics"
        )


def ratio(numerator, denominator):
    """Element-wise `numerator / denominator`, 0 where the denominator is not
    positive.
    """
    return (numerator / denominator.where(denominator > 0)).fillna(0.0)


def record_flags(records):
    """Boolean Series for the outcome and state tests shared by the
    aggregator and the health classifier.
    """
    outcome = records["Outcome"].map(text_key)
    accepted = records["State"].map(text_key) == STATE_ACCEPTED
    return {
        "committed": outcome == OUTCOME_COMMITTED,
        "added": outcome == OUTCOME_ADDED,
        "removed": outcome == OUTCOME_REMOVED,
        "accepted": accepted,
        "unfinished": (records["CommittedPts"] > 0) & ~accepted,
    }


def calculate_sprint_metrics(records, window):
    """Aggregate `records` for each sprint id in `window`.

    Sprint ids are matched case-insensitively. Sprints with no records get
    all-zero metrics.
    """
    flags = record_flags(records)
    committed_pts = records["CommittedPts"]
    story_points = records["StoryPoints"]

    contributions = pd.DataFrame(
        {
            "CommittedPts": committed_pts.where(flags["committed"], 0.0),
            "AcceptedPts": story_points.where(flags["accepted"], 0.0),
            "AddedPts": story_points.where(flags["added"], 0.0),
            "RemovedPts": story_points.where(flags["removed"], 0.0),
            "CountAdded": flags["added"].astype(int),
            "CountRemoved": flags["removed"].astype(int),
            "CountUnfinishedCommitted": flags["unfinished"].astype(int),
            "PtsUnfinishedCommitted": committed_pts.where(flags["unfinished"], 0.0),
        },
        index=records.index,
    )

    window_keys = [text_key(sprint) for sprint in window]
    totals = (
        contributions.groupby(records["Sprint"].map(text_key))
        .sum()
        .reindex(window_keys, fill_value=0)
    )
    totals.index = pd.Index(window, name="Sprint")

    totals["PerSprintPredictability"] = ratio(
        totals["AcceptedPts"], totals["CommittedPts"]
    )
    totals["PerSprintScopeChange"] = ratio(
        totals["AddedPts"] + totals["RemovedPts"], totals["CommittedPts"]
    )

    metrics = totals[SPRINT_METRICS_COLUMNS].copy()
    metrics[COUNT_COLUMNS] = metrics[COUNT_COLUMNS].astype(int)
    return metrics
