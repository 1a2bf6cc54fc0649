"""Sprint health classification for Sprint Health Metrics.

Labels each window sprint Good or Not Good against the predictability
threshold, and attributes a share of each sprint's committed points to the
items that were added, removed or left unfinished.
"""

import logging

import matplotlib.pyplot as plt
import pandas as pd

from ..calculator import Calculator
from ..chart_styling_utils import apply_sprint_axis_styling, save_chart_with_styling
from ..columns import ITEM_COLUMNS, SPRINT_HEALTH_COLUMNS
from ..common_constants import (
    HIGHLIGHT_ADDED,
    HIGHLIGHT_REMOVED,
    HIGHLIGHT_UNFINISHED,
    REASON_COMMITTED_NOT_ACCEPTED,
    REASON_SCOPE_ADDED,
    REASON_SCOPE_REMOVED,
    STATUS_GOOD,
    STATUS_NOT_GOOD,
)
from ..utils import text_key, write_data_files
from .records import RecordsCalculator
from .sprints import SprintMetricsCalculator, record_flags

logger = logging.getLogger(__name__)

GOOD_COLOR = "#92D192"
NOT_GOOD_COLOR = "#F4B4B4"


class SprintHealthCalculator(Calculator):
    """Classify sprints and contributing items.

    The result is a dict with:

    * `summary`: one row per window sprint (`SPRINT_HEALTH_COLUMNS`)
    * `not_good_items`, `good_items`: contributing items (`ITEM_COLUMNS`),
      split by the status of their sprint
    * `highlights`: row reference -> highlight category, for rows in
      Not Good sprints only
    """

    def run(self):
        records = self.get_result(RecordsCalculator)
        sprint_metrics = self.get_result(SprintMetricsCalculator)
        threshold = self.settings.get("threshold", 0.90)

        summary = classify_sprints(sprint_metrics, threshold)
        not_good_items, good_items = item_contributions(
            records, sprint_metrics, summary
        )
        highlights = row_highlights(records, summary)

        logger.info(
            "%d of %d sprints below predictability threshold %s",
            (summary["Status"] == STATUS_NOT_GOOD).sum(),
            len(summary.index),
            threshold,
        )

        return {
            "summary": summary,
            "not_good_items": not_good_items,
            "good_items": good_items,
            "highlights": highlights,
        }

    def write(self):
        result = self.get_result()

        for setting, key, sheet_name, label in (
            ("sprint_health_data", "summary", "SprintHealth", "sprint health"),
            ("not_good_items_data", "not_good_items", "NotGoodItems", "not good items"),
            ("good_items_data", "good_items", "GoodItems", "good items"),
        ):
            output_files = self.settings.get(setting)
            if not output_files:
                logger.debug("No output file specified for %s data", label)
                continue
            write_data_files(result[key], output_files, sheet_name, label)

        if self.settings.get("predictability_chart"):
            self.write_chart(result["summary"], self.settings["predictability_chart"])
        else:
            logger.debug("No output file specified for predictability chart")

    def write_chart(self, summary, output_file):
        """Bar chart of per-sprint predictability against the threshold."""
        if len(summary.index) == 0:
            logger.warning("Cannot draw predictability chart with zero sprints")
            return

        threshold = self.settings.get("threshold", 0.90)
        colors = [
            GOOD_COLOR if status == STATUS_GOOD else NOT_GOOD_COLOR
            for status in summary["Status"]
        ]

        fig, ax = plt.subplots()

        if self.settings.get("predictability_chart_title"):
            ax.set_title(self.settings["predictability_chart_title"])

        positions = list(range(len(summary.index)))
        ax.bar(positions, summary["PerSprintPredictability"] * 100, color=colors)
        ax.axhline(threshold * 100, linestyle="--", linewidth=1, color="grey")
        ax.annotate(
            f"Threshold ({threshold * 100:.0f}%)",
            xy=(positions[-1], threshold * 100),
            xytext=(0, 4),
            textcoords="offset points",
            ha="right",
            fontsize="x-small",
        )
        ax.set_ylabel("Predictability (%)", labelpad=10)

        apply_sprint_axis_styling(ax, summary["Sprint"])
        save_chart_with_styling(fig, output_file, "predictability")


def classify_sprints(sprint_metrics, threshold):
    """Label each sprint `Good` when its predictability reaches `threshold`
    (inclusive), otherwise `Not Good`.
    """
    summary = sprint_metrics.reset_index()
    summary["Status"] = [
        STATUS_GOOD if predictability >= threshold else STATUS_NOT_GOOD
        for predictability in summary["PerSprintPredictability"]
    ]
    return summary[SPRINT_HEALTH_COLUMNS].copy()


def contribution_reasons(records):
    """Return `(reason, numerator)` Series for each record.

    The first matching rule wins: added, then removed, then committed but
    not accepted. Records matching none have no reason.
    """
    flags = record_flags(records)
    added = flags["added"]
    removed = flags["removed"] & ~added
    unfinished = flags["unfinished"] & ~added & ~removed

    reason = pd.Series(None, index=records.index, dtype=object)
    reason[added] = REASON_SCOPE_ADDED
    reason[removed] = REASON_SCOPE_REMOVED
    reason[unfinished] = REASON_COMMITTED_NOT_ACCEPTED

    numerator = records["StoryPoints"].where(added | removed, records["CommittedPts"])
    return reason, numerator


def item_contributions(records, sprint_metrics, summary):
    """Split contributing records of window sprints into the Not Good and
    Good item reports, with each item's share of its sprint's committed points.
    """
    sprint_keys = records["Sprint"].map(text_key)
    status = sprint_keys.map(
        dict(zip(summary["Sprint"].map(text_key), summary["Status"]))
    )
    sprint_committed = sprint_keys.map(
        dict(
            zip(
                [text_key(sprint) for sprint in sprint_metrics.index],
                sprint_metrics["CommittedPts"],
            )
        )
    )

    reason, numerator = contribution_reasons(records)

    items = records.assign(
        Reason=reason,
        ContributionPct=(
            numerator / sprint_committed.where(sprint_committed > 0)
        ).fillna(0.0),
    )
    contributing = reason.notna() & status.notna()

    not_good = items[contributing & (status == STATUS_NOT_GOOD)]
    good = items[contributing & (status == STATUS_GOOD)]
    return (
        not_good[ITEM_COLUMNS].reset_index(drop=True),
        good[ITEM_COLUMNS].reset_index(drop=True),
    )


def row_highlights(records, summary):
    """Map the row reference of each record in a Not Good sprint to its
    highlight category, added > removed > unfinished.
    """
    not_good = set(
        summary.loc[summary["Status"] == STATUS_NOT_GOOD, "Sprint"].map(text_key)
    )
    in_not_good = records["Sprint"].map(text_key).isin(not_good)
    flags = record_flags(records)

    highlights = {}
    for row_ref, added, removed, unfinished in zip(
        records.loc[in_not_good, "RowRef"],
        flags["added"][in_not_good],
        flags["removed"][in_not_good],
        flags["unfinished"][in_not_good],
    ):
        if added:
            highlights[row_ref] = HIGHLIGHT_ADDED
        elif removed:
            highlights[row_ref] = HIGHLIGHT_REMOVED
        elif unfinished:
            highlights[row_ref] = HIGHLIGHT_UNFINISHED
    return highlights
