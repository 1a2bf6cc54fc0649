"""Window KPI summary for Sprint Health Metrics."""

import logging
import math

import pandas as pd

from ..calculator import Calculator
from ..columns import KPI_KEYS
from ..common_constants import KPI_LABELS
from ..utils import series_to_frame, write_data_files
from .sprints import SprintMetricsCalculator

logger = logging.getLogger(__name__)


class WindowKPICalculator(Calculator):
    """Summarise the per-sprint metrics of the window as a Series indexed by
    `KPI_KEYS`.
    """

    def run(self):
        sprint_metrics = self.get_result(SprintMetricsCalculator)
        kpis = calculate_window_kpis(sprint_metrics)

        logger.info(
            "Window predictability %.2f%%, volatility %.2f%%",
            kpis["Predictability"] * 100,
            kpis["Volatility"] * 100,
        )
        return kpis

    def write(self):
        output_files = self.settings.get("kpi_data")
        if not output_files:
            logger.debug("No output file specified for KPI data")
            return

        kpis = self.get_result().rename(index=KPI_LABELS)
        write_data_files(
            series_to_frame(kpis, "Metric", "Value"), output_files, "KPIs", "KPI"
        )


def mean(values):
    """Arithmetic mean, 0 for an empty Series."""
    return float(values.mean()) if len(values) else 0.0


def sample_variance(values):
    """Sample variance (n - 1 denominator), 0 for fewer than two values."""
    if len(values) < 2:
        return 0.0
    return float(values.var(ddof=1))


def calculate_window_kpis(sprint_metrics):
    """Compute the window KPIs from a per-sprint metrics DataFrame.

    `Predictability` is 1 - stddev/mean of accepted points and is not
    clamped, so a very uneven window goes negative. `Volatility` pools the
    point sums of the whole window, while `AvgScopeChange` averages the
    per-sprint ratios; the two differ when sprint sizes do.
    """
    accepted = sprint_metrics["AcceptedPts"]
    committed = sprint_metrics["CommittedPts"]

    avg_accepted = mean(accepted)
    variance_accepted = sample_variance(accepted)
    stddev_accepted = math.sqrt(variance_accepted)

    predictability = (
        1 - stddev_accepted / avg_accepted if avg_accepted > 0 else 0.0
    )

    committed_sum = float(committed.sum())
    scope_sum = float((sprint_metrics["AddedPts"] + sprint_metrics["RemovedPts"]).sum())
    volatility = scope_sum / committed_sum if committed_sum > 0 else 0.0

    values = {
        "AvgAccepted": avg_accepted,
        "StdDevAccepted": stddev_accepted,
        "Predictability": predictability,
        "Volatility": volatility,
        "AvgCommitted": mean(committed),
        "AvgScopeChange": mean(sprint_metrics["PerSprintScopeChange"]),
        "VarianceAccepted": variance_accepted,
    }
    return pd.Series([values[key] for key in KPI_KEYS], index=KPI_KEYS, dtype=float)
