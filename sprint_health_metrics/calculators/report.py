"""Workbook report for Sprint Health Metrics.

Collects the results of the other calculators into a single report and
writes it back into the source workbook.
"""

import logging

from ..calculator import Calculator
from ..common_constants import KPI_LABELS
from ..workbook import update_workbook
from .health import SprintHealthCalculator
from .kpis import WindowKPICalculator
from .records import RecordsCalculator
from .sprints import SprintMetricsCalculator

logger = logging.getLogger(__name__)


class WorkbookReportCalculator(Calculator):
    """Assemble the workbook report; `write()` applies it to the workbook and
    saves it, in place unless `output_workbook` is set.
    """

    def run(self):
        health = self.get_result(SprintHealthCalculator)
        kpis = self.get_result(WindowKPICalculator)

        return {
            "records": self.get_result(RecordsCalculator),
            "sprint_metrics": self.get_result(SprintMetricsCalculator),
            "kpis": [(key, KPI_LABELS[key], value) for key, value in kpis.items()],
            "threshold": self.settings.get("threshold", 0.90),
            "health": health["summary"],
            "not_good_items": health["not_good_items"],
            "good_items": health["good_items"],
            "highlights": health["highlights"],
        }

    def write(self):
        if not hasattr(self.source, "save"):
            logger.debug("Source is not a workbook; skipping workbook report")
            return

        update_workbook(
            self.source,
            self.get_result(),
            fix_numbers=self.settings.get("fix_numbers", True),
        )
        self.source.save(self.settings.get("output_workbook"))
