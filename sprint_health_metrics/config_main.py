"""Calculator pipeline for Sprint Health Metrics.

Calculators run in this order; each may read the results of those before it.
"""

from .calculators.health import SprintHealthCalculator
from .calculators.kpis import WindowKPICalculator
from .calculators.records import RecordsCalculator
from .calculators.report import WorkbookReportCalculator
from .calculators.sprints import SprintMetricsCalculator
from .calculators.window import SprintWindowCalculator

CALCULATORS = (
    RecordsCalculator,
    SprintWindowCalculator,
    SprintMetricsCalculator,
    WindowKPICalculator,
    SprintHealthCalculator,
    WorkbookReportCalculator,
)
