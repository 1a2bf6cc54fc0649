"""Common constants used across Sprint Health Metrics modules."""

from typing import Dict, Final, List

# Workbook sheet names
DATA_SHEET: Final[str] = "Data"
WINDOW_SHEET: Final[str] = "Window"
SPRINT_CALC_SHEET: Final[str] = "SprintCalc"
KPIS_SHEET: Final[str] = "KPIs"
REASONS_SHEET: Final[str] = "Reasons"

# Data sheet header -> record column. Every header is required.
REQUIRED_COLUMNS: Final[Dict[str, str]] = {
    "Team": "Team",
    "Sprint": "Sprint",
    "Sprint Start": "SprintStart",
    "Sprint End": "SprintEnd",
    "Item Type": "ItemType",
    "Item ID": "ItemID",
    "Story Points Committed": "CommittedPts",
    "Story Points": "StoryPoints",
    "State": "State",
    "Outcome": "Outcome",
}

NUMERIC_COLUMNS: Final[List[str]] = ["CommittedPts", "StoryPoints"]

# Outcome and state tags, compared lower-cased
OUTCOME_COMMITTED: Final[str] = "committed"
OUTCOME_ADDED: Final[str] = "added"
OUTCOME_REMOVED: Final[str] = "removed"
STATE_ACCEPTED: Final[str] = "accepted"

# Sprint health status
STATUS_GOOD: Final[str] = "Good"
STATUS_NOT_GOOD: Final[str] = "Not Good"

# Reasons an item contributes to its sprint's health
REASON_SCOPE_ADDED: Final[str] = "Scope added mid-sprint"
REASON_SCOPE_REMOVED: Final[str] = "Scope removed mid-sprint"
REASON_COMMITTED_NOT_ACCEPTED: Final[str] = "Committed (planned) but not accepted"

# Highlight categories for rows in Not Good sprints
HIGHLIGHT_ADDED: Final[str] = "added"
HIGHLIGHT_REMOVED: Final[str] = "removed"
HIGHLIGHT_UNFINISHED: Final[str] = "unfinished"

# ARGB fill colours per highlight category
HIGHLIGHT_COLORS: Final[Dict[str, str]] = {
    HIGHLIGHT_ADDED: "FFFFF4B3",
    HIGHLIGHT_REMOVED: "FFFFA8A8",
    HIGHLIGHT_UNFINISHED: "FFFFCC99",
}

PERCENT_FORMAT: Final[str] = "0.00%"
INTEGER_FORMAT: Final[str] = "0"

# Window KPI key -> label shown in the KPIs sheet
KPI_LABELS: Final[Dict[str, str]] = {
    "AvgAccepted": "Average Accepted (window)",
    "StdDevAccepted": "StdDev (Accepted) (window)",
    "Predictability": "Predictability % (1 - stdev/avg)",
    "Volatility": "Volatility % ((Added+Removed)/Committed)",
    "AvgCommitted": "Average Committed (window)",
    "AvgScopeChange": "Average Scope Change % (per-sprint mean)",
    "VarianceAccepted": "Variance (Accepted) (window)",
}

PERCENT_KPIS: Final[List[str]] = ["Predictability", "Volatility", "AvgScopeChange"]

# Data filename keys used in config parsing
DATA_FILENAME_KEYS: Final[List[str]] = [
    "sprint_metrics_data",
    "kpi_data",
    "sprint_health_data",
    "not_good_items_data",
    "good_items_data",
]

# Chart filename keys used in config parsing
CHART_FILENAME_KEYS: Final[List[str]] = [
    "predictability_chart",
]
