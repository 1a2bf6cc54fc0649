"""Shared column definitions for Sprint Health Metrics.

This module centralizes the column name lists used by the calculators,
the workbook writer and the tests.
"""

RECORD_COLUMNS = [
    "Team",
    "Sprint",
    "SprintStart",
    "SprintEnd",
    "ItemType",
    "ItemID",
    "CommittedPts",
    "StoryPoints",
    "State",
    "Outcome",
    "RowRef",
]

SPRINT_METRICS_COLUMNS = [
    "CommittedPts",
    "AcceptedPts",
    "AddedPts",
    "RemovedPts",
    "PerSprintPredictability",
    "PerSprintScopeChange",
    "CountAdded",
    "CountRemoved",
    "CountUnfinishedCommitted",
    "PtsUnfinishedCommitted",
]

COUNT_COLUMNS = [
    "CountAdded",
    "CountRemoved",
    "CountUnfinishedCommitted",
]

KPI_KEYS = [
    "AvgAccepted",
    "StdDevAccepted",
    "Predictability",
    "Volatility",
    "AvgCommitted",
    "AvgScopeChange",
    "VarianceAccepted",
]

SPRINT_HEALTH_COLUMNS = [
    "Sprint",
    "PerSprintPredictability",
    "Status",
    "CountAdded",
    "CountRemoved",
    "CountUnfinishedCommitted",
    "AddedPts",
    "RemovedPts",
    "PtsUnfinishedCommitted",
]

ITEM_COLUMNS = [
    "Sprint",
    "ItemID",
    "Outcome",
    "State",
    "CommittedPts",
    "StoryPoints",
    "Reason",
    "ContributionPct",
]

# Sheet headers, in the same order as the frames above
SPRINT_CALC_HEADERS = [
    ("Sprint", 16),
    ("CommittedPts", 16),
    ("AcceptedPts", 16),
    ("AddedPts", 14),
    ("RemovedPts", 14),
    ("PerSprint Predictability", 26),
    ("PerSprint ScopeChange%", 26),
]

SPRINT_HEALTH_HEADERS = [
    "Sprint",
    "Predictability%",
    "Status",
    "Added (items)",
    "Removed (items)",
    "Unfinished (items)",
    "Added Pts",
    "Removed Pts",
    "Unfinished Committed Pts",
]

ITEM_HEADERS = [
    "Sprint",
    "Item ID",
    "Outcome",
    "State",
    "CommittedPts",
    "StoryPoints",
    "Reason",
    "Contribution % (of sprint committed)",
]
