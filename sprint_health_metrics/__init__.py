"""Sprint Health Metrics - sprint predictability and scope volatility from
a workbook of work items.

This package provides calculators that aggregate work-item records by
sprint, summarise a window of sprints, and classify sprints and items
against a predictability threshold.
"""
