"""Exceptions for Sprint Health Metrics.

Both exceptions represent unmet preconditions: they abort a run before any
output is written.
"""


class ConfigError(Exception):
    """
    Exception raised for errors in the configuration.
    """


class DataError(Exception):
    """
    Exception raised when the input workbook cannot support a metrics run,
    e.g. a required column is missing or no sprints could be selected.
    """
