"""Utility functions for Sprint Health Metrics.

This module provides the cell value normalisation shared by the record
normalizer and the window selector, plus small helpers for writing data
files and charts.
"""

import logging
import math
import os.path
from numbers import Number

import pandas as pd
import seaborn as sns

logger = logging.getLogger(__name__)

NBSP = "\u00a0"


def extend_dict(d, e):
    """Extend dictionary d with entries from e, returning a new dictionary."""
    r = d.copy()
    r.update(e)
    return r


def clean_text(value) -> str:
    """Render a raw cell value as text, with non-breaking spaces removed
    and surrounding whitespace stripped. `None` becomes an empty string.
    """
    if value is None:
        return ""
    return str(value).replace(NBSP, "").strip()


def text_key(value) -> str:
    """Comparison key for free text: cleaned and lower-cased."""
    return clean_text(value).lower()


def to_number(value) -> float:
    """Coerce a raw cell value to a finite float.

    Thousands separators are ignored. Anything that cannot be read as a
    finite number (None, blanks, text, NaN, infinity, booleans) is 0.
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, Number):
        number = float(value)
    else:
        text = clean_text(value).replace(",", "")
        # float() would accept digit grouping such as "1_000"
        if not text or "_" in text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0

    return number if math.isfinite(number) else 0.0


def unique_by_key(values):
    """Drop repeats from `values`, comparing with `text_key` and keeping the
    first spelling seen. Order is preserved.
    """
    seen = set()
    result = []
    for value in values:
        key = text_key(value)
        if key in seen:
            continue
        seen.add(key)
        result.append(value)
    return result


def get_extension(filename):
    """Get file extension from filename."""
    return os.path.splitext(filename)[1].lower()


def set_chart_context(context):
    """Set seaborn chart context."""
    sns.set_context(context)


def write_data_files(data, output_files, sheet_name, label):
    """Write a DataFrame to each of `output_files`, picking the format from
    the file extension: `.json`, `.xlsx`, or CSV for anything else.
    """
    for output_file in output_files:
        output_extension = get_extension(output_file)

        logger.info("Writing %s data to %s", label, output_file)
        if output_extension == ".json":
            data.to_json(output_file, orient="records")
        elif output_extension == ".xlsx":
            data.to_excel(output_file, sheet_name=sheet_name, index=False)
        else:
            data.to_csv(output_file, header=True, index=False)


def series_to_frame(series, key_column, value_column):
    """Turn a labelled Series into a two-column DataFrame."""
    return pd.DataFrame(
        {key_column: list(series.index), value_column: list(series.values)}
    )
