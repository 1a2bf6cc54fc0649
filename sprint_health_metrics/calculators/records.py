"""Record normalizer for Sprint Health Metrics.

Turns raw data sheet rows into a typed DataFrame of work-item records.
"""

import logging

import pandas as pd

from ..calculator import Calculator
from ..columns import RECORD_COLUMNS
from ..common_constants import NUMERIC_COLUMNS, REQUIRED_COLUMNS
from ..config import DataError
from ..utils import clean_text, to_number

logger = logging.getLogger(__name__)


class RecordsCalculator(Calculator):
    """Build a DataFrame with one row per work item in the data sheet.

    Text columns are cleaned, the points columns coerced to numbers, and
    rows without a sprint dropped. `RowRef` holds the source row reference.
    """

    def run(self):
        check_required_columns(self.source.headers)

        records = normalize_records(self.source.rows())
        if len(records.index) == 0:
            raise DataError("No data rows found.")

        logger.info("Read %d work item records", len(records.index))
        return records


def check_required_columns(headers):
    """Fail before any row is read if a required header is absent."""
    missing = [name for name in REQUIRED_COLUMNS if name not in headers]
    if missing:
        raise DataError(
            "Missing Data header(s): " + ", ".join(f'"{name}"' for name in missing)
        )


def normalize_record(values):
    """Normalize one row of raw values keyed by header name.

    Returns None when the row has no sprint.
    """
    record = {}
    for header, column in REQUIRED_COLUMNS.items():
        value = values.get(header)
        if column in NUMERIC_COLUMNS:
            record[column] = to_number(value)
        else:
            record[column] = clean_text(value)

    if not record["Sprint"]:
        return None
    return record


def normalize_records(rows):
    """Normalize `(row_ref, values)` pairs into a records DataFrame."""
    data = []
    skipped = 0
    for row_ref, values in rows:
        record = normalize_record(values)
        if record is None:
            skipped += 1
            continue
        record["RowRef"] = row_ref
        data.append(record)

    if skipped:
        logger.debug("Skipped %d rows without a sprint", skipped)

    records = pd.DataFrame(data, columns=RECORD_COLUMNS)
    records[NUMERIC_COLUMNS] = records[NUMERIC_COLUMNS].astype(float)
    return records
