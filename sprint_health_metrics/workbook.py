"""Workbook input and output for Sprint Health Metrics.

`WorkbookSource` reads the raw work-item rows and the curated sprint window
out of an Excel workbook. `update_workbook` writes a finished report back
into the same workbook: row highlights, optional numeric clean-up of the
points columns, and freshly recreated `SprintCalc`, `KPIs` and `Reasons`
sheets. Neither touches the metric calculations themselves.
"""

import logging
import zipfile

import openpyxl
from openpyxl.styles import PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException

from .columns import (
    ITEM_COLUMNS,
    ITEM_HEADERS,
    SPRINT_CALC_HEADERS,
    SPRINT_HEALTH_COLUMNS,
    SPRINT_HEALTH_HEADERS,
)
from .common_constants import (
    DATA_SHEET,
    HIGHLIGHT_COLORS,
    INTEGER_FORMAT,
    KPIS_SHEET,
    PERCENT_FORMAT,
    PERCENT_KPIS,
    REASONS_SHEET,
    REQUIRED_COLUMNS,
    SPRINT_CALC_SHEET,
    WINDOW_SHEET,
)
from .config import DataError
from .utils import clean_text

logger = logging.getLogger(__name__)

NO_FILL = PatternFill(fill_type=None)


class WorkbookSource:
    """Read work-item rows from the data sheet of an existing workbook.

    Headers are taken from the first row; each following row is exposed as
    a `(row_number, {header: value})` pair, where the row number is the
    opaque reference used later to highlight the row.
    """

    def __init__(self, filename, data_sheet=DATA_SHEET, window_sheet=WINDOW_SHEET):
        self.filename = filename
        self.data_sheet = data_sheet
        self.window_sheet = window_sheet

        logger.debug("Loading workbook %s", filename)
        try:
            self.workbook = openpyxl.load_workbook(filename)
        except FileNotFoundError:
            raise DataError(f"Workbook `{filename}` not found.") from None
        except (InvalidFileException, zipfile.BadZipFile, KeyError) as e:
            raise DataError(f"Workbook `{filename}` could not be read: {e}") from e

        if data_sheet not in self.workbook.sheetnames:
            raise DataError(f'Sheet "{data_sheet}" not found in `{filename}`.')

        self.headers = self._read_headers()

    @property
    def data_worksheet(self):
        return self.workbook[self.data_sheet]

    def _read_headers(self):
        headers = {}
        for cell in self.data_worksheet[1]:
            name = clean_text(cell.value)
            if name:
                headers[name] = cell.column
        return headers

    def rows(self):
        """Yield `(row_number, values)` for every row below the header."""
        columns = {name: column - 1 for name, column in self.headers.items()}
        for row_number, row in enumerate(
            self.data_worksheet.iter_rows(min_row=2, values_only=True), start=2
        ):
            yield row_number, {
                name: row[index] if index < len(row) else None
                for name, index in columns.items()
            }

    def window_sprints(self):
        """Sprint ids listed in column A of the window sheet, below its header."""
        if self.window_sheet not in self.workbook.sheetnames:
            return []

        worksheet = self.workbook[self.window_sheet]
        sprints = []
        for (value,) in worksheet.iter_rows(min_row=2, max_col=1, values_only=True):
            sprint = clean_text(value)
            if sprint:
                sprints.append(sprint)
        return sprints

    def save(self, filename=None):
        """Save the workbook, in place unless another `filename` is given."""
        filename = filename or self.filename
        logger.info("Saving workbook to %s", filename)
        self.workbook.save(filename)


def _plain(value):
    """Unwrap numpy scalars so openpyxl stores plain Python values."""
    return value.item() if hasattr(value, "item") else value


def _recreate_sheet(workbook, title):
    if title in workbook.sheetnames:
        del workbook[title]
    return workbook.create_sheet(title)


def _append_frame(worksheet, frame, columns, percent_columns=()):
    """Append the rows of `frame`, formatting `percent_columns` as percentages."""
    for values in frame[columns].itertuples(index=False, name=None):
        worksheet.append([_plain(v) for v in values])
        row_number = worksheet.max_row
        for column in percent_columns:
            worksheet.cell(
                row=row_number, column=columns.index(column) + 1
            ).number_format = PERCENT_FORMAT


def highlight_rows(worksheet, highlights):
    """Clear previous fills below the header, then fill each highlighted row
    with the colour of its category.
    """
    for row in worksheet.iter_rows(min_row=2):
        for cell in row:
            cell.fill = NO_FILL

    for row_number, category in highlights.items():
        fill = PatternFill(fill_type="solid", fgColor=HIGHLIGHT_COLORS[category])
        for cell in worksheet[row_number]:
            cell.fill = fill


def write_numbers(worksheet, headers, records):
    """Write the coerced points back over the raw cells of each record."""
    for header, column in REQUIRED_COLUMNS.items():
        if column not in ("CommittedPts", "StoryPoints"):
            continue
        column_index = headers[header]
        for row_number, value in zip(records["RowRef"], records[column]):
            cell = worksheet.cell(row=int(row_number), column=column_index)
            cell.value = _plain(value)
            cell.number_format = INTEGER_FORMAT


def write_sprint_calc_sheet(workbook, sprint_metrics):
    worksheet = _recreate_sheet(workbook, SPRINT_CALC_SHEET)
    worksheet.append([header for header, _ in SPRINT_CALC_HEADERS])
    for index, (_, width) in enumerate(SPRINT_CALC_HEADERS, start=1):
        worksheet.column_dimensions[get_column_letter(index)].width = width

    frame = sprint_metrics.reset_index()
    columns = [
        "Sprint",
        "CommittedPts",
        "AcceptedPts",
        "AddedPts",
        "RemovedPts",
        "PerSprintPredictability",
        "PerSprintScopeChange",
    ]
    _append_frame(
        worksheet,
        frame,
        columns,
        percent_columns=("PerSprintPredictability", "PerSprintScopeChange"),
    )
    return worksheet


def write_kpis_sheet(workbook, kpis):
    """`kpis` is a sequence of `(key, label, value)` triples."""
    worksheet = _recreate_sheet(workbook, KPIS_SHEET)
    worksheet.append(["Metric", "Value"])
    for key, label, value in kpis:
        worksheet.append([label, _plain(value)])
        if key in PERCENT_KPIS:
            worksheet.cell(row=worksheet.max_row, column=2).number_format = (
                PERCENT_FORMAT
            )
    return worksheet


def write_reasons_sheet(workbook, threshold, health, not_good_items, good_items):
    worksheet = _recreate_sheet(workbook, REASONS_SHEET)

    worksheet.append(["Predictability threshold (0-1)", threshold])
    worksheet.append([])

    worksheet.append(["Sprint Health Summary"])
    worksheet.append(SPRINT_HEALTH_HEADERS)
    _append_frame(
        worksheet,
        health,
        SPRINT_HEALTH_COLUMNS,
        percent_columns=("PerSprintPredictability",),
    )

    for title, items in (
        ("Not Good Items (contributing)", not_good_items),
        ("Good Items (for context)", good_items),
    ):
        worksheet.append([])
        worksheet.append([title])
        worksheet.append(ITEM_HEADERS)
        _append_frame(
            worksheet, items, ITEM_COLUMNS, percent_columns=("ContributionPct",)
        )
    return worksheet


def update_workbook(source, report, fix_numbers=True):
    """Apply a finished report to the workbook held by `source`.

    The workbook is only modified in memory; call `source.save()` to persist.
    """
    workbook = source.workbook
    worksheet = source.data_worksheet

    if fix_numbers:
        logger.debug("Writing coerced story points back to %s", source.data_sheet)
        write_numbers(worksheet, source.headers, report["records"])

    logger.debug("Highlighting %d rows", len(report["highlights"]))
    highlight_rows(worksheet, report["highlights"])

    write_sprint_calc_sheet(workbook, report["sprint_metrics"])
    write_kpis_sheet(workbook, report["kpis"])
    write_reasons_sheet(
        workbook,
        report["threshold"],
        report["health"],
        report["not_good_items"],
        report["good_items"],
    )
