"""Sprint window selection for Sprint Health Metrics."""

import logging

from ..calculator import Calculator
from ..config import DataError
from ..utils import clean_text, text_key, unique_by_key
from .records import RecordsCalculator

logger = logging.getLogger(__name__)


class SprintWindowCalculator(Calculator):
    """Resolve the ordered list of sprint ids to analyse.

    An explicit `window` setting wins, then the sprints listed in the
    workbook's window sheet, then the last `last_n` distinct sprints in the
    data.
    """

    def run(self):
        records = self.get_result(RecordsCalculator)

        window = resolve_sprint_window(
            records,
            window_spec=self.settings.get("window"),
            curated=self.source.window_sprints(),
            last_n=self.settings.get("last_n", 6),
        )

        logger.info("Sprint window: %s", ", ".join(window))
        return window


def parse_window_spec(window_spec):
    """Split a comma-separated window string (or clean a list of ids),
    dropping empty entries.
    """
    if not window_spec:
        return []
    if isinstance(window_spec, str):
        window_spec = window_spec.split(",")
    return [s for s in (clean_text(v) for v in window_spec) if s]


def last_sprints(sprints, last_n):
    """The last `last_n` distinct sprints of `sprints`, oldest first."""
    seen = set()
    window = []
    for sprint in reversed(list(sprints)):
        if len(window) >= last_n:
            break
        key = text_key(sprint)
        if key and key not in seen:
            seen.add(key)
            window.append(sprint)
    window.reverse()
    return window


def resolve_sprint_window(records, window_spec=None, curated=None, last_n=6):
    """Resolve the sprint window, raising `DataError` if it comes out empty.

    A `window_spec` that is given but names no sprints is not ignored: it
    leaves the window empty.
    """
    if window_spec is not None:
        logger.debug("Using explicit sprint window")
        window = parse_window_spec(window_spec)
    else:
        window = parse_window_spec(curated)
        if window:
            logger.debug("Using sprints from the window sheet")
        else:
            logger.debug("Using the last %s sprints in the data", last_n)
            window = last_sprints(records["Sprint"], last_n)

    window = unique_by_key(window)
    if not window:
        raise DataError("No sprint window selected.")
    return window
