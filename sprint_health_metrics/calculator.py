"""Calculator base class and runner for Sprint Health Metrics."""

import logging

logger = logging.getLogger(__name__)


class Calculator:
    """Base class for calculators."""

    def __init__(self, source, settings, results):
        """Initialise with a record `source`, a dict of `settings`,
        and a reference to the dict of `results` from previous calculators.
        """
        self.source = source
        self.settings = settings
        self._results = results

    def get_result(self, calculator=None, default=None):
        """Get the results of this calculator or another calculator."""
        return self._results.get(calculator or self.__class__, default)

    def run(self):
        """Run the calculator and return its results.

        These will be automatically saved and be made available through
        `get_result()`. Implementations must not write any output here.
        """

    def write(self):
        """Write output files."""


def run_calculators(calculators, source, settings):
    """Run each calculator in turn, then write all output as a second pass.

    A failure in any `run()` propagates before anything has been written,
    so a run either produces all of its output or none of it.
    """
    results = {}
    instances = [C(source, settings, results) for C in calculators]

    for calculator in instances:
        name = calculator.__class__.__name__
        logger.info("%s running...", name)
        results[calculator.__class__] = calculator.run()
        logger.debug("%s completed", name)

    for calculator in instances:
        logger.debug("Writing output for %s...", calculator.__class__.__name__)
        calculator.write()

    return results
