import argparse
import logging
import os

from dotenv import load_dotenv

from .calculator import run_calculators
from .config import ConfigError, DataError, config_to_options, create_default_options
from .config_main import CALCULATORS
from .utils import set_chart_context
from .workbook import WorkbookSource

load_dotenv()

logger = logging.getLogger(__name__)

WORKBOOK_ENV_VAR = "SPRINT_HEALTH_WORKBOOK"


def configure_argument_parser():
    """Configure an ArgumentParser that manages command line options."""

    parser = argparse.ArgumentParser(
        description=(
            "Calculate sprint predictability, scope volatility and sprint "
            "health from a workbook of work items, and write the results "
            "back into the workbook."
        )
    )

    parser.add_argument(
        "workbook",
        metavar="workbook.xlsx",
        nargs="?",
        help=f"Existing workbook with a Data sheet (default: ${WORKBOOK_ENV_VAR})",
    )
    parser.add_argument(
        "--config", "-c", metavar="config.yml", help="Configuration file"
    )
    parser.add_argument("-v", dest="verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "-vv",
        dest="very_verbose",
        action="store_true",
        help="Even more verbose output",
    )

    # Metric options
    parser.add_argument(
        "--threshold",
        metavar="0.9",
        type=float,
        help="Predictability threshold for sprint health",
    )
    parser.add_argument(
        "--last",
        metavar="N",
        dest="last_n",
        type=int,
        help="If no window is given, use the last N sprints in the data",
    )
    parser.add_argument(
        "--window",
        metavar="S1,S2",
        help="Comma-separated sprint ids to use instead of the Window sheet",
    )
    parser.add_argument(
        "--fix-numbers",
        dest="fix_numbers",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Write coerced story points back into the Data sheet",
    )

    # Output options
    parser.add_argument(
        "--output-workbook",
        metavar="report.xlsx",
        help="Save the updated workbook here instead of in place",
    )
    parser.add_argument(
        "--output-directory",
        "-o",
        metavar="metrics",
        help=("Write output files to this directory, rather than the current working directory."),
    )

    return parser


def main():
    parser = configure_argument_parser()
    args = parser.parse_args()

    try:
        run_command_line(parser, args)
    except (ConfigError, DataError) as e:
        logger.debug("Aborting run", exc_info=True)
        parser.exit(1, f"Error: {e}\n")


def run_command_line(parser, args):
    logging.basicConfig(
        format="[%(asctime)s %(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        level=(
            logging.DEBUG
            if args.very_verbose
            else logging.INFO if args.verbose else logging.WARNING
        ),
    )

    # Configuration and settings
    # (command line arguments override config file options)

    if args.config:
        logger.debug("Parsing options from %s", args.config)
        try:
            with open(args.config, encoding="utf-8") as config:
                options = config_to_options(
                    config.read(), cwd=os.path.dirname(os.path.abspath(args.config))
                )
        except FileNotFoundError:
            print(
                f"Error: Configuration file '{args.config}' not found. "
                "Please provide a valid config file."
            )
            return None
    else:
        options = create_default_options()

    settings = options["settings"]
    override_options(settings, args)

    if not settings["workbook"]:
        settings["workbook"] = os.environ.get(WORKBOOK_ENV_VAR)

    if not settings["workbook"]:
        parser.print_usage()
        return None

    # Paths are resolved before any change of working directory
    settings["workbook"] = os.path.abspath(settings["workbook"])
    if settings["output_workbook"]:
        settings["output_workbook"] = os.path.abspath(settings["output_workbook"])

    # Set charting context, which determines how charts are rendered
    set_chart_context("paper")

    output_dir = options.get("output_directory")
    if args.output_directory:
        output_dir = args.output_directory
    if output_dir:
        logger.info("Changing working directory to %s", output_dir)
        os.makedirs(output_dir, exist_ok=True)
        os.chdir(output_dir)

    source = WorkbookSource(
        settings["workbook"],
        data_sheet=settings["data_sheet"],
        window_sheet=settings["window_sheet"],
    )

    logger.info("Running calculators")
    return run_calculators(CALCULATORS, source, settings)


def override_options(options, arguments):
    """Update `options` dict with settings from `arguments`
    with the same key.
    """
    for key in options.keys():
        if getattr(arguments, key, None) is not None:
            options[key] = getattr(arguments, key)


if __name__ == "__main__":
    main()
