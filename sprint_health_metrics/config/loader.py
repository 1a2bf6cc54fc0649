"""Configuration loader for Sprint Health Metrics."""

import logging
import os.path

from ..common_constants import (
    CHART_FILENAME_KEYS,
    DATA_FILENAME_KEYS,
    DATA_SHEET,
    WINDOW_SHEET,
)
from .exceptions import ConfigError
from .type_utils import (
    expand_key,
    force_bool,
    force_float,
    force_int,
    force_list,
)
from .yaml_utils import ordered_load

logger = logging.getLogger(__name__)


def create_default_options():
    """Create default options dictionary."""
    return {
        "settings": {
            "workbook": None,
            "data_sheet": DATA_SHEET,
            "window_sheet": WINDOW_SHEET,
            "output_workbook": None,
            "threshold": 0.90,
            "last_n": 6,
            "window": None,
            "fix_numbers": True,
            "sprint_metrics_data": None,
            "kpi_data": None,
            "sprint_health_data": None,
            "not_good_items_data": None,
            "good_items_data": None,
            "predictability_chart": None,
            "predictability_chart_title": None,
        },
    }


def _resolve_path(path, cwd):
    """Resolve `path` relative to the directory holding the config file."""
    path = str(path)
    if cwd is None or os.path.isabs(path):
        return path
    return os.path.normpath(os.path.join(cwd, path))


def _parse_input_config(config, options, cwd):
    """Parse input configuration."""
    if "input" not in config:
        return

    input_config = config["input"] or {}
    settings = options["settings"]

    if "workbook" in input_config:
        settings["workbook"] = _resolve_path(input_config["workbook"], cwd)

    for key in ("data_sheet", "window_sheet"):
        if expand_key(key) in input_config:
            settings[key] = str(input_config[expand_key(key)])


def _parse_output_config(config, options, cwd):
    """Parse output configuration."""
    if "output" not in config:
        return

    output_config = config["output"] or {}
    settings = options["settings"]

    if expand_key("output_directory") in output_config:
        options["output_directory"] = output_config[expand_key("output_directory")]

    if expand_key("output_workbook") in output_config:
        settings["output_workbook"] = _resolve_path(
            output_config[expand_key("output_workbook")], cwd
        )

    if "threshold" in output_config:
        settings["threshold"] = force_float("threshold", output_config["threshold"])

    if expand_key("last_n") in output_config:
        settings["last_n"] = force_int("last_n", output_config[expand_key("last_n")])

    if expand_key("fix_numbers") in output_config:
        settings["fix_numbers"] = force_bool(
            "fix_numbers", output_config[expand_key("fix_numbers")]
        )

    if "window" in output_config:
        settings["window"] = _parse_window(output_config["window"])

    _parse_filename_values(output_config, settings)
    _parse_filename_list_values(output_config, settings)

    if expand_key("predictability_chart_title") in output_config:
        settings["predictability_chart_title"] = str(
            output_config[expand_key("predictability_chart_title")]
        )


def _parse_window(value):
    """A window is either a comma-separated string or a list of sprint ids."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return [str(v) for v in force_list(value) if v is not None]


def _parse_filename_values(output_config, settings):
    """Parse filename values from output config."""
    for key in CHART_FILENAME_KEYS:
        if expand_key(key) in output_config:
            settings[key] = os.path.basename(output_config[expand_key(key)])


def _parse_filename_list_values(output_config, settings):
    """Parse filename list values from output config."""
    for key in DATA_FILENAME_KEYS:
        if expand_key(key) in output_config:
            settings[key] = list(
                map(
                    os.path.basename,
                    force_list(output_config[expand_key(key)]),
                )
            )


def config_to_options(data, cwd=None, _visited_files=None):
    """
    Parse YAML config data and return options dict.
    """
    if _visited_files is None:
        _visited_files = set()

    try:
        config = ordered_load(data)
    except Exception as e:
        raise ConfigError("Unable to parse YAML configuration file.") from e

    if config is None:
        raise ConfigError("Configuration file is empty") from None

    if not hasattr(config, "items"):
        raise ConfigError("Configuration file must contain a mapping") from None

    options = create_default_options()

    if "extends" in config:
        if cwd is None:
            raise ConfigError("`extends` is not supported here.")

        extends_filename = os.path.abspath(
            os.path.normpath(
                os.path.join(cwd, config["extends"].replace("/", os.path.sep))
            )
        )

        if not os.path.exists(extends_filename):
            raise ConfigError(
                f"File `{extends_filename}` referenced in `extends` not found."
            ) from None

        if extends_filename in _visited_files:
            raise ConfigError(
                f"Circular extends reference detected: {extends_filename}"
            ) from None

        _visited_files.add(extends_filename)

        logger.debug("Extending file %s", extends_filename)
        with open(extends_filename, encoding="utf-8") as extends_file:
            options = config_to_options(
                extends_file.read(),
                cwd=os.path.dirname(extends_filename),
                _visited_files=_visited_files,
            )

    _parse_input_config(config, options, cwd)
    _parse_output_config(config, options, cwd)

    return options
