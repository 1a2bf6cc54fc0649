"""Package configuration for sprint-health-metrics.

This file defines installation metadata and console entry points.
"""

import os

import setuptools


def _read_requirements(here, filename):
    """Read requirement lines, skipping comments and nested `-r` includes."""
    try:
        with open(os.path.join(here, filename), encoding="utf-8") as f:
            return [
                line.strip()
                for line in f.read().splitlines()
                if line.strip()
                and not line.strip().startswith("#")
                and not line.strip().startswith("-r ")
            ]
    except OSError:
        return []


def main():
    """Entrypoint for invoking setuptools.setup with package metadata."""

    here = os.path.abspath(os.path.dirname(__file__))

    # Safely read long description
    try:
        with open(os.path.join(here, "README.md"), encoding="utf-8") as f:
            long_description = f.read()
    except OSError:
        long_description = ""

    setuptools.setup(
        name="sprint-health-metrics",
        version="0.1",
        description=(
            "Sprint predictability, scope volatility and sprint health "
            "from a workbook of work items"
        ),
        long_description=long_description,
        long_description_content_type="text/markdown",
        license="MIT",
        keywords="agile sprint predictability volatility metrics",
        packages=setuptools.find_packages(exclude=["contrib", "docs", "tests*"]),
        install_requires=_read_requirements(here, "requirements-prod.txt"),
        extras_require={"test": _read_requirements(here, "requirements-dev.txt")},
        # argparse.BooleanOptionalAction
        python_requires=">=3.9",
        entry_points={
            "console_scripts": [
                "sprint-health-metrics=sprint_health_metrics.cli:main",
            ],
        },
    )


if __name__ == "__main__":
    main()
