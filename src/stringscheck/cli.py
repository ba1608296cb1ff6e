import logging
import os
import sys
from typing import Any, Iterable, TextIO

import yaml

import click
from stringscheck import checker, parser
from stringscheck.plist import DataTypeError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": {
        "level": "WARNING",
        "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
    },
    "check": {
        "combine": False,
        "extension": parser.STRINGS_EXTENSION,
    },
}


def load_config(config_folder: str) -> dict[str, Any]:
    """Read ``config.yml`` from ``config_folder``, falling back to defaults."""
    config_file_path = os.path.abspath(f"{config_folder}/config.yml")

    loaded: dict[str, Any] = {}
    try:
        with open(config_file_path, "r") as file:
            loaded = yaml.safe_load(file) or {}
    except FileNotFoundError:
        logger.debug(f"{config_file_path} not found, using defaults")

    if not isinstance(loaded, dict):
        raise yaml.YAMLError(f"{config_file_path}: expected a mapping")

    config = {}
    for section, defaults in DEFAULT_CONFIG.items():
        values = loaded.get(section) or {}
        if not isinstance(values, dict):
            raise yaml.YAMLError(f"{config_file_path}: {section} must be a mapping")
        config[section] = {**defaults, **values}
    return config


def report(errors: Iterable[object], sink: TextIO) -> int:
    """Write one line per error to ``sink`` and return how many were written."""
    count = 0
    for error in errors:
        sink.write(f"{error}\n")
        count += 1
    return count


@click.command(
    help="Checks that .strings localization files for different languages match.\n\n"
    "Looks for lproj directories inside DIRECTORY and ensures they contain "
    "localizations for the same strings.\n\n"
    "Example: stringscheck /path/with/lprojs en fi sv"
)
@click.option("--config-folder", default="config", help="Configuration folder path.")
@click.option(
    "--combine/--no-combine",
    default=None,
    help="Merge every strings file of a language into one table.",
)
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.argument("languages", nargs=-1, required=True)
@click.version_option(package_name="stringscheck")
def cli(
    config_folder: str, combine: bool | None, directory: str, languages: tuple[str, ...]
) -> None:
    if len(languages) < 2:
        raise click.UsageError("At least two languages are required.")

    try:
        config = load_config(config_folder)
    except yaml.YAMLError as exc:
        logger.error(sys._getframe().f_code.co_name + " " + str(exc))
        sys.exit(1)

    logging.basicConfig(
        level=logging.getLevelName(config["logging"]["level"]),
        format=config["logging"]["format"],
        datefmt=config["logging"]["datefmt"],
        force=True,
    )

    if combine is None:
        combine = bool(config["check"]["combine"])

    try:
        projects, duplicates = parser.load(
            directory,
            languages,
            combine=combine,
            extension=config["check"]["extension"],
        )
    except (DataTypeError, OSError) as exc:
        logger.error(f"Error reading {directory}: {exc}")
        sys.exit(1)

    errors = [*duplicates, *checker.find_errors(projects)]
    if report(errors, sys.stderr):
        sys.exit(1)
