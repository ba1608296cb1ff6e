#!/usr/bin/python3
import logging
import os
import pathlib
from typing import Iterable

from stringscheck.classes import (
    DuplicateKey,
    LanguageProject,
    LanguageProjectDatas,
    ParsedLanguageProject,
    StringsFile,
)
from stringscheck.plist import DataTypeError, parse_strings

logger = logging.getLogger(__name__)

LPROJ_SUFFIX = ".lproj"
STRINGS_EXTENSION = ".strings"
# Merged table of a whole language; it is the lproj directory itself
COMBINED_TABLE = ""


def ensure_extension(language: str) -> str:
    return language if language.endswith(LPROJ_SUFFIX) else language + LPROJ_SUFFIX


def read_strings_contents(
    directory: str, languages: Iterable[str], extension: str = STRINGS_EXTENSION
) -> list[LanguageProjectDatas]:
    """Read every requested language directory under ``directory``, sorted by name."""
    language_lprojs = set(ensure_extension(language) for language in languages)
    root = pathlib.Path(directory).absolute()

    lprojs = []
    for name in sorted(os.listdir(root)):
        if name not in language_lprojs:
            continue
        path = root / name
        if not path.is_dir():
            logger.warning(f"Skipping {path}: not a directory")
            continue
        lprojs.append(LanguageProject(path))

    found = set(lproj.path.name for lproj in lprojs)
    for name in sorted(language_lprojs - found):
        logger.warning(f"No {name} directory in {root}")
    logger.info(f"Found {len(lprojs)} language projects in {root}")

    return [read_language_project_datas(lproj, extension) for lproj in lprojs]


def read_language_project_datas(
    lproj: LanguageProject, extension: str = STRINGS_EXTENSION
) -> LanguageProjectDatas:
    datas: dict[StringsFile, bytes] = {}
    for name in sorted(os.listdir(lproj.path)):
        if not name.endswith(extension):
            continue
        strings_file = StringsFile(lproj, name)
        if not strings_file.path.is_file():
            continue
        logger.debug(f"Reading {strings_file}")
        datas[strings_file] = strings_file.path.read_bytes()
    return LanguageProjectDatas(lproj, datas)


def parse_language_project(
    datas: LanguageProjectDatas, combine: bool = False
) -> tuple[ParsedLanguageProject, list[DuplicateKey]]:
    """With ``combine`` all files merge into one table; repeated keys are returned."""
    content: dict[StringsFile, dict[str, str]] = {}
    duplicates: list[DuplicateKey] = []
    combined = StringsFile(datas.lproj, COMBINED_TABLE)
    sources: dict[str, pathlib.Path] = {}

    for strings_file, data in datas.datas.items():
        logger.debug(f"Parsing {strings_file}")
        try:
            strings = parse_strings(data)
        except DataTypeError as ex:
            ex.path = strings_file.path
            raise

        if not combine:
            content[strings_file] = strings
            continue

        table = content.setdefault(combined, {})
        for key, value in strings.items():
            if key in table:
                duplicates.append(
                    DuplicateKey(combined, key, sources[key], strings_file.path)
                )
                continue
            table[key] = value
            sources[key] = strings_file.path

    if combine and combined not in content:
        content[combined] = {}

    return ParsedLanguageProject(datas.lproj, content), duplicates


def load(
    directory: str,
    languages: Iterable[str],
    combine: bool = False,
    extension: str = STRINGS_EXTENSION,
) -> tuple[list[ParsedLanguageProject], list[DuplicateKey]]:
    projects = []
    duplicates = []
    for datas in read_strings_contents(directory, languages, extension):
        project, project_duplicates = parse_language_project(datas, combine)
        projects.append(project)
        duplicates.extend(project_duplicates)
    return projects, duplicates
