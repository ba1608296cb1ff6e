import logging
from typing import Sequence

from stringscheck.classes import (
    MissingKey,
    MissingLanguageKey,
    MissingStringsFile,
    ParsedLanguageProject,
)

logger = logging.getLogger(__name__)

ComparisonError = MissingStringsFile | MissingKey


def table_names(
    projects: Sequence[ParsedLanguageProject],
) -> tuple[list[str], list[str]]:
    """Return the union and the intersection of table names, in first-seen order."""
    if not projects:
        return [], []

    all_tables: dict[str, None] = {}
    common = set(sf.name for sf in projects[0].content)
    for project in projects:
        names = [sf.name for sf in project.content]
        all_tables.update(dict.fromkeys(names))
        common.intersection_update(names)

    return list(all_tables), [name for name in all_tables if name in common]


def find_errors(projects: Sequence[ParsedLanguageProject]) -> list[ComparisonError]:
    """Report tables and keys missing from any language, each (key, table) once."""
    errors: list[ComparisonError] = []
    if len(projects) < 2:
        return errors

    all_tables, common = table_names(projects)
    tables = [project.tables() for project in projects]

    for project, project_tables in zip(projects, tables):
        for name in all_tables:
            if name not in project_tables:
                errors.append(MissingStringsFile(project.language_project, name))

    reported: set[MissingLanguageKey] = set()
    for i, source_tables in enumerate(tables):
        for j, target_tables in enumerate(tables):
            if i == j:
                continue
            for name in common:
                source_file, source_strings = source_tables[name]
                target_file, target_strings = target_tables[name]
                for key in source_strings:
                    if key in target_strings:
                        continue
                    missing = MissingLanguageKey(key, target_file)
                    if missing in reported:
                        continue
                    reported.add(missing)
                    errors.append(MissingKey(missing, source_file))

    logger.debug(f"Compared {len(projects)} language projects: {len(errors)} errors")
    return errors
