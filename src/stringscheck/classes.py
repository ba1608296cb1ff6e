from dataclasses import dataclass, field
import pathlib


_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def quote(value: str) -> str:
    return '"' + "".join(_ESCAPES.get(c, c) for c in value) + '"'


@dataclass(frozen=True)
class LanguageProject:
    path: pathlib.Path

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class StringsFile:
    language_project: LanguageProject
    name: str

    @property
    def path(self) -> pathlib.Path:
        if not self.name:
            return self.language_project.path
        return self.language_project.path / self.name

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class LanguageProjectDatas:
    lproj: LanguageProject
    datas: dict[StringsFile, bytes] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class ParsedLanguageProject:
    language_project: LanguageProject
    content: dict[StringsFile, dict[str, str]] = field(
        default_factory=dict, hash=False
    )

    def tables(self) -> dict[str, tuple[StringsFile, dict[str, str]]]:
        return {sf.name: (sf, strings) for sf, strings in self.content.items()}


@dataclass(frozen=True)
class MissingStringsFile:
    language_project: LanguageProject
    name: str

    def __str__(self) -> str:
        return (
            f"Missing strings file in {quote(str(self.language_project))}: "
            f"{quote(self.name)}"
        )


@dataclass(frozen=True)
class MissingLanguageKey:
    key: str
    strings_file: StringsFile


@dataclass(frozen=True)
class MissingKey:
    key: MissingLanguageKey
    found_in: StringsFile

    def __str__(self) -> str:
        return (
            f"Missing key {quote(self.key.key)} in {self.key.strings_file} "
            f"(found in {self.found_in})"
        )


@dataclass(frozen=True)
class DuplicateKey:
    strings_file: StringsFile
    key: str
    first_source: pathlib.Path
    second_source: pathlib.Path

    def __str__(self) -> str:
        return (
            f"Duplicate key {quote(self.key)} in {self.strings_file} "
            f"(defined in {self.first_source} and {self.second_source})"
        )
