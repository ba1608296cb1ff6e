"""Decoding of Apple ``.strings`` payloads.

Binary and XML property lists go to :mod:`plistlib`, everything else is an
old-style (OpenStep) property list read with :mod:`openstep_plist`.
"""
import codecs
import pathlib
import plistlib
from typing import Any
from xml.parsers.expat import ExpatError

import openstep_plist


class DataTypeError(Exception):
    def __init__(self, message: str, path: pathlib.Path | None = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}: {self.message}"


def decode_text(data: bytes) -> str:
    for bom, encoding in (
        (codecs.BOM_UTF8, "utf-8-sig"),
        (codecs.BOM_UTF16_LE, "utf-16"),
        (codecs.BOM_UTF16_BE, "utf-16"),
    ):
        if data.startswith(bom):
            break
    else:
        encoding = "utf-8"
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as ex:
        raise DataTypeError(f"Cannot decode text: {ex.reason}") from ex


def _is_xml(data: bytes) -> bool:
    head = data.lstrip()[:64]
    if head.startswith(codecs.BOM_UTF8):
        head = head[len(codecs.BOM_UTF8) :].lstrip()
    return head.startswith((b"<?xml", b"<!DOCTYPE plist", b"<plist"))


def _load(data: bytes) -> Any:
    if data.startswith(b"bplist00") or _is_xml(data):
        try:
            return plistlib.loads(data)
        except (plistlib.InvalidFileException, ExpatError, ValueError) as ex:
            raise DataTypeError(f"Invalid property list: {ex}") from ex

    text = decode_text(data)
    if not text.strip():
        return {}
    try:
        value = openstep_plist.loads(text)
    except (openstep_plist.ParseError, ValueError) as ex:
        raise DataTypeError(f"Invalid strings file: {ex}") from ex
    except RecursionError:
        raise DataTypeError("Invalid strings file: nesting too deep") from None
    # A comment-only file is an empty table
    return {} if value is None else value


def parse_strings(data: bytes) -> dict[str, str]:
    """Decode one ``.strings`` payload into a flat ``{key: value}`` mapping.

    A key repeated within one file keeps its last value.
    """
    value = _load(data)

    if not isinstance(value, dict):
        raise DataTypeError(f"Expected a dictionary, found {type(value).__name__}")
    for key, item in value.items():
        if not isinstance(key, str) or not isinstance(item, str):
            raise DataTypeError(
                f"Expected string values, found {type(item).__name__} for key {key!r}"
            )
    return value
