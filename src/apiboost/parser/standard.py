"""Normalized module-list loader.

Reads the JSON (optionally JSONC, i.e. with comments) document produced by
the OpenAPI adapter: a top-level list of modules, each with its services.
"""

import json
import re
from pathlib import Path

from pydantic import ValidationError

from .base import Module, SourceFormatError

_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")
_LINE_COMMENT = re.compile(r"(^|\s)//.*$", re.MULTILINE)


def strip_jsonc(text: str) -> str:
    """Remove ``/* */`` and ``//`` comments.

    String contents are not tracked; a ``//`` preceded by whitespace inside a
    string value would be cut too.
    """
    text = _BLOCK_COMMENT.sub("", text)
    return _LINE_COMMENT.sub(r"\1", text)


def load_modules(data) -> list[Module]:
    """Validate already-decoded data as a list of modules."""
    if not isinstance(data, list):
        raise SourceFormatError(
            f"Source data must be a list of modules, got {type(data).__name__}"
        )
    modules = []
    for index, entry in enumerate(data):
        try:
            modules.append(Module.model_validate(entry))
        except ValidationError as e:
            raise SourceFormatError(f"Invalid module at index {index}: {e}") from e
    return modules


def parse_standard(file_path: Path) -> list[Module]:
    """Parse a normalized JSON/JSONC file into a list of Module."""
    text = file_path.read_text(encoding="utf-8")
    try:
        data = json.loads(strip_jsonc(text))
    except json.JSONDecodeError as e:
        raise SourceFormatError(f"{file_path} is not valid JSON: {e}") from e
    return load_modules(data)
