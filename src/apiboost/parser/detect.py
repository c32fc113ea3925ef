"""Auto-detect the API source format."""

import json
from pathlib import Path

import yaml

from .base import SourceFormatError
from .standard import strip_jsonc


def _load_any(text: str):
    # Try JSON (with comments removed) first, then YAML
    try:
        return json.loads(strip_jsonc(text))
    except (json.JSONDecodeError, ValueError):
        pass
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError:
        return None


def detect_format(file_path: Path) -> str:
    """Detect the format of an API source file.

    Returns: 'openapi' or 'standard'.
    """
    data = _load_any(file_path.read_text(encoding="utf-8"))

    if isinstance(data, dict) and ("openapi" in data or "swagger" in data):
        return "openapi"
    if isinstance(data, list):
        return "standard"
    raise SourceFormatError(
        f"Cannot detect the format of {file_path}: expected an OpenAPI/Swagger "
        "document or a normalized module list"
    )
