"""URL expression builder with path-parameter interpolation."""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict

from apiboost.parser.base import FieldDescriptor

_PLACEHOLDER_CHARS = re.compile(r"[{}:]")


class UrlExpr(BaseModel):
    """A URL rendered either as a string literal or as a template literal."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["literal", "template"]
    text: str

    def render(self) -> str:
        if self.kind == "template":
            return f"`{self.text}`"
        return f'"{self.text}"'


def _interpolation(binding: str, name: str) -> str:
    return "${" + f"{binding}.{name}" + "}"


def build_url(
    prefix: str,
    raw_path: str,
    path_fields: list[FieldDescriptor] | None,
    args_binding: str,
) -> UrlExpr:
    """Build the request URL for an operation.

    Both ``{name}`` and ``:name`` placeholders are replaced with
    ``${<args_binding>.name}``. When ``raw_path`` has no placeholder syntax at
    all, path fields are appended as trailing segments in field order.
    """
    prefix = prefix or ""
    url = f"{prefix}{raw_path}"
    path_fields = path_fields or []

    for field in path_fields:
        value = _interpolation(args_binding, field.name)
        name = re.escape(field.name)
        url = re.sub(r"\{" + name + r"\}", lambda _m: value, url)
        url = re.sub(":" + name + r"\b", lambda _m: value, url, flags=re.ASCII)

    if path_fields and not _PLACEHOLDER_CHARS.search(raw_path):
        tail = "/".join(_interpolation(args_binding, f.name) for f in path_fields)
        url = f"{prefix}{raw_path}/{tail}"

    if "${" in url:
        return UrlExpr(kind="template", text=url)
    return UrlExpr(kind="literal", text=url)
