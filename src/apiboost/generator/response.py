"""Response type modeling.

A response whose ``data`` field is an array is treated as a paginated list
envelope; everything else gets the generic ``{ code, msg, data? }`` shape.
"""

from typing import NamedTuple

from apiboost.parser.base import FieldDescriptor, ResponseDescriptor
from apiboost.generator.types import ANY, infer_type


class FieldOverride(NamedTuple):
    """Fixed rendering for a list-item field, keyed by field name in ITEM_FIELD_OVERRIDES."""

    type_expr: str
    rename: str | None = None
    force_optional: bool = False
    only_kind: str | None = None


# Product-specific overrides for the blog API these bindings were first built
# for. They are not a general rule; add entries here rather than in the
# rendering loop.
ITEM_FIELD_OVERRIDES: dict[str, FieldOverride] = {
    "article_cateList": FieldOverride(
        type_expr="{ id: number; name: string }[]",
        only_kind="array",
    ),
    "likes_count": FieldOverride(
        type_expr="number",
        rename="like_count",
        force_optional=True,
    ),
}

# Top-level envelope fields of a paginated list and their fallback types
PAGE_FIELDS = (
    ("code", "number"),
    ("msg", "string"),
    ("total", "number"),
    ("currentPage", "string"),
    ("pageSize", "string"),
)


def infer_response_type(resp: ResponseDescriptor | None) -> str:
    if resp is None or not resp.items:
        return ANY
    # first field wins on duplicate names
    top = {f.name: f for f in reversed(resp.items)}

    def scalar(name: str, fallback: str) -> str:
        field = top.get(name)
        return infer_type(field) if field is not None else fallback

    data = top.get("data")
    if data is not None and data.kind == "array":
        lines = ["{"]
        lines.extend(f"  {name}: {scalar(name, fallback)};" for name, fallback in PAGE_FIELDS)
        lines.append(f"  data: {_item_shape(data)}[];")
        lines.append("}")
        return "\n".join(lines)

    return "\n".join([
        "{",
        f"  code: {scalar('code', 'number')};",
        f"  msg: {scalar('msg', 'string')};",
        "  data?: any;",
        "}",
    ])


def _item_shape(data: FieldDescriptor) -> str:
    item_fields = data.items if isinstance(data.items, list) else []
    lines = ["{"]
    for f in item_fields:
        lines.append(f"    {_item_property(f)};")
    lines.append("  }")
    return "\n".join(lines)


def _item_property(f: FieldDescriptor) -> str:
    optional = "" if f.required else "?"
    override = ITEM_FIELD_OVERRIDES.get(f.name)
    if override is None or (override.only_kind and override.only_kind != f.kind):
        return f"{f.name}{optional}: {infer_type(f)}"
    name = override.rename or f.name
    if override.force_optional:
        optional = "?"
    return f"{name}{optional}: {override.type_expr}"
