"""Type inference: maps field descriptors to TypeScript type expressions.

Rules are applied in order: numeric enum extracted from the description,
then the declared kind. Anything that cannot be inferred becomes ``any``.
"""

import re

from apiboost.parser.base import FieldDescriptor

ANY = "any"

# "1:pending 2:approved" -> 1, 2
_NUMBERED_OPTION = re.compile(r"\b(\d+)\s*:", re.ASCII)

_PRIMITIVES = {
    "string": "string",
    "number": "number",
    "boolean": "boolean",
    "object": "object",
}


def number_union(field: FieldDescriptor | None) -> str | None:
    """Extract a numeric literal union from a number field's description.

    Needs at least two ``<n>:`` mentions, e.g. ``"status(1:pending 2:done)"``
    gives ``"1 | 2"``. Returns None otherwise.
    """
    if field is None or field.kind != "number":
        return None
    values = [int(m) for m in _NUMBERED_OPTION.findall(field.description)]
    if len(values) < 2:
        return None
    return " | ".join(str(v) for v in sorted(set(values)))


def infer_type(field: FieldDescriptor | None) -> str:
    if field is None:
        return ANY
    union = number_union(field)
    if union:
        return union
    if field.kind == "array":
        return f"{_element_type(field.items)}[]"
    return _PRIMITIVES.get(field.kind, ANY)


def _element_type(items) -> str:
    # Only the first entry of a field list stands for the element shape
    if isinstance(items, list):
        return infer_type(items[0]) if items else ANY
    return infer_type(items)


def doc_type(field: FieldDescriptor | None) -> str:
    """Same as :func:`infer_type`, with angle brackets swapped for parentheses for JSDoc."""
    return infer_type(field).replace("<", "(").replace(">", ")")


def fields_shape(fields: list[FieldDescriptor] | None) -> str:
    """Render an object type literal, one documented property per field."""
    if not fields:
        return "{}"
    lines = ["{"]
    for f in fields:
        optional = "" if f.required else "?"
        lines.append(f"  /** {f.description} */")
        lines.append(f"  {f.name}{optional}: {infer_type(f)};")
    lines.append("}")
    return "\n".join(lines)
