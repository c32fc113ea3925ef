"""Per-operation code units.

:func:`assemble_unit` turns one operation into a :class:`SourceUnit`; the
renderers turn a unit into either an exported function or an object method.
Both layouts are rendered from the same unit, so the generated body is
identical between them.
"""

from pydantic import BaseModel, ConfigDict

from apiboost.config import GeneratorConfig
from apiboost.generator.naming import resolve_name
from apiboost.generator.response import infer_response_type
from apiboost.generator.types import doc_type, fields_shape
from apiboost.generator.url import build_url
from apiboost.parser.base import Operation, OperationParameters

QUERY_BINDING = "params"
PATH_BINDING = "pathParams"
BODY_BINDING = "data"

AUTH_MARKER = " (auth required)"

INDENT = "  "


class SourceUnit(BaseModel):
    """Everything needed to render one request function."""

    model_config = ConfigDict(frozen=True)

    name: str
    doc: tuple[str, ...] = ()  # comment lines without the leading " * "
    params: tuple[tuple[str, str | None], ...] = ()  # (binding, type shape or None)
    return_type: str | None = None
    call: str
    payload: tuple[str, ...] = ()


def assemble_unit(
    module_name: str, operation: Operation, cfg: GeneratorConfig, used: set[str]
) -> SourceUnit:
    """Build the unit for one operation; registers its name in ``used``."""
    request = operation.parameters or OperationParameters()
    query_fields = request.query
    path_fields = request.path
    body_fields = request.body_fields

    groups = [
        (binding, fields)
        for binding, fields in (
            (QUERY_BINDING, query_fields),
            (PATH_BINDING, path_fields),
            (BODY_BINDING, body_fields),
        )
        if fields
    ]
    params = tuple(
        (binding, fields_shape(fields) if cfg.annotated else None)
        for binding, fields in groups
    )

    if path_fields:
        url_binding = PATH_BINDING
    elif query_fields:
        url_binding = QUERY_BINDING
    else:
        url_binding = BODY_BINDING
    url = build_url(cfg.base_url_prefix, operation.path, path_fields, url_binding)

    payload = [f"url: {url.render()}", f'method: "{operation.method}"']
    if query_fields:
        payload.append(QUERY_BINDING)
    if body_fields:
        payload.append(BODY_BINDING)

    doc: list[str] = []
    if cfg.include_jsdoc:
        summary = operation.summary + (AUTH_MARKER if operation.requires_auth else "")
        doc.append(summary.strip())
        doc.append(f"@group {module_name}")
        doc.append(f"@route {operation.path} [{operation.method.upper()}]")
        for binding, fields in groups:
            for f in fields:
                doc.append(f"@param {{{doc_type(f)}}} {binding}.{f.name} {f.description}".rstrip())

    return SourceUnit(
        name=resolve_name(operation.suggested_name, operation, used),
        doc=tuple(doc),
        params=params,
        return_type=infer_response_type(operation.response) if cfg.annotated else None,
        call=cfg.request_import.identifier,
        payload=tuple(payload),
    )


def _doc_lines(unit: SourceUnit) -> list[str]:
    if not unit.doc:
        return []
    return ["/**", *(f" * {line}".rstrip() for line in unit.doc), " */"]


def _signature(unit: SourceUnit) -> str:
    return ", ".join(f"{binding}: {shape}" if shape else binding for binding, shape in unit.params)


def _body_lines(unit: SourceUnit) -> list[str]:
    lines = [f"{INDENT}return {unit.call}({{"]
    lines.extend(f"{INDENT * 2}{entry}," for entry in unit.payload)
    lines.append(f"{INDENT}}});")
    lines.append("}")
    return lines


def render_function(unit: SourceUnit) -> str:
    """Render a unit as an exported function."""
    returns = f": Promise<{unit.return_type}>" if unit.return_type else ""
    head = f"export function {unit.name}({_signature(unit)}){returns} {{"
    return "\n".join([*_doc_lines(unit), head, *_body_lines(unit)]) + "\n"


def render_method(unit: SourceUnit) -> str:
    """Render a unit as a property of the exported object, without the return type."""
    head = f"{unit.name}({_signature(unit)}) {{"
    text = "\n".join([*_doc_lines(unit), head, *_body_lines(unit)])
    return "\n".join(INDENT + line if line else line for line in text.split("\n")) + ","
