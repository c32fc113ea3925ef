"""OpenAPI / Swagger document adapter.

Converts OpenAPI 3.x and Swagger 2.0 documents into the normalized Module
list consumed by the generator. Operations are grouped by their first tag or
by the first path segment.
"""

import re
from pathlib import Path

import yaml

from .base import (
    FieldDescriptor,
    Module,
    Operation,
    OperationParameters,
    RequestBody,
    ResponseDescriptor,
    SourceFormatError,
)

HTTP_METHODS = ("get", "post", "put", "delete", "patch")

DEFAULT_GROUP = "default"

_KINDS = {
    "integer": "number",
    "number": "number",
    "string": "string",
    "boolean": "boolean",
    "object": "object",
    "array": "array",
}


def parse_openapi(file_path: Path, group_by: str = "tag") -> list[Module]:
    """Parse an OpenAPI/Swagger file into a list of Module."""
    text = file_path.read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SourceFormatError(f"{file_path} is not valid YAML/JSON: {e}") from e
    return openapi_to_modules(doc, group_by=group_by)


def openapi_to_modules(doc: dict, group_by: str = "tag") -> list[Module]:
    """Group the operations of an OpenAPI document into modules."""
    if not isinstance(doc, dict) or not ("openapi" in doc or "swagger" in doc):
        raise SourceFormatError("Not an OpenAPI/Swagger document")

    tag_descriptions = {
        t["name"]: t.get("description") or ""
        for t in doc.get("tags") or []
        if isinstance(t, dict) and "name" in t
    }

    groups: dict[str, list[Operation]] = {}
    for path, path_item in (doc.get("paths") or {}).items():
        path_item = _resolve(doc, path_item or {}, set())[0]
        shared_params = path_item.get("parameters", [])
        for method, operation in path_item.items():
            if method.lower() not in HTTP_METHODS:
                continue
            op = _parse_operation(doc, path, method.lower(), operation or {}, shared_params)
            key = _group_key(path, op, group_by)
            groups.setdefault(key, []).append(op)

    return [
        Module(name=name, description=tag_descriptions.get(name, ""), operations=ops)
        for name, ops in groups.items()
    ]


def suggest_name(method: str, path: str) -> str:
    """Build a request function name from method and path.

    ``GET /article/list/self`` -> ``reqGetArticleListSelf``; placeholder
    segments such as ``{id}`` or ``:id`` are skipped.
    """
    words = []
    for segment in path.split("/"):
        if not segment or segment.startswith(("{", ":")):
            continue
        words.extend(w for w in re.split(r"[^A-Za-z0-9]+", segment) if w)
    return "req" + method.capitalize() + "".join(w[0].upper() + w[1:] for w in words)


def _group_key(path: str, op: Operation, group_by: str) -> str:
    if group_by == "path":
        for segment in path.split("/"):
            if segment and not segment.startswith(("{", ":")):
                return segment
        return DEFAULT_GROUP
    return op.tag or DEFAULT_GROUP


def _parse_operation(
    doc: dict, path: str, method: str, operation: dict, shared_params: list[dict]
) -> Operation:
    params = _merge_parameters(doc, shared_params, operation.get("parameters", []))

    by_location: dict[str, list[FieldDescriptor]] = {"query": [], "path": [], "header": []}
    for p in params:
        location = p.get("in", "query")
        if location in by_location:
            by_location[location].append(_param_field(doc, p))

    body_fields, content_type = _parse_request_body(doc, operation, params)
    body = RequestBody(kind="object", items=body_fields) if body_fields else None

    security = operation.get("security", doc.get("security"))
    tags = operation.get("tags") or []

    return Operation(
        path=path,
        method=method,
        summary=operation.get("summary", ""),
        description=operation.get("description", ""),
        tag=tags[0] if tags else None,
        suggested_name=suggest_name(method, path),
        requires_auth=bool(security),
        content_type=content_type,
        parameters=OperationParameters(body=body, **by_location),
        response=_parse_response(doc, operation.get("responses") or {}),
    )


def _merge_parameters(doc: dict, shared: list[dict], own: list[dict]) -> list[dict]:
    """Path-item parameters overridden by operation parameters of the same (in, name)."""
    merged: dict[tuple, dict] = {}
    for raw in list(shared or []) + list(own or []):
        p = _resolve(doc, raw, set())[0]
        if "name" not in p:
            continue
        merged[(p.get("in", "query"), p["name"])] = p
    return list(merged.values())


def _param_field(doc: dict, p: dict) -> FieldDescriptor:
    # Swagger 2 keeps type information on the parameter itself
    schema = p.get("schema") or p
    return _schema_field(
        doc,
        p["name"],
        schema,
        required=p.get("required", False),
        description=p.get("description") or "",
        seen=set(),
    )


def _parse_request_body(doc: dict, operation: dict, params: list[dict]) -> tuple[list[FieldDescriptor], str | None]:
    if "requestBody" in operation:
        body = _resolve(doc, operation["requestBody"] or {}, set())[0]
        content = body.get("content") or {}
        for content_type in ("application/json", "multipart/form-data", *content):
            if content_type in content:
                schema = (content[content_type] or {}).get("schema") or {}
                return _object_fields(doc, schema, set()), content_type
        return [], None

    # Swagger 2.0
    for p in params:
        if p.get("in") == "body":
            return _object_fields(doc, p.get("schema") or {}, set()), "application/json"
    form = [
        _schema_field(doc, p["name"], p, p.get("required", False), p.get("description") or "", set())
        for p in params
        if p.get("in") == "formData"
    ]
    if form:
        return form, "multipart/form-data"
    return [], None


def _parse_response(doc: dict, responses: dict) -> ResponseDescriptor | None:
    # YAML loads unquoted status codes as integers
    by_code = {str(c): r for c, r in responses.items() if str(c).startswith("2")}
    if not by_code:
        return None
    code = "200" if "200" in by_code else sorted(by_code)[0]
    resp = _resolve(doc, by_code[code] or {}, set())[0]

    if "content" in resp:
        content = resp.get("content") or {}
        media = next((ct for ct in ("application/json", *content) if ct in content), None)
        schema = (content[media] or {}).get("schema") if media else None
    else:
        schema = resp.get("schema")
    if not schema:
        return None

    fields = _object_fields(doc, schema, set())
    if not fields:
        return None
    return ResponseDescriptor(kind="object", items=fields)


def _object_fields(doc: dict, schema: dict, seen: set[str]) -> list[FieldDescriptor]:
    schema, seen = _resolve(doc, schema, seen)
    properties = dict(schema.get("properties") or {})
    required = set(schema.get("required") or [])
    for part in schema.get("allOf") or []:
        part, _ = _resolve(doc, part, seen)
        properties.update(part.get("properties") or {})
        required.update(part.get("required") or [])

    return [
        _schema_field(
            doc,
            name,
            prop or {},
            required=name in required,
            description=(prop or {}).get("description") or "",
            seen=seen,
        )
        for name, prop in properties.items()
    ]


def _schema_field(
    doc: dict, name: str, schema: dict, required: bool, description: str, seen: set[str]
) -> FieldDescriptor:
    schema, seen = _resolve(doc, schema, seen)
    kind = _kind(schema)
    items = None
    if kind == "array":
        element, element_seen = _resolve(doc, schema.get("items") or {}, seen)
        if _kind(element) == "object" and (element.get("properties") or element.get("allOf")):
            items = _object_fields(doc, element, element_seen)
        elif element:
            items = _schema_field(doc, "", element, False, element.get("description") or "", element_seen)

    return FieldDescriptor(
        name=name,
        kind=kind,
        required=required,
        description=description or schema.get("description") or "",
        items=items,
        default=schema.get("default"),
    )


def _kind(schema: dict) -> str | None:
    t = schema.get("type")
    if isinstance(t, list):
        t = next((x for x in t if x != "null"), None)
    if t is None and (schema.get("properties") or schema.get("allOf")):
        t = "object"
    return _KINDS.get(t)


def _resolve(doc: dict, node: dict, seen: set[str]) -> tuple[dict, set[str]]:
    """Follow local ``$ref`` pointers; a reference cycle degrades to an opaque object."""
    while isinstance(node, dict) and "$ref" in node:
        ref = node["$ref"]
        if ref in seen or not ref.startswith("#/"):
            return {"type": "object"}, seen
        seen = seen | {ref}
        target = doc
        for part in ref[2:].split("/"):
            part = part.replace("~1", "/").replace("~0", "~")
            target = target.get(part, {}) if isinstance(target, dict) else {}
        node = target
    return (node if isinstance(node, dict) else {}), seen
