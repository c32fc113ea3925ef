"""Identifier and file name helpers."""

import re

from apiboost.parser.base import Module, Operation

_PATH_SEPARATORS = re.compile(r"[/:{}]")


def path_suffix(operation: Operation) -> str:
    """``get`` + ``/article/{id}`` -> ``get_article_id``."""
    path = _PATH_SEPARATORS.sub("_", operation.path)
    path = re.sub(r"_+", "_", path).strip("_")
    return f"{operation.method}_{path}"


def resolve_name(suggested: str, operation: Operation, used: set[str]) -> str:
    """Return a function name not yet in ``used`` and record it there.

    A taken name gets a method+path suffix (``reqGetArticle_get_article_id``);
    if that is taken too, ``_2``, ``_3``, ... is appended.
    """
    if suggested not in used:
        used.add(suggested)
        return suggested

    base = f"{suggested}_{path_suffix(operation)}"
    candidate = base
    i = 2
    while candidate in used:
        candidate = f"{base}_{i}"
        i += 1
    used.add(candidate)
    return candidate


def camel_case(name: str) -> str:
    """``article-list`` / ``article_list`` -> ``articleList``."""
    return re.sub(r"[-_ ]+([a-zA-Z])", lambda m: m.group(1).upper(), name)


def pascal_case(name: str) -> str:
    return name[:1].upper() + name[1:]


def kebab_case(name: str) -> str:
    """``ArticleList`` -> ``article-list``."""
    return re.sub(r"([a-z])([A-Z])", r"\1-\2", name).lower()


def to_file_name(name: str, case: str) -> str:
    if case == "kebab":
        return kebab_case(name)
    return camel_case(name)


def namespace_name(module: Module) -> str:
    """Name of the exported object in the object layout."""
    return module.suggested_namespace_name or f"req{pascal_case(camel_case(module.name))}"
