"""Module-level output: one file per module, as functions or as one object."""

from apiboost.config import GeneratorConfig
from apiboost.generator.naming import namespace_name, to_file_name
from apiboost.generator.unit import assemble_unit, render_function, render_method
from apiboost.parser.base import Module, SourceFormatError


def build_header(cfg: GeneratorConfig) -> str:
    """Import preamble followed by a blank line, or an empty string."""
    ri = cfg.request_import
    if ri.enabled and ri.import_line:
        return ri.import_line + "\n\n"
    return ""


def render_function_file(module: Module, cfg: GeneratorConfig, header: str = "") -> str:
    used: set[str] = set()
    units = [assemble_unit(module.name, op, cfg, used) for op in module.operations]
    parts = [header] if header else []
    parts.extend(render_function(u) for u in units)
    return "\n".join(parts)


def render_object_file(module: Module, cfg: GeneratorConfig, header: str = "") -> str:
    used: set[str] = set()
    units = [assemble_unit(module.name, op, cfg, used) for op in module.operations]
    lines = [header] if header else []
    lines.append(f"export const {namespace_name(module)} = {{")
    lines.extend(render_method(u) for u in units)
    lines.append("};\n")
    return "\n".join(lines)


def output_filename(module: Module, cfg: GeneratorConfig) -> str:
    return f"{to_file_name(module.name, cfg.filename_case)}.{cfg.output_ext}"


def generate_module(module: Module, cfg: GeneratorConfig) -> tuple[str, str]:
    """Render one module. Returns (filename, content)."""
    header = build_header(cfg)
    if cfg.export_style == "object":
        content = render_object_file(module, cfg, header)
    else:
        content = render_function_file(module, cfg, header)
    return output_filename(module, cfg), content


def generate(modules: list[Module], cfg: GeneratorConfig) -> dict[str, str]:
    """Render every included module.

    Returns dict of {filename: content} in module order.
    """
    if not isinstance(modules, list):
        raise SourceFormatError(
            f"Expected a list of modules, got {type(modules).__name__}"
        )

    files: dict[str, str] = {}
    for module in modules:
        if cfg.group_include and module.name not in cfg.group_include:
            continue
        filename, content = generate_module(module, cfg)
        if filename in files:
            raise SourceFormatError(
                f"Module {module.name!r} maps to {filename}, which another module already uses"
            )
        files[filename] = content
    return files
