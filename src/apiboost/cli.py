"""CLI entry point for apiboost."""

import json
from pathlib import Path

import click

from apiboost import __version__
from apiboost.config import ConfigError, GeneratorConfig, default_config, dump_config, load_config
from apiboost.generator.layout import generate
from apiboost.generator.naming import resolve_name
from apiboost.parser.base import Module, SourceFormatError
from apiboost.parser.detect import detect_format
from apiboost.parser.openapi import parse_openapi
from apiboost.parser.standard import parse_standard

FORMATS = ["auto", "openapi", "standard"]

ADAPTER_DIR = "openapi-adapter"


def _parse_source(file_path: Path, fmt: str, group_by: str = "tag") -> tuple[list[Module], str]:
    """Parse an API source based on format. Returns (modules, detected format)."""
    if fmt == "auto":
        fmt = detect_format(file_path)

    if fmt == "openapi":
        return parse_openapi(file_path, group_by=group_by), fmt
    return parse_standard(file_path), fmt


def _run_config(cfg: GeneratorConfig, fmt: str, base_dir: Path) -> int:
    """Generate all files for one config entry. Returns the number of files written."""
    source = base_dir / cfg.source_path
    if not cfg.source_path or not source.is_file():
        raise click.ClickException(f"Source file not found: {source}")
    out_dir = base_dir / cfg.out_dir

    click.echo(f"Parsing {source} (format: {fmt})...")
    modules, detected = _parse_source(source, fmt, cfg.group_by)
    click.echo(f"Found {len(modules)} modules.")

    out_dir.mkdir(parents=True, exist_ok=True)
    if detected == "openapi":
        adapter_path = out_dir / ADAPTER_DIR / f"{source.stem}.json"
        adapter_path.parent.mkdir(parents=True, exist_ok=True)
        normalized = [m.model_dump(by_alias=True, exclude_none=True) for m in modules]
        adapter_path.write_text(json.dumps(normalized, indent=2, ensure_ascii=False), encoding="utf-8")
        click.echo(f"  Normalized source saved to {adapter_path}")

    files = generate(modules, cfg)
    for filename, content in files.items():
        file_path = out_dir / filename
        file_path.write_text(content, encoding="utf-8")
        click.echo(f"  Created {file_path}")
    return len(files)


@click.group()
@click.version_option(__version__, prog_name="apiboost")
def main():
    """apiboost — generate request bindings from API descriptions."""
    pass


@main.command(name="generate")
@click.option("-c", "--config", "config_path", default=None, type=click.Path(path_type=Path), help="Config file (default: apiboost.config.yaml in the current directory).")
@click.option("--source", default=None, help="Override the source file of every config entry.")
@click.option("-o", "--output", default=None, help="Override the output directory of every config entry.")
@click.option("--format", "fmt", default="auto", type=click.Choice(FORMATS), help="Source format.")
def generate_cmd(config_path: Path | None, source: str | None, output: str | None, fmt: str):
    """Generate request binding files from the configured sources."""
    try:
        configs = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    base_dir = Path.cwd()

    total = 0
    for cfg in configs:
        overrides = {}
        if source:
            overrides["source_path"] = source
        if output:
            overrides["out_dir"] = output
        if overrides:
            cfg = cfg.model_copy(update=overrides)
        try:
            total += _run_config(cfg, fmt, base_dir)
        except SourceFormatError as e:
            raise click.ClickException(str(e)) from e

    click.echo(f"Done! Generated {total} files.")


@main.command()
@click.option("-o", "--output", default="apiboost.config.yaml", type=click.Path(path_type=Path), help="Where to write the config file.")
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
def init(output: Path, force: bool):
    """Write a starter config file."""
    if output.exists() and not force:
        raise click.ClickException(f"{output} already exists (use --force to overwrite)")
    output.write_text(dump_config(default_config()), encoding="utf-8")
    click.echo(f"Config saved to {output}")


@main.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "fmt", default="auto", type=click.Choice(FORMATS), help="Source format.")
@click.option("--group-by", default="tag", type=click.Choice(["tag", "path"]), help="Grouping for OpenAPI sources.")
def inspect(source: Path, fmt: str, group_by: str):
    """List modules and the function name each operation will get."""
    try:
        modules, _ = _parse_source(source, fmt, group_by)
    except SourceFormatError as e:
        raise click.ClickException(str(e)) from e

    for module in modules:
        click.echo(f"{module.name} ({len(module.operations)} operations)")
        used: set[str] = set()
        for op in module.operations:
            name = resolve_name(op.suggested_name, op, used)
            click.echo(f"  {op.method.upper():<6} {op.path} -> {name}")
