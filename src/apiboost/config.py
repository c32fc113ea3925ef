"""Generator configuration.

Config files are YAML (JSON is accepted as well) and hold either one mapping
or a list of mappings; each mapping describes an independent generation run.
Keys may be written in snake_case or in the camelCase used by the original
``apiboost.config`` files (``exportStyle``, ``requestImport``, ...).
"""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILE_NAMES = ("apiboost.config.yaml", "apiboost.config.yml", "apiboost.config.json")

DEFAULT_IDENTIFIER = "request"
DEFAULT_IMPORT_LINE = "import request from '@/utils/request';"


class ConfigError(ValueError):
    """Configuration file missing or invalid."""


class RequestImport(BaseModel):
    """Import preamble and the request function called by generated code."""

    model_config = ConfigDict(populate_by_name=True)

    enabled: bool = False
    import_line: str = Field(default="", alias="importLine")
    identifier: str = Field(default=DEFAULT_IDENTIFIER)

    @field_validator("identifier", mode="before")
    @classmethod
    def _default_identifier(cls, v):
        return v or DEFAULT_IDENTIFIER

    @field_validator("import_line", mode="before")
    @classmethod
    def _none_is_empty(cls, v):
        return v or ""


class GeneratorConfig(BaseModel):
    """One generation run: where to read, where to write, and how to render."""

    model_config = ConfigDict(populate_by_name=True)

    source_path: str = Field(default="", alias="sourcePath")
    out_dir: str = Field(default="outputs", alias="outDir")
    export_style: Literal["function", "object"] = Field(default="function", alias="exportStyle")
    output_ext: Literal["ts", "js"] = Field(default="ts", alias="outputExt")
    base_url_prefix: str = Field(default="", alias="baseUrlPrefix")
    filename_case: Literal["camel", "kebab"] = Field(default="camel", alias="filenameCase")
    include_jsdoc: bool = Field(default=True, alias="includeJSDoc")
    group_include: list[str] = Field(default=[], alias="groupInclude")
    group_by: Literal["tag", "path"] = Field(default="tag", alias="groupBy")
    request_import: RequestImport = Field(default_factory=RequestImport, alias="requestImport")

    @field_validator("group_include", mode="before")
    @classmethod
    def _list_or_empty(cls, v):
        return v if isinstance(v, list) else []

    @field_validator("base_url_prefix", mode="before")
    @classmethod
    def _none_is_empty(cls, v):
        return v or ""

    @field_validator("request_import", mode="before")
    @classmethod
    def _none_is_disabled(cls, v):
        return v if v is not None else {}

    @property
    def annotated(self) -> bool:
        """True when generated code carries TypeScript type annotations."""
        return self.output_ext == "ts"


def default_config() -> GeneratorConfig:
    """Starter configuration written by ``apiboost init``."""
    return GeneratorConfig(
        source_path="openapi.json",
        request_import=RequestImport(enabled=True, import_line=DEFAULT_IMPORT_LINE),
    )


def find_config_file(root: Path) -> Path | None:
    """Return the first existing default config file under ``root``."""
    for name in CONFIG_FILE_NAMES:
        candidate = root / name
        if candidate.exists():
            return candidate
    return None


def load_config(path: Path | None = None, root: Path | None = None) -> list[GeneratorConfig]:
    """Load one or more generator configs.

    An explicit ``path`` must exist. Without one, the default file names are
    searched for in ``root`` (the current directory by default).
    """
    if path is not None:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
    else:
        root = root or Path.cwd()
        path = find_config_file(root)
        if path is None:
            raise ConfigError(
                f"No config file found in {root} (looked for {', '.join(CONFIG_FILE_NAMES)})"
            )

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse config file {path}: {e}") from e
    return parse_configs(data, source=str(path))


def parse_configs(data, source: str = "<config>") -> list[GeneratorConfig]:
    """Validate decoded config data (a mapping or a list of mappings)."""
    if data is None:
        data = {}
    entries = data if isinstance(data, list) else [data]
    configs = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ConfigError(f"{source}: entry {index} must be a mapping")
        try:
            configs.append(GeneratorConfig.model_validate(entry))
        except ValidationError as e:
            raise ConfigError(f"{source}: invalid config entry {index}: {e}") from e
    return configs


def dump_config(config: GeneratorConfig) -> str:
    """Serialize a config as YAML using the camelCase keys."""
    return yaml.safe_dump(config.model_dump(by_alias=True), sort_keys=False, allow_unicode=True)
