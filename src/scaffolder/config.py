"""Scaffolding configuration: data model and TOML loading."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from scaffolder.errors import ConfigParseError

DEFAULT_CONFIG_PATH = "scaffolding.toml"
DEFAULT_TEMPLATE_DIR = "templates"
UNNAMED_SCAFFOLD = "unnamed"


@dataclass(frozen=True)
class FileEntry:
    src: str
    dest: str


@dataclass(frozen=True)
class HookSpec:
    pre: str | None = None
    post: str | None = None


@dataclass(frozen=True)
class Scaffold:
    """One template source plus the files, hooks and variables to apply from it."""

    repo: str
    files: tuple[FileEntry, ...] = ()
    name: str | None = None
    template_dir: str | None = None
    hooks: HookSpec | None = None
    variables: dict[str, Any] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return self.name or UNNAMED_SCAFFOLD

    @property
    def template_root(self) -> str:
        return self.template_dir or DEFAULT_TEMPLATE_DIR


@dataclass(frozen=True)
class ProjectSettings:
    """Run settings read from the ``[project]`` table; None means not set."""

    name: str | None = None
    output: str | None = None
    overwrite: bool | None = None


@dataclass(frozen=True)
class Config:
    scaffolds: tuple[Scaffold, ...] = ()
    project: ProjectSettings = ProjectSettings()


def load_config(path) -> Config:
    """Read and parse a TOML scaffolding configuration file.

    Raises ConfigParseError if the file cannot be read, is not valid TOML,
    or does not have the expected shape.
    """
    config_path = Path(path)
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigParseError(f"Configuration file not found: {config_path}") from e
    except OSError as e:
        raise ConfigParseError(f"Cannot read configuration file {config_path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML in {config_path}: {e}") from e
    return parse_config(data)


def parse_config(data: dict) -> Config:
    """Build a Config from already-decoded configuration data."""
    project = _parse_project(_optional_table(data, "project", "project"))
    raw_scaffolds = data.get("scaffolds", [])
    if not isinstance(raw_scaffolds, list):
        raise ConfigParseError("'scaffolds' must be an array of tables")
    scaffolds = tuple(
        _parse_scaffold(raw, f"scaffolds[{index}]")
        for index, raw in enumerate(raw_scaffolds)
    )
    return Config(scaffolds=scaffolds, project=project)


def _parse_project(table):
    if table is None:
        return ProjectSettings()
    overwrite = table.get("overwrite")
    if overwrite is not None and not isinstance(overwrite, bool):
        raise ConfigParseError("'project.overwrite' must be a boolean")
    return ProjectSettings(
        name=_optional_string(table, "name", "project.name"),
        output=_optional_string(table, "output", "project.output"),
        overwrite=overwrite,
    )


def _parse_scaffold(raw, where):
    if not isinstance(raw, dict):
        raise ConfigParseError(f"'{where}' must be a table")

    repo = raw.get("repo")
    if not isinstance(repo, str) or not repo:
        raise ConfigParseError(f"'{where}.repo' is required and must be a string")

    template = raw.get("template")
    if not isinstance(template, dict):
        raise ConfigParseError(f"'{where}.template' is required and must be a table")
    raw_files = template.get("files", [])
    if not isinstance(raw_files, list):
        raise ConfigParseError(f"'{where}.template.files' must be an array of tables")

    hooks_table = _optional_table(raw, "hooks", f"{where}.hooks")
    hooks = None
    if hooks_table is not None:
        hooks = HookSpec(
            pre=_optional_string(hooks_table, "pre", f"{where}.hooks.pre"),
            post=_optional_string(hooks_table, "post", f"{where}.hooks.post"),
        )

    variables = _optional_table(raw, "variables", f"{where}.variables") or {}

    return Scaffold(
        repo=repo,
        files=tuple(
            _parse_file_entry(entry, f"{where}.template.files[{index}]")
            for index, entry in enumerate(raw_files)
        ),
        name=_optional_string(raw, "name", f"{where}.name"),
        template_dir=_optional_string(raw, "template_dir", f"{where}.template_dir"),
        hooks=hooks,
        variables=dict(variables),
    )


def _parse_file_entry(raw, where):
    if not isinstance(raw, dict):
        raise ConfigParseError(f"'{where}' must be a table with 'src' and 'dest'")
    for key in ("src", "dest"):
        if not isinstance(raw.get(key), str) or not raw[key]:
            raise ConfigParseError(f"'{where}.{key}' is required and must be a string")
    return FileEntry(src=raw["src"], dest=raw["dest"])


def _optional_table(table, key, where):
    value = table.get(key)
    if value is not None and not isinstance(value, dict):
        raise ConfigParseError(f"'{where}' must be a table")
    return value


def _optional_string(table, key, where):
    value = table.get(key)
    if value is not None and not isinstance(value, str):
        raise ConfigParseError(f"'{where}' must be a string")
    return value
