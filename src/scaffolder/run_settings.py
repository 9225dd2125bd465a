"""Effective run settings: CLI defaults merged with configuration overrides."""

from dataclasses import dataclass, replace

from scaffolder.config import ProjectSettings

DEFAULT_PROJECT_NAME = "MyExampleProject"
DEFAULT_OUTPUT_DIR = "generated"


@dataclass(frozen=True)
class RunSettings:
    project_name: str = DEFAULT_PROJECT_NAME
    output: str = DEFAULT_OUTPUT_DIR
    overwrite: bool = False


def merge_settings(cli_defaults: RunSettings, config_overrides: ProjectSettings) -> RunSettings:
    """Return the effective settings for a run.

    Each field set in the configuration's ``[project]`` table replaces the
    CLI value; fields left unset fall back to the CLI value.
    """
    overrides = {}
    if config_overrides.name is not None:
        overrides["project_name"] = config_overrides.name
    if config_overrides.output is not None:
        overrides["output"] = config_overrides.output
    if config_overrides.overwrite is not None:
        overrides["overwrite"] = config_overrides.overwrite
    return replace(cli_defaults, **overrides)
