"""Render engine: writes a scaffold's file entries into the output directory."""

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from scaffolder.errors import RenderError, SourceFileMissing
from scaffolder.template_engine import (
    JinjaTemplateEngine,
    is_template_file,
    normalize_template_key,
)

logger = logging.getLogger(__name__)

CREATED = "created"
REPLACED = "replaced"
SKIPPED = "skipped"


@dataclass(frozen=True)
class FileOutcome:
    """What the render engine did with one file entry."""

    src: str
    destination: Path
    action: str


class RenderEngine:
    """Renders template entries and copies all other entries verbatim.

    Args:
        engine_factory: Callable returning a fresh template engine for each
            scaffold, so templates never leak between scaffolds.
    """

    def __init__(self, engine_factory=JinjaTemplateEngine):
        self._engine_factory = engine_factory

    def render(self, template_root, output_root, scaffold, context, overwrite=False):
        """Write every file entry of *scaffold* below *output_root*.

        Entries are processed in declaration order; the first failing entry
        aborts the rest. An existing destination is left untouched unless
        *overwrite* is set.

        Returns:
            A list of FileOutcome, one per entry processed.
        """
        template_root = Path(template_root)
        output_root = Path(output_root)
        engine = self._register_templates(template_root, scaffold.files)

        outcomes = []
        for entry in scaffold.files:
            destination = self._destination(output_root, entry.dest, engine, context)
            if destination.is_dir():
                raise RenderError(f"Destination {destination} is an existing directory")
            existed = destination.exists()
            if existed and not overwrite:
                logger.debug("Skipping existing %s", destination)
                outcomes.append(FileOutcome(entry.src, destination, SKIPPED))
                continue

            if is_template_file(entry.src):
                rendered = engine.render_named(normalize_template_key(entry.src), context)
                _write(destination, lambda: destination.write_text(rendered, encoding="utf-8"))
            else:
                source_path = template_root / entry.src
                if not source_path.is_file():
                    raise SourceFileMissing(f"Source file not found: {source_path}")
                _write(destination, lambda: shutil.copyfile(source_path, destination))
            outcomes.append(FileOutcome(entry.src, destination, REPLACED if existed else CREATED))
        return outcomes

    def _register_templates(self, template_root, files):
        engine = self._engine_factory()
        for entry in files:
            if not is_template_file(entry.src):
                continue
            source_path = template_root / entry.src
            if not source_path.is_file():
                raise SourceFileMissing(f"Template file not found: {source_path}")
            try:
                raw_text = source_path.read_text(encoding="utf-8")
            except UnicodeDecodeError as e:
                raise RenderError(f"Template file {source_path} is not valid UTF-8: {e}") from e
            except OSError as e:
                raise SourceFileMissing(f"Cannot read template file {source_path}: {e}") from e
            engine.register_named(normalize_template_key(entry.src), raw_text)
        return engine

    @staticmethod
    def _destination(output_root, dest_template, engine, context):
        relative = engine.render_inline(dest_template, context)
        if not relative or os.path.isabs(relative):
            raise RenderError(f"Destination '{dest_template}' must resolve to a relative path, got '{relative}'")
        destination = output_root / relative
        resolved_root = output_root.resolve()
        if not destination.resolve().is_relative_to(resolved_root):
            raise RenderError(f"Destination '{relative}' escapes the output directory {output_root}")
        return destination


def _write(destination, write):
    """Create *destination*'s parents and run *write*, translating I/O failures."""
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        write()
    except OSError as e:
        raise RenderError(f"Cannot write {destination}: {e}") from e
