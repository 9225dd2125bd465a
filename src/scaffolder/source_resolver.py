"""Resolve a scaffold's source reference to a local directory."""

import logging
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from scaffolder.config import UNNAMED_SCAFFOLD
from scaffolder.errors import CloneFailed, SourceNotFound

logger = logging.getLogger(__name__)

REMOTE_PREFIXES = ("http://", "https://", "git://")
TEMP_DIR_PREFIX = "scaffolder-"


def is_remote_source(source: str) -> bool:
    """Return True if *source* names a remote repository.

    Purely syntactic: only http://, https:// and git:// URLs are remote,
    everything else is treated as a local path.
    """
    return source.startswith(REMOTE_PREFIXES)


def clone_dir_name(scaffold_name: str | None) -> str:
    """Return the single path segment a remote scaffold is cloned into.

    Only the last segment of *scaffold_name* is used, so absolute names and
    ``..`` components can never place the clone outside its temporary root.
    Names with no usable segment fall back to ``unnamed``.
    """
    segment = Path(scaffold_name or "").name
    if segment in ("", ".", ".."):
        return UNNAMED_SCAFFOLD
    return segment


@dataclass(frozen=True)
class ResolvedSource:
    """A scaffold source materialized on the local filesystem.

    ``disposable_root`` is the temporary directory that owns a remote clone
    and must be deleted once the run is over; it is None for local sources.
    """

    directory: Path
    disposable_root: Path | None = None

    @property
    def disposable(self) -> bool:
        return self.disposable_root is not None


class SourceResolver:
    """Turns local paths and remote URLs into readable scaffold directories."""

    def __init__(self, repository_provider, temp_parent=None):
        self._provider = repository_provider
        self._temp_parent = temp_parent

    def resolve(self, source: str, scaffold_name: str | None = None) -> ResolvedSource:
        if is_remote_source(source):
            return self._clone(source, scaffold_name)
        return self._open(source)

    def _open(self, source):
        try:
            path = Path(source).resolve(strict=True)
        except (OSError, RuntimeError) as e:
            raise SourceNotFound(f"Scaffold source not found: {source}") from e
        opened = self._provider.open(str(path))
        logger.debug("Using local scaffold source at %s", opened)
        return ResolvedSource(directory=Path(opened))

    def _clone(self, url, scaffold_name):
        temp_root = Path(tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX, dir=self._temp_parent))
        clone_dir = temp_root / clone_dir_name(scaffold_name)
        try:
            if not clone_dir.resolve().is_relative_to(temp_root.resolve()):
                raise CloneFailed(f"Clone directory {clone_dir} is outside {temp_root}")
            logger.debug("Cloning %s into %s", url, clone_dir)
            self._provider.clone(url, str(clone_dir))
        except BaseException:
            shutil.rmtree(temp_root, ignore_errors=True)
            raise
        return ResolvedSource(directory=clone_dir, disposable_root=temp_root)
