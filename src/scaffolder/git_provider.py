"""GitRepositoryProvider: opens and clones scaffold sources with GitPython."""

import logging
import os

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from scaffolder.errors import CloneFailed, SourceNotFound

logger = logging.getLogger(__name__)


class GitRepositoryProvider:
    """Repository provider backed by GitPython.

    ``open`` accepts a git working tree or a plain directory and returns the
    directory to read templates from. ``clone`` fetches a remote repository
    into ``destination``.
    """

    def open(self, path):
        if not os.path.isdir(path):
            raise SourceNotFound(f"Scaffold source not found: {path}")
        try:
            repo = Repo(path)
        except (InvalidGitRepositoryError, NoSuchPathError):
            logger.debug("%s is not a git working tree, using it as a plain directory", path)
            return path
        return repo.working_tree_dir or path

    def clone(self, url, destination):
        try:
            repo = Repo.clone_from(url, destination)
        except GitCommandError as e:
            raise CloneFailed(f"Failed to clone {url}: {e}") from e
        return repo.working_tree_dir
