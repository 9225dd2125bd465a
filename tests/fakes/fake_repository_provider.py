"""FakeRepositoryProvider: test double for GitRepositoryProvider.

Records open() and clone() calls. clone() materializes a configurable file
tree at the destination instead of fetching anything.
"""

import os

from scaffolder.errors import CloneFailed, SourceNotFound
from scaffold_tree import write_tree


class FakeRepositoryProvider:
    """Test double that records calls and writes a canned tree on clone."""

    def __init__(self, clone_tree=None, clone_error=None):
        self._clone_tree = clone_tree or {}
        self._clone_error = clone_error
        self.calls = []

    def open(self, path):
        self.calls.append(("open", path))
        if not os.path.isdir(path):
            raise SourceNotFound(f"Scaffold source not found: {path}")
        return path

    def clone(self, url, destination):
        self.calls.append(("clone", url, destination))
        if self._clone_error:
            raise CloneFailed(self._clone_error)
        os.makedirs(destination)
        write_tree(destination, self._clone_tree)
        return destination

    @property
    def clone_destinations(self):
        return [call[2] for call in self.calls if call[0] == "clone"]
