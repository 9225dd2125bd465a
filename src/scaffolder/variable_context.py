"""Build the per-scaffold variable context used for all substitutions."""

import copy
from types import MappingProxyType
from typing import Any, Mapping


def build_context(project_name: str, declared_variables: Mapping[str, Any] | None = None) -> Mapping[str, Any]:
    """Merge the project name with a scaffold's declared variables.

    ``project_name`` is inserted first, so a declared variable of the same
    name replaces it. Values keep their decoded shape (strings, numbers,
    booleans, nested tables) and are copied, so rendering never sees changes
    made to the scaffold's configuration. The returned mapping is read-only.
    """
    context = {"project_name": project_name}
    context.update(copy.deepcopy(dict(declared_variables or {})))
    return MappingProxyType(context)
