"""Per-record parameter resolution against the node description."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from src.schema.display import iter_visible
from src.schema.models import NodeDescription


class ParameterNotFoundError(Exception):
    """Raised when an operation reads a parameter that is not shown for the record."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Could not get parameter "{name}"')


class NodeParameters:
    """Resolved parameter values of one input record."""

    def __init__(self, values: Mapping[str, Any]) -> None:
        self._values = dict(values)

    def get(self, name: str) -> Any:
        if name not in self._values:
            raise ParameterNotFoundError(name)
        return self._values[name]

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)


def resolve_parameters(
    description: NodeDescription, raw: Mapping[str, Any],
) -> NodeParameters:
    """Keep the visible parameters of ``raw`` and fill in defaults for the rest.

    Values supplied for parameters that are hidden by the current selection are
    dropped, the way the form discards fields it no longer shows.
    """
    return NodeParameters({
        prop.name: value for prop, value in iter_visible(description, raw)
    })
