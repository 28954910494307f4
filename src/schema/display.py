"""Field visibility: which properties the form shows for the current values."""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping
from typing import Any

from src.schema.models import NodeDescription, NodeProperty

_MISSING = object()


def _lookup(key: str, values: Mapping[str, Any], root_values: Mapping[str, Any]) -> Any:
    # "/name" addresses a root parameter from inside a collection
    if key.startswith("/"):
        return root_values.get(key[1:], _MISSING)
    return values.get(key, _MISSING)


def is_visible(
    prop: NodeProperty,
    values: Mapping[str, Any],
    root_values: Mapping[str, Any] | None = None,
) -> bool:
    """Evaluate ``prop.display_options`` against the given parameter values.

    Every ``show`` condition must hold and no ``hide`` condition may match.
    A ``show`` condition on a parameter with no value fails.
    """
    options = prop.display_options
    if options is None:
        return True
    root = values if root_values is None else root_values

    for key, allowed in options.show.items():
        value = _lookup(key, values, root)
        if value is _MISSING or value not in allowed:
            return False

    for key, hidden in options.hide.items():
        value = _lookup(key, values, root)
        if value is not _MISSING and value in hidden:
            return False

    return True


def iter_visible(
    description: NodeDescription, values: Mapping[str, Any],
) -> Iterator[tuple[NodeProperty, Any]]:
    """Yield each visible top-level property with its effective value.

    Properties are walked in declaration order and each one is tested against
    the values resolved so far, so a condition can only depend on properties
    declared before it. When several declarations share a name, the first
    visible one wins. A missing value falls back to a copy of the default.
    """
    resolved: dict[str, Any] = {}
    for prop in description.properties:
        if prop.name in resolved or not is_visible(prop, resolved):
            continue
        if prop.name in values:
            value = values[prop.name]
        else:
            value = copy.deepcopy(prop.default)
        resolved[prop.name] = value
        yield prop, value


def visible_properties(
    description: NodeDescription, values: Mapping[str, Any],
) -> list[NodeProperty]:
    return [prop for prop, _ in iter_visible(description, values)]


def visible_options(
    prop: NodeProperty, root_values: Mapping[str, Any],
) -> list[NodeProperty]:
    """Collection fields offered for the current root values."""
    return [
        field for field in prop.fields()
        if is_visible(field, {}, root_values)
    ]
