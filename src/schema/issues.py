"""Parameter issues: validation hints the form renderer shows next to fields."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from src.schema.display import iter_visible
from src.schema.models import NodeDescription, NodeProperty, PropertyType


@dataclass
class ParameterIssue:
    parameter: str
    message: str


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def _check_value(prop: NodeProperty, value: Any, path: str) -> list[ParameterIssue]:
    issues: list[ParameterIssue] = []

    if prop.type == PropertyType.OPTIONS and not _is_empty(value):
        if value not in prop.choices():
            issues.append(ParameterIssue(
                path, f'Parameter "{prop.display_name}" has unknown value "{value}".',
            ))

    if prop.type == PropertyType.NUMBER and not _is_empty(value):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            issues.append(ParameterIssue(
                path, f'Parameter "{prop.display_name}" must be a number.',
            ))
        elif prop.type_options is not None:
            low, high = prop.type_options.min_value, prop.type_options.max_value
            if low is not None and value < low:
                issues.append(ParameterIssue(
                    path, f'Parameter "{prop.display_name}" must be at least {low:g}.',
                ))
            if high is not None and value > high:
                issues.append(ParameterIssue(
                    path, f'Parameter "{prop.display_name}" must be at most {high:g}.',
                ))

    if prop.type == PropertyType.COLLECTION and isinstance(value, Mapping):
        fields = {f.name: f for f in prop.fields()}
        for key, item in value.items():
            field = fields.get(key)
            if field is not None:
                issues.extend(_check_value(field, item, f"{path}.{key}"))

    return issues


def collect_issues(
    description: NodeDescription, values: Mapping[str, Any],
) -> list[ParameterIssue]:
    """Return the issues of all visible parameters, in declaration order.

    Hidden parameters are never reported. Open key/value bags are only checked
    for the keys the description declares.
    """
    issues: list[ParameterIssue] = []
    for prop, value in iter_visible(description, values):
        if prop.required and _is_empty(value):
            issues.append(ParameterIssue(
                prop.name, f'Parameter "{prop.display_name}" is required.',
            ))
            continue
        issues.extend(_check_value(prop, value, prop.name))
    return issues
