"""
Audience attribute models.

An AttributeSet maps registered attribute names (industry, company_size,
role) to the set of values declared for them. Raw values are comma-separated
strings where each part is an alternative, so "Tech, Finance" declares two
acceptable industries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Iterator, Mapping, Optional, Tuple


INDUSTRY = "industry"
COMPANY_SIZE = "company_size"
ROLE = "role"

# Registered attribute names, in the order they are compared.
DEFAULT_ATTRIBUTE_NAMES: Tuple[str, ...] = (INDUSTRY, COMPANY_SIZE, ROLE)


def parse_attribute_value(raw: Any) -> FrozenSet[str]:
    """Split a raw attribute value into lowercase, trimmed alternatives.

    Accepts None, a comma-separated string, or a list/tuple/set of such
    strings. Empty parts are dropped.
    """
    if raw is None:
        return frozenset()
    if isinstance(raw, (list, tuple, set, frozenset)):
        parts: list[str] = []
        for element in raw:
            parts.extend(parse_attribute_value(element))
        return frozenset(parts)
    values = set()
    for part in str(raw).split(","):
        clean = part.strip().lower()
        if clean:
            values.add(clean)
    return frozenset(values)


@dataclass(frozen=True)
class AttributeSet:
    """Immutable set of audience attributes keyed by registered name."""

    values: Mapping[str, FrozenSet[str]] = field(default_factory=dict)
    names: Tuple[str, ...] = DEFAULT_ATTRIBUTE_NAMES

    def __post_init__(self) -> None:
        unknown = [name for name in self.values if name not in self.names]
        if unknown:
            raise ValueError(f"Unknown attribute name(s): {', '.join(sorted(unknown))}")
        # Drop unset attributes so equality only depends on declared values.
        cleaned = {
            name: frozenset(values)
            for name, values in self.values.items()
            if values
        }
        object.__setattr__(self, "values", cleaned)

    @classmethod
    def from_raw(
        cls,
        raw: Optional[Mapping[str, Any]],
        names: Tuple[str, ...] = DEFAULT_ATTRIBUTE_NAMES,
    ) -> "AttributeSet":
        """Build from request or storage input, ignoring unregistered keys."""
        raw = raw or {}
        return cls(
            values={name: parse_attribute_value(raw.get(name)) for name in names},
            names=names,
        )

    def get(self, name: str) -> FrozenSet[str]:
        return self.values.get(name, frozenset())

    def specified_names(self) -> Iterator[str]:
        """Registered names that carry at least one value, in registry order."""
        return (name for name in self.names if self.values.get(name))

    @property
    def compared_count(self) -> int:
        return sum(1 for _ in self.specified_names())

    def is_empty(self) -> bool:
        return not self.values

    def normalized_items(self) -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
        """Names sorted, values sorted and deduplicated."""
        return tuple(
            (name, tuple(sorted(self.values[name])))
            for name in sorted(self.values)
        )

    def to_dict(self) -> Dict[str, str]:
        """Comma-joined representation used for storage and admin listings."""
        return {name: ",".join(values) for name, values in self.normalized_items()}


def sanitize_targeting(raw: Mapping[str, Any], names: Iterable[str] = DEFAULT_ATTRIBUTE_NAMES) -> Dict[str, str]:
    """Normalize raw targeting input into the stored comma-separated form.

    Lists are joined, whitespace around each alternative is trimmed and
    empty alternatives are dropped. Original casing is kept for display.
    """
    sanitized: Dict[str, str] = {}
    for name in names:
        if name not in raw:
            continue
        value = raw[name]
        if value is None:
            sanitized[name] = ""
            continue
        if isinstance(value, (list, tuple)):
            value = ",".join(str(v) for v in value)
        parts = [part.strip() for part in str(value).split(",")]
        sanitized[name] = ",".join(part for part in parts if part)
    return sanitized
