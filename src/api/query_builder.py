# This file builds SQL WHERE clauses from an ordered list of predicates.
# It exists so filter text and bound values are produced together and can never drift apart.
# Each predicate is a template with an optional `{param}` slot and the value bound to it.
# Parameter names are derived from the predicate position, which keeps binding order auditable.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

PARAM_SLOT = "{param}"


@dataclass(frozen=True)
class Predicate:
    template: str
    value: Any = None
    bound: bool = False


@dataclass(frozen=True)
class WhereClause:
    sql: str
    params: dict[str, Any]


@dataclass
class PredicateBuilder:
    """Ordered conjunction of SQL predicates with positionally named parameters."""

    param_prefix: str = "p"
    _predicates: list[Predicate] = field(default_factory=list)

    def add_fixed(self, template: str) -> PredicateBuilder:
        if PARAM_SLOT in template:
            raise ValueError(f"Fixed predicate must not contain a parameter slot: {template!r}")
        self._predicates.append(Predicate(template=template))
        return self

    def add(self, template: str, value: Any) -> PredicateBuilder:
        if template.count(PARAM_SLOT) != 1:
            raise ValueError(f"Predicate must contain exactly one parameter slot: {template!r}")
        self._predicates.append(Predicate(template=template, value=value, bound=True))
        return self

    def add_if_present(self, template: str, raw_value: str | None, *, pattern: str = "{}") -> PredicateBuilder:
        """Append a bound predicate when `raw_value` is non-blank after trimming.

        `pattern` wraps the trimmed value, e.g. ``"%{}%"`` for substring matches.
        """

        value = clean_param(raw_value)
        if value is None:
            return self
        return self.add(template, pattern.format(value))

    def build(self) -> WhereClause:
        if not self._predicates:
            raise ValueError("At least one predicate is required.")

        fragments: list[str] = []
        params: dict[str, Any] = {}
        for predicate in self._predicates:
            if not predicate.bound:
                fragments.append(predicate.template)
                continue
            name = f"{self.param_prefix}{len(params) + 1}"
            fragments.append(predicate.template.replace(PARAM_SLOT, f":{name}"))
            params[name] = predicate.value

        return WhereClause(sql=" AND ".join(fragments), params=params)


def clean_param(raw_value: str | None) -> str | None:
    """Trim a query parameter; blank values count as absent."""

    if raw_value is None:
        return None
    value = raw_value.strip()
    return value or None


def split_csv_param(raw_value: str | None) -> list[str]:
    """Split a comma-separated parameter into trimmed, non-empty items."""

    if raw_value is None:
        return []
    return [item.strip() for item in raw_value.split(",") if item.strip()]
