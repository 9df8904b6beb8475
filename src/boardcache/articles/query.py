"""
Repository Query Description

Value objects describing what the side hot list asks of an article
repository: a filter tree, sort order, page size and field projection.
Repositories are free to translate a Query into their own query language;
filters also evaluate themselves against plain records so in-memory
repositories can run them directly.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from boardcache.articles.model import KEY_ID, parse_tags


class FilterOperator(Enum):
    """Comparison applied by a PropertyFilter."""
    EQUAL = "=="
    NOT_EQUAL = "!="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    CONTAINS = "contains"          # Collection (or comma separated string) holds value
    NOT_CONTAINS = "not contains"


class CompositeFilterOperator(Enum):
    """How to combine child filters."""
    AND = "and"  # All filters must match
    OR = "or"    # At least one filter must match


class SortDirection(Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


def _as_number(value: Any) -> Optional[Union[int, float]]:
    """Return value as a number when it is one or spells one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            try:
                return float(value)
            except ValueError:
                return None
    return None


def _comparable(left: Any, right: Any) -> Tuple[Any, Any]:
    """Compare numerically when both sides are numeric, otherwise as given."""
    left_number, right_number = _as_number(left), _as_number(right)
    if left_number is not None and right_number is not None:
        return left_number, right_number
    return left, right


@dataclass(frozen=True)
class PropertyFilter:
    """Single field comparison."""
    name: str
    operator: FilterOperator
    value: Any

    def matches(self, record: Mapping[str, Any]) -> bool:
        """Evaluate the filter against a record."""
        actual = record.get(self.name)

        if self.operator == FilterOperator.CONTAINS:
            return self.value in parse_tags(actual)
        if self.operator == FilterOperator.NOT_CONTAINS:
            return self.value not in parse_tags(actual)

        left, right = _comparable(actual, self.value)
        if self.operator == FilterOperator.EQUAL:
            return left == right
        if self.operator == FilterOperator.NOT_EQUAL:
            return left != right

        # Ordering comparisons never match a missing field
        if left is None:
            return False
        try:
            if self.operator == FilterOperator.GREATER_THAN:
                return left > right
            if self.operator == FilterOperator.GREATER_THAN_OR_EQUAL:
                return left >= right
            if self.operator == FilterOperator.LESS_THAN:
                return left < right
            if self.operator == FilterOperator.LESS_THAN_OR_EQUAL:
                return left <= right
        except TypeError:
            return False

        raise ValueError(f"Unsupported filter operator: {self.operator}")


@dataclass(frozen=True)
class CompositeFilter:
    """Combination of child filters."""
    operator: CompositeFilterOperator
    filters: Tuple[Union[PropertyFilter, 'CompositeFilter'], ...]

    def matches(self, record: Mapping[str, Any]) -> bool:
        if self.operator == CompositeFilterOperator.AND:
            return all(f.matches(record) for f in self.filters)
        return any(f.matches(record) for f in self.filters)


@dataclass(frozen=True)
class Sort:
    """Sort key applied by a Query."""
    name: str
    direction: SortDirection = SortDirection.ASCENDING


@dataclass(frozen=True)
class Query:
    """
    Repository query.

    Attributes:
        filter: Filter tree, or None to match every record
        sorts: Sort keys, most significant first
        limit: Maximum number of results, or None for no limit
        projections: Fields to return besides the id; empty means all fields
    """
    filter: Optional[Union[PropertyFilter, CompositeFilter]] = None
    sorts: Tuple[Sort, ...] = field(default_factory=tuple)
    limit: Optional[int] = None
    projections: Tuple[str, ...] = field(default_factory=tuple)

    def matches(self, record: Mapping[str, Any]) -> bool:
        return self.filter is None or self.filter.matches(record)

    def apply(self, records: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        """
        Run the query over in-memory records.

        Filters, sorts (stable, most significant key first), truncates to
        the limit and projects the surviving records.
        """
        selected = [record for record in records if self.matches(record)]

        # Stable sort from the least significant key up
        for sort in reversed(self.sorts):
            present = [r for r in selected if r.get(sort.name) is not None]
            missing = [r for r in selected if r.get(sort.name) is None]
            present.sort(
                key=lambda r, name=sort.name: _sort_value(r.get(name)),
                reverse=sort.direction == SortDirection.DESCENDING
            )
            selected = present + missing

        if self.limit is not None:
            selected = selected[:self.limit]

        return [self.project(record) for record in selected]

    def project(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        """Keep the id and the projected fields of a record."""
        if not self.projections:
            return dict(record)
        fields: Sequence[str] = (KEY_ID,) + tuple(self.projections)
        return {name: record[name] for name in fields if name in record}


def _sort_value(value: Any) -> Tuple[int, Any]:
    # Numbers sort before strings, strings before anything else
    number = _as_number(value)
    if number is not None:
        return 0, number
    if isinstance(value, str):
        return 1, value
    return 2, str(value)
