"""Application search – Query, conditions and sort clauses."""
from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, Iterable, Literal

from facet_lists.kernel.errors import BackendExecutionError, BaseError, ConfigurationError
from facet_lists.observability.logging import get_logger

if TYPE_CHECKING:
    from facet_lists.application.search.index import IndexDescriptor
    from facet_lists.application.search.result import ResultSet

__all__ = ["Condition", "ConditionGroup", "Query", "SortClause"]

logger = get_logger(__name__)

ConditionOperator = Literal["=", "<>", "IN", "NOT IN"]
_OPERATORS: frozenset[str] = frozenset({"=", "<>", "IN", "NOT IN"})


@dataclasses.dataclass(frozen=True)
class Condition:
    field: str
    value: Any
    operator: ConditionOperator = "="

    def __post_init__(self) -> None:
        if self.operator not in _OPERATORS:
            raise ConfigurationError(f"Unsupported condition operator {self.operator!r}", option="operator")
        if self.operator in ("IN", "NOT IN"):
            object.__setattr__(self, "value", tuple(self.value))


@dataclasses.dataclass
class ConditionGroup:
    """Conditions joined by ``AND`` or ``OR``; groups nest."""

    conjunction: Literal["AND", "OR"] = "AND"
    conditions: list["Condition | ConditionGroup"] = dataclasses.field(default_factory=list)
    tags: set[str] = dataclasses.field(default_factory=set)

    def add_condition(self, field: str, value: Any, operator: ConditionOperator = "=") -> "ConditionGroup":
        self.conditions.append(Condition(field, value, operator))
        return self

    def add_condition_group(self, group: "ConditionGroup") -> "ConditionGroup":
        self.conditions.append(group)
        return self

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def find_tagged(self, tag: str) -> list["ConditionGroup"]:
        found = [self] if tag in self.tags else []
        for condition in self.conditions:
            if isinstance(condition, ConditionGroup):
                found.extend(condition.find_tagged(tag))
        return found


@dataclasses.dataclass(frozen=True)
class SortClause:
    field: str
    direction: Literal["ASC", "DESC"] = "ASC"


class Query:
    """A search query against one index.

    Built by a list source, altered by the backend's pre-execute hooks and
    executed at most once; later ``execute()`` calls return the same results.
    """

    def __init__(
        self,
        index: "IndexDescriptor",
        *,
        limit: int | None = None,
        offset: int = 0,
        search_id: str = "",
    ) -> None:
        self.index = index
        self.limit = limit
        self.offset = offset
        self.search_id = search_id
        self.languages: tuple[str, ...] | None = None
        self._conditions = ConditionGroup("AND")
        self._options: dict[str, Any] = {}
        self._sorts: list[SortClause] = []
        self._results: "ResultSet | None" = None

    # Conditions -------------------------------------------------------
    def add_condition(self, field: str, value: Any, operator: ConditionOperator = "=") -> "Query":
        self._conditions.add_condition(field, value, operator)
        return self

    def add_condition_group(self, group: ConditionGroup) -> "Query":
        self._conditions.add_condition_group(group)
        return self

    def create_condition_group(self, conjunction: Literal["AND", "OR"] = "AND", tags: Iterable[str] = ()) -> ConditionGroup:
        return ConditionGroup(conjunction, tags=set(tags))

    @property
    def condition_group(self) -> ConditionGroup:
        return self._conditions

    # Options ----------------------------------------------------------
    def set_option(self, key: str, value: Any) -> "Query":
        self._options[key] = value
        return self

    def get_option(self, key: str, default: Any = None) -> Any:
        return self._options.get(key, default)

    def set_languages(self, languages: Iterable[str]) -> "Query":
        self.languages = tuple(languages)
        return self

    # Sorting ----------------------------------------------------------
    def sort(self, field: str, direction: str = "ASC") -> "Query":
        normalized = str(direction).upper()
        if normalized not in ("ASC", "DESC"):
            raise ConfigurationError(f"Invalid sort direction {direction!r} for '{field}'", option="sort")
        self._sorts.append(SortClause(field, normalized))  # type: ignore[arg-type]
        return self

    @property
    def sorts(self) -> tuple[SortClause, ...]:
        return tuple(self._sorts)

    # Execution --------------------------------------------------------
    @property
    def executed(self) -> bool:
        return self._results is not None

    def execute(self) -> "ResultSet":
        if self._results is not None:
            return self._results
        backend = self.index.backend
        if backend is None:
            raise BackendExecutionError(self.index.id, f"Index '{self.index.id}' has no search backend")
        try:
            self._results = backend.execute(self)
        except BaseError:
            raise
        except Exception as exc:
            logger.error("query.failed", index_id=self.index.id, search_id=self.search_id, error=repr(exc))
            raise BackendExecutionError(self.index.id, cause=exc) from exc
        return self._results

    @property
    def cache_tags(self) -> tuple[str, ...]:
        return self.index.cache_tags

    def __repr__(self) -> str:
        return f"Query(index={self.index.id!r}, search_id={self.search_id!r}, limit={self.limit}, offset={self.offset})"
