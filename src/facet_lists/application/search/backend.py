"""Application search – SearchBackend protocol and InMemorySearchBackend."""
from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Protocol, runtime_checkable

from facet_lists.application.search.query import Condition, ConditionGroup, Query
from facet_lists.application.search.result import ResultItem, ResultSet
from facet_lists.observability.logging import get_logger

__all__ = ["FEATURE_FACETS", "InMemorySearchBackend", "PreExecuteHook", "SearchBackend"]

FEATURE_FACETS = "search_api_facets"

PreExecuteHook = Callable[[Query], None]

logger = get_logger(__name__)


@runtime_checkable
class SearchBackend(Protocol):
    def execute(self, query: Query) -> ResultSet: ...
    def supports_feature(self, feature: str) -> bool: ...


class InMemorySearchBackend:
    """Search backend evaluating queries against a list of field dicts.

    Each document needs an ``id``; an ``entity`` key, when present, is passed
    through to the result item. Pre-execute hooks run in registration order
    and may alter the query before it is evaluated.
    """

    def __init__(
        self,
        documents: Iterable[Mapping[str, Any]] = (),
        *,
        hooks: Iterable[PreExecuteHook] = (),
        features: Iterable[str] = (FEATURE_FACETS,),
        language_field: str = "search_api_language",
    ) -> None:
        self._documents: list[Mapping[str, Any]] = list(documents)
        self._hooks: list[PreExecuteHook] = list(hooks)
        self._features = frozenset(features)
        self._language_field = language_field

    def add_documents(self, documents: Iterable[Mapping[str, Any]]) -> None:
        self._documents.extend(documents)

    def add_pre_execute_hook(self, hook: PreExecuteHook) -> None:
        self._hooks.append(hook)

    def supports_feature(self, feature: str) -> bool:
        return feature in self._features

    def execute(self, query: Query) -> ResultSet:
        for hook in self._hooks:
            hook(query)

        matches = [
            doc for doc in self._documents
            if self._matches_language(doc, query.languages) and self._matches(doc, query.condition_group)
        ]

        for clause in reversed(query.sorts):
            matches.sort(key=lambda d, f=clause.field: _sort_key(d.get(f)), reverse=(clause.direction == "DESC"))

        total = len(matches)
        start = query.offset or 0
        page = matches[start:start + query.limit] if query.limit else matches[start:]
        logger.debug("backend.executed", index_id=query.index.id, search_id=query.search_id, total=total)
        return ResultSet(
            items=[ResultItem(id=str(doc["id"]), fields=doc, entity=doc.get("entity")) for doc in page],
            result_count=total,
        )

    def _matches_language(self, doc: Mapping[str, Any], languages: tuple[str, ...] | None) -> bool:
        if not languages or self._language_field not in doc:
            return True
        return str(doc[self._language_field]) in languages

    def _matches(self, doc: Mapping[str, Any], group: ConditionGroup) -> bool:
        outcomes = (
            self._matches(doc, c) if isinstance(c, ConditionGroup) else self._matches_condition(doc, c)
            for c in group.conditions
        )
        if group.conjunction == "OR":
            return not group.conditions or any(outcomes)
        return all(outcomes)

    @staticmethod
    def _matches_condition(doc: Mapping[str, Any], condition: Condition) -> bool:
        present = _as_strings(doc.get(condition.field))
        match condition.operator:
            case "=":  return str(condition.value) in present
            case "<>": return str(condition.value) not in present
            case "IN": return any(str(v) in present for v in condition.value)
            case "NOT IN": return not any(str(v) in present for v in condition.value)
            case _: return False


def _as_strings(value: Any) -> set[str]:
    if value is None:
        return set()
    if isinstance(value, (list, tuple, set, frozenset)):
        return {str(v) for v in value}
    return {str(value)}


def _sort_key(value: Any) -> tuple[bool, Any]:
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    return (value is None, value if value is not None else "")
