"""Application hierarchy – expand a node id into itself plus its descendants."""
from __future__ import annotations

from typing import Callable, Generic, Iterable, Iterator, TypeVar

from facet_lists.kernel.errors import NotFoundError
from facet_lists.observability.logging import get_logger

__all__ = ["HierarchyExpander"]

logger = get_logger(__name__)

TNode = TypeVar("TNode")


class HierarchyExpander(Generic[TNode]):
    """Depth-first expansion over any tree-shaped taxonomy.

    ``load`` returns the node for an id (``None`` when unknown),
    ``children_of`` its direct children and ``node_id`` the id of a node.
    Nodes already visited are skipped, so cyclic data terminates.
    """

    def __init__(
        self,
        load: Callable[[str], TNode | None],
        children_of: Callable[[TNode], Iterable[TNode]],
        node_id: Callable[[TNode], str] = lambda node: str(getattr(node, "id")),
        *,
        name: str = "hierarchy",
    ) -> None:
        self._load = load
        self._children_of = children_of
        self._node_id = node_id
        self.name = name

    def get_hierarchy(self, root_id: str) -> list[str]:
        """*root_id* first, then every transitive descendant in depth-first order."""
        root = self._load(str(root_id))
        if root is None:
            raise NotFoundError(f"Hierarchy node ({self.name})", root_id)

        root_key = self._node_id(root)
        ordered: list[str] = [root_key]
        visited: set[str] = {root_key}
        stack: list[Iterator[TNode]] = [iter(self._children_of(root))]
        while stack:
            child = next(stack[-1], None)
            if child is None:
                stack.pop()
                continue
            child_key = self._node_id(child)
            if child_key in visited:
                logger.warning("hierarchy.cycle_detected", hierarchy=self.name, root_id=root_key, node_id=child_key)
                continue
            visited.add(child_key)
            ordered.append(child_key)
            stack.append(iter(self._children_of(child)))
        return ordered
