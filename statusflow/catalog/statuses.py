"""Status catalog: the selectable status definitions of a tenant/project."""

from typing import Iterable, Iterator

from ..schema.models import StatusDefinition


class StatusCatalog:
    """Read-only, ordered collection of StatusDefinition keyed by id."""

    def __init__(self, statuses: Iterable[StatusDefinition] = ()):
        self._by_id: dict[int, StatusDefinition] = {}
        for status in statuses:
            self._by_id.setdefault(status.id, status)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, str]]) -> "StatusCatalog":
        """Build a catalog from ``(id, name)`` tuples."""
        return cls(StatusDefinition(id=status_id, name=name) for status_id, name in pairs)

    def get(self, status_id: int) -> StatusDefinition | None:
        return self._by_id.get(status_id)

    def name_of(self, status_id: int) -> str | None:
        status = self._by_id.get(status_id)
        return status.name if status is not None else None

    def unplaced(self, placed_ids: Iterable[int]) -> list[StatusDefinition]:
        """Statuses not yet present in a graph, in catalog order."""
        placed = set(placed_ids)
        return [s for s in self._by_id.values() if s.id not in placed]

    def is_empty(self) -> bool:
        return not self._by_id

    def __contains__(self, status_id: object) -> bool:
        return status_id in self._by_id

    def __iter__(self) -> Iterator[StatusDefinition]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)
