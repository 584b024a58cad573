"""Category registry: the ordered lifecycle categories of a session."""

from typing import Iterable, Iterator


class CategoryRegistry:
    """An immutable, ordered set of category tags.

    The first entry is the default category for newly placed statuses. An
    empty registry is valid and disables node creation.
    """

    def __init__(self, categories: Iterable[str] = ()):
        seen: dict[str, None] = {}
        for category in categories:
            seen.setdefault(str(category), None)
        self._categories = tuple(seen)

    @property
    def categories(self) -> tuple[str, ...]:
        return self._categories

    @property
    def default(self) -> str | None:
        """The default category, or None if the registry is empty."""
        return self._categories[0] if self._categories else None

    def is_empty(self) -> bool:
        return not self._categories

    def __contains__(self, category: object) -> bool:
        return category in self._categories

    def __iter__(self) -> Iterator[str]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __repr__(self) -> str:
        return f"CategoryRegistry({list(self._categories)!r})"
