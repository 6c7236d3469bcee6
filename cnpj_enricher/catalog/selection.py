from collections.abc import Iterable, Iterator


class SelectionSet:
    """Field keys chosen by the operator, iterated in insertion order."""

    def __init__(self, keys: Iterable[str] = ()) -> None:
        self._keys: dict[str, None] = dict.fromkeys(keys)

    def add(self, key: str) -> None:
        self._keys.setdefault(key, None)

    def remove(self, key: str) -> None:
        self._keys.pop(key, None)

    def toggle(self, key: str) -> bool:
        """Flip membership of `key`; returns True when it ends up selected."""
        if key in self._keys:
            self.remove(key)
            return False
        self.add(key)
        return True

    def select_all(self, keys: Iterable[str]) -> None:
        self._keys = dict.fromkeys(keys)

    def clear(self) -> None:
        self._keys.clear()

    def snapshot(self) -> tuple[str, ...]:
        """Immutable copy of the current selection, used for a whole run."""
        return tuple(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._keys))

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"SelectionSet({list(self._keys)!r})"
