"""Read-only sequence views over frozen tuples."""

from __future__ import annotations

from typing import Any, Iterator, Sequence, TypeVar, overload

T = TypeVar("T")


class ArrayView(Sequence[T]):
    """
    Restartable, read-only view over a tuple.

    Iterating the view walks the underlying tuple directly, so every call to
    `iter()` starts again from the first element without copying.
    """

    __slots__ = ("_values",)

    def __init__(self, values: tuple[T, ...]) -> None:
        self._values = values

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[T, ...]: ...

    def __getitem__(self, index: Any) -> Any:
        return self._values[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ArrayView({list(self._values)!r})"


EMPTY_VIEW: ArrayView[Any] = ArrayView(())
