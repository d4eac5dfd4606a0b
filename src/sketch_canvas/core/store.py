"""Ordered in-memory collection of placed shapes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sketch_canvas.exceptions import IndexOutOfRangeError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sketch_canvas.core.models import PlacedShape


class ShapeStore:
    """Append-mostly sequence of shapes.

    A shape's index is its identity within a session. Indices are stable
    across ``replace_at``; nothing is ever inserted mid-sequence.
    """

    def __init__(self) -> None:
        self._shapes: list[PlacedShape] = []

    def __len__(self) -> int:
        return len(self._shapes)

    def __iter__(self) -> Iterator[PlacedShape]:
        return iter(list(self._shapes))

    def __getitem__(self, index: int) -> PlacedShape:
        return self.get(index)

    def append(self, shape: PlacedShape) -> int:
        """Add ``shape`` on top of the stack.

        Returns:
            The index of the new shape.
        """
        self._shapes.append(shape)
        return len(self._shapes) - 1

    def get(self, index: int) -> PlacedShape:
        """Return the shape at ``index``.

        Raises:
            IndexOutOfRangeError: If no shape lives at ``index``.
        """
        self._check(index)
        return self._shapes[index]

    def replace_at(self, index: int, shape: PlacedShape) -> None:
        """Swap the shape at ``index`` for ``shape``.

        Raises:
            IndexOutOfRangeError: If ``index`` is negative or not below the store length.
        """
        self._check(index)
        self._shapes[index] = shape

    def clear(self) -> None:
        self._shapes.clear()

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self._shapes):
            raise IndexOutOfRangeError(index, len(self._shapes))
