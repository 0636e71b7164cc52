"""Board cells for the Armada engine."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(unsafe_hash=True)
class Position:
    """A single board cell.

    Two positions are equal when they share row and column; the ``occupied``
    and ``hit`` flags are state, not identity. Coordinates are not range
    checked here: the fleet validates placements and the game validates shots.
    """

    row: int
    column: int
    occupied: bool = field(default=False, compare=False)
    hit: bool = field(default=False, compare=False)

    def is_adjacent_to(self, other: Position) -> bool:
        """True for the same cell and each of its eight neighbours."""
        return abs(self.row - other.row) <= 1 and abs(self.column - other.column) <= 1

    def occupy(self) -> None:
        self.occupied = True

    def shoot(self) -> None:
        self.hit = True

    def __str__(self) -> str:
        return f"({self.row}, {self.column})"
