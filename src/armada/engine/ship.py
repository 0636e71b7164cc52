"""Ship domain model for the Armada engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum

from .position import Position

logger = logging.getLogger(__name__)

Offsets = tuple[tuple[int, int], ...]


class Bearing(Enum):
    """Compass bearings a ship can be placed with."""

    NORTH = "n"
    SOUTH = "s"
    EAST = "e"
    WEST = "w"
    UNKNOWN = "u"

    @classmethod
    def from_char(cls, text: str) -> Bearing:
        """Map the first character of ``text`` to a bearing, or UNKNOWN."""
        cleaned = text.strip().lower()
        if not cleaned:
            return cls.UNKNOWN
        for bearing in cls:
            if bearing.value == cleaned[0]:
                return bearing
        return cls.UNKNOWN

    def __str__(self) -> str:
        return self.value


class ShipKind(Enum):
    """The five ship classes, valued by the number of cells they occupy."""

    BARGE = 1
    CARAVEL = 2
    CARRACK = 3
    FRIGATE = 4
    GALLEON = 5

    @property
    def size(self) -> int:
        return self.value

    @property
    def category(self) -> str:
        """Display tag shared by every ship of this kind."""
        return self.name.title()

    @classmethod
    def lookup(cls, text: str) -> ShipKind | None:
        """Resolve a kind from its name, ignoring case; None if unknown."""
        return cls.__members__.get(text.strip().upper())


class InvalidBearingError(ValueError):
    """Raised when a ship cannot be laid out with the requested bearing."""

    def __init__(self, kind: ShipKind, bearing: object) -> None:
        super().__init__(f"Invalid bearing {bearing!r} for {kind.category}")
        self.kind = kind
        self.bearing = bearing


# Rows grow downwards, columns to the right.
GALLEON_OFFSETS: dict[Bearing, Offsets] = {
    Bearing.NORTH: ((0, 0), (0, 1), (0, 2), (1, 1), (2, 1)),
    Bearing.SOUTH: ((0, 0), (1, 0), (2, -1), (2, 0), (2, 1)),
    Bearing.EAST: ((0, 0), (1, -2), (1, -1), (1, 0), (2, 0)),
    Bearing.WEST: ((0, 0), (1, 0), (1, 1), (1, 2), (2, 0)),
}


def footprint_offsets(kind: ShipKind, bearing: Bearing) -> Offsets:
    """Return the (row, column) offsets from the anchor for a ship layout.

    Linear ships grow towards higher indices on their axis whichever way they
    face, so NORTH lays out the same cells as SOUTH and EAST the same as WEST.
    """
    if not isinstance(bearing, Bearing) or bearing is Bearing.UNKNOWN:
        raise InvalidBearingError(kind, bearing)
    if kind is ShipKind.GALLEON:
        return GALLEON_OFFSETS[bearing]
    if bearing in (Bearing.NORTH, Bearing.SOUTH):
        return tuple((offset, 0) for offset in range(kind.size))
    return tuple((0, offset) for offset in range(kind.size))


@dataclass(eq=False)
class Ship:
    """A placed ship and the board cells it owns."""

    kind: ShipKind
    bearing: Bearing
    anchor: Position
    _positions: tuple[Position, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        positions = tuple(
            Position(self.anchor.row + delta_row, self.anchor.column + delta_col)
            for delta_row, delta_col in footprint_offsets(self.kind, self.bearing)
        )
        for position in positions:
            position.occupy()
        self._positions = positions

    @property
    def size(self) -> int:
        return self.kind.size

    @property
    def category(self) -> str:
        return self.kind.category

    def positions(self) -> list[Position]:
        """Return copies of the occupied cells, in footprint order."""
        return [replace(position) for position in self._positions]

    def occupies(self, pos: Position) -> bool:
        return any(position == pos for position in self._positions)

    def still_floating(self) -> bool:
        """True while at least one cell of the ship has not been hit."""
        return any(not position.hit for position in self._positions)

    def is_sunk(self) -> bool:
        return not self.still_floating()

    def too_close_to(self, other: Ship | Position) -> bool:
        """True if any cell touches ``other``, diagonals included."""
        if isinstance(other, Ship):
            return any(self.too_close_to(position) for position in other._positions)
        return any(position.is_adjacent_to(other) for position in self._positions)

    def top_most_pos(self) -> int:
        return min(position.row for position in self._positions)

    def bottom_most_pos(self) -> int:
        return max(position.row for position in self._positions)

    def left_most_pos(self) -> int:
        return min(position.column for position in self._positions)

    def right_most_pos(self) -> int:
        return max(position.column for position in self._positions)

    def shoot(self, pos: Position) -> bool:
        """Mark the cell at ``pos`` as hit; return False if the ship is not there."""
        struck = False
        for position in self._positions:
            if position == pos:
                position.shoot()
                struck = True
        return struck

    def __str__(self) -> str:
        return f"[{self.category} {self.bearing} {self.anchor}]"


def build_ship(kind: ShipKind | str, bearing: Bearing, pos: Position) -> Ship | None:
    """Create a ship of ``kind`` anchored at ``pos``.

    Returns None for an unknown kind so callers can re-prompt. An unusable
    bearing raises InvalidBearingError.
    """
    resolved = kind if isinstance(kind, ShipKind) else ShipKind.lookup(kind)
    if resolved is None:
        logger.warning("unknown_ship_kind", extra={"kind": kind})
        return None
    return Ship(resolved, bearing, Position(pos.row, pos.column))
