"""Tests for Ship domain logic."""

import pytest

from armada.engine.position import Position
from armada.engine.ship import (
    GALLEON_OFFSETS,
    Bearing,
    InvalidBearingError,
    Ship,
    ShipKind,
    build_ship,
)

VALID_BEARINGS = [Bearing.NORTH, Bearing.SOUTH, Bearing.EAST, Bearing.WEST]
LINEAR_KINDS = [ShipKind.BARGE, ShipKind.CARAVEL, ShipKind.CARRACK, ShipKind.FRIGATE]


def _cells(ship: Ship) -> list[tuple[int, int]]:
    return [(pos.row, pos.column) for pos in ship.positions()]


@pytest.mark.parametrize("bearing", VALID_BEARINGS)
@pytest.mark.parametrize(
    ("kind", "size"),
    [
        (ShipKind.BARGE, 1),
        (ShipKind.CARAVEL, 2),
        (ShipKind.CARRACK, 3),
        (ShipKind.FRIGATE, 4),
        (ShipKind.GALLEON, 5),
    ],
)
def test_size_matches_kind(kind: ShipKind, size: int, bearing: Bearing) -> None:
    ship = Ship(kind, bearing, Position(4, 4))
    assert ship.size == size
    assert len(ship.positions()) == size
    assert all(pos.occupied for pos in ship.positions())


@pytest.mark.parametrize("bearing", VALID_BEARINGS)
@pytest.mark.parametrize("kind", LINEAR_KINDS)
def test_linear_ships_are_contiguous(kind: ShipKind, bearing: Bearing) -> None:
    cells = _cells(Ship(kind, bearing, Position(2, 3)))
    for (row_a, col_a), (row_b, col_b) in zip(cells, cells[1:]):
        step = (row_b - row_a, col_b - col_a)
        assert step in {(1, 0), (0, 1)}
    assert cells[0] == (2, 3)


def test_opposite_bearings_share_a_footprint() -> None:
    # Linear ships always grow towards higher indices.
    anchor = Position(1, 1)
    for kind in LINEAR_KINDS:
        assert _cells(Ship(kind, Bearing.NORTH, anchor)) == _cells(Ship(kind, Bearing.SOUTH, anchor))
        assert _cells(Ship(kind, Bearing.EAST, anchor)) == _cells(Ship(kind, Bearing.WEST, anchor))
    assert _cells(Ship(ShipKind.FRIGATE, Bearing.SOUTH, anchor)) == [(1, 1), (2, 1), (3, 1), (4, 1)]
    assert _cells(Ship(ShipKind.CARAVEL, Bearing.WEST, anchor)) == [(1, 1), (1, 2)]


@pytest.mark.parametrize(
    ("bearing", "expected"),
    [
        (Bearing.NORTH, [(3, 3), (3, 4), (3, 5), (4, 4), (5, 4)]),
        (Bearing.SOUTH, [(3, 3), (4, 3), (5, 2), (5, 3), (5, 4)]),
        (Bearing.EAST, [(3, 3), (4, 1), (4, 2), (4, 3), (5, 3)]),
        (Bearing.WEST, [(3, 3), (4, 3), (4, 4), (4, 5), (5, 3)]),
    ],
)
def test_galleon_shapes(bearing: Bearing, expected: list[tuple[int, int]]) -> None:
    assert _cells(Ship(ShipKind.GALLEON, bearing, Position(3, 3))) == expected
    assert len(GALLEON_OFFSETS[bearing]) == ShipKind.GALLEON.size


def test_galleon_bounding_box() -> None:
    ship = Ship(ShipKind.GALLEON, Bearing.EAST, Position(0, 2))
    assert ship.top_most_pos() == 0
    assert ship.bottom_most_pos() == 2
    assert ship.left_most_pos() == 0
    assert ship.right_most_pos() == 2


@pytest.mark.parametrize("kind", list(ShipKind))
def test_unknown_bearing_is_rejected(kind: ShipKind) -> None:
    with pytest.raises(InvalidBearingError):
        Ship(kind, Bearing.UNKNOWN, Position(0, 0))
    with pytest.raises(ValueError):
        Ship(kind, None, Position(0, 0))  # type: ignore[arg-type]


def test_ship_hit_and_sink() -> None:
    ship = Ship(ShipKind.CARRACK, Bearing.NORTH, Position(3, 3))
    cells = ship.positions()
    for index, pos in enumerate(cells, start=1):
        assert ship.shoot(pos) is True
        assert sum(cell.hit for cell in ship.positions()) == index
        assert ship.still_floating() is (index < ship.size)
    assert ship.is_sunk()


def test_shoot_elsewhere_is_a_no_op() -> None:
    ship = Ship(ShipKind.CARAVEL, Bearing.EAST, Position(2, 2))
    assert ship.shoot(Position(3, 3)) is False
    assert not any(cell.hit for cell in ship.positions())
    assert ship.still_floating()


def test_positions_are_copies() -> None:
    ship = Ship(ShipKind.BARGE, Bearing.NORTH, Position(0, 0))
    ship.positions()[0].shoot()
    assert ship.still_floating()


def test_occupies_and_too_close_to() -> None:
    ship = Ship(ShipKind.CARAVEL, Bearing.EAST, Position(2, 2))
    assert ship.occupies(Position(2, 3))
    assert not ship.occupies(Position(3, 3))
    assert ship.too_close_to(Position(3, 4))
    assert not ship.too_close_to(Position(4, 4))

    diagonal = Ship(ShipKind.BARGE, Bearing.NORTH, Position(1, 1))
    distant = Ship(ShipKind.BARGE, Bearing.NORTH, Position(0, 5))
    assert ship.too_close_to(diagonal)
    assert diagonal.too_close_to(ship)
    assert not ship.too_close_to(distant)


def test_build_ship_dispatches_on_kind() -> None:
    ship = build_ship("Galleon", Bearing.NORTH, Position(0, 0))
    assert ship is not None
    assert ship.kind is ShipKind.GALLEON
    assert ship.category == "Galleon"
    assert build_ship(ShipKind.BARGE, Bearing.EAST, Position(9, 9)).size == 1


def test_build_ship_returns_none_for_unknown_kind() -> None:
    assert build_ship("submarine", Bearing.NORTH, Position(0, 0)) is None


def test_build_ship_copies_anchor() -> None:
    anchor = Position(4, 4)
    ship = build_ship("barge", Bearing.NORTH, anchor)
    assert ship.anchor == anchor
    assert ship.anchor is not anchor


def test_bearing_from_char() -> None:
    assert Bearing.from_char("n") is Bearing.NORTH
    assert Bearing.from_char("South") is Bearing.SOUTH
    assert Bearing.from_char(" E ") is Bearing.EAST
    assert Bearing.from_char("w") is Bearing.WEST
    assert Bearing.from_char("x") is Bearing.UNKNOWN
    assert Bearing.from_char("") is Bearing.UNKNOWN


def test_ship_str_shows_category_bearing_and_anchor() -> None:
    ship = Ship(ShipKind.FRIGATE, Bearing.SOUTH, Position(1, 2))
    assert str(ship) == "[Frigate s (1, 2)]"
