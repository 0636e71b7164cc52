"""Tests for board cells."""

from armada.engine.position import Position


def test_equality_ignores_flags() -> None:
    plain = Position(3, 4)
    flagged = Position(3, 4, occupied=True, hit=True)
    assert plain == flagged
    assert hash(plain) == hash(flagged)
    assert Position(3, 4) != Position(4, 3)


def test_adjacency_includes_diagonals_and_same_cell() -> None:
    centre = Position(5, 5)
    for delta_row in (-1, 0, 1):
        for delta_col in (-1, 0, 1):
            assert centre.is_adjacent_to(Position(5 + delta_row, 5 + delta_col))
    assert not centre.is_adjacent_to(Position(7, 5))
    assert not centre.is_adjacent_to(Position(5, 3))
    assert not centre.is_adjacent_to(Position(3, 3))


def test_flags_are_idempotent() -> None:
    pos = Position(0, 0)
    assert not pos.occupied and not pos.hit
    pos.occupy()
    pos.occupy()
    pos.shoot()
    pos.shoot()
    assert pos.occupied and pos.hit


def test_shot_positions_found_in_lists_regardless_of_flags() -> None:
    shots = [Position(1, 1, hit=True)]
    assert Position(1, 1) in shots
    assert Position(1, 1) in {Position(1, 1, occupied=True)}
