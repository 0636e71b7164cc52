"""Console command loop for building fleets and firing at them."""

from __future__ import annotations

import argparse
import random
from typing import Iterable

from armada.engine.fleet import BOARD_SIZE, FLEET_SIZE, Fleet
from armada.engine.game import Game
from armada.engine.instrumented_game import InstrumentedGame
from armada.engine.position import Position
from armada.engine.ship import Bearing, InvalidBearingError, Ship, ShipKind, build_ship
from armada.telemetry import init_console_logging, init_telemetry

NUMBER_SHOTS = 3
GOODBYE_MESSAGE = "Fair winds!"
VICTORY_MESSAGE = "The whole fleet is at the bottom of the sea. Victory!"

NEW_FLEET = "new"
RANDOM_FLEET = "random"
STATUS = "status"
CHEAT_MAP = "map"
BURST = "burst"
SHOW_SHOTS = "shots"
QUIT = "quit"

HELP_TEXT = (
    "Commands: new, random, status, map, burst, shots, quit\n"
    "Ship lines look like 'galleon 2 3 n' (kind, row, column, bearing n/s/e/w)."
)


def _position_from_input(text: str) -> Position:
    parts = text.split()
    if len(parts) != 2:
        raise ValueError("Use the format 'row column', e.g. '3 7'.")
    try:
        row, column = (int(part) for part in parts)
    except ValueError as exc:
        raise ValueError("Row and column must be whole numbers.") from exc
    return Position(row, column)


def _ship_from_input(text: str) -> Ship | None:
    """Parse 'kind row column bearing'; None means the kind is unknown."""
    parts = text.split()
    if len(parts) != 4:
        raise ValueError("Use the format 'kind row column bearing', e.g. 'caravel 2 2 e'.")
    kind, row, column, bearing = parts
    pos = _position_from_input(f"{row} {column}")
    return build_ship(kind, Bearing.from_char(bearing), pos)


def format_board(positions: Iterable[Position], marker: str) -> str:
    """Render a board with ``marker`` on the given cells and '.' elsewhere."""
    marked = {(pos.row, pos.column) for pos in positions}
    header = "   " + " ".join(str(column) for column in range(BOARD_SIZE))
    rows = [header]
    for row in range(BOARD_SIZE):
        symbols = [marker if (row, column) in marked else "." for column in range(BOARD_SIZE)]
        rows.append(f"{row:>2} " + " ".join(symbols))
    return "\n".join(rows)


def format_fleet(fleet: Fleet) -> str:
    cells = [pos for ship in fleet.get_ships() for pos in ship.positions()]
    return format_board(cells, "#")


def format_status(fleet: Fleet) -> str:
    status = fleet.status()
    lines = [f"Fleet of {fleet.owner}: {len(status.ships)} ships, {len(status.floating)} afloat"]
    for category, ships in status.by_category.items():
        lines.append(f"  {category} ({len(ships)}): " + " ".join(str(ship) for ship in ships))
    if status.floating:
        lines.append("  Afloat: " + " ".join(str(ship) for ship in status.floating))
    return "\n".join(lines)


def format_statistics(game: Game) -> str:
    return (
        f"Hits: {game.hits} Invalid: {game.invalid_shots} "
        f"Repeated: {game.repeated_shots} Ships remaining: {game.remaining_ships}"
    )


def _read_fleet(owner: str = "player") -> Fleet:
    """Prompt for ship lines until the fleet holds FLEET_SIZE + 1 ships."""
    fleet = Fleet(owner=owner)
    while len(fleet.ships) <= FLEET_SIZE:
        raw = input(f"Ship {len(fleet.ships) + 1}: ")
        try:
            ship = _ship_from_input(raw)
        except InvalidBearingError as exc:
            print(f"Invalid bearing: {exc}")
            continue
        except ValueError as exc:
            print(f"Invalid input: {exc}")
            continue
        if ship is None:
            kinds = ", ".join(kind.name.lower() for kind in ShipKind)
            print(f"Unknown ship! Known kinds: {kinds}")
            continue
        if not fleet.add_ship(ship):
            print(f"Could not place {ship}: off the board or too close to another ship.")
    print(f"{len(fleet.ships)} ships placed.")
    return fleet


def _read_position(prompt: str) -> Position:
    while True:
        try:
            return _position_from_input(input(prompt))
        except ValueError as exc:
            print(f"Invalid input: {exc}")


def firing_round(game: Game, shots: int = NUMBER_SHOTS) -> None:
    """Read and fire a burst of shots, then report the tally."""
    for index in range(shots):
        sunk = game.fire(_read_position(f"Shot {index + 1}: "))
        if sunk is not None:
            print(f"You sank the {sunk.category}!")
    print(format_statistics(game))
    if game.remaining_ships == 0:
        print(VICTORY_MESSAGE)


def run_console(shots: int = NUMBER_SHOTS, rng: random.Random | None = None) -> None:
    """Run the command loop until 'quit' or end of input."""
    rng = rng or random.Random()
    fleet: Fleet | None = None
    game: Game | None = None

    print(HELP_TEXT)
    try:
        while True:
            command = input("> ").strip().lower()
            if not command:
                continue
            if command == QUIT:
                break
            if command in (NEW_FLEET, RANDOM_FLEET):
                if isinstance(game, InstrumentedGame):
                    game.close()
                if command == NEW_FLEET:
                    fleet = _read_fleet()
                else:
                    fleet = Fleet(owner="player")
                    fleet.random_placement(rng)
                    print(f"{len(fleet.ships)} ships placed at random.")
                game = InstrumentedGame(fleet)
            elif command == STATUS:
                if fleet is not None:
                    print(format_status(fleet))
            elif command == CHEAT_MAP:
                if fleet is not None:
                    print(format_fleet(fleet))
            elif command == BURST:
                if game is not None:
                    firing_round(game, shots)
            elif command == SHOW_SHOTS:
                if game is not None:
                    print(format_board(game.shots, "X"))
            else:
                print(f"Unknown command '{command}'. {HELP_TEXT}")
    except EOFError:
        pass
    finally:
        if isinstance(game, InstrumentedGame):
            game.close()
    print(GOODBYE_MESSAGE)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Build a fleet and fire at it from the console.")
    parser.add_argument(
        "--shots", type=int, default=NUMBER_SHOTS, help="Shots fired per burst."
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Optional RNG seed for random fleets."
    )
    parser.add_argument(
        "--log-level", default="WARNING", help="Console log level (DEBUG, INFO, WARNING...)."
    )
    args = parser.parse_args(argv)
    init_console_logging(args.log_level.upper())
    init_telemetry()
    run_console(shots=args.shots, rng=random.Random(args.seed))


if __name__ == "__main__":
    main()
