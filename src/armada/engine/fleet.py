"""Fleet placement rules and spatial queries for the Armada engine."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from armada.telemetry import get_meter, get_tracer

from .position import Position
from .ship import Bearing, Ship, ShipKind

logger = logging.getLogger(__name__)
tracer = get_tracer("armada.engine.fleet")
meter = get_meter("armada.engine.fleet")

BOARD_SIZE = 10
FLEET_SIZE = 10

# Largest ships first so random layouts rarely dead-end.
STANDARD_FLEET: tuple[tuple[ShipKind, int], ...] = (
    (ShipKind.GALLEON, 1),
    (ShipKind.FRIGATE, 1),
    (ShipKind.CARRACK, 2),
    (ShipKind.CARAVEL, 3),
    (ShipKind.BARGE, 4),
)

PLACEMENT_BEARINGS = (Bearing.NORTH, Bearing.SOUTH, Bearing.EAST, Bearing.WEST)
MAX_PLACEMENT_ATTEMPTS = 500

PLACEMENT_COUNTER = meter.create_counter(
    "armada_engine_ship_placements",
    unit="1",
    description="Number of attempted ship placements",
)


@dataclass(frozen=True)
class FleetStatus:
    """Read-only projection of a fleet for status reports."""

    ships: tuple[Ship, ...]
    by_category: dict[str, tuple[Ship, ...]]
    floating: tuple[Ship, ...]


@dataclass
class Fleet:
    """One player's ships, laid out under the no-touching rule."""

    ships: list[Ship] = field(default_factory=list, init=False)
    owner: str = "unknown"

    def is_inside_board(self, ship: Ship) -> bool:
        """Check the ship's bounding box against the board edges."""
        return (
            ship.left_most_pos() >= 0
            and ship.right_most_pos() < BOARD_SIZE
            and ship.top_most_pos() >= 0
            and ship.bottom_most_pos() < BOARD_SIZE
        )

    def collision_risk(self, ship: Ship) -> bool:
        """True if ``ship`` overlaps or touches any ship already in the fleet."""
        return any(existing.too_close_to(ship) for existing in self.ships)

    def add_ship(self, ship: Ship) -> bool:
        """Add ``ship`` if the fleet has room and the placement is legal.

        The fleet is left untouched when the ship is rejected.
        """
        with tracer.start_as_current_span("fleet.add_ship") as span:
            span.set_attribute("ship.category", ship.category)
            span.set_attribute("ship.bearing", ship.bearing.value)
            span.set_attribute("ship.anchor.row", ship.anchor.row)
            span.set_attribute("ship.anchor.column", ship.anchor.column)
            span.set_attribute("fleet.owner", self.owner)
            details = {
                "owner": self.owner,
                "category": ship.category,
                "bearing": ship.bearing.value,
                "row": ship.anchor.row,
                "column": ship.anchor.column,
            }
            if len(self.ships) > FLEET_SIZE:
                reason = "fleet_full"
            elif not self.is_inside_board(ship):
                reason = "out_of_bounds"
            elif self.collision_risk(ship):
                reason = "collision_risk"
            else:
                self.ships.append(ship)
                PLACEMENT_COUNTER.add(1, attributes={"result": "success", "owner": self.owner})
                logger.info("ship_placed", extra=details)
                return True

            span.set_attribute("placement.rejected", reason)
            PLACEMENT_COUNTER.add(1, attributes={"result": reason, "owner": self.owner})
            logger.warning("ship_placement_failed", extra={**details, "reason": reason})
            return False

    def get_ships(self) -> list[Ship]:
        return list(self.ships)

    def get_ships_like(self, category: ShipKind | str) -> list[Ship]:
        """Return the ships whose category matches exactly."""
        wanted = category.category if isinstance(category, ShipKind) else category
        return [ship for ship in self.ships if ship.category == wanted]

    def get_floating_ships(self) -> list[Ship]:
        return [ship for ship in self.ships if ship.still_floating()]

    def ship_at(self, pos: Position) -> Ship | None:
        """Return the first ship, in placement order, covering ``pos``."""
        for ship in self.ships:
            if ship.occupies(pos):
                return ship
        return None

    def status(self) -> FleetStatus:
        by_category = {
            kind.category: tuple(self.get_ships_like(kind))
            for kind in ShipKind
            if self.get_ships_like(kind)
        }
        return FleetStatus(
            ships=tuple(self.ships),
            by_category=by_category,
            floating=tuple(self.get_floating_ships()),
        )

    def random_placement(self, rng: random.Random) -> None:
        """Replace the fleet with a random legal layout of the standard fleet."""
        with tracer.start_as_current_span("fleet.random_placement") as span:
            span.set_attribute("fleet.owner", self.owner)
            layouts = 1
            while not self._try_random_layout(rng):
                layouts += 1
            span.set_attribute("fleet.layouts_tried", layouts)
            logger.debug(
                "random_fleet_placed",
                extra={"owner": self.owner, "layouts": layouts, "ships": len(self.ships)},
            )

    def _try_random_layout(self, rng: random.Random) -> bool:
        self.ships.clear()
        for kind, count in STANDARD_FLEET:
            for _ in range(count):
                if not self._place_randomly(kind, rng):
                    return False
        return True

    def _place_randomly(self, kind: ShipKind, rng: random.Random) -> bool:
        for _ in range(MAX_PLACEMENT_ATTEMPTS):
            anchor = Position(rng.randrange(BOARD_SIZE), rng.randrange(BOARD_SIZE))
            candidate = Ship(kind, rng.choice(PLACEMENT_BEARINGS), anchor)
            if self.is_inside_board(candidate) and not self.collision_risk(candidate):
                return self.add_ship(candidate)
        return False
