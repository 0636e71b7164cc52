"""Game wrapper that reports each match as a trace with metrics."""

from __future__ import annotations

import time
from contextlib import nullcontext

from opentelemetry import trace

from armada.engine.fleet import Fleet
from armada.engine.game import Game, ShotOutcome
from armada.engine.position import Position
from armada.engine.ship import Ship
from armada.telemetry import get_logger, get_tracer, record_histogram, record_metric


class InstrumentedGame(Game):
    """Game whose shots are traced as children of one match span.

    The match span is started on creation without becoming the current span;
    each shot enters it only for the duration of `fire`. It ends when the last
    ship sinks or when `close` is called.
    """

    def __init__(self, fleet: Fleet) -> None:
        super().__init__(fleet)
        self._logger = get_logger("armada.engine")
        self._tracer = get_tracer("armada.engine")
        self._started_at = time.perf_counter()
        self._match_span = self._tracer.start_span("armada.engine.match")
        self._match_span.set_attribute("fleet.owner", self.fleet.owner)
        self._match_span.set_attribute("fleet.ships", len(self.fleet.ships))

    def _in_match(self):
        if self._match_span is None:
            return nullcontext()
        return trace.use_span(self._match_span, end_on_exit=False)

    def fire(self, pos: Position) -> Ship | None:
        with self._in_match():
            sunk = super().fire(pos)

        outcome = self.last_outcome or ShotOutcome.MISS
        self._logger.info(
            "fire owner=%s pos=(%d,%d) outcome=%s",
            self.fleet.owner,
            pos.row,
            pos.column,
            outcome.value,
        )
        if sunk is not None and self.is_over():
            self._finish_match()
        return sunk

    def _finish_match(self) -> None:
        duration = time.perf_counter() - self._started_at
        shots = len(self.shots)
        attrs = {"owner": self.fleet.owner}

        record_metric("armada_game_completed_total", 1, attrs)
        record_histogram("armada_game_duration_seconds", duration, attrs, unit="s")

        with self._in_match():
            with self._tracer.start_as_current_span("armada.engine.match_complete") as span:
                span.set_attribute("shots", shots)
                span.set_attribute("hits", self.hits)
                span.set_attribute("duration_ms", duration * 1000)

        if self._match_span is not None:
            self._match_span.set_attribute("shots", shots)
            self._match_span.set_attribute("invalid_shots", self.invalid_shots)
            self._match_span.set_attribute("repeated_shots", self.repeated_shots)
            self._match_span.set_attribute("duration_ms", duration * 1000)

        self._logger.info(
            "Fleet of %s sunk. shots=%d hits=%d duration_s=%.3f",
            self.fleet.owner,
            shots,
            self.hits,
            duration,
        )
        self.close()

    def close(self) -> None:
        """End the match span, e.g. when a match is abandoned."""
        if self._match_span is not None:
            self._match_span.end()
            self._match_span = None
