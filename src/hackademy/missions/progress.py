"""Stage progression, success tracking and stale-feedback filtering."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Coroutine, Optional, Sequence

from hackademy.runtime import telemetry

from .levels import LEVEL_CONFIGS, STAGE_ORDER, GameStage, LevelConfig

Reviewer = Callable[[str, str], Awaitable[str]]
Scheduler = Callable[[Coroutine[Any, Any, None]], object]


@dataclass(frozen=True, slots=True)
class FeedbackTicket:
    """Identifies the stage attempt a review was requested for."""

    stage: GameStage
    generation: int


class MissionProgress:
    def __init__(self, order: Sequence[GameStage] = STAGE_ORDER) -> None:
        if not order:
            raise ValueError("stage order cannot be empty")
        self._order = tuple(order)
        self._index = 0
        self._generation = 0
        self.is_success = False
        self.feedback = ""

    @property
    def stage(self) -> GameStage:
        return self._order[self._index]

    @property
    def config(self) -> LevelConfig:
        return LEVEL_CONFIGS[self.stage]

    @property
    def level_number(self) -> int:
        return self._index + 1

    @property
    def playable_levels(self) -> int:
        return len(self._order) - 1

    @property
    def is_completed(self) -> bool:
        return self.stage is GameStage.COMPLETED

    def evaluate(self, code: str) -> bool:
        """Validate ``code``; True only when the stage just became solved."""

        if self.config.validate(code):
            if self.is_success:
                return False
            self.is_success = True
            return True
        if self.is_success:
            # Breaking a solved stage invalidates any review still in flight.
            self._generation += 1
            self.feedback = ""
        self.is_success = False
        return False

    def advance(self) -> bool:
        if self._index >= len(self._order) - 1:
            return False
        self._index += 1
        self._generation += 1
        self.is_success = False
        self.feedback = ""
        return True

    def feedback_ticket(self) -> FeedbackTicket:
        return FeedbackTicket(stage=self.stage, generation=self._generation)

    def apply_feedback(self, ticket: FeedbackTicket, text: str) -> bool:
        if ticket.stage is not self.stage or ticket.generation != self._generation:
            telemetry.record_event(
                "mission.feedback_discarded",
                level="debug",
                data={"stage": ticket.stage.value, "current": self.stage.value},
                logger_name="hackademy.missions",
            )
            return False
        self.feedback = text
        return True


# In-flight review tasks, held until they finish.
_REVIEW_TASKS: set["asyncio.Task[None]"] = set()


def _default_scheduler(coro: Coroutine[Any, Any, None]) -> object:
    task = asyncio.get_running_loop().create_task(coro)
    _REVIEW_TASKS.add(task)
    task.add_done_callback(_REVIEW_TASKS.discard)
    return task


class MissionTracker:
    """Connects an edit session to mission progress.

    Every ``buffer.change`` is validated; the first success of a stage
    attempt schedules a code review whose result is dropped if the player
    has moved on by the time it arrives.
    """

    def __init__(
        self,
        session,
        progress: Optional[MissionProgress] = None,
        *,
        reviewer: Optional[Reviewer] = None,
        schedule: Scheduler = _default_scheduler,
        on_feedback: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.session = session
        self.progress = progress or MissionProgress()
        self._reviewer = reviewer
        self._schedule = schedule
        self._on_feedback = on_feedback
        self.session.bus.subscribe("buffer.change", self._on_buffer_change)
        self.session.load_stage(self.progress.config.initial_code)

    def next_level(self) -> bool:
        if not self.progress.advance():
            return False
        telemetry.record_event(
            "mission.advance",
            data={"stage": self.progress.stage.value},
            logger_name="hackademy.missions",
        )
        self.session.load_stage(self.progress.config.initial_code)
        return True

    def _on_buffer_change(self, payload: object) -> None:
        if not self.progress.evaluate(str(payload)):
            return
        telemetry.record_event(
            "mission.solved",
            data={"stage": self.progress.stage.value},
            logger_name="hackademy.missions",
        )
        if self._reviewer is not None:
            ticket = self.progress.feedback_ticket()
            self._schedule(self._review(self._reviewer, ticket, str(payload)))

    async def _review(
        self, reviewer: Reviewer, ticket: FeedbackTicket, code: str
    ) -> None:
        text = await reviewer(code, LEVEL_CONFIGS[ticket.stage].mission)
        if self.progress.apply_feedback(ticket, text) and self._on_feedback:
            self._on_feedback(text)


__all__ = [
    "FeedbackTicket",
    "MissionProgress",
    "MissionTracker",
    "Reviewer",
    "Scheduler",
]
