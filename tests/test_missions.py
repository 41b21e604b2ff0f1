from __future__ import annotations

import asyncio
from typing import Any, Coroutine, List

from hackademy.missions import (
    LEVEL_CONFIGS,
    GameStage,
    MissionProgress,
    MissionTracker,
)
from hackademy.session.controller import EditSessionController

SOLVED_INTRO = "<div>\n<h1>Hello World</h1>\n<p>I am the new hacker</p>\n</div>"


class ManualScheduler:
    def __init__(self) -> None:
        self.pending: List[Coroutine[Any, Any, None]] = []

    def __call__(self, coro: Coroutine[Any, Any, None]) -> None:
        self.pending.append(coro)

    def run_all(self) -> None:
        async def drain() -> None:
            for coro in self.pending:
                await coro

        asyncio.run(drain())
        self.pending.clear()


def make_tracker(reviews: List[str]) -> tuple[MissionTracker, ManualScheduler]:
    async def reviewer(code: str, mission: str) -> str:
        reviews.append(mission)
        return f"review of {len(code)} chars"

    scheduler = ManualScheduler()
    tracker = MissionTracker(
        EditSessionController(), reviewer=reviewer, schedule=scheduler
    )
    return tracker, scheduler


def test_level_validators() -> None:
    assert LEVEL_CONFIGS[GameStage.INTRO].validate(SOLVED_INTRO)
    assert not LEVEL_CONFIGS[GameStage.INTRO].validate("<h1></h1><p>x</p>")
    assert LEVEL_CONFIGS[GameStage.CSS_STYLING].validate(
        '<button className="bg-blue-500 text-white rounded-lg p-2">'
    )
    assert not LEVEL_CONFIGS[GameStage.REACT_STATE].validate("useState(0)")


def test_tracker_loads_first_stage() -> None:
    tracker, _ = make_tracker([])

    assert tracker.progress.stage is GameStage.INTRO
    assert tracker.session.text == LEVEL_CONFIGS[GameStage.INTRO].initial_code
    assert tracker.progress.level_number == 1
    assert tracker.progress.playable_levels == 3


def test_success_schedules_single_review() -> None:
    reviews: List[str] = []
    tracker, scheduler = make_tracker(reviews)

    tracker.session.push_host_edit(SOLVED_INTRO, 0)
    tracker.session.push_host_edit(SOLVED_INTRO + "\n", 0)
    scheduler.run_all()

    assert tracker.progress.is_success is True
    assert reviews == [LEVEL_CONFIGS[GameStage.INTRO].mission]
    assert tracker.progress.feedback == f"review of {len(SOLVED_INTRO)} chars"


def test_feedback_for_previous_stage_is_discarded() -> None:
    reviews: List[str] = []
    tracker, scheduler = make_tracker(reviews)
    tracker.session.push_host_edit(SOLVED_INTRO, 0)

    assert tracker.next_level() is True
    scheduler.run_all()

    assert tracker.progress.stage is GameStage.CSS_STYLING
    assert tracker.progress.feedback == ""
    assert tracker.session.text == LEVEL_CONFIGS[GameStage.CSS_STYLING].initial_code


def test_breaking_solution_invalidates_review() -> None:
    progress = MissionProgress()
    progress.evaluate(SOLVED_INTRO)
    ticket = progress.feedback_ticket()

    progress.evaluate("<div></div>")

    assert progress.apply_feedback(ticket, "late") is False
    assert progress.feedback == ""


def test_advance_stops_at_completed() -> None:
    progress = MissionProgress()

    while progress.advance():
        pass

    assert progress.is_completed is True
    assert progress.advance() is False
    assert progress.evaluate("anything") is False


def test_next_level_resets_session_once() -> None:
    tracker, _ = make_tracker([])
    resets: List[object] = []
    tracker.session.bus.subscribe("stage.reset", resets.append)
    tracker.session.push_host_edit(SOLVED_INTRO, 0)

    tracker.next_level()

    assert resets == [LEVEL_CONFIGS[GameStage.CSS_STYLING].initial_code]


def test_default_scheduler_holds_review_until_done() -> None:
    from hackademy.missions import progress as progress_module

    async def reviewer(code: str, mission: str) -> str:
        await asyncio.sleep(0)
        return "nice"

    async def scenario() -> tuple[int, int, str]:
        tracker = MissionTracker(EditSessionController(), reviewer=reviewer)
        tracker.session.push_host_edit(SOLVED_INTRO, 0)
        in_flight = len(progress_module._REVIEW_TASKS)
        for _ in range(5):
            await asyncio.sleep(0)
        return in_flight, len(progress_module._REVIEW_TASKS), tracker.progress.feedback

    in_flight, remaining, feedback = asyncio.run(scenario())

    assert in_flight == 1
    assert remaining == 0
    assert feedback == "nice"
