"""Shared test fixtures: workout definitions, fake device capabilities, stores."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

import pytest

from plan_compiler.models.segment import Segment
from plan_compiler.models.workout_plan import WorkoutPlan
from watch_sync.capabilities import AuthorizationStatus
from watch_sync.orchestrator import SyncOrchestrator
from watch_sync.settings import SyncSettings
from watch_sync.store import InMemoryStore


# ---------------------------------------------------------------------------
# Definition builders
# ---------------------------------------------------------------------------


def seg_node(segment_type: str, target_type: str = "open", **fields) -> dict:
    """Raw ``segment`` node as authored in the app."""
    return {
        "type": "segment",
        "segment": {"segmentType": segment_type, "targetType": target_type, **fields},
    }


def repeat_node(count, *children) -> dict:
    return {"type": "repeat", "repeatCount": count, "steps": list(children)}


@pytest.fixture
def interval_definition() -> dict:
    """10 min warmup, 5 x (1 km @ 4:00-4:10/km + 2 min jog), open cooldown."""
    return {
        "steps": [
            seg_node("warmup", "duration", durationSeconds=600),
            repeat_node(
                5,
                seg_node(
                    "work", "distance", distanceMeters=1000,
                    paceSecondsPerKmMin=240, paceSecondsPerKmMax=250,
                ),
                seg_node("recovery", "duration", durationSeconds=120),
            ),
            seg_node("cooldown", "open"),
        ]
    }


@pytest.fixture
def segment_factory() -> Callable[..., Segment]:
    """Factory fixture for Segment values.

    Usage:
        seg = segment_factory("work", "duration", duration_seconds=300)
    """

    def factory(segment_type: str = "work", target_type: str = "open", **overrides) -> Segment:
        return Segment(segment_type=segment_type, target_type=target_type, **overrides)

    return factory


# ---------------------------------------------------------------------------
# Fake device capabilities
# ---------------------------------------------------------------------------


class FakeScheduler:
    """Records every (plan, at) pair; optionally fails on a given title."""

    def __init__(self, fail_on_title: str | None = None) -> None:
        self.scheduled: list[tuple[WorkoutPlan, datetime]] = []
        self.fail_on_title = fail_on_title

    def schedule(self, plan: WorkoutPlan, at: datetime) -> None:
        if plan.display_name == self.fail_on_title:
            raise RuntimeError(f"device refused {plan.display_name}")
        self.scheduled.append((plan, at))

    @property
    def titles(self) -> list[str]:
        return [plan.display_name for plan, _ in self.scheduled]


class FakeAuthorizer:
    def __init__(self, answer: object = AuthorizationStatus.AUTHORIZED) -> None:
        self.answer = answer
        self.requests = 0

    def request_authorization(self) -> object:
        self.requests += 1
        return self.answer

    def authorization_status(self) -> object:
        return self.answer


@pytest.fixture
def fake_scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def fake_authorizer() -> FakeAuthorizer:
    return FakeAuthorizer()


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def orchestrator_factory(
    fake_scheduler: FakeScheduler,
    fake_authorizer: FakeAuthorizer,
    memory_store: InMemoryStore,
) -> Callable[..., SyncOrchestrator]:
    """Build an orchestrator over the shared fakes.

    Usage:
        orch = orchestrator_factory(authorized=True, on_malformed=MalformedPolicy.COLLECT)
    """

    def factory(authorized: bool = True, **settings) -> SyncOrchestrator:
        orch = SyncOrchestrator(
            scheduler=fake_scheduler,
            authorizer=fake_authorizer,
            store=memory_store,
            settings=SyncSettings(**settings),
        )
        if authorized:
            orch.request_authorization()
        return orch

    return factory


@pytest.fixture
def payload_factory(interval_definition: dict) -> Callable[..., dict]:
    """Raw payload dicts; scheduled 2026-03-10 07:30:15 local time by default."""
    default_ms = datetime(2026, 3, 10, 7, 30, 15).timestamp() * 1000

    def factory(payload_id: str = "w-1", title: str = "Intervals", **overrides) -> dict:
        payload = {
            "id": payload_id,
            "title": title,
            "scheduledAtMs": default_ms,
            "definition": interval_definition,
        }
        payload.update(overrides)
        return payload

    return factory
