"""Test factories — minimal valid domain objects with overridable fields."""

from datetime import datetime, timedelta, timezone

from decision_twin.schemas.decision import Decision, Outcome

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)   # a Monday


def make_outcome(**overrides) -> Outcome:
    data = {
        "id": "o-1",
        "rating": 8,
        "would_choose_differently": False,
        "reflection": "",
        "created_at": T0,
    }
    data.update(overrides)
    return Outcome(**data)


def make_decision(**overrides) -> Decision:
    data = {
        "id": "d-1",
        "title": "Take the job",
        "choice": "Accept offer",
        "alternatives": ["Stay"],
        "category": "Career",
        "confidence": 70,
        "tags": [],
        "context": "",
        "created_at": T0,
        "outcomes": [],
    }
    data.update(overrides)
    return Decision(**data)


class FakeClock:
    """Mutable clock; tests advance it explicitly."""

    def __init__(self, now=T0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)
