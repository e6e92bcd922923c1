from __future__ import annotations

import pytest

from dragoneye import Dragoneye, DragoneyeSettings


class SleepRecorder:
    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def client(sleep_recorder: SleepRecorder) -> Dragoneye:
    settings = DragoneyeSettings(api_key="test-key", polling_interval_ms=250)
    dragoneye = Dragoneye(settings=settings)
    dragoneye.classification.sleep = sleep_recorder
    return dragoneye
