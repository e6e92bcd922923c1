"""Classification of server-issued prediction task states."""

from __future__ import annotations

import pytest

from dragoneye.common import is_task_complete, is_task_failed, is_task_successful

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("state", "successful", "failed"),
    [
        ("predicted", True, False),
        ("failed_timeout", False, True),
        ("failed_invalid_input", False, True),
        ("failed", False, True),
        ("pending", False, False),
        ("uploading", False, False),
        ("predicting_frames", False, False),
        ("Predicted", False, False),
        ("", False, False),
    ],
)
def test_state_classification(state: str, successful: bool, failed: bool) -> None:
    assert is_task_successful(state) is successful
    assert is_task_failed(state) is failed
    assert is_task_complete(state) is (successful or failed)
