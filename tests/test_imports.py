"""Smoke-check that the public package surface imports cleanly."""

from __future__ import annotations

from importlib import import_module

import pytest

MODULES_AND_SYMBOLS = [
    ("dragoneye", "Dragoneye"),
    ("dragoneye", "Image"),
    ("dragoneye", "Video"),
    ("dragoneye.classification", "Classification"),
    ("dragoneye.client", "Dragoneye"),
    ("dragoneye.common", "is_task_complete"),
    ("dragoneye.config", "DragoneyeSettings"),
    ("dragoneye.exceptions", "PredictionTaskError"),
    ("dragoneye.logging", "configure_logging"),
    ("dragoneye.media", "guess_mime_type"),
    ("dragoneye.models", "PredictionTaskBeginResponse"),
]


@pytest.mark.parametrize(("module_path", "symbol"), MODULES_AND_SYMBOLS)
def test_module_exports_symbol(module_path: str, symbol: str) -> None:
    module = import_module(module_path)
    assert hasattr(module, symbol), f"{module_path} is missing {symbol}"
