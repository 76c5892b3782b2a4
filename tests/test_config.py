from __future__ import annotations

import pytest
from pydantic import ValidationError

from minimax_chess.config import EngineSettings


def test_defaults() -> None:
    s = EngineSettings()
    assert s.depth == 3
    assert s.promotion == "q"
    assert s.seed is None
    assert s.ai_color == "b"
    assert s.log_level == "WARNING"


def test_normalization() -> None:
    s = EngineSettings(promotion="N", log_level="debug")
    assert s.promotion == "n"
    assert s.log_level == "DEBUG"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"depth": -1},
        {"depth": 7},
        {"promotion": "k"},
        {"promotion": "qq"},
        {"ai_color": "white"},
        {"log_level": "chatty"},
    ],
)
def test_invalid_values_rejected(kwargs) -> None:
    with pytest.raises(ValidationError):
        EngineSettings(**kwargs)
