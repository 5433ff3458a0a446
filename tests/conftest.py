"""Shared pytest fixtures for arithtree tests."""

import pytest

from arithtree.core.config import ArithConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ARITHTREE_* settings from the developer's shell out of the tests."""
    for name in ("UNKNOWN_CHARACTERS", "EXPONENT_ASSOCIATIVITY", "INT_BITS"):
        monkeypatch.delenv(f"ARITHTREE_{name}", raising=False)


@pytest.fixture
def strict_config() -> ArithConfig:
    """Config that rejects unrecognised characters."""
    return ArithConfig(unknown_characters="error")


@pytest.fixture
def right_assoc_config() -> ArithConfig:
    """Config that groups exponent chains from the right."""
    return ArithConfig(exponent_associativity="right")
