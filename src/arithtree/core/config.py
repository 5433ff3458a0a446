"""
Runtime configuration for tokenizing, parsing and evaluating expressions.

Values come from keyword overrides first, then ``ARITHTREE_*`` environment
variables, then the defaults below.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from arithtree.core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_INT_BITS = 64

_ENV_PREFIX = "ARITHTREE_"


class ArithConfig(BaseModel):
    """Policies for the open behaviours of the expression pipeline."""

    unknown_characters: Literal["skip", "error"] = Field(
        default="skip",
        description="Drop unrecognised characters silently, or reject them",
    )
    exponent_associativity: Literal["left", "right"] = Field(
        default="left",
        description="How a chain like 2 ^ 3 ^ 2 groups",
    )
    int_bits: int = Field(
        default=DEFAULT_INT_BITS,
        ge=2,
        description="Width of the checked signed integer range",
    )

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def int_min(self) -> int:
        return -(1 << (self.int_bits - 1))

    @property
    def int_max(self) -> int:
        return (1 << (self.int_bits - 1)) - 1


def load_config(**overrides: Any) -> ArithConfig:
    """Build an :class:`ArithConfig` from the environment plus explicit overrides.

    Overrides set to ``None`` are ignored so CLI flags can be passed through
    unconditionally.

    Raises:
        ConfigError: If a value from either source is invalid.
    """
    values: dict[str, Any] = {}
    for name in ArithConfig.model_fields:
        raw = os.environ.get(_ENV_PREFIX + name.upper())
        if raw is not None and raw.strip():
            values[name] = raw.strip().lower()

    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        config = ArithConfig(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    logger.debug(f"Loaded config: {config!r}")
    return config
