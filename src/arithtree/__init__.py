"""
arithtree - parse, print, graph and evaluate integer arithmetic expressions.
"""

from __future__ import annotations

from ._version import __version__
from .core.config import ArithConfig, load_config
from .core.errors import ArithError, ConfigError, LexError, ParseError
from .core.expression_lang import Error, Int, ParseResult, evaluate, parse, parse_expr, to_dot

__all__ = [
    "__version__",
    "ArithConfig",
    "ArithError",
    "ConfigError",
    "Error",
    "Int",
    "LexError",
    "ParseError",
    "ParseResult",
    "evaluate",
    "load_config",
    "parse",
    "parse_expr",
    "to_dot",
]
