"""
Error logging and graceful degradation helpers.

``first_success`` chains fallible strategies: each one is tried in order and
the first result wins. The chain ends in a strategy that must not raise.
"""
from __future__ import annotations

import logging
import traceback
from typing import Any, Callable, Optional, Sequence, Tuple, Type, TypeVar

from compgen.core.error_handling import CompgenError

T = TypeVar("T")

logger = logging.getLogger(__name__)


def format_error(error: Exception, include_trace: bool = False) -> str:
    """Render an exception with its compgen context and optional traceback."""
    text = f"{type(error).__name__}: {error}"
    if include_trace and getattr(error, "__traceback__", None):
        tb = "".join(traceback.format_tb(error.__traceback__, limit=10))
        text = f"{text}\n\nTraceback:\n{tb}"
    return text


def log_error(message: str, error: Optional[Exception] = None, level: int = logging.ERROR,
              include_trace: bool = True, log: Optional[logging.Logger] = None) -> None:
    target = log or logger
    if error is None:
        target.log(level, message)
        return
    if isinstance(error, CompgenError):
        # compgen errors carry their own context.
        include_trace = False
    target.log(level, "%s: %s", message, format_error(error, include_trace))


def first_success(
    strategies: Sequence[Callable[..., T]],
    final: Callable[..., T],
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
    log: Optional[logging.Logger] = None,
) -> Callable[..., T]:
    """
    Combine fallible strategies into one callable.

    Args:
        strategies: Strategies tried in order; any of them may raise
        final: Strategy used when every other one failed; must not raise
        exceptions: Exception types treated as a strategy failure
        log: Logger receiving one WARNING per failed strategy

    Returns:
        Callable with the strategies' signature returning the first result
    """

    def run(*args: Any, **kwargs: Any) -> T:
        for strategy in strategies:
            try:
                return strategy(*args, **kwargs)
            except exceptions as e:
                log_error(f"Strategy {strategy.__name__} failed", e, logging.WARNING, False, log)
        return final(*args, **kwargs)

    run.__name__ = f"first_success_{final.__name__}"
    return run
