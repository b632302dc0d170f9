"""Helpers for @Logger.io: call-chain bookkeeping, call targets and masking."""

from collections.abc import Callable
import inspect
from pathlib import Path
import re
import time
from typing import Any

from booking_service.platform.logging.loguru_io_config import (
    SENSITIVE_KEYWORDS,
    call_depth_var,
    chain_start_time_var,
)


MASK = '********'
MAX_CONTENT_LENGTH = 1000

# password=abc, token: 'abc' ...
_SENSITIVE_PAIR = re.compile(
    rf"({'|'.join(sorted(SENSITIVE_KEYWORDS))})(\s*[=:]\s*)'?[^,')\s]+'?",
    re.IGNORECASE,
)


def enter_call() -> float:
    """Open one decorated frame; returns the start time of the outermost one."""
    depth = call_depth_var.get()
    call_depth_var.set(depth + 1)
    if depth == 0 or not chain_start_time_var.get():
        chain_start_time_var.set(time.time())
    return chain_start_time_var.get()


def exit_call() -> None:
    depth = max(call_depth_var.get() - 1, 0)
    call_depth_var.set(depth)
    if depth == 0:
        chain_start_time_var.set(0)


def call_target(func: Callable[..., Any]) -> str:
    target = getattr(func, '__func__', func)
    try:
        file_name = Path(inspect.getfile(target)).name
        line = inspect.getsourcelines(target)[1]
    except (OSError, TypeError):
        file_name, line = '<unknown>', 0
    return f'{file_name}::{target.__qualname__}:{line}'


def mask_sensitive(data: Any) -> Any:
    if isinstance(data, dict):
        return {
            key: MASK if key in SENSITIVE_KEYWORDS else mask_sensitive(value)
            for key, value in data.items()
        }
    if isinstance(data, list | tuple):
        return type(data)(mask_sensitive(item) for item in data)

    text = str(data)
    masked = _SENSITIVE_PAIR.sub(rf"\1\2'{MASK}'", text)
    return data if masked == text else masked


def truncate_content(data: Any, limit: int = MAX_CONTENT_LENGTH) -> Any:
    text = str(data)
    if len(text) <= limit:
        return data
    return f'{text[:limit]}... (truncated {len(text)} chars)'
