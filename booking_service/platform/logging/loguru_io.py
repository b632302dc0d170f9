"""
Logger facade.

``Logger.base`` is the bound loguru logger for plain records. ``@Logger.io``
wraps a sync or async callable and logs its arguments and return value at
DEBUG, with secrets masked and long payloads truncated. An exception is logged
once, by the innermost decorated frame it passes through. Domain errors
(CustomBaseError) are logged without a traceback.
"""

from collections.abc import Callable
from functools import wraps
from inspect import iscoroutinefunction
from typing import TYPE_CHECKING, Any, ParamSpec, TypeVar, cast, overload

from booking_service.platform.config.core_setting import settings
from booking_service.platform.exception.exceptions import CustomBaseError
from booking_service.platform.logging.loguru_io_config import ExtraField, custom_logger
from booking_service.platform.logging.loguru_io_utils import (
    call_target,
    enter_call,
    exit_call,
    mask_sensitive,
    truncate_content,
)


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

_P = ParamSpec('_P')
_T = TypeVar('_T')
_F = TypeVar('_F', bound=Callable[..., Any])

_LOGGED_FLAG = '_logged_by_io'


class LoguruIO:
    def __init__(
        self, logger: 'LoguruLogger', *, reraise: bool = True, truncate: bool = True
    ) -> None:
        self.logger = logger
        self.reraise = reraise
        self.truncate = truncate

    def render(self, data: Any) -> Any:
        masked = mask_sensitive(data)
        return truncate_content(masked) if self.truncate else masked

    def _frame_logger(self, target: str, chain_start: float, **opt: Any) -> 'LoguruLogger':
        # depth=2: skip this helper and the wrapper, report the decorated call site
        return self.logger.bind(
            **{ExtraField.CALL_TARGET: target, ExtraField.CHAIN_START_TIME: chain_start}
        ).opt(depth=2, **opt)

    def _log_args(self, target: str, chain_start: float, args: tuple, kwargs: dict) -> None:
        if settings.DEBUG:
            self._frame_logger(target, chain_start).debug(
                f'args: {self.render(args)}, kwargs: {self.render(kwargs)}'
            )

    def _log_return(self, target: str, chain_start: float, value: Any) -> None:
        if settings.DEBUG:
            self._frame_logger(target, chain_start).debug(f'return: {self.render(value)}')

    def _log_error(self, target: str, chain_start: float, e: Exception) -> None:
        if getattr(e, _LOGGED_FLAG, False):
            return
        setattr(e, _LOGGED_FLAG, True)
        traceback = None if isinstance(e, CustomBaseError) else e
        self._frame_logger(target, chain_start, exception=traceback).error(
            f'{type(e).__name__}: {e}'
        )

    def __call__(self, func: _F) -> _F:
        target = call_target(func)

        if iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                chain_start = enter_call()
                try:
                    self._log_args(target, chain_start, args, kwargs)
                    value = await func(*args, **kwargs)
                except Exception as e:
                    self._log_error(target, chain_start, e)
                    if self.reraise:
                        raise
                    return None
                finally:
                    exit_call()
                self._log_return(target, chain_start, value)
                return value

            return cast(_F, async_wrapper)

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            chain_start = enter_call()
            try:
                self._log_args(target, chain_start, args, kwargs)
                value = func(*args, **kwargs)
            except Exception as e:
                self._log_error(target, chain_start, e)
                if self.reraise:
                    raise
                return None
            finally:
                exit_call()
            self._log_return(target, chain_start, value)
            return value

        return cast(_F, sync_wrapper)


class Logger:
    base = custom_logger

    @overload
    @staticmethod
    def io(func: Callable[_P, _T]) -> Callable[_P, _T]: ...

    @overload
    @staticmethod
    def io(func: None = ..., *, reraise: bool = ..., truncate: bool = ...) -> LoguruIO: ...

    @staticmethod
    def io(
        func: Callable[_P, _T] | None = None, *, reraise: bool = True, truncate: bool = True
    ) -> Callable[_P, _T] | LoguruIO:
        decorator = LoguruIO(custom_logger, reraise=reraise, truncate=truncate)
        return decorator(func) if func is not None else decorator
