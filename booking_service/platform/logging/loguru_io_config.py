"""
loguru sinks for booking-service.

Every record carries three extras: the service instance, the start time of
the @Logger.io call chain it belongs to, and the decorated function. Records
from stdlib logging (grpc, confluent-kafka, uvicorn) go to the same sinks.
"""

from contextvars import ContextVar
from datetime import datetime, timezone
from enum import StrEnum
import inspect
import logging
import os
import sys
from typing import TYPE_CHECKING

from loguru import logger as loguru_logger

from booking_service.platform.config.core_setting import settings
from booking_service.platform.constant.path import LOG_DIR
from booking_service.platform.logging.service_context import get_service_context


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


SENSITIVE_KEYWORDS = frozenset({'password', 'sasl_password', 'token'})

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth', default=0)

LOG_FORMAT = (
    f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</> | <lvl>{{level:<8}}</> | '
    f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</> | '
    f'{{message}} | <lk>{{elapsed}}</> | <lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>'
)

# Client libraries whose DEBUG output drowns the application's
_CHATTY_LOGGERS = ('asyncio', 'grpc', 'kafka', 'confluent_kafka')


def default_extra() -> dict[str, str]:
    return {
        ExtraField.SERVICE_CONTEXT: get_service_context(),
        ExtraField.CHAIN_START_TIME: '',
        ExtraField.CALL_TARGET: '',
    }


class InterceptHandler(logging.Handler):
    """Forward stdlib records to loguru, pointing at the original call site."""

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno <= logging.DEBUG and record.name.startswith(_CHATTY_LOGGERS):
            return

        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        custom_logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _log_file_name(now: datetime) -> str:
    prefix = 'test_' if os.environ.get('TEST_LOG_DIR') else ''
    return f'{prefix}{now:%Y-%m-%d_%H}.log'


def configure_logging() -> 'LoguruLogger':
    level = 'DEBUG' if settings.DEBUG else 'INFO'

    loguru_logger.remove()
    loguru_logger.add(sys.stdout, format=LOG_FORMAT, level=level, enqueue=True)
    if settings.DEBUG:
        # Outside DEBUG, stdout is shipped by the log collector
        loguru_logger.add(
            LOG_DIR / _log_file_name(datetime.now(timezone.utc)),
            format=LOG_FORMAT,
            level=level,
            rotation='1 hour',
            retention='7 days',
            compression='gz',
            enqueue=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    return loguru_logger.bind(**default_extra())


custom_logger = configure_logging()
