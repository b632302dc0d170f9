"""
Unit tests for the Logger.io decorator and its masking helpers

Test Focus:
1. Sensitive keys and key=value pairs are masked before logging
2. Long payloads are truncated
3. Decorated functions keep their return value and re-raise exactly once-logged errors
"""

import pytest

from booking_service.platform.exception.exceptions import ValidationError
from booking_service.platform.logging.loguru_io import Logger, LoguruIO
from booking_service.platform.logging.loguru_io_utils import mask_sensitive, truncate_content


@pytest.mark.unit
class TestMasking:
    def test_nested_values_are_masked(self):
        masked = mask_sensitive({'config': {'sasl_password': 'x'}, 'args': ['token=abc']})

        assert masked == {'config': {'sasl_password': '********'}, 'args': ["token='********'"]}

    def test_sensitive_dict_keys_are_masked(self):
        io = LoguruIO(Logger.base)

        masked = io.render({'password': 'hunter2', 'group_id': 'booking-service'})

        assert masked == {'password': '********', 'group_id': 'booking-service'}

    def test_key_value_pairs_in_text_are_masked(self):
        assert mask_sensitive('sasl_password=s3cret, user=booking') == (
            "sasl_password='********', user=booking"
        )
        assert mask_sensitive("token: 'abc.def'") == "token: '********'"

    def test_clean_values_are_returned_unchanged(self):
        value = 'topic=booking-events'

        assert mask_sensitive(value) is value

    def test_long_content_is_truncated(self):
        truncated = truncate_content('x' * 1500)

        assert truncated.startswith('x' * 1000)
        assert truncated.endswith('(truncated 1500 chars)')


@pytest.mark.unit
class TestLoggerIO:
    @pytest.mark.asyncio
    async def test_async_function_returns_value(self):
        @Logger.io
        async def add(a: int, *, b: int) -> int:
            return a + b

        assert await add(1, b=2) == 3

    def test_sync_function_reraises_and_marks_logged(self):
        @Logger.io
        def reject(reason: str) -> None:
            raise ValidationError(reason)

        with pytest.raises(ValidationError) as exc_info:
            reject('Booking start time must be in the future')

        assert exc_info.value._logged_by_io is True

    def test_reraise_false_swallows_into_none(self):
        @Logger.io(reraise=False)
        def explode() -> int:
            raise RuntimeError('boom')

        assert explode() is None
