"""
Unit tests for the process shutdown sequence

Test Focus:
1. A failing close is logged and does not stop the remaining releases
"""

from unittest.mock import AsyncMock

import pytest

from booking_service.main import _release


@pytest.mark.unit
class TestRelease:
    @pytest.mark.asyncio
    async def test_failing_close_does_not_raise(self):
        """
        Given: A resource whose close raises
        When: It is released, followed by another resource
        Then: Both closes are awaited and nothing escapes
        """
        # Arrange
        broken = AsyncMock(side_effect=RuntimeError('channel already gone'))
        healthy = AsyncMock()

        # Act
        await _release('Availability client', broken)
        await _release('Database engine', healthy)

        # Assert
        broken.assert_awaited_once()
        healthy.assert_awaited_once()
