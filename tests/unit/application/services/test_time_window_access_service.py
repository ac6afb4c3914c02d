"""Unit tests for TimeWindowAccessService."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import pytest

from promptgate.application.services.time_window_access_service import (
    TimeWindowAccessService,
    check_time_window_access,
    resolve_now,
)
from promptgate.core.config import Settings
from promptgate.core.exceptions import InvalidInstantError
from promptgate.domain.entities import NO_GROUPS_MESSAGE, AccessPolicy, Group, TimeWindow

OFFICE_HOURS = TimeWindow(
    window_type="daily", id="w1", name="Office hours", start_time="09:00", end_time="17:00"
)
STAFF = Group(id="g1", name="Staff", time_windows=(OFFICE_HOURS,))


@pytest.fixture
def provider():
    """Mock membership provider."""
    return AsyncMock()


@pytest.fixture
def service(provider):
    return TimeWindowAccessService(provider, settings=Settings())


def test_resolve_now_variants():
    assert resolve_now("2024-01-15T08:00:00Z") == datetime(2024, 1, 15, 8, 0, tzinfo=timezone.utc)
    assert resolve_now(datetime(2024, 1, 15, 8, 0)) == datetime(2024, 1, 15, 8, 0, tzinfo=timezone.utc)

    shifted = datetime(2024, 1, 15, 10, 0, tzinfo=timezone(timedelta(hours=2)))
    resolved = resolve_now(shifted)
    assert resolved == datetime(2024, 1, 15, 8, 0, tzinfo=timezone.utc)
    assert resolved.tzinfo == timezone.utc

    assert resolve_now().tzinfo == timezone.utc


@pytest.mark.parametrize("value", ["not a date", "2024-13-45T00:00:00Z", 1705305600, object()])
def test_resolve_now_rejects_invalid(value):
    with pytest.raises(InvalidInstantError):
        resolve_now(value)


@pytest.mark.asyncio
async def test_denied_with_next_allowed_time(service, provider):
    provider.get_user_groups.return_value = [STAFF]

    decision = await service.check_time_window_access("user-1", now="2024-01-15T08:00:00Z")

    assert decision.is_allowed is False
    assert decision.to_dict()["nextAllowedTime"] == "2024-01-15T09:00:00.000Z"
    provider.get_user_groups.assert_awaited_once_with("user-1")


@pytest.mark.asyncio
async def test_allowed_inside_window(service, provider):
    provider.get_user_groups.return_value = [STAFF]

    decision = await service.check_time_window_access(
        "user-1", now=datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
    )

    assert decision.is_allowed is True
    assert decision.to_dict() == {"isAllowed": True}


@pytest.mark.asyncio
async def test_fetch_failure_fails_open(service, provider):
    provider.get_user_groups.side_effect = ConnectionError("database unavailable")

    with patch(
        "promptgate.application.services.time_window_access_service.logger"
    ) as mock_logger:
        decision = await service.check_time_window_access("user-1", now="2024-01-15T08:00:00Z")

    assert decision.is_allowed is True
    mock_logger.warning.assert_called_once()
    assert mock_logger.warning.call_args.kwargs["exc_info"] is True
    mock_logger.error.assert_not_called()


@pytest.mark.asyncio
async def test_invalid_now_fails_open_without_fetching(service, provider):
    decision = await service.check_time_window_access("user-1", now="yesterday-ish")

    assert decision.is_allowed is True
    provider.get_user_groups.assert_not_awaited()


@pytest.mark.asyncio
async def test_no_groups_uses_policy(service, provider):
    provider.get_user_groups.return_value = None

    denied = await service.check_time_window_access("user-1", now="2024-01-15T08:00:00Z")
    allowed = await service.check_time_window_access(
        "user-1",
        policy=AccessPolicy(default_allow_when_no_groups=True),
        now="2024-01-15T08:00:00Z",
    )

    assert denied.is_allowed is False
    assert denied.message == NO_GROUPS_MESSAGE
    assert allowed.is_allowed is True


@pytest.mark.asyncio
async def test_default_policy_comes_from_settings(provider):
    provider.get_user_groups.return_value = []
    service = TimeWindowAccessService(provider, settings=Settings(default_allow_when_no_groups=True))

    decision = await service.check_time_window_access("user-1", now="2024-01-15T08:00:00Z")

    assert decision.is_allowed is True


@pytest.mark.asyncio
async def test_malformed_windows_never_raise(service, provider):
    provider.get_user_groups.return_value = [
        Group(
            id="g1",
            name="Broken",
            time_windows=(
                TimeWindow(window_type="daily", start_time="09:00"),
                TimeWindow(window_type="weekly", start_time="09:00", end_time="17:00"),
                TimeWindow(window_type="exception", start_date="someday"),
            ),
        )
    ]

    decision = await service.check_time_window_access("user-1", now="2024-01-15T10:00:00Z")

    assert decision.is_allowed is False
    assert decision.next_allowed_time is None


@pytest.mark.asyncio
async def test_unusable_provider_result_fails_open(service, provider):
    provider.get_user_groups.return_value = 42

    decision = await service.check_time_window_access("user-1", now="2024-01-15T10:00:00Z")

    assert decision.is_allowed is True


@pytest.mark.asyncio
async def test_module_level_helper(provider):
    provider.get_user_groups.return_value = [Group(id="g1", name="Open")]

    decision = await check_time_window_access(
        provider, "user-1", now="2024-01-15T08:00:00Z", settings=Settings()
    )

    assert decision.is_allowed is True


@pytest.mark.asyncio
async def test_concurrent_checks_are_independent(provider):
    import asyncio

    provider.get_user_groups.return_value = [STAFF]
    service = TimeWindowAccessService(provider, settings=Settings())

    early, late = await asyncio.gather(
        service.check_time_window_access("a", now="2024-01-15T08:00:00Z"),
        service.check_time_window_access("b", now="2024-01-15T10:00:00Z"),
    )

    assert early.is_allowed is False
    assert late.is_allowed is True
