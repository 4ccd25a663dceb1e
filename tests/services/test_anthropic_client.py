"""Resilient client tests — retry, backoff and error mapping around messages.create.

Invariants:
    - Rate limits retry, then raise AdvisorRateLimitError with Retry-After
    - Transient errors retry max_retries times
    - Credit exhaustion and other 4xx fail immediately
"""

from unittest.mock import AsyncMock

import anthropic
import httpx
import pytest

from decision_twin.core.errors import (
    AdvisorAPIError, AdvisorCreditsExhaustedError, AdvisorRateLimitError,
)
from decision_twin.infrastructure.anthropic_client import ResilientAnthropicClient
from tests.services.mock_anthropic import text_message

_REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def _status_error(cls, status: int, message: str = "error", headers=None):
    response = httpx.Response(status, request=_REQUEST, headers=headers or {})
    return cls(message, response=response, body=None)


@pytest.fixture
def resilient(monkeypatch):
    monkeypatch.setattr(
        "decision_twin.infrastructure.anthropic_client.asyncio.sleep", AsyncMock(),
    )
    client = ResilientAnthropicClient(api_key="sk-ant-test", max_retries=2, base_delay_ms=1)
    client.client.messages.create = AsyncMock()
    return client


async def _call(client):
    return await client.create_message(
        model="m", max_tokens=10, system="s", messages=[{"role": "user", "content": "u"}],
    )


async def test_success_first_try(resilient):
    resilient.client.messages.create.return_value = text_message("hi")
    response = await _call(resilient)
    assert response.content[0].text == "hi"
    assert resilient.client.messages.create.await_count == 1


async def test_rate_limit_then_success(resilient):
    resilient.client.messages.create.side_effect = [
        _status_error(anthropic.RateLimitError, 429),
        text_message("hi"),
    ]
    assert (await _call(resilient)).content[0].text == "hi"
    assert resilient.client.messages.create.await_count == 2


async def test_rate_limit_exhausted_carries_retry_after(resilient):
    resilient.client.messages.create.side_effect = [
        _status_error(anthropic.RateLimitError, 429, headers={"retry-after": "2"})
        for _ in range(3)
    ]
    with pytest.raises(AdvisorRateLimitError) as exc:
        await _call(resilient)
    assert exc.value.http_status == 429
    assert exc.value.context.retry_after_ms == 2000


async def test_server_errors_retry_then_fail(resilient):
    resilient.client.messages.create.side_effect = [
        _status_error(anthropic.InternalServerError, 500) for _ in range(3)
    ]
    with pytest.raises(AdvisorAPIError) as exc:
        await _call(resilient)
    assert exc.value.api_error_type == "connection_error"
    assert resilient.client.messages.create.await_count == 3


async def test_overloaded_is_transient(resilient):
    resilient.client.messages.create.side_effect = [
        _status_error(anthropic.APIStatusError, 529),
        text_message("back"),
    ]
    assert (await _call(resilient)).content[0].text == "back"


async def test_timeout_fails_fast(resilient):
    resilient.client.messages.create.side_effect = anthropic.APITimeoutError(request=_REQUEST)
    with pytest.raises(AdvisorAPIError) as exc:
        await _call(resilient)
    assert exc.value.api_error_type == "timeout"
    assert resilient.client.messages.create.await_count == 1


async def test_credit_balance_is_credits_exhausted(resilient):
    resilient.client.messages.create.side_effect = _status_error(
        anthropic.BadRequestError, 400, "Your credit balance is too low",
    )
    with pytest.raises(AdvisorCreditsExhaustedError) as exc:
        await _call(resilient)
    assert exc.value.http_status == 402


async def test_other_client_errors_fail_immediately(resilient):
    resilient.client.messages.create.side_effect = _status_error(
        anthropic.BadRequestError, 400, "bad model",
    )
    with pytest.raises(AdvisorAPIError) as exc:
        await _call(resilient)
    assert exc.value.api_error_type == "client_error"
    assert resilient.client.messages.create.await_count == 1


def test_backoff_is_capped():
    client = ResilientAnthropicClient(api_key="k", base_delay_ms=1000, max_delay_ms=5000)
    assert client._backoff(10) <= 5000 * 1.25
