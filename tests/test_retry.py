import httpx
import pytest

from team_productivity.exceptions import (
    AuthenticationError,
    TransientServiceError,
    ValidationError,
)
from team_productivity.services.retry import (
    classify_response,
    classify_transport_error,
    exponential_delay,
    is_retryable,
    with_retry,
)


class Flaky:
    """Fails with the queued errors, then returns 'ok'."""

    def __init__(self, *errors):
        self.errors = list(errors)
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return "ok"


def response(status, json=None):
    return httpx.Response(status, json=json, request=httpx.Request("GET", "https://jira.test/x"))


class TestWithRetry:
    @pytest.mark.asyncio
    async def test_success_first_time(self, fake_sleep):
        operation = Flaky()
        assert await with_retry(operation, sleep=fake_sleep) == "ok"
        assert operation.calls == 1
        assert fake_sleep.calls == []

    @pytest.mark.asyncio
    async def test_backoff_doubles_between_attempts(self, fake_sleep):
        operation = Flaky(TransientServiceError("a"), TransientServiceError("b"))
        result = await with_retry(
            operation, max_attempts=3, delay=exponential_delay(1.0), sleep=fake_sleep
        )
        assert result == "ok"
        assert operation.calls == 3
        assert fake_sleep.calls == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_exhausted_attempts_raise_last_error(self, fake_sleep):
        operation = Flaky(*(TransientServiceError(str(i)) for i in range(5)))
        with pytest.raises(TransientServiceError, match="2"):
            await with_retry(operation, max_attempts=3, sleep=fake_sleep)
        assert operation.calls == 3
        assert len(fake_sleep.calls) == 2

    @pytest.mark.asyncio
    async def test_non_retryable_fails_immediately(self, fake_sleep):
        operation = Flaky(AuthenticationError("nope"))
        with pytest.raises(AuthenticationError):
            await with_retry(operation, max_attempts=5, sleep=fake_sleep)
        assert operation.calls == 1
        assert fake_sleep.calls == []

    @pytest.mark.asyncio
    async def test_single_attempt_never_sleeps(self, fake_sleep):
        operation = Flaky(TransientServiceError("a"))
        with pytest.raises(TransientServiceError):
            await with_retry(operation, max_attempts=1, sleep=fake_sleep)
        assert fake_sleep.calls == []

    @pytest.mark.asyncio
    async def test_custom_predicate(self, fake_sleep):
        operation = Flaky(KeyError("x"))
        result = await with_retry(
            operation, should_retry=lambda e: isinstance(e, KeyError), sleep=fake_sleep
        )
        assert result == "ok"


class TestClassifyResponse:
    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_failures(self, status):
        with pytest.raises(AuthenticationError):
            classify_response(response(status))

    def test_bad_request_carries_upstream_detail(self):
        body = {"errorMessages": ["Field 'sprint' does not exist"], "errors": {"jql": "bad"}}
        with pytest.raises(ValidationError) as info:
            classify_response(response(400, body))
        assert "Field 'sprint' does not exist" in info.value.detail
        assert "jql: bad" in info.value.detail

    @pytest.mark.parametrize("status", [429, 500, 502, 503, 504])
    def test_transient_statuses(self, status):
        with pytest.raises(TransientServiceError) as info:
            classify_response(response(status))
        assert info.value.status_code == status
        assert is_retryable(info.value)

    def test_other_client_errors_are_not_retryable(self):
        with pytest.raises(httpx.HTTPStatusError) as info:
            classify_response(response(404))
        assert not is_retryable(info.value)

    def test_success_passes(self):
        classify_response(response(200, {}))


class TestClassifyTransportError:
    @pytest.mark.parametrize(
        "error",
        [
            httpx.ConnectError("dns failure"),
            httpx.ConnectTimeout("connect timeout"),
            httpx.ReadError("connection reset by peer"),
        ],
    )
    def test_network_failures_are_retryable(self, error):
        assert is_retryable(classify_transport_error(error))

    def test_read_timeout_is_not_retryable(self):
        error = httpx.ReadTimeout("slow")
        assert classify_transport_error(error) is error
        assert not is_retryable(error)
