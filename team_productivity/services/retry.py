import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

import httpx

from team_productivity.exceptions import (
    AuthenticationError,
    TransientServiceError,
    ValidationError,
)

log = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]

# Transport failures worth another attempt: DNS/refused, connect timeout, reset
RETRYABLE_TRANSPORT_ERRORS = (
    httpx.ConnectError,
    httpx.ConnectTimeout,
    httpx.ReadError,
    httpx.WriteError,
    httpx.RemoteProtocolError,
)


def exponential_delay(base_delay: float) -> Callable[[int], float]:
    """Delay before the retry following attempt_index: base * 2**attempt_index."""

    def delay(attempt_index: int) -> float:
        return base_delay * (2**attempt_index)

    return delay


def is_retryable(error: BaseException) -> bool:
    return isinstance(error, TransientServiceError)


def classify_response(response: httpx.Response) -> None:
    """Raises the typed engine error matching a failed upstream response."""
    code = response.status_code
    if code < 400:
        return
    if code in (401, 403):
        raise AuthenticationError(f"Upstream rejected credentials ({code})")
    if code == 400:
        raise ValidationError(_error_detail(response))
    if code == 429 or code >= 500:
        raise TransientServiceError(f"Upstream unavailable ({code})", status_code=code)
    raise httpx.HTTPStatusError(
        f"Unexpected upstream status {code}", request=response.request, response=response
    )


def classify_transport_error(error: httpx.TransportError) -> Exception:
    if isinstance(error, RETRYABLE_TRANSPORT_ERRORS):
        return TransientServiceError(f"Network failure: {type(error).__name__}")
    return error


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return "Bad request"
    if not isinstance(body, dict):
        return "Bad request"
    messages = list(body.get("errorMessages") or [])
    messages.extend(f"{k}: {v}" for k, v in (body.get("errors") or {}).items())
    return "; ".join(messages) or "Bad request"


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    should_retry: Callable[[BaseException], bool] = is_retryable,
    max_attempts: int = 3,
    delay: Callable[[int], float] = exponential_delay(1.0),
    sleep: Sleep = asyncio.sleep,
    description: str = "request",
) -> T:
    """
    Runs operation up to max_attempts times.

    Failures rejected by should_retry propagate immediately. Between attempts
    waits delay(attempt_index). The last failure propagates once attempts are
    exhausted.
    """
    for attempt in range(max_attempts):
        try:
            return await operation()
        except Exception as e:
            if not should_retry(e) or attempt == max_attempts - 1:
                raise
            wait = delay(attempt)
            log.warning(
                f"{description} failed (attempt {attempt + 1}/{max_attempts}): {e}; "
                f"retrying in {wait:.1f}s"
            )
            await sleep(wait)
    raise RuntimeError("with_retry requires max_attempts >= 1")
