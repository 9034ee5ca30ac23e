# ABOUTME: Shared httpx client factory with tenacity-backed retries for the weather providers.
# ABOUTME: Retries connection errors, timeouts, and 429/5xx responses before giving up.

import httpx
from pydantic_ai.retries import AsyncTenacityTransport, RetryConfig, wait_retry_after
from tenacity import retry_if_exception, stop_after_attempt

RETRY_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRY_STATUS_CODES
    return isinstance(exc, (httpx.ConnectError, httpx.ReadTimeout))


def _raise_for_transient_status(response: httpx.Response) -> None:
    if response.status_code in RETRY_STATUS_CODES:
        response.raise_for_status()


def create_http_client(timeout: float = 10.0) -> httpx.AsyncClient:
    """Create an httpx client with tenacity retry on transient HTTP errors.

    Only 429/5xx responses are retried; other error statuses (e.g. 400 for a
    bad query) come straight back so their body can be turned into a message.
    """
    transport = AsyncTenacityTransport(
        RetryConfig(
            retry=retry_if_exception(_is_transient),
            wait=wait_retry_after(max_wait=30),
            stop=stop_after_attempt(3),
            reraise=True,
        ),
        validate_response=_raise_for_transient_status,
    )
    return httpx.AsyncClient(transport=transport, timeout=timeout)
