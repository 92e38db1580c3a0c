"""
Tests unitaires pour le mecanisme de retry avec backoff exponentiel.

Ces tests verifient:
- RateLimitError capture le header Retry-After
- with_retry relance sur 429 et sur les erreurs de transport, pas sur le reste
- request_with_retry convertit les 429 et propage les autres erreurs HTTP
"""

import httpx
import pytest
import respx

from mediameta.adapters.api.retry import (
    RETRYABLE_ERRORS,
    RateLimitError,
    request_with_retry,
    with_retry,
)

SEASON_URL = "https://api.themoviedb.org/3/tv/1399/season/1"


class TestRateLimitError:
    """Tests pour l'exception RateLimitError."""

    def test_stores_retry_after(self) -> None:
        error = RateLimitError(retry_after=10)
        assert error.retry_after == 10
        assert "10" in str(error)

    def test_retry_after_is_optional(self) -> None:
        assert RateLimitError().retry_after is None

    def test_transport_errors_are_retryable(self) -> None:
        assert RateLimitError in RETRYABLE_ERRORS
        assert httpx.TransportError in RETRYABLE_ERRORS


class TestWithRetry:
    """Tests pour le decorateur with_retry."""

    @pytest.mark.asyncio
    async def test_retries_transport_error_then_succeeds(self) -> None:
        attempts = []

        @with_retry(max_attempts=3, max_wait=1)
        async def fetch_season() -> dict:
            attempts.append(1)
            if len(attempts) == 1:
                raise httpx.ConnectError("connection reset")
            return {"season_number": 1}

        assert await fetch_season() == {"season_number": 1}
        assert len(attempts) == 2

    @pytest.mark.asyncio
    async def test_reraises_after_max_attempts(self) -> None:
        attempts = []

        @with_retry(max_attempts=2, max_wait=1)
        async def always_limited() -> None:
            attempts.append(1)
            raise RateLimitError(retry_after=1)

        with pytest.raises(RateLimitError):
            await always_limited()
        assert len(attempts) == 2

    @pytest.mark.asyncio
    async def test_other_errors_are_not_retried(self) -> None:
        attempts = []

        @with_retry(max_attempts=3, max_wait=1)
        async def bad_payload() -> None:
            attempts.append(1)
            raise ValueError("invalid JSON")

        with pytest.raises(ValueError):
            await bad_payload()
        assert len(attempts) == 1


class TestRequestWithRetry:
    """Tests pour request_with_retry avec httpx."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_429_is_retried_then_succeeds(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(SEASON_URL).mock(
            side_effect=[
                httpx.Response(429, headers={"Retry-After": "1"}),
                httpx.Response(200, json={"season_number": 1}),
            ]
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(client, "GET", SEASON_URL, max_attempts=3)

        assert response.json() == {"season_number": 1}
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_exhausted_429_raises_rate_limit_error(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(SEASON_URL).mock(
            return_value=httpx.Response(429, headers={"Retry-After": "abc"})
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError) as exc_info:
                await request_with_retry(client, "GET", SEASON_URL, max_attempts=2)

        # Header non numerique ignore
        assert exc_info.value.retry_after is None
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_404_is_not_retried(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(SEASON_URL).mock(return_value=httpx.Response(404))

        async with httpx.AsyncClient() as client:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await request_with_retry(client, "GET", SEASON_URL)

        assert exc_info.value.response.status_code == 404
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_success_passes_through(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(SEASON_URL).mock(
            return_value=httpx.Response(200, json={"episodes": []})
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(
                client, "GET", SEASON_URL, params={"language": "de"}
            )

        assert response.status_code == 200
        assert route.calls.last.request.url.params["language"] == "de"
