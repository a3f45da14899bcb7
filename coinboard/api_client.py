import asyncio
import logging
from http import HTTPStatus
from typing import Any, Optional

import requests
from pydantic import ValidationError

from .config import ApiConfig, load_config
from .constants import Defaults, Endpoints
from .query import QueryParams, build_url
from .schemas import ErrorBody, TrendingResponse

logger = logging.getLogger("api_client")


class CoinGeckoAPIError(Exception):
    """Raised when a CoinGecko API call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class CoinGeckoDecodeError(CoinGeckoAPIError):
    """Raised when a successful response does not carry a JSON body."""


def parse_error_body(response: requests.Response) -> ErrorBody:
    """
    Decode the error payload of a failed response.

    Falls back to an empty `ErrorBody` when the body is not JSON or is not
    an object with a string `error` field.
    """

    try:
        payload = response.json()
    except ValueError:
        return ErrorBody()

    if not isinstance(payload, dict):
        return ErrorBody()

    try:
        return ErrorBody.model_validate(payload)
    except ValidationError:
        return ErrorBody()


def reason_phrase(response: requests.Response) -> str:
    """Reason phrase sent by the server, or the standard one for the status."""

    reason = getattr(response, "reason", None)
    if isinstance(reason, str) and reason:
        return reason
    try:
        return HTTPStatus(response.status_code).phrase
    except ValueError:
        return "Unknown Error"


class CoinGeckoClient:
    """Thin async client for the CoinGecko REST API."""

    def __init__(self, config: ApiConfig):
        self.config = config

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "CoinGeckoClient":
        return cls(load_config(env_file))

    def _headers(self, revalidate: int) -> dict:
        return {
            self.config.api_key_header: self.config.api_key,
            'Content-Type': 'application/json',
            'Accept': 'application/json',
            'User-Agent': Defaults.USER_AGENT,
            'Cache-Control': f'max-age={revalidate}',
        }

    async def fetch(
        self,
        endpoint: str,
        params: Optional[QueryParams] = None,
        revalidate: int = Defaults.REVALIDATE_SECONDS
    ) -> Any:
        """
        GET an endpoint and return its decoded JSON body.

        The body is returned as-is; callers own its shape.

        Args:
            endpoint: Path relative to the configured base URL.
            params: Query parameters. `None` and empty-string values are dropped.
            revalidate: Seconds the response may be reused before an upstream
                cache revalidates it. Sent as a `Cache-Control` hint.

        Returns:
            The parsed JSON payload.

        Raises:
            ValueError: If the endpoint is empty or revalidate is negative.
            CoinGeckoAPIError: If the request fails or returns a non-2xx status.
            CoinGeckoDecodeError: If a 2xx response body is not valid JSON.
        """

        # parameter validation
        if not endpoint or not endpoint.strip("/"):
            raise ValueError("endpoint must not be empty")
        if revalidate < 0:
            raise ValueError("revalidate must be greater than or equal to 0")

        url = build_url(self.config.base_url, endpoint, params)

        try:
            response = await asyncio.to_thread(
                requests.get,
                url,
                headers=self._headers(revalidate),
                timeout=self.config.timeout
            )
        except requests.exceptions.Timeout:
            logger.error(f"Request timeout: {url}")
            raise CoinGeckoAPIError("Request timeout")
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error: {str(e)}")
            raise CoinGeckoAPIError(f"Request error: {str(e)}")

        status = response.status_code
        logger.info(f"API Response: Status {status} for {endpoint}")

        if not 200 <= status < 300:
            if status == 429:
                retry_after = response.headers.get('Retry-After')
                logger.warning(f"Rate limited on {endpoint}, Retry-After: {retry_after}")

            error_body = parse_error_body(response)
            detail = error_body.error or reason_phrase(response)
            error_msg = f"API Error: {status}: {detail}"
            logger.error(error_msg)
            raise CoinGeckoAPIError(error_msg, status_code=status, detail=detail)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON body from {endpoint}: {str(e)}")
            raise CoinGeckoDecodeError(
                f"Invalid JSON response from {endpoint}", status_code=status
            ) from e

    async def get_trending(self) -> TrendingResponse:
        """Fetch trending coins and parse them into `TrendingResponse`."""

        payload = await self.fetch(
            Endpoints.TRENDING, revalidate=Defaults.TRENDING_REVALIDATE_SECONDS
        )
        trending = TrendingResponse.model_validate(payload)
        logger.info(f"Successfully fetched {len(trending.coins)} trending coins")
        return trending
