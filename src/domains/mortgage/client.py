"""HTTP client for the HomeSlice API.

Each method performs exactly one request. There are no retries and no
caching; every failure surfaces as a RemoteError.
"""

from typing import Any, Optional

import httpx

from shared.config import HomeSliceSettings
from shared.errors import RemoteError
from shared.logging import get_logger
from shared.models import (
    DEFAULT_LOAN_TERM,
    OPTIONAL_MORTGAGE_FIELDS,
    MortgageRequest,
)

logger = get_logger(__name__)


class HomeSliceClient:
    """
    Client for the HomeSlice rates and calculator endpoints.

    Authenticates every request with the pre-shared x-api-key header.
    """

    def __init__(
        self,
        settings: HomeSliceSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Server settings carrying the API origin and key
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = settings.api_base
        self._api_key = settings.api_key
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_headers(self) -> dict[str, str]:
        return {
            "accept": "application/json",
            "x-api-key": self._api_key.get_secret_value(),
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._get_headers(),
                transport=self._transport
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HomeSliceClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _send(self, method: str, path: str, **kwargs) -> Any:
        """
        Send one request and decode the JSON body.

        Raises:
            RemoteError: On network failure, non-2xx status or a non-JSON body
        """
        client = await self._get_client()

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.warning("HomeSlice request failed", method=method, path=path, error=str(e))
            raise RemoteError(str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.warning(
                "HomeSlice returned an error status",
                method=method,
                path=path,
                status_code=response.status_code
            )
            raise RemoteError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
                reason=response.reason_phrase
            )

        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(
                f"Invalid JSON response: {e}",
                status_code=response.status_code
            ) from e

    async def fetch_state_rates(self, state: str) -> dict[str, Any]:
        """
        Fetch live mortgage rates for a state.

        Args:
            state: Two-letter state code (any case)

        Returns:
            The provider's rates payload

        Raises:
            RemoteError: If the request fails
        """
        try:
            data = await self._send("GET", "/rates", params={"state": state.upper()})
        except RemoteError as e:
            raise RemoteError(
                f"Failed to fetch HomeSlice rates: {e}",
                status_code=e.status_code,
                reason=e.reason
            ) from e

        if not isinstance(data, dict):
            raise RemoteError("Failed to fetch HomeSlice rates: unexpected response body")

        return data

    async def calculate_mortgage(self, request: MortgageRequest) -> Any:
        """
        Run the HomeSlice mortgage calculator.

        Args:
            request: Validated calculator arguments

        Returns:
            The provider's response body, unchanged

        Raises:
            RemoteError: If the request fails
        """
        try:
            return await self._send(
                "POST",
                "/calculate",
                json=build_calculation_body(request),
                headers={"content-type": "application/json"}
            )
        except RemoteError as e:
            raise RemoteError(
                f"Failed to calculate mortgage: {e}",
                status_code=e.status_code,
                reason=e.reason
            ) from e


def _as_number(value: float | int) -> float | int:
    # 300000.0 is sent as 300000
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def build_calculation_body(request: MortgageRequest) -> dict[str, Any]:
    """
    Build the /calculate request body.

    Optional fields the caller did not supply are left out entirely.
    """
    body: dict[str, Any] = {
        "home_price": _as_number(request.home_price),
        "down_payment_amt": _as_number(request.down_payment_amt),
        "down_payment_type": request.down_payment_type.value,
        "state": request.state.upper(),
        "loan_term": _as_number(request.loan_term or DEFAULT_LOAN_TERM),
    }

    for field in OPTIONAL_MORTGAGE_FIELDS:
        value = getattr(request, field)
        if value is not None:
            body[field] = _as_number(value)

    return body
