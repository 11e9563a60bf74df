"""OTA (distribution partner) client for inventory pushes."""

from typing import Any, Optional

import httpx
from loguru import logger


DEFAULT_OTA_ENDPOINT = "https://ota-api-endpoint.com/update"


class OTAPushFailed(Exception):
    """The OTA endpoint could not be reached or rejected the push."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class OTAClient:
    """Pushes room inventory to the OTA partner with a bearer credential."""

    def __init__(
        self,
        endpoint: str = DEFAULT_OTA_ENDPOINT,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = endpoint
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

    async def initialize(self):
        if self._http_client is None:
            kwargs = {"timeout": self.timeout}
            if self._transport is not None:
                kwargs["transport"] = self._transport
            self._http_client = httpx.AsyncClient(**kwargs)

    async def close(self):
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def push_inventory(self, payload: dict) -> Optional[Any]:
        """POST the inventory payload to the OTA endpoint.

        Returns:
            Decoded response body (or raw text), None if no API key is configured

        Raises:
            OTAPushFailed: network error or non-2xx response
        """
        if not self.api_key:
            logger.warning("OTA_API_KEY not configured, skipping OTA push")
            return None

        await self.initialize()
        try:
            response = await self._http_client.post(
                self.endpoint,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Failed to push inventory to OTA {self.endpoint}: {e}")
            raise OTAPushFailed(f"OTA request failed: {e}") from e

        if not response.is_success:
            logger.error(f"OTA API error: {response.status_code} - {response.text[:200]}")
            raise OTAPushFailed(
                f"OTA returned {response.status_code}", status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError:
            return response.text
