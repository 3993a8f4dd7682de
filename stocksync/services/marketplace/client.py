import json
import logging
from typing import Any, Dict, Optional

import httpx

from stocksync.core.config import MarketplaceConfig
from stocksync.core.enums import CredentialKey
from stocksync.core.exceptions import AuthFailed, TransportError
from stocksync.integrations.base import CredentialStore
from stocksync.schemas.sync import TokenGrant

logger = logging.getLogger(__name__)

# InvalidURL and StreamError sit outside httpx.HTTPError
NETWORK_ERRORS = (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError)


class MarketplaceClient:
    """
    Thin asynchronous client for the marketplace REST API.

    Covers the five calls the sync engine needs:
        - POST /oauth/token               (exchange_code)
        - GET  /items/{id}                (get_item, token as query param)
        - PUT  /items/{id}                (put_item, bearer header)
        - GET  /orders/{id}               (get_order, token as query param)
        - POST /users/{id}/notifications  (subscribe_webhook)

    Transport failures never leave this class: every call except
    exchange_code returns {} instead of raising.
    """

    def __init__(
        self,
        config: MarketplaceConfig,
        credentials: CredentialStore,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.credentials = credentials
        self.BASE_URL = config.api_base.rstrip('/')
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.config.timeout, transport=self._transport)

    def _get_headers(self, token: Optional[str]) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    @staticmethod
    def _decode(response: httpx.Response) -> Dict[str, Any]:
        if response.status_code == 204 or not response.content:
            return {}
        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning(f"Undecodable response body (status {response.status_code})")
            return {}
        return body if isinstance(body, dict) else {}

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict] = None,
        params: Optional[Dict] = None,
        token: Optional[str] = None,
    ) -> Dict:
        """
        Make a request to the marketplace API

        Raises:
            TransportError: If the request could not be completed
        """
        url = f"{self.BASE_URL}/{endpoint.lstrip('/')}"
        logger.debug(f"Making {method} request to {url}")

        try:
            async with self._client() as client:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=self._get_headers(token),
                    json=data,
                    params=params,
                )
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {str(e)}") from e
        except NETWORK_ERRORS as e:
            raise TransportError(f"Network error: {str(e)}") from e

        if response.status_code >= 400:
            logger.warning(f"Marketplace API {method} {endpoint} returned {response.status_code}")

        return self._decode(response)

    async def _safe_request(self, method: str, endpoint: str, **kwargs) -> Dict:
        try:
            return await self._make_request(method, endpoint, **kwargs)
        except TransportError as e:
            logger.error(f"Marketplace {method} {endpoint} failed, treating as no data: {e}")
            return {}

    # OAuth

    async def exchange_code(self, code: str, redirect_uri: str) -> TokenGrant:
        """
        Exchange an authorization code for tokens

        Raises:
            AuthFailed: On transport error or a response without access_token
        """
        client_id = await self.credentials.get(CredentialKey.CLIENT_ID)
        client_secret = await self.credentials.get(CredentialKey.CLIENT_SECRET)
        form = {
            "grant_type": "authorization_code",
            "client_id": client_id or "",
            "client_secret": client_secret or "",
            "code": code,
            "redirect_uri": redirect_uri,
        }

        try:
            async with self._client() as client:
                response = await client.post(f"{self.BASE_URL}/oauth/token", data=form)
        except NETWORK_ERRORS as e:
            logger.error(f"Network error exchanging authorization code: {str(e)}")
            raise AuthFailed(str(e)) from e

        body = self._decode(response)
        if not body.get("access_token"):
            logger.error(f"Token exchange returned no access token (status {response.status_code})")
            raise AuthFailed("Invalid response from the marketplace.")

        account_id = body.get("user_id")
        return TokenGrant(
            access_token=body["access_token"],
            refresh_token=body.get("refresh_token"),
            remote_account_id=str(account_id) if account_id is not None else None,
        )

    # Items

    async def get_item(self, item_id: str, token: Optional[str]) -> Dict:
        return await self._safe_request("GET", f"/items/{item_id}", params={"access_token": token or ""})

    async def put_item(self, item_id: str, fields: Dict[str, Any]) -> Dict:
        """Partial update of an item; only the given fields are sent"""
        token = await self.credentials.get(CredentialKey.ACCESS_TOKEN)
        return await self._safe_request("PUT", f"/items/{item_id}", data=fields, token=token)

    # Orders

    async def get_order(self, order_id: str, token: Optional[str]) -> Dict:
        return await self._safe_request("GET", f"/orders/{order_id}", params={"access_token": token or ""})

    # Notifications

    async def subscribe_webhook(self, token: str, account_id: Optional[str], callback_url: str) -> None:
        """Register callback_url for order notifications. Best effort, nothing is returned."""
        if not account_id:
            logger.warning("No marketplace account id in the token grant, skipping notification subscription")
            return

        payload = {"topic": self.config.webhook_topic, "url": callback_url}
        response = await self._safe_request(
            "POST", f"/users/{account_id}/notifications", data=payload, token=token
        )
        logger.info(f"Requested {self.config.webhook_topic} notifications for account {account_id}")
        logger.debug(f"Subscription response: {response}")
