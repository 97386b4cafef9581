"""Beeswax API client wrapper.

Handles cookie-session authentication and HTTP requests to the Beeswax API.
Base URL: https://stingersbx.api.beeswax.com (sandbox)
Auth: POST /rest/authenticate stores a session cookie reused by every call.
"""

import asyncio
import logging
import ssl
from pathlib import Path
from typing import Any

import httpx

from beeswax_client.config_schema import (
    BEESWAX_ENTITIES,
    DEFAULT_API_ROOT,
    BeeswaxConnectionConfig,
    BeeswaxSettings,
    parse_connection_config,
)
from beeswax_client.errors import BeeswaxAPIError, BeeswaxAuthenticationError
from beeswax_client.managers.entities import BeeswaxEntityManager
from beeswax_client.managers.segment_uploads import SegmentUploadManager
from beeswax_client.schemas import OperationResult
from beeswax_client.tls import build_ssl_context
from beeswax_client.version import get_version

logger = logging.getLogger(__name__)


class BeeswaxClient:
    """Client for interacting with the Beeswax REST API.

    One entity manager is composed per configured entity, e.g.
    ``client.campaigns.find(123)`` or ``client.line_items.query_all({...})``.

    Attributes:
        email: Login email
        api_root: API root URL (default: sandbox host)
        timeout: Request timeout in seconds
    """

    DEFAULT_API_ROOT = DEFAULT_API_ROOT
    DEFAULT_TIMEOUT = 30
    AUTH_PATH = "/rest/authenticate"

    def __init__(
        self,
        email: str,
        password: str,
        api_root: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        verify: ssl.SSLContext | bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the Beeswax client.

        Args:
            email: Login email
            password: Login password
            api_root: Optional custom API root URL
            timeout: Request timeout in seconds
            verify: SSL context from build_ssl_context(), or a bool
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        if not email or not password:
            raise ValueError("Must provide creds with email + password")

        self.email = email
        self._password = password
        self.api_root = (api_root or self.DEFAULT_API_ROOT).rstrip("/")
        self.timeout = timeout

        # The cookie jar of this client is the Beeswax session
        self._http = httpx.AsyncClient(
            base_url=self.api_root,
            timeout=timeout,
            verify=verify,
            transport=transport,
            headers={"User-Agent": f"beeswax-client/{get_version()}"},
        )

        self._auth_lock = asyncio.Lock()
        self._auth_future: asyncio.Future[None] | None = None

        self.advertisers = BeeswaxEntityManager(self, BEESWAX_ENTITIES["advertisers"])
        self.campaigns = BeeswaxEntityManager(self, BEESWAX_ENTITIES["campaigns"])
        self.creatives = BeeswaxEntityManager(self, BEESWAX_ENTITIES["creatives"])
        self.creative_add_ons = BeeswaxEntityManager(self, BEESWAX_ENTITIES["creative_add_ons"])
        self.creative_assets = BeeswaxEntityManager(self, BEESWAX_ENTITIES["creative_assets"])
        self.creative_assets_upload = BeeswaxEntityManager(self, BEESWAX_ENTITIES["creative_assets_upload"])
        self.line_items = BeeswaxEntityManager(self, BEESWAX_ENTITIES["line_items"])
        self.line_item_flights = BeeswaxEntityManager(self, BEESWAX_ENTITIES["line_item_flights"])
        self.targeting_templates = BeeswaxEntityManager(self, BEESWAX_ENTITIES["targeting_templates"])
        self.segment_uploads = SegmentUploadManager(self, BEESWAX_ENTITIES["segment_uploads"])
        self.segment_category_sharings = BeeswaxEntityManager(self, BEESWAX_ENTITIES["segment_category_sharings"])
        self.segment_sharings = BeeswaxEntityManager(self, BEESWAX_ENTITIES["segment_sharings"])
        self.segment_category_associations = BeeswaxEntityManager(
            self, BEESWAX_ENTITIES["segment_category_associations"]
        )
        self.segments = BeeswaxEntityManager(self, BEESWAX_ENTITIES["segments"])
        self.segment_categories = BeeswaxEntityManager(self, BEESWAX_ENTITIES["segment_categories"])

    @classmethod
    def from_config(
        cls,
        config: BeeswaxConnectionConfig | BeeswaxSettings | dict[str, Any],
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "BeeswaxClient":
        """Build a client from a connection config (or its stored dict form).

        A configured ``ca_bundle`` is loaded into an explicit SSL context.
        """
        if isinstance(config, BeeswaxSettings):
            config = config.to_connection_config()
        elif not isinstance(config, BeeswaxConnectionConfig):
            config = parse_connection_config(config)

        verify: ssl.SSLContext | bool = True
        if config.ca_bundle:
            verify = build_ssl_context(config.ca_bundle)

        return cls(
            email=config.email,
            password=config.password.get_secret_value(),
            api_root=config.api_root,
            timeout=config.timeout,
            verify=verify,
            transport=transport,
        )

    @classmethod
    def from_env(cls, transport: httpx.AsyncBaseTransport | None = None) -> "BeeswaxClient":
        """Build a client from BEESWAX_* environment variables (or .env)."""
        return cls.from_config(BeeswaxSettings(), transport=transport)

    async def __aenter__(self) -> "BeeswaxClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP session."""
        await self._http.aclose()

    # =========================================================================
    # Session
    # =========================================================================

    async def authenticate(self) -> None:
        """Log in to Beeswax, sharing one in-flight login between callers.

        Raises:
            BeeswaxAuthenticationError: If Beeswax rejects the credentials
            BeeswaxAPIError: If the login request fails
        """
        async with self._auth_lock:
            if self._auth_future is None:
                self._auth_future = asyncio.ensure_future(self._login())
                self._auth_future.add_done_callback(self._clear_auth_future)
            future = self._auth_future

        # Shielded so a cancelled caller does not cancel the shared login
        await asyncio.shield(future)

    def _clear_auth_future(self, future: asyncio.Future[None]) -> None:
        if self._auth_future is future:
            self._auth_future = None
        # Waiters may all have been cancelled; mark a failure as retrieved
        if not future.cancelled():
            future.exception()

    async def _login(self) -> None:
        logger.info(f"Authenticating to Beeswax at {self.api_root}")
        response = await self._send(
            "POST",
            self.AUTH_PATH,
            json={
                "email": self.email,
                "password": self._password,
                "keep_logged_in": True,  # longer lasting sessions
            },
        )
        body = self._decode_body(response)

        if response.status_code >= 400 or (isinstance(body, dict) and body.get("success") is False):
            raise BeeswaxAuthenticationError(
                f"Beeswax authentication failed (HTTP {response.status_code}): {body}",
                status_code=response.status_code,
                response_body=body,
            )

        logger.info("Beeswax session established")

    # =========================================================================
    # Requests
    # =========================================================================

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send one HTTP request on the cookie session.

        Raises:
            BeeswaxAPIError: If the transport fails
        """
        try:
            return await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            # Raised outside the handler: the httpx error holds the request body
            error = BeeswaxAPIError(f"Request failed: {type(e).__name__}: {e}")
        raise error

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        try:
            return response.json() if response.content else None
        except ValueError:
            return response.text

    def _handle_response(self, response: httpx.Response) -> Any:
        """Handle API response and raise errors if needed.

        Args:
            response: httpx response object

        Returns:
            Decoded JSON response body

        Raises:
            BeeswaxAPIError: If the status or the envelope indicates an error
        """
        body = self._decode_body(response)

        if response.status_code == 401:
            raise BeeswaxAPIError(
                "Beeswax session rejected after re-authentication (HTTP 401)",
                status_code=401,
                response_body=body,
            )

        if response.status_code >= 500:
            raise BeeswaxAPIError(
                f"Beeswax API server error (HTTP {response.status_code})",
                status_code=response.status_code,
                response_body=body,
            )

        if response.status_code >= 400:
            raise BeeswaxAPIError(
                f"Beeswax API error (HTTP {response.status_code}): {body}",
                status_code=response.status_code,
                response_body=body,
            )

        # Beeswax reports application errors in the envelope, even with HTTP 200
        if isinstance(body, dict) and body.get("success") is False:
            raise BeeswaxAPIError(
                f"Beeswax API request unsuccessful: {body}",
                status_code=response.status_code,
                response_body=body,
            )

        return body

    async def request(self, method: str, path: str, body: dict[str, Any] | None = None) -> Any:
        """Make an API request, re-authenticating once on an expired session.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE); any of them may carry a body
            path: API endpoint path
            body: JSON request body

        Returns:
            Decoded response envelope

        Raises:
            BeeswaxAPIError: If the request fails or a second 401 is received
        """
        logger.debug(f"Beeswax {method} {path}")
        response = await self._send(method, path, json=body)

        if response.status_code == 401:
            logger.info(f"Beeswax session expired on {method} {path}, re-authenticating")
            await self.authenticate()
            response = await self._send(method, path, json=body)

        return self._handle_response(response)

    async def get(self, path: str, body: dict[str, Any] | None = None) -> Any:
        """Make a GET request with a JSON filter body."""
        return await self.request("GET", path, body)

    async def post(self, path: str, body: dict[str, Any]) -> Any:
        """Make a POST request."""
        return await self.request("POST", path, body)

    async def put(self, path: str, body: dict[str, Any]) -> Any:
        """Make a PUT request."""
        return await self.request("PUT", path, body)

    async def delete(self, path: str, body: dict[str, Any] | None = None) -> Any:
        """Make a DELETE request."""
        return await self.request("DELETE", path, body)

    async def upload_file(self, path: str, field_name: str, file_path: str | Path) -> Any:
        """Upload a file as multipart/form-data.

        Authenticates explicitly first: a streamed file body cannot be replayed
        after a 401, so uploads never go through the retry in request().

        Args:
            path: Upload endpoint path
            field_name: Multipart field carrying the file bytes
            file_path: Local file to stream

        Returns:
            Decoded response body, without envelope inspection

        Raises:
            BeeswaxAPIError: If the request fails
        """
        await self.authenticate()

        file_path = Path(file_path)
        logger.info(f"Uploading {file_path.name} to Beeswax {path}")
        with file_path.open("rb") as fh:
            response = await self._send("POST", path, files={field_name: (file_path.name, fh)})

        body = self._decode_body(response)
        if response.status_code >= 400:
            raise BeeswaxAPIError(
                f"Beeswax upload failed (HTTP {response.status_code}): {body}",
                status_code=response.status_code,
                response_body=body,
            )
        return body

    # =========================================================================
    # Segment Upload Operations
    # =========================================================================

    async def create_upload_segment(self, file_path: str | Path | None = None, **params: Any) -> OperationResult:
        """Register a segment upload. See SegmentUploadManager.create_upload."""
        return await self.segment_uploads.create_upload(file_path, **params)

    async def upload_segment_file(self, segment_upload_id: int | str, file_path: str | Path) -> OperationResult:
        """Push a segment file to a registered upload."""
        return await self.segment_uploads.upload_file(segment_upload_id, file_path)

    async def upload_segment(self, file_path: str | Path, **params: Any) -> OperationResult:
        """Register, push and re-read a segment upload."""
        return await self.segment_uploads.upload_segment(file_path, **params)
