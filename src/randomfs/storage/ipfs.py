"""
IPFS HTTP client for the content store protocol.

Talks to the IPFS daemon RPC API (``/api/v0/add``, ``/api/v0/cat``,
``/api/v0/version``). Every put/get is a single attempt: failures surface
to the caller unchanged. Only the startup connectivity check is retried,
and only as many times as settings.connect_attempts allows.
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..errors import NotFound, StoreRejected, StoreUnavailable
from ..settings import Settings
from .base import ContentStore

__all__ = ["IpfsContentStore"]

logger = logging.getLogger(__name__)


class IpfsContentStore(ContentStore):
    """
    ContentStore adapter for an IPFS daemon.

    Uses httpx with the timeout from settings. A preconfigured client can be
    injected for tests (e.g. one built on httpx.MockTransport).
    """

    def __init__(self, settings: Settings, *, client: Optional[httpx.Client] = None) -> None:
        """
        Initialize IPFS adapter with settings.

        Args:
            settings: Settings containing the API endpoint and timeouts
            client: Optional httpx client to use instead of creating one
        """
        self._settings = settings
        self.base_url = settings.ipfs_api.rstrip("/")
        self.client = client or httpx.Client(
            timeout=httpx.Timeout(settings.http_timeout_s, connect=5.0),
            headers={"User-Agent": "randomfs/0.1.0"},
        )
        logger.debug(f"IPFS adapter using {self.base_url}, timeout: {settings.http_timeout_s}s")

    def put(self, data: bytes) -> str:
        """Add bytes to IPFS and return the assigned CID."""
        try:
            response = self.client.post(
                f"{self.base_url}/api/v0/add",
                files={"file": ("data", data, "application/octet-stream")},
            )
        except httpx.RequestError as e:
            raise StoreUnavailable(f"Network error adding {len(data)} bytes to IPFS: {e}") from e

        if response.status_code != 200:
            raise StoreRejected(
                f"IPFS add failed with status: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            content_id = response.json().get("Hash")
        except (ValueError, AttributeError) as e:
            raise StoreRejected(f"IPFS add returned an unreadable body: {e}", status_code=response.status_code) from e

        if not content_id:
            raise StoreRejected("IPFS add response carried no Hash", status_code=response.status_code)

        logger.debug(f"Added {len(data)} bytes to IPFS as {content_id}")
        return content_id

    def get(self, content_id: str) -> bytes:
        """Fetch bytes for a CID from IPFS."""
        try:
            response = self.client.post(f"{self.base_url}/api/v0/cat", params={"arg": content_id})
        except httpx.RequestError as e:
            raise StoreUnavailable(f"Network error fetching {content_id} from IPFS: {e}") from e

        if response.status_code == 200:
            return response.content

        if response.status_code == 404 or self._is_not_found(response):
            raise NotFound(f"Content not found: {content_id}", ref=content_id)

        raise StoreRejected(
            f"IPFS cat failed with status: {response.status_code}",
            status_code=response.status_code,
        )

    def check_connection(self) -> str:
        """
        Verify the daemon is reachable and return its version string.

        Raises:
            StoreUnavailable: If the daemon cannot be reached or answers with an error
        """
        try:
            return self._version()
        except httpx.RequestError as e:
            raise StoreUnavailable(f"failed to connect to IPFS at {self.base_url}: {e}") from e
        except httpx.HTTPStatusError as e:
            raise StoreUnavailable(
                f"IPFS daemon not accessible, status: {e.response.status_code}"
            ) from e
        except ValueError as e:
            raise StoreUnavailable(f"IPFS version endpoint returned an unreadable body: {e}") from e

    def _version(self) -> str:
        @retry(
            stop=stop_after_attempt(self._settings.connect_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        )
        def _probe() -> str:
            response = self.client.post(f"{self.base_url}/api/v0/version")
            response.raise_for_status()
            return response.json().get("Version", "unknown")

        version = _probe()
        logger.debug(f"Connected to IPFS {version} at {self.base_url}")
        return version

    @staticmethod
    def _is_not_found(response: httpx.Response) -> bool:
        # kubo reports missing content as a 500 with an error message body
        if response.status_code != 500:
            return False
        try:
            message = response.json().get("Message", "")
        except (ValueError, AttributeError):
            message = response.text
        return "not found" in str(message).lower()

    def close(self):
        """Close HTTP client."""
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
