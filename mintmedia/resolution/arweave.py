"""
Arweave Transaction Resolver.

Fetches a transaction's tag list and body from the Arweave HTTP API and
extracts the declared content type.
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

import httpx

from mintmedia.resolution.base import NetworkError, ParseError, SourceType

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass
class ArweaveContent:
    """Body and declared content type of an Arweave transaction."""

    content: Union[bytes, str]
    content_type: str = DEFAULT_CONTENT_TYPE

    @property
    def is_text(self) -> bool:
        return isinstance(self.content, str)


def decode_b64url(value: str) -> str:
    """
    Decode a base64url (unpadded) string to text.

    Raises:
        ParseError: If the value is not valid base64url or not UTF-8
    """
    if not isinstance(value, str):
        raise ParseError(f"Tag field is not a string: {value!r}", source_type=SourceType.ARWEAVE)
    padded = value + "=" * (-len(value) % 4)
    try:
        return base64.b64decode(padded, altchars=b"-_", validate=True).decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise ParseError(
            f"Malformed tag encoding: {value!r}",
            source_type=SourceType.ARWEAVE,
            original_error=e,
        ) from e


def find_content_type(tags: list[dict[str, Any]], default: str = DEFAULT_CONTENT_TYPE) -> str:
    """
    Scan encoded transaction tags for a Content-Type declaration.

    Tag names are compared case-insensitively after decoding; the first
    match wins.
    """
    for tag in tags:
        if not isinstance(tag, dict):
            raise ParseError(f"Malformed tag entry: {tag!r}", source_type=SourceType.ARWEAVE)
        name = decode_b64url(tag.get("name", ""))
        if name.lower() == "content-type":
            return decode_b64url(tag.get("value", ""))
    return default


class ArweaveResolver:
    """
    Arweave transaction fetcher.

    Two requests per transaction: ``/tx/<id>`` for the tag list and
    ``/raw/<id>`` for the body. No retry; any failure raises.
    """

    def __init__(
        self,
        api_url: str = "https://arweave.net",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.api_url,
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._http_client

    async def get_tags(self, tx_id: str) -> list[dict[str, Any]]:
        """Fetch the (still encoded) tag list of a transaction."""
        client = await self._ensure_client()
        response = await self._get(client, f"/tx/{tx_id}")
        try:
            transaction = response.json()
        except ValueError as e:
            raise ParseError(
                f"Transaction {tx_id} returned non-JSON metadata",
                source_type=SourceType.ARWEAVE,
                original_error=e,
            ) from e

        tags = transaction.get("tags", []) if isinstance(transaction, dict) else None
        if not isinstance(tags, list):
            raise ParseError(
                f"Transaction {tx_id} has no tag list",
                source_type=SourceType.ARWEAVE,
            )
        return tags

    async def get_data(self, tx_id: str) -> bytes:
        """Fetch the raw body of a transaction."""
        client = await self._ensure_client()
        response = await self._get(client, f"/raw/{tx_id}")
        return response.content

    async def fetch(self, tx_id: str, as_text: bool = False) -> ArweaveContent:
        """
        Fetch a transaction's body and declared content type.

        Args:
            tx_id: Arweave transaction id
            as_text: Return the body decoded as UTF-8 text instead of bytes

        Returns:
            ArweaveContent with body and content type

        Raises:
            NetworkError: On any network failure or non-2xx status
            ParseError: If the metadata or tag encoding is malformed
        """
        if not tx_id:
            raise ParseError("Empty transaction id", source_type=SourceType.ARWEAVE)

        tags = await self.get_tags(tx_id)
        content_type = find_content_type(tags)
        data = await self.get_data(tx_id)

        logger.debug(f"Arweave {tx_id}: {len(data)} bytes, {content_type}")

        if as_text:
            return ArweaveContent(data.decode("utf-8", errors="replace"), content_type)
        return ArweaveContent(data, content_type)

    async def _get(self, client: httpx.AsyncClient, path: str) -> httpx.Response:
        try:
            response = await client.get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NetworkError(
                f"Arweave fetch error: {e.response.status_code} for {path}",
                source_type=SourceType.ARWEAVE,
                original_error=e,
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(
                f"Arweave fetch error: {e}",
                source_type=SourceType.ARWEAVE,
                original_error=e,
            ) from e
        return response

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
