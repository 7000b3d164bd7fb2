"""
HTTP transport for the UPS XML API.

The facade only depends on ``Transport.request``; tests and callers may inject
their own implementation. ``HttpxTransport`` is the default.
"""
import logging
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import httpx

from ups_shipping.core.config import settings
from ups_shipping.core.exceptions import UPSTransportError
from ups_shipping.core.sanitize import sanitize_for_logging

logger = logging.getLogger(__name__)

XML_CONTENT_TYPE = "text/xml; charset=utf-8"


@dataclass
class TransportResponse:
    """Raw body plus the parsed root element (None when unparseable)."""
    status_code: int
    body: str
    xml: Optional[ET.Element] = None


class Transport(ABC):
    """
    Sends an access document and a request document to a UPS endpoint.
    """

    @abstractmethod
    def request(self, access: str, payload: str, endpoint_url: str) -> TransportResponse:
        """
        POST the access and request documents in one body.

        Args:
            access: Serialized AccessRequest document
            payload: Serialized request document
            endpoint_url: Full endpoint URL

        Returns:
            TransportResponse; ``xml`` is None when the body is not XML
        """
        pass

    def close(self) -> None:
        """Release any held resources."""
        pass


def parse_xml(content: bytes) -> Optional[ET.Element]:
    if not content or not content.strip():
        return None
    try:
        return ET.fromstring(content)
    except ET.ParseError as e:
        logger.error(f"UPS response is not valid XML: {e}")
        return None


class HttpxTransport(Transport):
    """Synchronous httpx transport with a lazily created client."""

    def __init__(self, timeout: Optional[float] = None, client: Optional[httpx.Client] = None):
        self.timeout = timeout if timeout is not None else settings.UPS_REQUEST_TIMEOUT
        self._client = client
        # injected clients belong to the caller
        self._owns_client = client is None

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout)
            self._owns_client = True
        return self._client

    def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def request(self, access: str, payload: str, endpoint_url: str) -> TransportResponse:
        client = self._get_client()
        body = f"{access}{payload}"

        logger.debug(f"UPS POST {endpoint_url}: {sanitize_for_logging(payload)}")

        try:
            response = client.post(
                endpoint_url,
                content=body.encode("utf-8"),
                headers={"Content-Type": XML_CONTENT_TYPE},
            )
        except httpx.RequestError as e:
            logger.error(f"UPS request to {endpoint_url} failed: {e}")
            raise UPSTransportError(f"Network error: {e}", url=endpoint_url) from e

        logger.debug(f"UPS POST {endpoint_url} -> {response.status_code}")

        if response.status_code >= 400:
            logger.warning(
                f"UPS returned HTTP {response.status_code}: {sanitize_for_logging(response.text, 500)}"
            )

        return TransportResponse(
            status_code=response.status_code,
            body=response.text,
            xml=parse_xml(response.content),
        )
