"""
HTTP transport and response classification for MWS requests.

A signed request is sent as a single POST with every parameter in the query
string and an empty body. The XML response is classified into exactly one
outcome:

- transport: the HTTP call itself failed (DNS, TCP, TLS, timeout)
- parse: a response arrived but its body is not well-formed XML
- api: the body is an ``ErrorResponse`` document
- success: any other well-formed document

Usage:
    from mws.transport import Transport

    transport = Transport(timeout_seconds=30)
    response = await transport.post(signed_url)
    if response.success:
        print(response.data)
    else:
        print(response.origin, response.error)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional
from xml.etree import ElementTree

import httpx

from .config import MWSConfig

logger = logging.getLogger(__name__)

ERROR_RESPONSE_TAG = "ErrorResponse"


class ErrorOrigin(str, Enum):
    """Where a failed request broke down."""
    TRANSPORT = "transport"
    PARSE = "parse"
    API = "api"


@dataclass
class MWSResponse:
    """Outcome of one MWS request."""
    success: bool
    origin: Optional[ErrorOrigin] = None
    data: Any = None
    status_code: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None
    error_code: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)


def _local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on tags."""
    return tag.rsplit("}", 1)[-1]


def _convert(element: ElementTree.Element, child_values: list[Any]) -> Any:
    attributes = {f"@{_local_name(k)}": v for k, v in element.attrib.items()}
    text = (element.text or "").strip()

    if not child_values:
        if not attributes:
            return text
        if text:
            attributes["#text"] = text
        return attributes

    result: dict[str, Any] = attributes
    for child, value in zip(element, child_values):
        key = _local_name(child.tag)
        if key not in result:
            result[key] = value
        elif isinstance(result[key], list):
            result[key].append(value)
        else:
            result[key] = [result[key], value]
    return result


def element_to_dict(element: ElementTree.Element) -> Any:
    """
    Convert an element into plain Python values.

    Text-only elements become strings, repeated child tags collapse into
    lists and attributes are stored under ``@name`` keys. The tree is walked
    with an explicit stack, so any nesting depth converts.
    """
    converted: dict[int, Any] = {}
    stack: list[tuple[ElementTree.Element, bool]] = [(element, False)]
    while stack:
        node, expanded = stack.pop()
        if not expanded:
            stack.append((node, True))
            stack.extend((child, False) for child in node)
            continue
        converted[id(node)] = _convert(node, [converted.pop(id(child)) for child in node])
    return converted[id(element)]


def parse_xml(body: str | bytes) -> dict[str, Any]:
    """
    Parse an XML document into ``{root_tag: content}``.

    Raises:
        ElementTree.ParseError: If the body is not well-formed XML
        LookupError: If the XML declaration names an unknown encoding
    """
    root = ElementTree.fromstring(body)
    return {_local_name(root.tag): element_to_dict(root)}


def classify_response(body: str | bytes, status_code: int = 0) -> MWSResponse:
    """
    Classify a received response body.

    Args:
        body: Raw response body
        status_code: HTTP status code, recorded but not used to classify

    Returns:
        MWSResponse with origin "parse", "api" or success
    """
    try:
        document = parse_xml(body)
    except (ElementTree.ParseError, LookupError, ValueError) as e:
        return MWSResponse(
            success=False,
            origin=ErrorOrigin.PARSE,
            status_code=status_code,
            error=f"Malformed XML response: {e}",
            error_type=type(e).__name__,
        )

    if ERROR_RESPONSE_TAG in document:
        error_response = document[ERROR_RESPONSE_TAG]
        error = error_response.get("Error") if isinstance(error_response, dict) else None
        if isinstance(error, list):
            error = error[0]
        if not isinstance(error, dict):
            error = {"Message": error} if error else {}

        return MWSResponse(
            success=False,
            origin=ErrorOrigin.API,
            status_code=status_code,
            error=error.get("Message") or "Unknown MWS error",
            error_type=error.get("Type") or "MWSError",
            error_code=error.get("Code"),
            metadata=error,
        )

    return MWSResponse(
        success=True,
        data=document,
        status_code=status_code,
    )


class Transport:
    """
    Sends signed MWS requests over HTTPS.

    Attributes:
        timeout_seconds: Per-request timeout handed to httpx
        user_agent: Value of the x-amazon-user-agent header
    """

    CONTENT_TYPE = "text/xml"

    def __init__(
        self,
        timeout_seconds: float = MWSConfig.timeout_seconds,
        user_agent: str = MWSConfig.user_agent,
    ):
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent

    @property
    def headers(self) -> dict[str, str]:
        return {
            "x-amazon-user-agent": self.user_agent,
            "Content-Type": self.CONTENT_TYPE,
        }

    async def post(self, url: str) -> MWSResponse:
        """
        POST to a fully signed URL and classify the outcome.

        Args:
            url: ``https://{host}{endpoint}?{query}`` including the Signature

        Returns:
            MWSResponse; never raises for network or body errors
        """
        async with httpx.AsyncClient() as client:
            try:
                response = await client.post(
                    url,
                    headers=self.headers,
                    timeout=self.timeout_seconds,
                )
            except httpx.RequestError as e:
                return MWSResponse(
                    success=False,
                    origin=ErrorOrigin.TRANSPORT,
                    error=f"Request failed: {str(e)}",
                    error_type=type(e).__name__,
                    metadata={"url": url.split("?", 1)[0]},
                )

        logger.debug("HTTP %s, %d bytes", response.status_code, len(response.content))
        return classify_response(response.content, response.status_code)
