"""
Content negotiation for API responses.

JSON is the default representation; XML is served when the client asks for
it. An ``Accept`` header that names only unsupported types is answered with
406 rather than silently falling back to JSON.
"""

import re
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional, Tuple

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from webapi.shared.exceptions import NotAcceptableError

JSON_MEDIA_TYPE = "application/json"
XML_MEDIA_TYPE = "application/xml"

_SUPPORTED = {
    "application/json": JSON_MEDIA_TYPE,
    "text/json": JSON_MEDIA_TYPE,
    "application/xml": XML_MEDIA_TYPE,
    "text/xml": XML_MEDIA_TYPE,
}
_WILDCARDS = ("*/*", "application/*", "text/*")
_XML_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_.-]*$")


def parse_accept(accept: str) -> List[Tuple[str, float]]:
    """Split an Accept header into (media_type, q) pairs, highest q first."""
    ranges: List[Tuple[str, float]] = []
    for part in accept.split(","):
        pieces = [p.strip() for p in part.split(";")]
        media_type = pieces[0].lower()
        if not media_type:
            continue
        q = 1.0
        for param in pieces[1:]:
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    q = float(value)
                except ValueError:
                    q = 0.0
        ranges.append((media_type, q))
    # sort is stable, so equal q keeps header order
    return sorted(ranges, key=lambda r: r[1], reverse=True)


def negotiate(accept: Optional[str]) -> str:
    """Pick the response media type for *accept*."""
    if not accept or not accept.strip():
        return JSON_MEDIA_TYPE
    for media_type, q in parse_accept(accept):
        if q <= 0:
            continue
        if media_type in _SUPPORTED:
            return _SUPPORTED[media_type]
        if media_type in _WILDCARDS:
            return JSON_MEDIA_TYPE
    raise NotAcceptableError(accept)


def ensure_acceptable(request: Request) -> str:
    """Route dependency: fail with 406 before the handler runs."""
    return negotiate(request.headers.get("accept"))


def _append(parent: ET.Element, tag: str, value: Any, item_tag: str) -> None:
    if _XML_NAME.match(tag):
        node = ET.SubElement(parent, tag)
    else:
        node = ET.SubElement(parent, "item", {"key": tag})
    _fill(node, value, item_tag)


def _fill(node: ET.Element, value: Any, item_tag: str) -> None:
    if isinstance(value, dict):
        for key, child in value.items():
            _append(node, str(key), child, "string")
    elif isinstance(value, list):
        for child in value:
            _append(node, item_tag, child, "string")
    elif value is None:
        node.set("nil", "true")
    elif isinstance(value, bool):
        node.text = "true" if value else "false"
    else:
        node.text = str(value)


def to_xml(content: Any, root: str, item: str = "item") -> bytes:
    """Serialize JSON-compatible *content* under a *root* element."""
    element = ET.Element(root)
    _fill(element, jsonable_encoder(content), item)
    return ET.tostring(element, encoding="utf-8", xml_declaration=True)


def render(
    request: Request,
    content: Any,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
    root: str = "response",
    item: str = "item",
    strict: bool = True,
) -> Response:
    """
    Build a JSON or XML response for *content* according to ``Accept``.

    With ``strict=False`` an unacceptable ``Accept`` falls back to JSON
    instead of raising; error responses use that.
    """
    try:
        media_type = negotiate(request.headers.get("accept"))
    except NotAcceptableError:
        if strict:
            raise
        media_type = JSON_MEDIA_TYPE
    if media_type == XML_MEDIA_TYPE:
        return Response(
            content=to_xml(content, root, item),
            status_code=status_code,
            headers=headers,
            media_type=XML_MEDIA_TYPE,
        )
    return JSONResponse(
        content=jsonable_encoder(content),
        status_code=status_code,
        headers=headers,
    )
