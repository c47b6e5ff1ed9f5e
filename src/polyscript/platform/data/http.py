"""Conversion of HTTP requests and responses into plain data maps.

Scripts cannot work with ``httpx`` objects directly, so requests and
responses are flattened into string-keyed maps before they are stored in
an execution context.
"""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


def _multi_map(items: list[tuple[str, str]]) -> dict[str, list[str]]:
    result: dict[str, list[str]] = {}
    for key, value in items:
        result.setdefault(key, []).append(value)
    return result


def _request_body(request: httpx.Request) -> bytes:
    try:
        return request.content
    except httpx.RequestNotRead:
        if not isinstance(request.stream, httpx.SyncByteStream):
            raise TypeError("cannot read async request body synchronously") from None
        return request.read()


def _response_body(response: httpx.Response) -> bytes:
    try:
        return response.content
    except httpx.ResponseNotRead:
        if not isinstance(response.stream, httpx.SyncByteStream):
            raise TypeError("cannot read async response body synchronously") from None
        return response.read()


def request_to_map(request: httpx.Request) -> dict[str, Any]:
    """Convert an HTTP request to a data map.

    Example:
        >>> request = httpx.Request("POST", "https://example.com/api?q=1", json={"a": 1})
        >>> data = request_to_map(request)
        >>> data["method"], data["url_path"], data["query_params"]
        ('POST', '/api', {'q': ['1']})
    """
    body = _request_body(request)
    url = request.url
    return {
        "method": request.method,
        "url": str(url),
        "url_scheme": url.scheme,
        "url_host": url.host,
        "url_path": url.path,
        "headers": _multi_map(request.headers.multi_items()),
        "query_params": _multi_map(url.params.multi_items()),
        "body": body.decode("utf-8", errors="replace"),
        "content_length": len(body),
        "host": request.headers.get("host", url.host),
    }


def response_to_map(response: httpx.Response) -> dict[str, Any]:
    """Convert an HTTP response to a data map.

    ``url`` is None when the response is not attached to a request.
    """
    body = _response_body(response)
    try:
        url: str | None = str(response.request.url)
    except RuntimeError:
        url = None

    return {
        "status_code": response.status_code,
        "reason_phrase": response.reason_phrase,
        "http_version": response.http_version,
        "headers": _multi_map(response.headers.multi_items()),
        "body": body.decode("utf-8", errors="replace"),
        "content_length": len(body),
        "url": url,
    }
