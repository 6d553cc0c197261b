"""Classify raw transport failures into ``FailureDetail`` variants.

Rules are applied in order, first match wins: no connectivity, timeout,
unresolved host, HTTP 4xx, HTTP 5xx, malformed body, anything else.
Exceptions are inspected along their whole cause chain because ``requests``
wraps the socket-level error two or three levels deep.
"""

from __future__ import annotations

import errno
import json
import socket
from typing import Any, Iterator, List

from requests import exceptions as req_exc
from urllib3 import exceptions as urllib3_exc

from roster.domain.errors import (
    FailureDetail,
    NoConnectivity,
    ParseFailure,
    Timeout,
    Unclassified,
    UnresolvedHost,
    classify_status,
)

from .api_errors import parse_error_body
from .mappers import MalformedPayloadError

_UNREACHABLE_ERRNOS = frozenset(
    {errno.ENETUNREACH, errno.EHOSTUNREACH, errno.ENETDOWN, errno.ECONNREFUSED}
)
_NAME_RESOLUTION_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "failed to resolve",
    "temporary failure in name resolution",
    "no address associated with hostname",
)
_CHAIN_LIMIT = 16


def classify(cause: Any) -> FailureDetail:
    """Map an exception or a completed non-2xx response to a ``FailureDetail``."""
    if isinstance(cause, FailureDetail):
        return cause
    if isinstance(cause, BaseException):
        return classify_exception(cause)
    status = getattr(cause, "status_code", None)
    if isinstance(status, int) and not isinstance(status, bool):
        return classify_status(status, parse_error_body(cause))
    return Unclassified()


def classify_exception(exc: BaseException) -> FailureDetail:
    chain = list(_exception_chain(exc))
    timed_out = any(_is_timeout(item) for item in chain)
    unresolved = any(_is_name_resolution(item) for item in chain)
    if not timed_out and not unresolved and any(_is_unreachable(item) for item in chain):
        return NoConnectivity(exc)
    if timed_out:
        return Timeout(exc)
    if unresolved:
        return UnresolvedHost(exc)

    response = getattr(exc, "response", None)
    status = getattr(response, "status_code", None)
    if isinstance(status, int) and not isinstance(status, bool):
        return classify_status(status, parse_error_body(response))

    for item in chain:
        if isinstance(item, MalformedPayloadError):
            return ParseFailure(str(item), item)
        if isinstance(item, (json.JSONDecodeError, req_exc.JSONDecodeError)):
            return ParseFailure("invalid JSON body", item)
    return Unclassified(exc)


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    seen = set()
    queue: List[BaseException] = [exc]
    while queue and len(seen) < _CHAIN_LIMIT:
        current = queue.pop(0)
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        linked = [
            getattr(current, "reason", None),
            current.__cause__,
            current.__context__,
            *current.args,
        ]
        queue.extend(item for item in linked if isinstance(item, BaseException))


def _is_timeout(exc: BaseException) -> bool:
    if isinstance(exc, (req_exc.Timeout, socket.timeout, TimeoutError)):
        return True
    if isinstance(exc, urllib3_exc.ReadTimeoutError):
        return True
    # urllib3 derives NewConnectionError from ConnectTimeoutError
    return isinstance(exc, urllib3_exc.ConnectTimeoutError) and not isinstance(
        exc, urllib3_exc.NewConnectionError
    )


def _is_name_resolution(exc: BaseException) -> bool:
    if isinstance(exc, (socket.gaierror, urllib3_exc.NameResolutionError)):
        return True
    if isinstance(exc, (req_exc.ConnectionError, urllib3_exc.NewConnectionError, OSError)):
        text = str(exc).lower()
        return any(marker in text for marker in _NAME_RESOLUTION_MARKERS)
    return False


def _is_unreachable(exc: BaseException) -> bool:
    if isinstance(exc, (req_exc.ConnectionError, ConnectionError)):
        return True
    if isinstance(exc, (urllib3_exc.NewConnectionError, urllib3_exc.ProtocolError)):
        return True
    return isinstance(exc, OSError) and exc.errno in _UNREACHABLE_ERRNOS


def is_transport_error(exc: BaseException) -> bool:
    """True for failures worth retrying at the socket level."""
    return isinstance(exc, (req_exc.Timeout, req_exc.ConnectionError))


__all__ = ["classify", "classify_exception", "is_transport_error"]
