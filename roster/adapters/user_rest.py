from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, TypeVar

import requests

from roster.domain.entities import UNASSIGNED_ID, UserId, UserRecord
from roster.domain.errors import ParseFailure, to_domain_error
from roster.domain.outcome import Error, ErrorCategory, Outcome, Success
from roster.domain.ports import UserDataSource

from .failure_classifier import classify
from .http_client import HttpConfig, RetryingSession
from .mappers import UserWireMapper
from .network_result import RawFailure, RawOutcome, RawSuccess

T = TypeVar("T")


class UserRestSource(UserDataSource):
    """Remote user source backed by the users REST API.

    Every call settles to an ``Outcome``: transport exceptions, non-2xx
    responses and malformed bodies are classified into a ``FailureDetail``
    and returned as ``Error`` with that detail as ``cause``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        request_timeout_s: float = 30,
        retries: int = 0,
        mapper: Optional[UserWireMapper] = None,
    ) -> None:
        if not base_url or not str(base_url).strip():
            raise ValueError("UserRestSource requires a base URL")

        self.base_url = str(base_url).strip()
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        self.session = RetryingSession(api_key, self.cfg)
        self.mapper = mapper or UserWireMapper()
        self._log = logging.getLogger(__name__)

    def fetch_one(self, user_id: UserId) -> Outcome[UserRecord]:
        ctx = f"get_user[{user_id}]"
        url = self._make_url(f"users/{user_id}")
        raw = self._execute(lambda: self.session.get(url), self.mapper.parse_one)
        return self._settle(raw, ctx)

    def fetch_all(self) -> Outcome[List[UserRecord]]:
        url = self._make_url("users")
        raw = self._execute(lambda: self.session.get(url), self.mapper.parse_many)
        return self._settle(raw, "get_users")

    def save(self, record: UserRecord) -> Outcome[bool]:
        if record.id == UNASSIGNED_ID:
            return Error(
                "User id must be assigned before saving.", ErrorCategory.VALIDATION
            )
        ctx = f"save_user[{record.id}]"
        url = self._make_url("users")
        body = self.mapper.to_wire(record).to_json()
        raw = self._execute(lambda: self.session.post(url, json_body=body), _accepted)
        return self._settle(raw, ctx)

    def delete(self, user_id: UserId) -> Outcome[bool]:
        ctx = f"delete_user[{user_id}]"
        url = self._make_url(f"users/{user_id}")
        # the delete endpoint may answer with no body or plain text
        raw = self._execute(lambda: self.session.delete(url), _accepted, ignore_body=True)
        return self._settle(raw, ctx)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _make_url(self, path: str) -> str:
        base = self.base_url
        if base.endswith("/"):
            base = base[:-1]
        return f"{base}/{path}"

    @staticmethod
    def _execute(
        send: Callable[[], requests.Response],
        parse: Callable[[Any], T],
        *,
        ignore_body: bool = False,
    ) -> RawOutcome[T]:
        try:
            resp = send()
            if not 200 <= resp.status_code < 300:
                return RawFailure(classify(resp))
            if ignore_body:
                # any 2xx is acceptance
                return RawSuccess(parse(None))
            payload = _json_or_none(resp)
            if payload is None:
                return RawFailure(ParseFailure("no body"))
            return RawSuccess(parse(payload))
        except Exception as exc:
            return RawFailure(classify(exc))

    def _settle(self, raw: RawOutcome[T], ctx: str) -> Outcome[T]:
        if isinstance(raw, RawSuccess):
            return Success(raw.data)
        if isinstance(raw, RawFailure):
            detail = raw.detail
            self._log.warning("%s failed: %s", ctx, detail.technical_message())
            domain = to_domain_error(detail)
            return Error(detail.user_message(), domain.category, detail)
        return Error("Operation in progress.", ErrorCategory.UNKNOWN)


def _json_or_none(resp: requests.Response) -> Any:
    """Decode the body; ``None`` when the body is empty or JSON ``null``."""
    content = resp.content or b""
    if not content.strip():
        return None
    return resp.json()


def _accepted(_payload: Any) -> bool:
    return True


__all__ = ["UserRestSource"]
