from __future__ import annotations

from typing import Any, Dict, Optional

from roster.domain.errors import ErrorBody

_SNIPPET_LIMIT = 400


def parse_error_payload(resp: Any) -> Any:
    """Best-effort extraction of error payload without raising."""
    try:
        return resp.json()
    except Exception:
        snippet = getattr(resp, "text", "") or ""
        if not snippet.strip():
            return None
        return snippet[:_SNIPPET_LIMIT]


def parse_error_body(resp: Any) -> Optional[ErrorBody]:
    """Build an ``ErrorBody`` from a failed response, or ``None`` if it had no body."""
    payload = parse_error_payload(resp)
    if payload is None:
        return None
    message = first_string(payload) or "Unknown error"
    return ErrorBody(
        message=message,
        technical_message=extract_technical_message(payload),
        error_code=extract_error_code(payload),
        field_errors=extract_field_errors(payload),
    )


def extract_error_code(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        for key in ("errorCode", "error_code", "code"):
            value = payload.get(key)
            if value is None:
                continue
            if isinstance(value, str):
                return value
            return str(value)
    return None


def extract_technical_message(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        for key in ("technicalMessage", "technical_message"):
            text = stringify(payload.get(key))
            if text:
                return text
    return None


def extract_field_errors(payload: Any) -> Optional[Dict[str, str]]:
    if not isinstance(payload, dict):
        return None
    for key in ("fieldErrors", "field_errors", "errors"):
        raw = payload.get(key)
        if not isinstance(raw, dict):
            continue
        errors: Dict[str, str] = {}
        for field_name, value in raw.items():
            text = stringify(value)
            if text:
                errors[str(field_name)] = text
        if errors:
            return errors
    return None


def first_string(payload: Any) -> Optional[str]:
    if isinstance(payload, str):
        text = payload.strip()
        return text or None
    if isinstance(payload, dict):
        for key in ("message", "detail", "error", "title"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
            if isinstance(value, (list, dict)):
                candidate = first_string(value)
                if candidate:
                    return candidate
    if isinstance(payload, list):
        for item in payload:
            candidate = first_string(item)
            if candidate:
                return candidate
    return None


def stringify(data: Any, *, limit: int = 200) -> Optional[str]:
    if data is None:
        return None
    if isinstance(data, str):
        cleaned = data.strip()
        return cleaned[:limit] if cleaned else None
    if isinstance(data, list):
        parts = []
        for item in data:
            text = stringify(item, limit=limit)
            if text:
                parts.append(text)
            if len(parts) >= 3:
                break
        if not parts:
            return None
        return "; ".join(parts)[:limit]
    if isinstance(data, dict):
        pairs = []
        for key, value in list(data.items())[:4]:
            value_text = stringify(value, limit=limit)
            if value_text:
                pairs.append(f"{key}={value_text}")
        if not pairs:
            return None
        return ", ".join(pairs)[:limit]
    text = str(data).strip()
    return text[:limit] if text else None


__all__ = [
    "extract_error_code",
    "extract_field_errors",
    "extract_technical_message",
    "first_string",
    "parse_error_body",
    "parse_error_payload",
    "stringify",
]
