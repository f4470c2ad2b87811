import re
from typing import Any, List, Optional

_NON_DIAL_CHARS = re.compile(r"[^\d+]")


def clean_phone_number(value: Any) -> Optional[str]:
    """Trim a caller-supplied number and drop embedded line breaks."""
    if not isinstance(value, str):
        return None
    cleaned = value.strip().replace("\n", "").replace("\r", "")
    return cleaned or None


def phone_number_candidates(phone: str) -> List[str]:
    """
    Formats to try when looking a business up by phone number, in order:
    as given, digits and plus only, E.164 with +1, and national without the
    leading country code.
    """
    normalized = _NON_DIAL_CHARS.sub("", phone)
    digits_only = normalized.replace("+", "")
    with_plus_one = f"+{digits_only}" if digits_only.startswith("1") else f"+1{digits_only}"
    without_plus_one = digits_only[1:] if digits_only.startswith("1") else digits_only

    candidates = []
    for candidate in (phone, normalized, with_plus_one, without_plus_one):
        if candidate and candidate not in candidates:
            candidates.append(candidate)
    return candidates


def _nested(value: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def extract_to_number(body: Any) -> Optional[str]:
    """
    Pull the dialled number out of a voice-provider tool call.

    Accepts a raw string or any of these shapes, directly or wrapped in
    "arguments": {"to_number"}, {"phoneNumber": {"number"}},
    {"phoneNumber": "..."}, {"number"}.
    """
    if isinstance(body, str):
        return clean_phone_number(body)
    if not isinstance(body, dict):
        return None

    lookups = (
        ("to_number",),
        ("phoneNumber", "number"),
        ("phoneNumber",),
        ("number",),
        ("arguments", "to_number"),
        ("arguments", "phoneNumber", "number"),
        ("arguments", "phoneNumber"),
    )
    for path in lookups:
        number = clean_phone_number(_nested(body, *path))
        if number:
            return number
    return None


def extract_extension(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    return body.get("extension") or _nested(body, "arguments", "extension") or None


def extract_program_id(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    for path in (("program_id",), ("programId",), ("arguments", "program_id"), ("arguments", "programId")):
        value = _nested(body, *path)
        if value:
            return value
    return None
