"""
Scalar coercion for loosely-typed agent payloads.

Every function here is total: it accepts any value and returns either a
usable value or None. Nothing raises on malformed agent input.
"""

import math
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

Number = Union[int, float]

CONFIDENCE_LEVELS = ("high", "medium", "low", "unknown")


def to_text(value: Any) -> Optional[str]:
    """Return the trimmed string if it has non-whitespace content."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def to_text_list(value: Any) -> Optional[List[str]]:
    """Coerce a sequence (or a lone scalar) into a non-empty list of strings."""
    if isinstance(value, (list, tuple)):
        items = [text for text in (to_text(item) for item in value) if text]
        return items or None
    single = to_text(value)
    return [single] if single else None


def to_number(value: Any) -> Optional[Number]:
    """Accept finite numbers as-is and parse numeric strings."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None

    text = to_text(value)
    if text is None:
        return None
    try:
        parsed = float(text)
    except ValueError:
        return None
    return parsed if math.isfinite(parsed) else None


def to_currency_code(value: Any) -> Optional[str]:
    text = to_text(value)
    return text.upper() if text else None


def normalize_token(text: str) -> str:
    """Lower-case and replace spaces with underscores."""
    return text.lower().replace(" ", "_")


def to_enum(allowed: Iterable[str]) -> Callable[[Any], Optional[str]]:
    """Build a coercer that only admits members of a fixed set."""
    members = frozenset(allowed)

    def coerce(value: Any) -> Optional[str]:
        text = to_text(value)
        if text is None:
            return None
        normalized = normalize_token(text)
        return normalized if normalized in members else None

    return coerce


def to_confidence(value: Any) -> Optional[str]:
    """Resolve a confidence level by substring, e.g. "Very High" -> "high"."""
    text = to_text(value)
    if text is None:
        return None

    normalized = text.lower()
    for level in CONFIDENCE_LEVELS:
        if level in normalized:
            return level
    return None


def parse_datetime(text: str) -> Optional[datetime]:
    """Parse an ISO-8601 date or date-time; naive values are taken as UTC."""
    candidate = text.strip()
    if candidate.endswith(("Z", "z")):
        candidate = candidate[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(moment: datetime) -> str:
    """Canonical form: UTC, millisecond precision, trailing Z."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    return format_timestamp(datetime.now(timezone.utc))


def to_timestamp(value: Any) -> Optional[str]:
    """Canonicalize parseable timestamps; unparseable text passes through unchanged."""
    text = to_text(value)
    if text is None:
        return None
    try:
        parsed = parse_datetime(text)
    except (OverflowError, ValueError):
        parsed = None
    if parsed is None:
        return text
    try:
        return format_timestamp(parsed)
    except (OverflowError, ValueError):
        return text


def to_id(value: Any, fallback_index: int, prefix: str = "id") -> str:
    """Use the supplied id when present, otherwise synthesize a unique one."""
    text = to_text(value)
    if text:
        return text
    return f"{prefix}-{fallback_index}-{uuid.uuid4().hex[:8]}"


def first_value(record: Mapping[str, Any], *keys: str) -> Any:
    """First value that is not None among the given keys."""
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def first_text(record: Mapping[str, Any], *keys: str) -> Optional[str]:
    """First key whose value coerces to non-blank text."""
    for key in keys:
        text = to_text(record.get(key))
        if text:
            return text
    return None


@dataclass
class Impact:
    """Monetary impact pulled from a finding's impact-like field."""
    amount: Optional[Number] = None
    currency: Optional[str] = None
    text: Optional[str] = None


def extract_impact(value: Any) -> Impact:
    """Read impact from a number, a string or a mapping of sub-fields."""
    if value is None or isinstance(value, bool):
        return Impact()

    if isinstance(value, (int, float)):
        return Impact(amount=to_number(value))

    if isinstance(value, str):
        return Impact(text=to_text(value))

    if isinstance(value, Mapping):
        return Impact(
            amount=to_number(first_value(value, "amount", "value", "delta")),
            currency=to_currency_code(first_value(value, "currency", "ccy")),
            text=to_text(first_value(value, "text", "summary", "comment")),
        )

    return Impact()


def format_amount(amount: Number) -> str:
    """Thousands separators, no trailing zero fraction: 1200 -> "1,200"."""
    if isinstance(amount, float) and amount.is_integer():
        amount = int(amount)
    if isinstance(amount, int):
        return f"{amount:,}"
    return f"{amount:,.3f}".rstrip("0").rstrip(".")
