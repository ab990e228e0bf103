"""Clip data model and raw-record normalization.

Clip records arrive from the data endpoint with loosely agreed field
names: one database may expose ``video_url``, another ``videoUrl``, and
tags can be a list, a JSON string, a delimited string, or a mapping of
lists. Everything is folded into the canonical :class:`Clip` here.
"""

from __future__ import annotations

import json
import math
import re
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

DEFAULT_TITLE = "Untitled highlight"
DEFAULT_CHAMPION = "Unknown Champion"
DEFAULT_ROLE = "Unknown role"
DEFAULT_CATEGORY = "General"

# Candidate raw field names per attribute, in resolution order.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("uuid", "id", "clip_id"),
    "title": ("title",),
    "champion": ("champion", "hero"),
    "role": ("role", "lane"),
    "category": ("category", "play_type"),
    "tags": ("tags",),
    "video_url": ("videoUrl", "video_url", "video"),
    "thumbnail_url": ("thumbnailUrl", "thumbnail_url", "thumbnail"),
    "favorite": ("favorite",),
    "recorded_at": ("recorded_at", "recordedAt", "recorded_at_utc"),
    "notes": ("notes", "description"),
}

PAYLOAD_KEYS = ("clips", "data")

_TAG_SEPARATORS = re.compile(r"[,;|]")
# Fractional seconds after hh:mm:ss, any number of digits
_FRACTION = re.compile(r"(?<=:\d\d)\.(\d+)")


@dataclass
class Clip:
    id: str
    video_url: str
    title: str = DEFAULT_TITLE
    champion: str = DEFAULT_CHAMPION
    role: str = DEFAULT_ROLE
    category: str = DEFAULT_CATEGORY
    tags: list[str] = field(default_factory=list)
    thumbnail_url: str = ""
    favorite: bool = False
    recorded_at: str = ""
    notes: str = ""

    @property
    def recorded_datetime(self) -> datetime:
        return _parse_datetime(self.recorded_at) or datetime.fromtimestamp(0, timezone.utc)

    def to_dict(self) -> dict:
        """Return the canonical camelCase record for this clip."""
        return {
            "id": self.id,
            "title": self.title,
            "champion": self.champion,
            "role": self.role,
            "category": self.category,
            "tags": list(self.tags),
            "videoUrl": self.video_url,
            "thumbnailUrl": self.thumbnail_url,
            "favorite": self.favorite,
            "recordedAt": self.recorded_at,
            "notes": self.notes,
        }


def _first_present(raw: Mapping, attribute: str):
    """Return the first non-null value among the attribute's aliases."""
    for name in FIELD_ALIASES[attribute]:
        value = raw.get(name)
        if value is not None:
            return value
    return None


def _as_text(value) -> str:
    # Same text JavaScript's String() gives for JSON values
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ",".join(_as_text(item) for item in value)
    return str(value)


def _clean(values) -> list[str]:
    return [text for text in (_as_text(v).strip() for v in values) if text]


def coerce_tags(raw_tags) -> list[str]:
    """Coerce any supported tag encoding into a list of tag strings."""
    if not raw_tags:
        return []

    if isinstance(raw_tags, (list, tuple)):
        return _clean(raw_tags)

    if isinstance(raw_tags, str):
        trimmed = raw_tags.strip()
        if not trimmed:
            return []
        try:
            parsed = json.loads(trimmed)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list):
            return _clean(parsed)
        return _clean(_TAG_SEPARATORS.split(trimmed))

    if isinstance(raw_tags, Mapping):
        flattened = []
        for value in raw_tags.values():
            if isinstance(value, (list, tuple)):
                flattened.extend(value)
            else:
                flattened.append(value)
        return _clean(flattened)

    return []


def coerce_favorite(value) -> bool:
    """True for ``True``, ``1``, ``"1"`` and ``"true"``; False otherwise."""
    if value is True:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 1
    return value in ("1", "true")


def _parse_datetime(value) -> datetime | None:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        # Numeric timestamps are epoch milliseconds
        try:
            return datetime.fromtimestamp(value / 1000, timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        # fromisoformat on 3.10 only takes 3 or 6 fraction digits
        text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text)
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_iso(moment: datetime) -> str:
    """Format as ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    text = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def parse_timestamp(value) -> str:
    """Parse a recorded-at value to ISO-8601, falling back to the current time."""
    parsed = _parse_datetime(value)
    if parsed is None:
        parsed = datetime.now(timezone.utc)
    return format_iso(parsed)


def format_date(iso_timestamp: str) -> str:
    """Short display date, e.g. ``Mar 4, 2024``."""
    parsed = _parse_datetime(iso_timestamp)
    if parsed is None:
        return ""
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def _text_or(raw: Mapping, attribute: str, default: str) -> str:
    value = _first_present(raw, attribute)
    return default if value is None else _as_text(value)


def normalize_clip(raw) -> Clip | None:
    """Map one raw record to a Clip, or None when it cannot be shown.

    Records without a usable video URL are rejected.
    """
    if not raw or not isinstance(raw, Mapping):
        return None

    identity = next(
        (raw.get(name) for name in FIELD_ALIASES["id"] if raw.get(name)),
        None,
    )
    if identity is None:
        identity = uuid.uuid4()

    clip = Clip(
        id=_as_text(identity),
        title=_text_or(raw, "title", DEFAULT_TITLE),
        champion=_text_or(raw, "champion", DEFAULT_CHAMPION),
        role=_text_or(raw, "role", DEFAULT_ROLE),
        category=_text_or(raw, "category", DEFAULT_CATEGORY),
        tags=coerce_tags(raw.get("tags")),
        video_url=_text_or(raw, "video_url", ""),
        thumbnail_url=_text_or(raw, "thumbnail_url", ""),
        favorite=coerce_favorite(raw.get("favorite")),
        recorded_at=parse_timestamp(_first_present(raw, "recorded_at")),
        notes=_text_or(raw, "notes", ""),
    )
    if not clip.video_url:
        return None
    return clip


def extract_records(payload) -> list:
    """Unwrap a payload that is a bare list or holds one under a known key."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        for key in PAYLOAD_KEYS:
            if isinstance(payload.get(key), list):
                return payload[key]
    return []


def normalize_payload(payload) -> list[Clip]:
    """Normalize every record in a payload, dropping rejected ones."""
    clips = []
    for item in extract_records(payload):
        clip = normalize_clip(item)
        if clip is not None:
            clips.append(clip)
    return clips
