"""Classify free-form message text as a base64 blob, GUID or legacy id.

Rules are tried in a fixed order and the first one that yields a value wins:

  1. padded base64 (``...==``)
  2. unpadded base64 (only when rule 1 finds no candidate)
  3. hyphenated GUID text, optionally in {braces} or (parentheses) (whole message)
  4. signed 32-bit decimal integer (whole message)

The padded rule must run first: the unpadded pattern also matches the data
part of a padded blob, and would otherwise re-pad it as a separate candidate.
A base64 candidate that does not decode to 16 bytes is not a match, so
detection carries on with rules 3 and 4.
"""
import enum
import re
import uuid
from dataclasses import dataclass

from guid_helper.codec import decode_base64_guid
from guid_helper.constants import (
    BASE64_ALPHABET,
    BASE64_MIN_RUN,
    BASE64_PADDING,
    LEGACY_ID_MAX,
    LEGACY_ID_MIN,
)

PADDED_BASE64_PATTERN = re.compile(
    rf"[{BASE64_ALPHABET}]{{{BASE64_MIN_RUN},}}{BASE64_PADDING}"
)
UNPADDED_BASE64_PATTERN = re.compile(rf"[{BASE64_ALPHABET}]{{{BASE64_MIN_RUN},}}")
_GUID_BODY = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
# Bare, {braced} or (parenthesised), as copied from .NET tooling.
GUID_PATTERN = re.compile(
    rf"(?P<bare>{_GUID_BODY})|\{{(?P<braced>{_GUID_BODY})\}}|\((?P<parens>{_GUID_BODY})\)",
    re.IGNORECASE,
)
LEGACY_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


class DetectionKind(enum.Enum):
    PADDED_BASE64 = "padded_base64"
    UNPADDED_BASE64 = "unpadded_base64"
    GUID = "guid"
    LEGACY_ID = "legacy_id"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class Detection:
    """Result of classifying a message.

    ``value`` is a UUID for the base64 and GUID kinds, an int for LEGACY_ID and
    None when unrecognized. ``candidate`` is the text the value came from.
    """

    kind: DetectionKind
    value: uuid.UUID | int | None = None
    candidate: str | None = None


UNRECOGNIZED = Detection(DetectionKind.UNRECOGNIZED)


# ---------------------------------------------------------------------------
# Matching rules
# ---------------------------------------------------------------------------


def match_padded_base64(text: str) -> str | None:
    """Return the leftmost padded base64 run (including ``==``), if any."""
    match = PADDED_BASE64_PATTERN.search(text)
    return match.group(0) if match else None


def match_unpadded_base64(text: str) -> str | None:
    """Return the leftmost base64 run with ``==`` appended, if any."""
    match = UNPADDED_BASE64_PATTERN.search(text)
    return match.group(0) + BASE64_PADDING if match else None


def match_guid(text: str) -> uuid.UUID | None:
    """Parse the whole message as hyphenated GUID text.

    The 8-4-4-4-12 body may be wrapped in a matching pair of braces or
    parentheses.
    """
    match = GUID_PATTERN.fullmatch(text.strip())
    if not match:
        return None
    return uuid.UUID(match.group("bare") or match.group("braced") or match.group("parens"))


def match_legacy_id(text: str) -> int | None:
    """Parse the whole message as a signed 32-bit decimal integer."""
    text = text.strip()
    if not LEGACY_ID_PATTERN.fullmatch(text):
        return None
    value = int(text)
    if value < LEGACY_ID_MIN or value > LEGACY_ID_MAX:
        return None
    return value


def detect(text: str) -> Detection:
    """Run the matching rules in priority order."""
    if not text:
        return UNRECOGNIZED

    candidate = match_padded_base64(text)
    kind = DetectionKind.PADDED_BASE64
    if candidate is None:
        candidate = match_unpadded_base64(text)
        kind = DetectionKind.UNPADDED_BASE64
    if candidate is not None:
        guid = decode_base64_guid(candidate)
        if guid is not None:
            return Detection(kind, guid, candidate)

    guid = match_guid(text)
    if guid is not None:
        return Detection(DetectionKind.GUID, guid, text.strip())

    legacy_id = match_legacy_id(text)
    if legacy_id is not None:
        return Detection(DetectionKind.LEGACY_ID, legacy_id, text.strip())

    return UNRECOGNIZED
