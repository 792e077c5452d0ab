"""Byte-layout conversions between GUIDs, base64 blobs and legacy integer ids.

GUIDs travel in the mixed-endian layout (``UUID.bytes_le``): the first group is
a little-endian 32-bit value, the next two groups little-endian 16-bit values,
and the last 8 bytes are stored as written. That is the layout the ids were
originally serialised with, so ``KQAAAIauU0aduPa9rNCU5Q==`` renders as
``00000029-ae86-4653-9db8-f6bdacd094e5``.
"""
import base64
import binascii
import struct
import uuid

from guid_helper.constants import (
    BASE_TEMPLATE,
    GUID_BYTE_LENGTH,
    LEGACY_ID_BYTE_LENGTH,
)

_LEGACY_ID_FORMAT = "<i"


def guid_from_bytes(data: bytes) -> uuid.UUID:
    """Build a GUID from its 16-byte wire form.

    Raises:
        ValueError: If ``data`` is not exactly 16 bytes long.
    """
    if len(data) != GUID_BYTE_LENGTH:
        raise ValueError(f"GUID must be {GUID_BYTE_LENGTH} bytes, got {len(data)}")
    return uuid.UUID(bytes_le=bytes(data))


def guid_to_base64(guid: uuid.UUID) -> str:
    """Render a GUID's wire form as padded standard base64."""
    return base64.b64encode(guid.bytes_le).decode("ascii")


def decode_base64_guid(candidate: str) -> uuid.UUID | None:
    """Decode a base64 candidate into a GUID.

    Returns:
        The GUID, or None when the candidate is not valid base64 or does not
        decode to exactly 16 bytes.
    """
    try:
        data = base64.b64decode(candidate, validate=True)
    except (binascii.Error, ValueError):
        return None
    if len(data) != GUID_BYTE_LENGTH:
        return None
    return guid_from_bytes(data)


def embed_legacy_id(legacy_id: int) -> uuid.UUID:
    """Overlay a signed 32-bit legacy id onto the base template.

    Args:
        legacy_id: Integer in the signed 32-bit range.

    Returns:
        GUID whose first 4 wire bytes are ``legacy_id`` little-endian and whose
        remaining 12 bytes are the base template's.

    Raises:
        ValueError: If ``legacy_id`` does not fit in 32 signed bits.
    """
    try:
        prefix = struct.pack(_LEGACY_ID_FORMAT, legacy_id)
    except struct.error as e:
        raise ValueError(f"Legacy id out of range: {legacy_id}") from e
    return guid_from_bytes(prefix + BASE_TEMPLATE.bytes_le[LEGACY_ID_BYTE_LENGTH:])


def extract_legacy_id(guid: uuid.UUID) -> int:
    """Read the first 4 wire bytes of a GUID as a signed little-endian integer.

    The template suffix is not checked; use is_legacy_compatible() first.
    """
    (legacy_id,) = struct.unpack(
        _LEGACY_ID_FORMAT, guid.bytes_le[:LEGACY_ID_BYTE_LENGTH]
    )
    return legacy_id


def is_legacy_compatible(guid: uuid.UUID) -> bool:
    """Check whether a GUID carries the base template's trailing 12 bytes."""
    return (
        guid.bytes_le[LEGACY_ID_BYTE_LENGTH:]
        == BASE_TEMPLATE.bytes_le[LEGACY_ID_BYTE_LENGTH:]
    )
