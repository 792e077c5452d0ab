"""GUID conversion logic for the Telegram bot."""
from .codec import (
    embed_legacy_id,
    extract_legacy_id,
    guid_to_base64,
    is_legacy_compatible,
)
from .detector import Detection, DetectionKind, detect
from .dispatcher import UpdateDispatcher

__all__ = [
    "Detection",
    "DetectionKind",
    "UpdateDispatcher",
    "detect",
    "embed_legacy_id",
    "extract_legacy_id",
    "guid_to_base64",
    "is_legacy_compatible",
]
