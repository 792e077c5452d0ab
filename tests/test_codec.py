"""Tests for GUID / base64 / legacy id byte conversions."""
import uuid

import pytest

from guid_helper.codec import (
    decode_base64_guid,
    embed_legacy_id,
    extract_legacy_id,
    guid_from_bytes,
    guid_to_base64,
    is_legacy_compatible,
)
from guid_helper.constants import BASE_TEMPLATE

SAMPLE_GUID = uuid.UUID("00000029-ae86-4653-9db8-f6bdacd094e5")
SAMPLE_BASE64 = "KQAAAIauU0aduPa9rNCU5Q=="

LEGACY_IDS = [0, 1, 41, 255, 256, 65535, 123456789, -1, -41, 2 ** 31 - 1, -(2 ** 31)]


# ---------------------------------------------------------------------------
# Base64 <-> GUID
# ---------------------------------------------------------------------------


class TestBase64:
    def test_decode_uses_mixed_endian_layout(self):
        assert decode_base64_guid(SAMPLE_BASE64) == SAMPLE_GUID

    def test_encode(self):
        assert guid_to_base64(SAMPLE_GUID) == SAMPLE_BASE64

    def test_decode_wrong_length(self):
        # 12 bytes
        assert decode_base64_guid("AAAAAAAAAAAAAAAA") is None

    def test_decode_invalid_padding(self):
        assert decode_base64_guid("XXXXXXXXXXXXXXXX==") is None

    def test_decode_rejects_foreign_characters(self):
        assert decode_base64_guid("KQAAAIauU0adu-a9rNCU5Q==") is None

    def test_guid_from_bytes_requires_16_bytes(self):
        with pytest.raises(ValueError, match="16 bytes"):
            guid_from_bytes(b"\x00" * 15)


# ---------------------------------------------------------------------------
# Legacy id embedding
# ---------------------------------------------------------------------------


class TestLegacyId:
    def test_embed_sample(self):
        assert embed_legacy_id(41) == SAMPLE_GUID

    def test_extract_sample(self):
        assert extract_legacy_id(SAMPLE_GUID) == 41

    @pytest.mark.parametrize("legacy_id", LEGACY_IDS)
    def test_round_trip(self, legacy_id):
        assert extract_legacy_id(embed_legacy_id(legacy_id)) == legacy_id

    @pytest.mark.parametrize("legacy_id", LEGACY_IDS)
    def test_embed_keeps_template_suffix(self, legacy_id):
        guid = embed_legacy_id(legacy_id)
        assert guid.bytes_le[4:] == BASE_TEMPLATE.bytes_le[4:]
        assert is_legacy_compatible(guid)

    def test_embed_negative(self):
        assert str(embed_legacy_id(-1)) == "ffffffff-ae86-4653-9db8-f6bdacd094e5"

    def test_embed_out_of_range(self):
        with pytest.raises(ValueError, match="out of range"):
            embed_legacy_id(2 ** 31)

    def test_extract_does_not_check_suffix(self):
        guid = uuid.UUID("00000029-0000-0000-0000-000000000000")
        assert extract_legacy_id(guid) == 41
        assert not is_legacy_compatible(guid)

    def test_compatibility_ignores_case(self):
        guid = uuid.UUID("0000002A-AE86-4653-9DB8-F6BDACD094E5")
        assert is_legacy_compatible(guid)
