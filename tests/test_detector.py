"""Tests for message format detection."""
import uuid

from guid_helper.detector import (
    DetectionKind,
    detect,
    match_guid,
    match_legacy_id,
    match_padded_base64,
    match_unpadded_base64,
)

SAMPLE_GUID = uuid.UUID("00000029-ae86-4653-9db8-f6bdacd094e5")


class TestMatchingRules:
    def test_padded_claims_padding(self):
        assert match_padded_base64("XXXXXXXXXXXXXXXX==") == "XXXXXXXXXXXXXXXX=="

    def test_padded_needs_sixteen_characters(self):
        assert match_padded_base64("XXXXXXXXXXXXXXX==") is None

    def test_padded_found_inside_text(self):
        text = "id is KQAAAIauU0aduPa9rNCU5Q== in the log"
        assert match_padded_base64(text) == "KQAAAIauU0aduPa9rNCU5Q=="

    def test_padded_alphabet_includes_plus_and_slash(self):
        assert match_padded_base64("ab+/cd+/ef+/gh+/ij==") == "ab+/cd+/ef+/gh+/ij=="

    def test_unpadded_appends_padding(self):
        assert match_unpadded_base64("KQAAAIauU0aduPa9rNCU5Q") == "KQAAAIauU0aduPa9rNCU5Q=="

    def test_unpadded_no_match(self):
        assert match_unpadded_base64("hello world") is None

    def test_guid_text(self):
        assert match_guid(" 00000029-AE86-4653-9DB8-F6BDACD094E5\n") == SAMPLE_GUID

    def test_guid_requires_whole_message(self):
        assert match_guid("guid 00000029-ae86-4653-9db8-f6bdacd094e5") is None

    def test_guid_requires_hyphens(self):
        assert match_guid("00000029ae8646539db8f6bdacd094e5") is None

    def test_guid_in_braces(self):
        assert match_guid("{00000029-ae86-4653-9db8-f6bdacd094e5}") == SAMPLE_GUID

    def test_guid_in_parentheses(self):
        assert match_guid("(00000029-AE86-4653-9DB8-F6BDACD094E5)") == SAMPLE_GUID

    def test_guid_wrapper_must_match(self):
        assert match_guid("{00000029-ae86-4653-9db8-f6bdacd094e5)") is None
        assert match_guid("{00000029-ae86-4653-9db8-f6bdacd094e5") is None

    def test_legacy_id(self):
        assert match_legacy_id("41") == 41
        assert match_legacy_id("-7") == -7
        assert match_legacy_id("+7") == 7

    def test_legacy_id_range(self):
        assert match_legacy_id("2147483647") == 2147483647
        assert match_legacy_id("-2147483648") == -2147483648
        assert match_legacy_id("2147483648") is None

    def test_legacy_id_rejects_other_text(self):
        assert match_legacy_id("4_1") is None
        assert match_legacy_id("41.0") is None


class TestDetect:
    def test_padded_blob(self):
        detection = detect("KQAAAIauU0aduPa9rNCU5Q==")
        assert detection.kind == DetectionKind.PADDED_BASE64
        assert detection.value == SAMPLE_GUID
        assert detection.candidate == "KQAAAIauU0aduPa9rNCU5Q=="

    def test_unpadded_blob(self):
        detection = detect("KQAAAIauU0aduPa9rNCU5Q")
        assert detection.kind == DetectionKind.UNPADDED_BASE64
        assert detection.value == SAMPLE_GUID

    def test_single_padding_character_falls_back_to_unpadded(self):
        detection = detect("KQAAAIauU0aduPa9rNCU5Q=")
        assert detection.kind == DetectionKind.UNPADDED_BASE64
        assert detection.value == SAMPLE_GUID

    def test_guid(self):
        detection = detect("00000029-ae86-4653-9db8-f6bdacd094e5")
        assert detection.kind == DetectionKind.GUID
        assert detection.value == SAMPLE_GUID

    def test_braced_guid(self):
        detection = detect("{00000029-ae86-4653-9db8-f6bdacd094e5}")
        assert detection.kind == DetectionKind.GUID
        assert detection.value == SAMPLE_GUID

    def test_legacy_id(self):
        detection = detect("41")
        assert detection.kind == DetectionKind.LEGACY_ID
        assert detection.value == 41

    def test_undecodable_blob_falls_through(self):
        # Matches the unpadded rule but is not a 16-byte payload.
        detection = detect("12345678901234567")
        assert detection.kind == DetectionKind.UNRECOGNIZED

    def test_undecodable_padded_blob(self):
        assert detect("XXXXXXXXXXXXXXXX==").kind == DetectionKind.UNRECOGNIZED

    def test_plain_text(self):
        assert detect("hello world").kind == DetectionKind.UNRECOGNIZED

    def test_empty(self):
        assert detect("").kind == DetectionKind.UNRECOGNIZED

    def test_repeatable(self):
        assert detect("KQAAAIauU0aduPa9rNCU5Q") == detect("KQAAAIauU0aduPa9rNCU5Q")
