"""Tests for request body decoding under both policies."""

import pytest

from attnviz.exceptions import DecodeError
from attnviz.payloads import decode_text_payload


class TestPermissiveDecoding:

    def test_valid_payload(self):
        assert decode_text_payload(b'{"text": "hello"}').text == "hello"

    def test_missing_field_is_empty_text(self):
        assert decode_text_payload(b"{}").text == ""

    def test_extra_fields_ignored(self):
        assert decode_text_payload(b'{"text": "hi", "id": 5}').text == "hi"

    def test_surrounding_whitespace_allowed(self):
        assert decode_text_payload(b'\n  {"text": "hi"}\n').text == "hi"

    @pytest.mark.parametrize(
        "raw",
        [b'{"text": "a"} trailing', b'{"text": "a"}{"text": "b"}', b'{"text": "a"}}'],
    )
    def test_only_first_json_value_is_used(self, raw):
        assert decode_text_payload(raw).text == "a"

    @pytest.mark.parametrize(
        "raw",
        [
            b"",
            b"   ",
            b"not json",
            b'{"text": ',
            b"[1, 2]",
            b'{"text": 5}',
            b'{"text": null}',
            b"\xff\xfe",
        ],
    )
    def test_undecodable_body_falls_back_to_empty_text(self, raw):
        assert decode_text_payload(raw).text == ""


class TestStrictDecoding:

    def test_valid_payload(self):
        assert decode_text_payload(b'{"text": "hello"}', strict=True).text == "hello"

    def test_missing_field_is_still_allowed(self):
        assert decode_text_payload(b"{}", strict=True).text == ""

    def test_trailing_whitespace_allowed(self):
        assert decode_text_payload(b'{"text": "hi"}\n', strict=True).text == "hi"

    @pytest.mark.parametrize(
        "raw",
        [b"", b"not json", b"[1, 2]", b'{"text": 5}', b"\xff", b'{"text": "a"} trailing'],
    )
    def test_undecodable_body_raises(self, raw):
        with pytest.raises(DecodeError, match="Malformed request payload"):
            decode_text_payload(raw, strict=True)

    def test_trailing_data_reason_in_message(self):
        with pytest.raises(DecodeError, match="unexpected data after the JSON value"):
            decode_text_payload(b'{"text": "a"} {}', strict=True)
