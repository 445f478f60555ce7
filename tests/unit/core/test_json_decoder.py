"""Tests for JSON body decoding."""

import pytest

from adconnect.core.json_decoder import parse_json_data
from adconnect.core.types import JsonDecodeError, SuccessList, SuccessMap
from adconnect.utils.config import JSON_ERROR_CODE, JSON_ERROR_MESSAGE


class TestParseJsonData:
    """Objects and arrays succeed; everything else is a decode error."""

    def test_object_gives_success_map(self):
        assert parse_json_data(b'{"a":1}') == SuccessMap({"a": 1})

    def test_array_gives_success_list(self):
        assert parse_json_data(b"[1,2,3]") == SuccessList([1, 2, 3])

    def test_nested_values_preserved(self):
        outcome = parse_json_data(b'{"items": [{"id": 1, "tags": ["x"]}], "next": null}')
        assert outcome == SuccessMap({"items": [{"id": 1, "tags": ["x"]}], "next": None})

    def test_leading_whitespace_and_utf8(self):
        assert parse_json_data(' \n["é"]'.encode()) == SuccessList(["é"])

    @pytest.mark.parametrize(
        "body",
        [b"not json", b"", b"{", b"[1,2,", b"{'a': 1}", b"\x80abc"],
    )
    def test_malformed_body(self, body):
        outcome = parse_json_data(body)
        assert isinstance(outcome, JsonDecodeError)
        assert outcome.cause is not None

    @pytest.mark.parametrize("body", [b"42", b'"text"', b"null", b"true", b"3.5"])
    def test_bare_scalar_is_rejected(self, body):
        """Scalars parse as JSON but are not a map or list."""
        outcome = parse_json_data(body)
        assert isinstance(outcome, JsonDecodeError)

    @pytest.mark.parametrize("body", [b"NaN", b"[Infinity]", b'{"a": -Infinity}'])
    def test_non_standard_constants_rejected(self, body):
        assert isinstance(parse_json_data(body), JsonDecodeError)

    def test_error_has_fixed_code_and_message(self):
        outcome = parse_json_data(b"not json")
        assert outcome.code == JSON_ERROR_CODE == 501
        assert outcome.message == JSON_ERROR_MESSAGE
        assert outcome.is_success is False

    def test_success_flags(self):
        assert parse_json_data(b"{}").is_success is True
        assert parse_json_data(b"[]").is_success is True

    def test_error_carries_domain(self):
        assert parse_json_data(b"{").domain == "ADConnectionManager"
