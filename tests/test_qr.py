import json

import pytest

from campushub.utils.qr import (
    CHECK_IN_CODE_ALPHABET,
    generate_check_in_code,
    normalize_check_in_code,
    parse_credential,
)


def test_generated_codes_are_twelve_uppercase_alphanumerics():
    codes = {generate_check_in_code() for _ in range(50)}

    assert len(codes) == 50
    for code in codes:
        assert len(code) == 12
        assert set(code) <= set(CHECK_IN_CODE_ALPHABET)


def test_normalize_check_in_code():
    assert normalize_check_in_code("  ab12cd34ef56 ") == "AB12CD34EF56"


def test_parse_manual_code():
    assert parse_credential("ab12cd34ef56") == ("code", "AB12CD34EF56")


def test_parse_qr_dict():
    kind, payload = parse_credential(
        {"type": "event_checkin", "registration_id": "7", "qr_code": "abc"}
    )

    assert kind == "qr"
    assert payload["registration_id"] == 7
    assert payload["qr_code"] == "abc"


def test_parse_qr_json_string():
    raw = json.dumps({"type": "event_checkin", "registration_id": 3, "qr_code": "tok"})

    kind, payload = parse_credential(raw)

    assert kind == "qr"
    assert payload["registration_id"] == 3


@pytest.mark.parametrize(
    "credential",
    [
        "",
        "   ",
        42,
        {"type": "wifi", "registration_id": 1, "qr_code": "x"},
        {"type": "event_checkin", "qr_code": "x"},
        {"type": "event_checkin", "registration_id": "seven", "qr_code": "x"},
    ],
)
def test_parse_rejects_malformed_credentials(credential):
    with pytest.raises(ValueError):
        parse_credential(credential)
