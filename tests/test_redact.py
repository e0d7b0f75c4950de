from __future__ import annotations

from fleetsync._redact import redact_filters, redact_for_log


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = {
        "apikey": "anon-key",
        "Authorization": "Bearer anon-key",
        "name": "Maria",
        "bank_account": "000-111",
        "rows": [{"documentId": "1234567", "ci": "998877", "phone": "555-1"}],
    }

    redacted = redact_for_log(payload)
    assert redacted["apikey"] == "<redacted>"
    assert redacted["Authorization"] == "<redacted>"
    assert redacted["name"] == "Maria"
    assert redacted["bank_account"] == "<redacted>"
    assert redacted["rows"][0] == {"documentId": "<redacted>", "ci": "<redacted>", "phone": "555-1"}


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]


def test_redact_for_log_matches_any_spelling_of_a_sensitive_column() -> None:
    redacted = redact_for_log([{"document_id": "1", "Bank-Account": "2", "licenseNumber": "L-1"}])
    assert redacted == [{"document_id": "<redacted>", "Bank-Account": "<redacted>", "licenseNumber": "L-1"}]


def test_redact_filters_keeps_operator_and_other_columns() -> None:
    params = {"select": "*", "document_id": "eq.1234567", "ci": "998877", "vehicle_id": "eq.v-1"}

    assert redact_filters(params) == {
        "select": "*",
        "document_id": "eq.<redacted>",
        "ci": "<redacted>",
        "vehicle_id": "eq.v-1",
    }
    assert redact_filters(None) == {}
