from __future__ import annotations

from pypoi._redact import redact_for_log


def test_redact_for_log_masks_user_id() -> None:
    payload = {"user_id": "abc123", "nested": {"userId": "abc123", "version": 4}}

    redacted = redact_for_log(payload)

    assert redacted["user_id"] == "<redacted>"
    assert redacted["nested"]["userId"] == "<redacted>"
    assert redacted["nested"]["version"] == 4


def test_redact_for_log_truncates_long_strings() -> None:
    redacted = redact_for_log({"description": "x" * 600}, max_string=10)
    assert redacted["description"].startswith("x" * 10)
    assert "<truncated>" in redacted["description"]


def test_redact_for_log_summarises_long_lists() -> None:
    redacted = redact_for_log({"pois": list(range(12))}, max_items=3)
    assert redacted["pois"] == [0, 1, 2, "<9 more>"]
