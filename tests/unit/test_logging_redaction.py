import logging

from dividend_planner.utils.logging_redaction import RedactingFilter, redact_message


def test_redacts_query_string_credentials():
    message = "GET https://brapi.dev/api/quote/HGLG11?token=abc123&range=1d"

    assert redact_message(message) == "GET https://brapi.dev/api/quote/HGLG11?token=[REDACTED]&range=1d"


def test_redacts_sync_auth_and_bearer():
    assert "s3cr3t" not in redact_message("PUT https://db.example.com/saves.json?auth=s3cr3t")
    assert redact_message("Authorization: Bearer abc.def") == "Authorization: Bearer [REDACTED]"
    assert redact_message("api_key=XYZ") == "api_key=[REDACTED]"


def test_plain_messages_pass_through():
    assert redact_message("Planned 2 asset(s) for goal 1000") == "Planned 2 asset(s) for goal 1000"


def test_filter_rewrites_formatted_record():
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="calling %s",
        args=("https://x.example/quote?token=zzz",),
        exc_info=None,
    )

    assert RedactingFilter().filter(record) is True
    assert record.getMessage() == "calling https://x.example/quote?token=[REDACTED]"
