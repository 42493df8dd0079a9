import datetime as dt

from records import (
    NOT_AVAILABLE,
    NOT_SPECIFIED,
    display_value,
    format_date,
    format_datetime,
    is_eligible,
    link_value,
    normalize_records,
    resolve_timestamp,
    resolved_role,
)
from schemas import ResumeRecord

NOW = dt.datetime(2024, 6, 1, 12, 0, tzinfo=dt.timezone.utc)


def _record(**fields):
    return ResumeRecord.model_validate({"_id": "r1", **fields})


def test_normalize_drops_non_objects_and_keeps_server_ids():
    records = normalize_records([{"_id": "a"}, "junk", None, {"id": "b"}])
    assert [r.id for r in records] == ["a", "b"]


def test_normalize_handles_missing_list():
    assert normalize_records(None) == []


def test_has_attachment_must_be_literal_true():
    assert _record(hasAttachment=True).has_attachment is True
    assert _record(hasAttachment="true").has_attachment is False
    assert _record(hasAttachment=1).has_attachment is False


def test_non_object_attachment_data_is_absent():
    assert _record(attachmentData="oops").attachment_data is None


def test_eligibility_needs_name_or_email():
    assert is_eligible(_record(hasAttachment=True, attachmentData={"name": "Ann"}))
    assert is_eligible(_record(hasAttachment=True, attachmentData={"email": "a@x.io"}))
    assert not is_eligible(_record(hasAttachment=True, attachmentData={"role": "Eng"}))
    assert not is_eligible(_record(hasAttachment=False, attachmentData={"name": "Ann"}))
    assert not is_eligible(_record(hasAttachment=True))


def test_resolve_timestamp_prefers_received_at():
    record = _record(receivedAt="2024-01-02T00:00:00Z", createdAt="2023-01-01T00:00:00Z")
    assert resolve_timestamp(record, now=NOW) == dt.datetime(2024, 1, 2, tzinfo=dt.timezone.utc)


def test_resolve_timestamp_skips_unparseable_values():
    record = _record(receivedAt="not a date", createdAt="2023-05-06T07:08:09+00:00")
    assert resolve_timestamp(record, now=NOW).year == 2023


def test_resolve_timestamp_reads_epoch_milliseconds():
    record = _record(timestamp=1_700_000_000_000)
    assert resolve_timestamp(record, now=NOW) == dt.datetime.fromtimestamp(1_700_000_000, tz=dt.timezone.utc)


def test_resolve_timestamp_falls_back_to_now():
    assert resolve_timestamp(_record(), now=NOW) == NOW


def test_resolved_role_defaults():
    assert resolved_role(_record(attachmentData={"role": "Eng"})) == "Eng"
    assert resolved_role(_record(attachmentData={"role": ""})) == NOT_SPECIFIED
    assert resolved_role(_record()) == NOT_SPECIFIED
    assert resolved_role(_record(attachmentData={"role": "   "})) == NOT_SPECIFIED
    assert resolved_role(_record(attachmentData={"role": " Eng "})) == "Eng"


def test_display_value_placeholders():
    assert display_value(None) == NOT_AVAILABLE
    assert display_value("   ") == NOT_AVAILABLE
    assert display_value("", NOT_SPECIFIED) == NOT_SPECIFIED
    assert display_value("x") == "x"


def test_link_value():
    record = _record(attachmentData={"links": {"linkedin": "https://linkedin.com/in/a"}})
    assert link_value(record, "linkedin") == "https://linkedin.com/in/a"
    assert link_value(record, "github") is None
    assert link_value(_record(attachmentData={"links": "nope"}), "linkedin") is None


def test_format_helpers_use_placeholder_for_bad_input():
    assert format_date(None) == NOT_AVAILABLE
    assert format_date("garbage") == NOT_AVAILABLE
    assert format_datetime("garbage") == NOT_AVAILABLE
    assert format_date("2024-03-15T12:00:00Z").endswith(", 2024")
