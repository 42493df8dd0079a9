import datetime as dt
import logging

from pydantic import ValidationError as SchemaError

from schemas import AttachmentData, ResumeRecord

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
NOT_SPECIFIED = "Not Specified"
UNKNOWN_CANDIDATE = "Unknown Candidate"


def normalize_record(raw) -> ResumeRecord | None:
    if isinstance(raw, ResumeRecord):
        return raw
    if not isinstance(raw, dict):
        return None
    try:
        return ResumeRecord.model_validate(raw)
    except SchemaError as exc:
        logger.warning("[records] dropping malformed record %r: %s", raw.get("_id", raw.get("id")), exc)
        return None


def normalize_records(raw_list) -> list[ResumeRecord]:
    if not raw_list:
        return []
    out = []
    for raw in raw_list:
        record = normalize_record(raw)
        if record is not None:
            out.append(record)
    return out


def _parse_timestamp(value) -> dt.datetime | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, dt.datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        # Numeric timestamps are epoch milliseconds.
        try:
            parsed = dt.datetime.fromtimestamp(value / 1000.0, tz=dt.timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = dt.datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def resolve_timestamp(record: ResumeRecord, now: dt.datetime | None = None) -> dt.datetime:
    """First parseable of receivedAt, createdAt, timestamp; else ``now``."""
    for value in (record.received_at, record.created_at, record.timestamp):
        parsed = _parse_timestamp(value)
        if parsed is not None:
            return parsed
    if now is None:
        now = dt.datetime.now(dt.timezone.utc)
    return now


def attachment(record: ResumeRecord) -> AttachmentData:
    return record.attachment_data or AttachmentData()


def is_eligible(record: ResumeRecord) -> bool:
    data = record.attachment_data
    return bool(record.has_attachment and data is not None and (data.name or data.email))


def resolved_role(record: ResumeRecord) -> str:
    return (attachment(record).role or "").strip() or NOT_SPECIFIED


def display_value(value, placeholder: str = NOT_AVAILABLE) -> str:
    if value is None:
        return placeholder
    text = str(value)
    return text if text.strip() else placeholder


def link_value(record: ResumeRecord, key: str):
    links = attachment(record).links
    if links is None:
        return None
    return getattr(links, key, None)


def format_date(value) -> str:
    parsed = _parse_timestamp(value)
    if parsed is None:
        return NOT_AVAILABLE
    return parsed.astimezone().strftime("%b %d, %Y").replace(" 0", " ")


def format_datetime(value) -> str:
    parsed = _parse_timestamp(value)
    if parsed is None:
        return NOT_AVAILABLE
    return parsed.astimezone().strftime("%m/%d/%Y, %I:%M:%S %p")
