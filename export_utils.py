import datetime as dt
import io

import pandas as pd
from openpyxl.utils import get_column_letter

from records import NOT_AVAILABLE, attachment, display_value, format_datetime, link_value, resolved_role
from schemas import ResumeRecord

SHEET_NAME = "Detailed Resume Data"
DEFAULT_SOURCE = "Web Upload"

# (column, width in characters)
EXPORT_COLUMNS = [
    ("Name", 25),
    ("Email", 30),
    ("Mobile Number", 18),
    ("Location", 20),
    ("Role", 25),
    ("LinkedIn", 30),
    ("GitHub", 30),
    ("Date of Birth", 15),
    ("Summary", 50),
    ("Received At", 20),
    ("Source", 40),
]
COLUMN_NAMES = [name for name, _ in EXPORT_COLUMNS]


def export_row(record: ResumeRecord) -> dict[str, str]:
    data = attachment(record)
    return {
        "Name": display_value(data.name),
        "Email": display_value(data.email),
        "Mobile Number": display_value(data.contact_number),
        "Location": display_value(data.location),
        "Role": resolved_role(record),
        "LinkedIn": display_value(link_value(record, "linkedin")),
        "GitHub": display_value(link_value(record, "github")),
        "Date of Birth": display_value(data.date_of_birth),
        "Summary": display_value(data.summary),
        "Received At": format_datetime(record.received_at) if record.received_at else NOT_AVAILABLE,
        "Source": display_value(record.subject, DEFAULT_SOURCE),
    }


def export_rows(filtered: list[ResumeRecord]) -> list[dict[str, str]]:
    return [export_row(r) for r in filtered]


def export_filename(today: dt.date | None = None, extension: str = "xlsx") -> str:
    today = today or dt.date.today()
    return f"Resume_Data_{today.isoformat()}.{extension}"


def rows_frame(rows: list[dict[str, str]]) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=COLUMN_NAMES)


def write_xlsx(rows: list[dict[str, str]]) -> bytes:
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        rows_frame(rows).to_excel(writer, sheet_name=SHEET_NAME, index=False)
        sheet = writer.sheets[SHEET_NAME]
        for idx, (_, width) in enumerate(EXPORT_COLUMNS, start=1):
            sheet.column_dimensions[get_column_letter(idx)].width = width
    return buffer.getvalue()


def write_csv(rows: list[dict[str, str]]) -> bytes:
    return rows_frame(rows).to_csv(index=False).encode("utf-8")
