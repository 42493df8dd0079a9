from dataclasses import dataclass

from errors import ValidationError

MAX_UPLOAD_FILES = 25
MAX_FILE_BYTES = 10 * 1024 * 1024
PDF_MIME = "application/pdf"

EDIT_FIELDS = [
    "name",
    "email",
    "contactNumber",
    "dateOfBirth",
    "role",
    "location",
    "experience",
    "summary",
    "links.linkedin",
    "links.github",
    "links.portfolio",
]


@dataclass(frozen=True)
class UploadFile:
    name: str
    content: bytes
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def is_pdf(self) -> bool:
        if self.content_type:
            return self.content_type == PDF_MIME
        return self.name.lower().endswith(".pdf")


def validate_upload(files: list[UploadFile]) -> list[UploadFile]:
    if not files:
        raise ValidationError("Please select at least one PDF file")
    if len(files) > MAX_UPLOAD_FILES:
        raise ValidationError(f"You can only upload a maximum of {MAX_UPLOAD_FILES} files at once")
    for f in files:
        if not f.is_pdf:
            raise ValidationError("Please upload PDF files only")
        if f.size > MAX_FILE_BYTES:
            raise ValidationError("Each file must be less than 10MB")
    return list(files)


def validate_resume_url(url: str | None) -> str:
    cleaned = (url or "").strip()
    if not cleaned:
        raise ValidationError("Please enter a valid PDF URL")
    return cleaned


def validate_login(username: str | None, password: str | None) -> str:
    if not (username or "").strip() or not (password or "").strip():
        raise ValidationError("Please enter both username and password")
    return username.strip()


def edit_form_from_record(record) -> dict[str, str]:
    data = record.attachment_data
    links = data.links if data else None
    return {
        "name": (data.name if data else None) or "",
        "email": (data.email if data else None) or "",
        "contactNumber": (data.contact_number if data else None) or "",
        "dateOfBirth": (data.date_of_birth if data else None) or "",
        "role": (data.role if data else None) or "",
        "location": (data.location if data else None) or "",
        "experience": (data.experience if data else None) or "",
        "summary": (data.summary if data else None) or "",
        "links.linkedin": (links.linkedin if links else None) or "",
        "links.github": (links.github if links else None) or "",
        "links.portfolio": (links.portfolio if links else None) or "",
    }


def build_update_payload(form: dict) -> dict:
    """Trim the edit form and nest the ``links.*`` fields."""
    values = {key: str(form.get(key) or "").strip() for key in EDIT_FIELDS}
    if not values["name"]:
        raise ValidationError("Name is required")
    payload = {key: value for key, value in values.items() if not key.startswith("links.")}
    payload["links"] = {
        "linkedin": values["links.linkedin"],
        "github": values["links.github"],
        "portfolio": values["links.portfolio"],
    }
    return payload
