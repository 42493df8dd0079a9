from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def _as_text(value):
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, str):
        return value
    return None


class Links(WireModel):
    linkedin: str | None = None
    github: str | None = None
    portfolio: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        return _as_text(value)


class AttachmentData(WireModel):
    name: str | None = None
    email: str | None = None
    contact_number: str | None = None
    date_of_birth: str | None = None
    role: str | None = None
    location: str | None = None
    experience: str | None = None
    summary: str | None = None
    links: Links | None = None

    @field_validator(
        "name", "email", "contact_number", "date_of_birth", "role",
        "location", "experience", "summary", mode="before",
    )
    @classmethod
    def _coerce_text(cls, value):
        return _as_text(value)

    @field_validator("links", mode="before")
    @classmethod
    def _links_object(cls, value):
        if isinstance(value, (dict, Links)):
            return value
        return None


class ResumeRecord(WireModel):
    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    has_attachment: bool = False
    attachment_data: AttachmentData | None = None
    received_at: Any = None
    created_at: Any = None
    timestamp: Any = None
    subject: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_text(cls, value):
        return "" if value is None else str(value)

    @field_validator("has_attachment", mode="before")
    @classmethod
    def _strict_flag(cls, value):
        return value is True

    @field_validator("attachment_data", mode="before")
    @classmethod
    def _attachment_object(cls, value):
        if isinstance(value, (dict, AttachmentData)):
            return value
        return None

    @field_validator("subject", mode="before")
    @classmethod
    def _subject_text(cls, value):
        return _as_text(value)


class AdminIdentity(WireModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    username: str = ""


class LoginResponse(WireModel):
    token: str
    admin: AdminIdentity = Field(default_factory=AdminIdentity)


class VerifyResponse(WireModel):
    admin: AdminIdentity = Field(default_factory=AdminIdentity)


class StatsResponse(WireModel):
    count: int = 0


class UploadResult(WireModel):
    file: str = ""
    status: str = "error"
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


class UploadResponse(WireModel):
    results: list[UploadResult] = Field(default_factory=list)


class BirthdayPerson(WireModel):
    name: str = ""
    email: str | None = None
    contact_number: str | None = None
    date_of_birth: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _name_text(cls, value):
        return _as_text(value) or ""

    @field_validator("email", "contact_number", "date_of_birth", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        return _as_text(value)


class BirthdayResponse(WireModel):
    birthdays: list[BirthdayPerson] = Field(default_factory=list)


class NewRecordEvent(WireModel):
    message: str = "New resume received"
    email: Any = None

    @field_validator("message", mode="before")
    @classmethod
    def _message_text(cls, value):
        return _as_text(value) or "New resume received"

    @property
    def record_id(self) -> str | None:
        if isinstance(self.email, dict):
            value = self.email.get("_id") or self.email.get("id")
            return str(value) if value is not None else None
        if self.email is None:
            return None
        return str(self.email)
