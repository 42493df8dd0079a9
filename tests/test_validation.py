from unittest.mock import MagicMock

import pytest

from errors import ValidationError
from validation import (
    MAX_FILE_BYTES,
    MAX_UPLOAD_FILES,
    UploadFile,
    build_update_payload,
    edit_form_from_record,
    validate_login,
    validate_resume_url,
    validate_upload,
)
from conftest import make_record
from ui_upload import upload_resumes


def _pdf(name="cv.pdf", size=10):
    return UploadFile(name=name, content=b"x" * size, content_type="application/pdf")


def test_upload_requires_files():
    with pytest.raises(ValidationError, match="Please select at least one PDF file"):
        validate_upload([])


def test_upload_rejects_too_many_files():
    files = [_pdf(f"{i}.pdf") for i in range(MAX_UPLOAD_FILES + 1)]
    with pytest.raises(ValidationError, match="maximum of 25 files"):
        validate_upload(files)


def test_upload_rejects_non_pdf():
    doc = UploadFile(name="cv.docx", content=b"x", content_type="application/msword")
    with pytest.raises(ValidationError, match="PDF files only"):
        validate_upload([_pdf(), doc])


def test_upload_rejects_large_file():
    with pytest.raises(ValidationError, match="less than 10MB"):
        validate_upload([_pdf(size=MAX_FILE_BYTES + 1)])


def test_upload_accepts_valid_batch():
    files = [_pdf(f"{i}.pdf") for i in range(MAX_UPLOAD_FILES)]
    assert validate_upload(files) == files


def test_pdf_detection_without_content_type():
    assert UploadFile(name="CV.PDF", content=b"").is_pdf
    assert not UploadFile(name="cv.txt", content=b"").is_pdf


def test_resume_url():
    assert validate_resume_url("  https://x.io/cv.pdf ") == "https://x.io/cv.pdf"
    with pytest.raises(ValidationError):
        validate_resume_url("   ")


def test_login_fields():
    assert validate_login(" admin ", "pw") == "admin"
    with pytest.raises(ValidationError, match="both username and password"):
        validate_login("admin", "")


def test_update_payload_trims_and_nests_links():
    form = edit_form_from_record(make_record("1", name="Ann", role="Eng"))
    form["name"] = "  Ann Lee "
    form["links.github"] = " https://github.com/ann "
    payload = build_update_payload(form)
    assert payload["name"] == "Ann Lee"
    assert payload["role"] == "Eng"
    assert payload["links"] == {"linkedin": "", "github": "https://github.com/ann", "portfolio": ""}
    assert "links.github" not in payload


def test_update_payload_requires_name():
    form = edit_form_from_record(make_record("1", name="Ann"))
    form["name"] = "   "
    with pytest.raises(ValidationError, match="Name is required"):
        build_update_payload(form)


def test_oversized_batch_never_reaches_the_server():
    api = MagicMock()
    files = [_pdf(f"{i}.pdf") for i in range(26)]
    with pytest.raises(ValidationError, match="maximum of 25 files"):
        upload_resumes(api, files)
    api.upload.assert_not_called()


def test_valid_batch_is_sent_once():
    api = MagicMock()
    upload_resumes(api, [_pdf("a.pdf"), _pdf("b.pdf")])
    api.upload.assert_called_once_with([("a.pdf", b"x" * 10), ("b.pdf", b"x" * 10)])
