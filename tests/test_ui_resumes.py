from ui_resumes import forget_pdf, pending_pdf, remember_pdf


def test_only_latest_pdf_is_held():
    state = {}
    remember_pdf(state, "a", b"%PDF-a")
    remember_pdf(state, "b", b"%PDF-b")
    assert pending_pdf(state, "a") is None
    assert pending_pdf(state, "b") == b"%PDF-b"
    assert len(state) == 1


def test_saved_pdf_is_released():
    state = {}
    remember_pdf(state, "a", b"%PDF-a")
    forget_pdf(state)
    assert pending_pdf(state, "a") is None
    assert state == {}
    forget_pdf(state)
