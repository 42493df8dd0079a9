import streamlit as st

import export_utils
import utils
import validation
from errors import AuthError, DashboardError
from pipeline import ALL_ROLES, ViewFilters, derive_view, role_filter_options


def _current_filters(page_size):
    filters = st.session_state.get("filters") or ViewFilters(page_size=page_size)
    if filters.page_size != page_size:
        filters = ViewFilters(filters.search_query, filters.selected_role, 1, page_size)
    return filters


def _set_page(page):
    st.session_state.filters = st.session_state.filters.with_page(page)


def _refresh(api, store, notifier):
    try:
        store.refetch_all(api)
    except AuthError:
        st.rerun()
    except DashboardError as exc:
        notifier.error(exc.message)


@st.dialog("Add Resume from URL")
def _add_from_url_dialog(api, store, notifier):
    url = st.text_input(
        "PDF Resume URL",
        placeholder="https://example.com/resume.pdf",
        help="Enter a direct link to a PDF resume file",
        key="add_resume_url",
    )
    c1, c2 = st.columns(2)
    if c1.button("Cancel", use_container_width=True):
        st.rerun()
    if c2.button("Add Resume", type="primary", use_container_width=True, disabled=not (url or "").strip()):
        try:
            cleaned = validation.validate_resume_url(url)
            with st.spinner("Processing resume..."):
                api.add_from_url(cleaned)
        except AuthError:
            st.rerun()
        except DashboardError as exc:
            st.error(exc.message)
            return
        notifier.success("Resume added successfully!")
        _refresh(api, store, notifier)
        st.session_state.pop("add_resume_url", None)
        st.rerun()


@st.dialog("Edit Resume Details", width="large")
def _edit_dialog(api, store, notifier, record_id):
    record = store.find(record_id)
    if record is None:
        st.warning("This resume is no longer available.")
        return
    form = validation.edit_form_from_record(record)

    st.markdown("##### Personal Information")
    c1, c2 = st.columns(2)
    form["name"] = c1.text_input("Full Name", value=form["name"], placeholder="Enter candidate full name")
    form["email"] = c2.text_input("Email Address", value=form["email"], placeholder="candidate@email.com")
    form["contactNumber"] = c1.text_input("Contact Number", value=form["contactNumber"], placeholder="+1 (555) 123-4567")
    form["dateOfBirth"] = c2.text_input("Date of Birth", value=form["dateOfBirth"], placeholder="MM/DD/YYYY")
    form["role"] = c1.text_input("Current Role/Position", value=form["role"], placeholder="Software Engineer")
    form["location"] = c2.text_input("Location", value=form["location"], placeholder="City, State/Country")
    form["experience"] = c1.text_input("Experience", value=form["experience"], placeholder="5 years")

    st.markdown("##### Professional Links")
    l1, l2, l3 = st.columns(3)
    form["links.linkedin"] = l1.text_input("LinkedIn Profile", value=form["links.linkedin"], placeholder="https://linkedin.com/in/username")
    form["links.github"] = l2.text_input("GitHub Profile", value=form["links.github"], placeholder="https://github.com/username")
    form["links.portfolio"] = l3.text_input("Portfolio Website", value=form["links.portfolio"], placeholder="https://portfolio.com")

    st.markdown("##### Professional Summary")
    form["summary"] = st.text_area("Professional Summary", value=form["summary"], height=120, placeholder="Brief professional summary...")

    if st.button("Save All Changes", type="primary", disabled=not form["name"].strip()):
        try:
            payload = validation.build_update_payload(form)
            api.update_details(record_id, payload)
        except AuthError:
            st.rerun()
        except DashboardError as exc:
            st.error(exc.message)
            return
        store.patch_local(record_id, payload)
        notifier.success("Resume details updated successfully!")
        st.rerun()


_PDF_SLOT = "pending_pdf"


def remember_pdf(state, record_id, content):
    """Hold one fetched PDF until it is saved; a newer fetch replaces it."""
    state[_PDF_SLOT] = (record_id, content)


def pending_pdf(state, record_id):
    pending = state.get(_PDF_SLOT)
    if pending and pending[0] == record_id:
        return pending[1]
    return None


def forget_pdf(state):
    state.pop(_PDF_SLOT, None)


def _render_card(api, store, notifier, record):
    with st.container(border=True):
        st.markdown(utils.generate_resume_card_html(record), unsafe_allow_html=True)
        b1, b2, b3 = st.columns(3)
        if b1.button("✏️ Edit", key=f"edit_{record.id}", use_container_width=True):
            _edit_dialog(api, store, notifier, record.id)
        if b2.button("🗑️ Delete", key=f"del_{record.id}", use_container_width=True):
            try:
                api.delete_record(record.id)
            except AuthError:
                st.rerun()
            except DashboardError as exc:
                notifier.error(exc.message)
                st.rerun()
            forget_pdf(st.session_state)
            notifier.success("Resume deleted successfully")
            _refresh(api, store, notifier)
            st.rerun()

        content = pending_pdf(st.session_state, record.id)
        if content is not None:
            b3.download_button(
                "💾 Save PDF",
                data=content,
                on_click=forget_pdf,
                args=(st.session_state,),
                file_name=utils.download_filename(record),
                mime="application/pdf",
                key=f"save_{record.id}",
                use_container_width=True,
            )
        elif b3.button("📥 Resume", key=f"dl_{record.id}", use_container_width=True):
            try:
                remember_pdf(st.session_state, record.id, api.download(record.id))
            except AuthError:
                st.rerun()
            except DashboardError as exc:
                notifier.error(exc.message or "Failed to download PDF")
                st.rerun()
            notifier.success("Resume PDF downloaded successfully!")
            st.rerun()


def _clear_filters():
    st.session_state.search_query = ""
    st.session_state.selected_role = ALL_ROLES


def render_resumes(api, store, notifier, page_size):
    filters = _current_filters(page_size)
    resumes = derive_view(store.records, filters).resumes

    if resumes:
        c_search, c_role, c_export, c_add = st.columns([3, 2, 1, 1])
        c_search.text_input("Search by name", placeholder="Search candidates by name...", key="search_query")
        options = role_filter_options(resumes)
        if st.session_state.get("selected_role") not in options:
            st.session_state.selected_role = ALL_ROLES
        c_role.selectbox(
            "Filter by Role",
            list(options.keys()),
            format_func=lambda r: options[r],
            key="selected_role",
        )
        filters = filters.with_search(st.session_state.search_query).with_role(st.session_state.selected_role)
    else:
        _, c_add = st.columns([6, 1])
    st.session_state.filters = filters
    view = derive_view(store.records, filters)
    if view.page_count and filters.current_page > view.page_count:
        filters = filters.with_page(view.page_count)
        st.session_state.filters = filters
        view = derive_view(store.records, filters)

    if view.resumes:
        rows = export_utils.export_rows(view.filtered)
        c_export.download_button(
            f"⬇️ Export XLSX ({len(view.filtered)})",
            data=export_utils.write_xlsx(rows) if rows else b"",
            file_name=export_utils.export_filename(),
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            disabled=not rows,
            on_click=notifier.success,
            args=(f"Exported {len(rows)} resume(s) to {export_utils.export_filename()}",),
            use_container_width=True,
        )

    if c_add.button("➕ Add Resume", use_container_width=True):
        _add_from_url_dialog(api, store, notifier)

    if not view.resumes:
        st.info("No Resumes Found. Resumes will appear here when candidates submit them, or add one from a PDF link.")
        return

    if not view.filtered:
        st.info("No Resumes Found. Try adjusting your search or filter criteria.")
        st.button("Clear Filters", on_click=_clear_filters)
        return

    cols = st.columns(3)
    for i, record in enumerate(view.page_items):
        with cols[i % 3]:
            _render_card(api, store, notifier, record)

    if len(view.filtered) > filters.page_size:
        p_prev, p_label, p_next = st.columns([1, 2, 1])
        p_prev.button(
            "◀ Previous", disabled=filters.current_page <= 1,
            on_click=_set_page, args=(filters.current_page - 1,), use_container_width=True,
        )
        p_label.markdown(
            f"<div style='text-align:center; padding-top:6px;'>Page {filters.current_page} of {view.page_count}</div>",
            unsafe_allow_html=True,
        )
        p_next.button(
            "Next ▶", disabled=filters.current_page >= view.page_count,
            on_click=_set_page, args=(filters.current_page + 1,), use_container_width=True,
        )
