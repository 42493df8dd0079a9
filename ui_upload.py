import streamlit as st

import validation
from errors import AuthError, DashboardError


def _to_upload_files(uploaded):
    return [validation.UploadFile(name=f.name, content=f.getvalue(), content_type=f.type) for f in uploaded or []]


def upload_resumes(api, files):
    """Validate the whole batch, then send it in one request."""
    files = validation.validate_upload(files)
    return api.upload([(f.name, f.content) for f in files])


def render_upload(api, store, notifier):
    st.markdown("#### Submit Resumes")
    st.caption(
        f"PDF only, up to {validation.MAX_UPLOAD_FILES} files at once, "
        f"each less than {validation.MAX_FILE_BYTES // (1024 * 1024)}MB."
    )

    if "upload_key" not in st.session_state:
        st.session_state.upload_key = 0

    uploaded = st.file_uploader(
        "Upload Resumes (PDF)",
        type=["pdf"],
        accept_multiple_files=True,
        key=f"resume_upload_{st.session_state.upload_key}",
    )

    files = _to_upload_files(uploaded)
    problem = None
    if files:
        try:
            validation.validate_upload(files)
        except DashboardError as exc:
            problem = exc.message
            st.error(problem)
        else:
            st.caption(f"{len(files)} file(s) selected")

    if st.button("📤 Upload Resumes", type="primary", disabled=bool(problem)):
        try:
            with st.spinner(f"Uploading {len(files)} file(s)..."):
                response = upload_resumes(api, files)
        except AuthError:
            st.rerun()
        except DashboardError as exc:
            st.error(exc.message)
            return
        st.session_state.upload_results = response.results
        st.session_state.upload_key += 1
        try:
            store.refetch_all(api)
        except AuthError:
            st.rerun()
        except DashboardError as exc:
            notifier.error(exc.message)
        st.rerun()

    results = st.session_state.get("upload_results")
    if results:
        with st.container(border=True):
            st.markdown("**Upload Completed**: your file(s) have been processed.")
            for r in results:
                if r.ok:
                    st.markdown(f"✅ **{r.file}**  \nUploaded successfully")
                else:
                    st.markdown(f"❌ **{r.file}**  \n{r.error or 'Failed'}")
