import streamlit as st

from errors import DashboardError


def render_login(gate, toggle_theme):
    _, center, _ = st.columns([1, 2, 1])
    with center:
        c_title, c_theme = st.columns([5, 1])
        c_title.title("🔐 Admin Login")
        c_theme.button("🌓", key="login_theme", on_click=toggle_theme, help="Toggle light/dark mode")
        st.caption("Intelligent Resume Management System")

        if gate.error:
            st.error(gate.error)

        with st.form("login_form"):
            username = st.text_input("Username")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Sign In", type="primary", use_container_width=True)

        if submitted:
            try:
                with st.spinner("Signing in..."):
                    gate.login(username, password)
            except DashboardError as exc:
                gate.error = exc.message
                st.rerun()
            st.rerun()
