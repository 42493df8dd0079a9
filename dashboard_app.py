import logging

import streamlit as st

# Import local modules
import analytics
import notifications
import pipeline
import ui_analytics
import ui_login
import ui_resumes
import ui_upload
import utils
from api_client import DashboardAPI
from config import settings
from dashboard_state import DashboardStore
from errors import AuthError, DashboardError
from live_updates import LiveFeed, LiveUpdateSubscription, current_session_alive
from preferences import PreferencesContext
from session_gate import GateState, SessionContext, SessionGate
from storage import KeyValueStore
from theme import css

# --- LOGGING CONFIGURATION ---
logging.basicConfig(level=settings.log_level, format="%(asctime)s - %(levelname)s - %(name)s - %(message)s")
for noisy in ("socketio", "engineio", "urllib3"):
    logging.getLogger(noisy).setLevel(logging.WARNING)
logger = logging.getLogger("dashboard")

# --- CONFIGURATION ---
st.set_page_config(page_title="HR Power · Resume Dashboard", page_icon="📄", layout="wide")


# --- SESSION INIT ---
def _on_gate_change(state):
    if state != GateState.UNAUTHENTICATED:
        return
    sub = st.session_state.get("live_subscription")
    if sub is not None:
        sub.stop()
    st.session_state.live_subscription = None
    st.session_state.store.clear()
    st.session_state.birthdays = None


if "kv_store" not in st.session_state:
    st.session_state.kv_store = KeyValueStore(settings.storage_path)
if "prefs" not in st.session_state:
    st.session_state.prefs = PreferencesContext(st.session_state.kv_store)
if "session_ctx" not in st.session_state:
    st.session_state.session_ctx = SessionContext(st.session_state.kv_store)
if "store" not in st.session_state:
    st.session_state.store = DashboardStore()
if "live_feed" not in st.session_state:
    st.session_state.live_feed = LiveFeed()
if "live_subscription" not in st.session_state:
    st.session_state.live_subscription = None
if "birthdays" not in st.session_state:
    st.session_state.birthdays = None
if "api" not in st.session_state:
    st.session_state.api = DashboardAPI(
        base_url=settings.api_url,
        token_provider=lambda ctx=st.session_state.session_ctx: ctx.token,
    )
if "gate" not in st.session_state:
    gate = SessionGate(context=st.session_state.session_ctx, api=st.session_state.api)
    gate.on_change(_on_gate_change)
    st.session_state.api.on_unauthorized = gate.expire
    st.session_state.gate = gate

prefs = st.session_state.prefs
gate = st.session_state.gate
api = st.session_state.api
store = st.session_state.store
feed = st.session_state.live_feed
notifier = notifications.Notifier(st.session_state)


def toggle_theme():
    prefs.toggle_theme()


st.markdown(css(prefs.theme_mode), unsafe_allow_html=True)

# --- MAILBOX CONNECT CALLBACK (consumed once) ---
callback = utils.mailbox_callback_message(st.query_params)
if callback:
    kind, message = callback
    notifier.notify(kind, message, notifications.ERROR_TTL)
for param in ("outlook_auth", "email", "message"):
    if param in st.query_params:
        del st.query_params[param]

# --- SESSION GATE ---
if gate.state == GateState.UNCHECKED:
    with st.spinner("Checking session..."):
        gate.check()

if not gate.is_authenticated:
    ui_login.render_login(gate, toggle_theme)
    st.stop()


# --- LIVE UPDATES ---
def _start_live_updates():
    if st.session_state.live_subscription is not None:
        return True
    if not settings.live_updates:
        return False
    session_alive = current_session_alive()
    if session_alive is None:
        logger.info("[live] not served by a Streamlit runtime; live updates disabled")
        return False
    sub = LiveUpdateSubscription(
        url=settings.api_url,
        health_check=api.health,
        on_new_record=feed.push,
        on_status=feed.set_connected,
        health_interval=settings.health_interval_sec,
        session_alive=session_alive,
    )
    sub.start()
    st.session_state.live_subscription = sub
    return True


def refetch_all():
    try:
        store.refetch_all(api)
    except AuthError:
        st.rerun()
    except DashboardError as exc:
        notifier.error(exc.message)


live_started = _start_live_updates()

if not store.loaded:
    with st.spinner("Loading resumes..."):
        refetch_all()
    if not live_started:
        feed.set_connected(api.health())

if st.session_state.birthdays is None:
    try:
        st.session_state.birthdays = api.birthdays_today()
    except AuthError:
        st.rerun()
    except DashboardError as exc:
        logger.warning("[birthdays] fetch failed: %s", exc)
        st.session_state.birthdays = []


@st.fragment(run_every=2)
def live_sync_area():
    events = feed.drain()
    if events:
        last = events[-1]
        notifier.notify("success", last.message, notifications.EVENT_TTL, record_id=last.record_id)
        # One full re-fetch per event; bursts are not coalesced.
        for _ in events:
            refetch_all()
        st.rerun(scope="app")

    note = notifier.current()
    if note is None:
        return
    if note.kind == "success":
        st.success(note.message, icon="✅")
    elif note.kind == "error":
        st.error(note.message, icon="⚠️")
    else:
        st.info(note.message)


def logout():
    gate.logout()


# --- HEADER ---
col_head, col_actions = st.columns([3, 4])
with col_head:
    st.title("📄 HR Power")
    admin = gate.admin
    st.caption(
        "Intelligent Resume Management System"
        + (f" · Admin: **{admin.username}**" if admin and admin.username else "")
    )
with col_actions:
    a_theme, a_bday, a_share, a_mail, a_refresh, a_logout = st.columns(6)
    a_theme.button(
        "☀️" if prefs.theme_mode == "dark" else "🌙",
        on_click=toggle_theme, help="Toggle light/dark mode", use_container_width=True,
    )
    birthdays = st.session_state.birthdays or []
    with a_bday.popover(f"🔔 {len(birthdays)}" if birthdays else "🔔", use_container_width=True):
        st.markdown(f"**Today's Birthdays ({len(birthdays)})**")
        if not birthdays:
            st.caption("No birthdays today")
        for person in birthdays:
            st.markdown(f"🎂 **{person.name}**")
            if person.email:
                st.caption(person.email)
            if person.contact_number:
                st.link_button("Send WhatsApp wishes", utils.whatsapp_link(person.contact_number, person.name))
    with a_share.popover("🔗 Share", use_container_width=True):
        st.caption("Shareable upload link")
        st.code(utils.share_link(settings.public_url), language=None)
    a_mail.link_button("📧 Outlook", api.mailbox_connect_url(), use_container_width=True)
    if a_refresh.button("🔄 Refresh", use_container_width=True):
        refetch_all()
        st.rerun()
    a_logout.button("🚪 Logout", on_click=logout, use_container_width=True)

live_sync_area()

if st.query_params.get("view") == "upload":
    ui_upload.render_upload(api, store, notifier)
    st.stop()

# --- STAT CARDS ---
resumes = pipeline.resumes_with_attachments(store.records)
role_stats = analytics.role_stats(resumes)
metrics = analytics.summary_metrics(resumes, role_stats)

s1, s2, s3, s4 = st.columns(4)
s1.markdown(utils.generate_stat_card_html(metrics["total_resumes"], "Total Resumes"), unsafe_allow_html=True)
s2.markdown(utils.generate_stat_card_html(metrics["unique_roles"], "Unique Roles"), unsafe_allow_html=True)
if feed.connected:
    s3.markdown(utils.generate_stat_card_html("Live Sync", "Server Status", "status-online"), unsafe_allow_html=True)
else:
    s3.markdown(utils.generate_stat_card_html("Offline", "Server Status", "status-offline"), unsafe_allow_html=True)
s4.markdown(utils.generate_stat_card_html(metrics["top_role_count"], "Top Role Count"), unsafe_allow_html=True)

st.write("")

# --- TABS DEFINITION ---
tab_resumes, tab_analytics, tab_upload = st.tabs(["Resume Dashboard", "Role Analytics", "Upload Resumes"])

with tab_resumes:
    ui_resumes.render_resumes(api, store, notifier, settings.page_size)

with tab_analytics:
    ui_analytics.render_analytics(resumes, role_stats, prefs.theme_mode)

with tab_upload:
    ui_upload.render_upload(api, store, notifier)
