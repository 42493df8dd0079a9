import logging
import threading
import traceback
from dataclasses import dataclass, field
from typing import Any, Callable

import socketio
from streamlit import runtime
from streamlit.runtime.scriptrunner import get_script_run_ctx

from schemas import NewRecordEvent

logger = logging.getLogger(__name__)

NEW_RECORD_EVENT = "newEmail"
HEALTH_INTERVAL_SEC = 10.0


def _default_client() -> Any:
    return socketio.Client(
        reconnection=True,
        reconnection_attempts=5,
        reconnection_delay=1,
        logger=False,
        engineio_logger=False,
    )


def current_session_alive() -> Callable[[], bool] | None:
    """Liveness check for the calling Streamlit session.

    Returns None when the script is not served by a Streamlit runtime
    (bare execution or the testing harness), since there is then no
    session whose end could stop the subscription.
    """
    ctx = get_script_run_ctx()
    if ctx is None or not runtime.exists():
        return None
    session_id = ctx.session_id
    instance = runtime.get_instance()
    return lambda: instance.is_active_session(session_id)


@dataclass
class LiveFeed:
    """Hand-off between socket threads and the Streamlit script thread."""

    _lock: threading.Lock = field(default_factory=threading.Lock)
    _events: list[NewRecordEvent] = field(default_factory=list)
    connected: bool = False

    def push(self, event: NewRecordEvent) -> None:
        with self._lock:
            self._events.append(event)

    def set_connected(self, value: bool) -> None:
        self.connected = bool(value)

    def drain(self) -> list[NewRecordEvent]:
        with self._lock:
            events, self._events = self._events, []
        return events


@dataclass
class LiveUpdateSubscription:
    """Socket.IO listener plus health polling, alive only while signed in."""

    url: str
    health_check: Callable[[], bool]
    on_new_record: Callable[[NewRecordEvent], None]
    on_status: Callable[[bool], None] | None = None
    health_interval: float = HEALTH_INTERVAL_SEC
    connect_timeout: float = 20.0
    client_factory: Callable[[], Any] = _default_client
    session_alive: Callable[[], bool] | None = None
    connected: bool = False
    _client: Any = None
    _stop_event: threading.Event = field(default_factory=threading.Event)
    _threads: list[threading.Thread] = field(default_factory=list)

    @property
    def running(self) -> bool:
        return any(t.is_alive() for t in self._threads)

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._client = self.client_factory()
        self._client.on("connect", self._on_connect)
        self._client.on("connect_error", self._on_connect_error)
        self._client.on("disconnect", self._on_disconnect)
        self._client.on(NEW_RECORD_EVENT, self._on_new_record)
        self._threads = [
            threading.Thread(target=self._connect, name="live-connect", daemon=True),
            threading.Thread(target=self._health_loop, name="live-health", daemon=True),
        ]
        for t in self._threads:
            t.start()
        logger.info("[live] subscription started for %s", self.url)

    def stop(self) -> None:
        self._stop_event.set()
        client, self._client = self._client, None
        if client is not None:
            try:
                client.disconnect()
            except Exception:
                logger.warning("[live] disconnect failed:\n%s", traceback.format_exc())
        for t in self._threads:
            if t is not threading.current_thread():
                t.join(timeout=2.0)
        self._threads = []
        self._set_connected(False)
        logger.info("[live] subscription stopped")

    def _connect(self) -> None:
        client = self._client
        if client is None or self._stop_event.is_set():
            return
        try:
            client.connect(self.url, wait_timeout=self.connect_timeout, retry=True)
        except Exception as exc:
            logger.warning("[live] socket connect failed: %s", exc)
            self.check_health()

    def _health_loop(self) -> None:
        while not self._stop_event.is_set():
            if self.session_alive is not None and not self.session_alive():
                logger.info("[live] browser session ended; stopping subscription")
                self.stop()
                break
            self.check_health()
            if self._stop_event.wait(self.health_interval):
                break

    def check_health(self) -> bool:
        if self._stop_event.is_set():
            return self.connected
        try:
            ok = bool(self.health_check())
        except Exception:
            logger.warning("[live] health check raised:\n%s", traceback.format_exc())
            ok = False
        self._set_connected(ok)
        return ok

    def _set_connected(self, value: bool) -> None:
        changed = value != self.connected
        self.connected = value
        if changed:
            logger.info("[live] connectivity: %s", "online" if value else "offline")
        if self.on_status:
            try:
                self.on_status(value)
            except Exception:
                logger.warning("[live] on_status failed:\n%s", traceback.format_exc())

    def _on_connect(self) -> None:
        if self._stop_event.is_set():
            return
        logger.info("[live] socket connected")
        self._set_connected(True)

    def _on_connect_error(self, data=None) -> None:
        logger.warning("[live] socket connect error: %s", data)
        self.check_health()

    def _on_disconnect(self, *args) -> None:
        logger.info("[live] socket disconnected")
        self.check_health()

    def _on_new_record(self, data=None) -> None:
        if self._stop_event.is_set():
            return
        event = NewRecordEvent.model_validate(data if isinstance(data, dict) else {})
        logger.info("[live] new record event: %s", event.message)
        try:
            self.on_new_record(event)
        except Exception:
            logger.warning("[live] on_new_record failed:\n%s", traceback.format_exc())
