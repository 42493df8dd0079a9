from unittest.mock import MagicMock

import pytest
from conftest import make_record

from dashboard_state import DashboardStore
from errors import ApiError, AuthError
from schemas import StatsResponse


def _api(records):
    api = MagicMock()
    api.list_records.return_value = records
    api.record_stats.return_value = StatsResponse(count=len(records))
    return api


def test_refetch_all_replaces_records():
    store = DashboardStore(records=[make_record("old")])
    store.refetch_all(_api([make_record("a"), make_record("b")]))
    assert [r.id for r in store.records] == ["a", "b"]
    assert store.stats.count == 2
    assert store.loaded


def test_stats_failure_keeps_records():
    api = _api([make_record("a")])
    api.record_stats.side_effect = ApiError("down", status=500)
    store = DashboardStore()
    store.refetch_all(api)
    assert [r.id for r in store.records] == ["a"]


def test_stats_auth_error_propagates():
    api = _api([make_record("a")])
    api.record_stats.side_effect = AuthError("expired", status=401)
    with pytest.raises(AuthError):
        DashboardStore().refetch_all(api)


def test_list_failure_leaves_state_untouched():
    api = MagicMock()
    api.list_records.side_effect = ApiError("down")
    store = DashboardStore(records=[make_record("keep")])
    with pytest.raises(ApiError):
        store.refetch_all(api)
    assert [r.id for r in store.records] == ["keep"]
    assert not store.loaded


def test_patch_local_merges_and_replaces_list():
    before = [make_record("a", name="Ann", role="Eng", email="ann@x.io"), make_record("b")]
    store = DashboardStore(records=before)

    patched = store.patch_local("a", {"name": "Ann Lee", "links": {"github": "https://github.com/ann"}})

    assert patched.attachment_data.name == "Ann Lee"
    assert patched.attachment_data.email == "ann@x.io"
    assert patched.attachment_data.links.github == "https://github.com/ann"
    assert store.records is not before
    assert before[0].attachment_data.name == "Ann"
    assert store.find("a") is patched


def test_patch_local_unknown_id():
    store = DashboardStore(records=[make_record("a")])
    assert store.patch_local("zzz", {"name": "x"}) is None


def test_clear():
    store = DashboardStore(records=[make_record("a")], loaded=True)
    store.clear()
    assert store.records == []
    assert not store.loaded
