import sys
from pathlib import Path

import pytest

# Set up paths
root_dir = str(Path(__file__).parent.parent)
if root_dir not in sys.path:
    sys.path.insert(0, root_dir)

from schemas import ResumeRecord  # noqa: E402
from storage import KeyValueStore  # noqa: E402


def make_record(record_id, name="Alice", role=None, received_at=None, email=None, has_attachment=True, **extra):
    """Build a server-shaped record; ``name=None`` and ``email=None`` make it ineligible."""
    data = {"name": name, "email": email}
    if role is not None:
        data["role"] = role
    raw = {"_id": record_id, "hasAttachment": has_attachment, "attachmentData": data, "receivedAt": received_at}
    raw.update(extra)
    return ResumeRecord.model_validate(raw)


@pytest.fixture
def kv_store(tmp_path):
    return KeyValueStore(str(tmp_path / "storage.json"))
