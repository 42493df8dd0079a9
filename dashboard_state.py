import logging
from dataclasses import dataclass, field

from errors import AuthError, DashboardError
from schemas import AttachmentData, ResumeRecord, StatsResponse

logger = logging.getLogger(__name__)


@dataclass
class DashboardStore:
    """The one owner of the in-memory record list.

    Two update strategies with different consistency:
    ``refetch_all`` replaces everything with a fresh server read, and
    ``patch_local`` merges an edit that the server already accepted.
    """

    records: list[ResumeRecord] = field(default_factory=list)
    stats: StatsResponse = field(default_factory=StatsResponse)
    loaded: bool = False

    def refetch_all(self, api) -> list[ResumeRecord]:
        records = api.list_records()
        self.records = records
        self.loaded = True
        try:
            self.stats = api.record_stats()
        except AuthError:
            raise
        except DashboardError as exc:
            logger.warning("[store] stats fetch failed: %s", exc)
        return self.records

    def patch_local(self, record_id: str, update: dict) -> ResumeRecord | None:
        for idx, record in enumerate(self.records):
            if record.id != record_id:
                continue
            patched = record.model_copy(update={"attachment_data": _merge_attachment(record.attachment_data, update)})
            self.records = self.records[:idx] + [patched] + self.records[idx + 1:]
            return patched
        return None

    def find(self, record_id: str) -> ResumeRecord | None:
        for record in self.records:
            if record.id == record_id:
                return record
        return None

    def clear(self) -> None:
        self.records = []
        self.stats = StatsResponse()
        self.loaded = False


def _merge_attachment(current: AttachmentData | None, update: dict) -> AttachmentData:
    base = current.model_dump(by_alias=True) if current else {}
    base.update(update)
    return AttachmentData.model_validate(base)
