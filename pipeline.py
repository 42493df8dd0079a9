"""Résumé list derivation: eligibility -> recency -> search -> role -> page.

Every function here is pure. Inputs are never mutated and the same input
always yields the same output, so the view can be recomputed from scratch on
each Streamlit rerun.
"""
import datetime as dt
import math
from collections import Counter
from dataclasses import dataclass, field, replace

from records import is_eligible, resolve_timestamp, resolved_role
from schemas import ResumeRecord

ALL_ROLES = "all"
DEFAULT_PAGE_SIZE = 6


@dataclass(frozen=True)
class ViewFilters:
    search_query: str = ""
    selected_role: str = ALL_ROLES
    current_page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def with_search(self, query: str) -> "ViewFilters":
        if query == self.search_query:
            return self
        return replace(self, search_query=query, current_page=1)

    def with_role(self, role: str) -> "ViewFilters":
        if role == self.selected_role:
            return self
        return replace(self, selected_role=role, current_page=1)

    def with_page(self, page: int) -> "ViewFilters":
        return replace(self, current_page=page)


@dataclass(frozen=True)
class DerivedView:
    resumes: list[ResumeRecord] = field(default_factory=list)
    filtered: list[ResumeRecord] = field(default_factory=list)
    page_items: list[ResumeRecord] = field(default_factory=list)
    page_count: int = 0


def eligible_records(records: list[ResumeRecord]) -> list[ResumeRecord]:
    return [r for r in records if is_eligible(r)]


def sort_by_recency(records: list[ResumeRecord], now: dt.datetime | None = None) -> list[ResumeRecord]:
    # One shared "now" keeps every timestamp-less record tied, so the
    # stable sort leaves them in input order.
    if now is None:
        now = dt.datetime.now(dt.timezone.utc)
    return sorted(records, key=lambda r: resolve_timestamp(r, now=now), reverse=True)


def resumes_with_attachments(records: list[ResumeRecord], now: dt.datetime | None = None) -> list[ResumeRecord]:
    return sort_by_recency(eligible_records(records), now=now)


def search_by_name(records: list[ResumeRecord], query: str) -> list[ResumeRecord]:
    needle = (query or "").strip().lower()
    if not needle:
        return records
    return [
        r for r in records
        if needle in ((r.attachment_data.name if r.attachment_data else None) or "").lower()
    ]


def filter_by_role(records: list[ResumeRecord], role: str) -> list[ResumeRecord]:
    if role == ALL_ROLES:
        return records
    return [r for r in records if resolved_role(r) == role]


def paginate(records: list[ResumeRecord], page: int, page_size: int = DEFAULT_PAGE_SIZE) -> list[ResumeRecord]:
    if page_size <= 0 or page < 1:
        return []
    start = (page - 1) * page_size
    return records[start:start + page_size]


def page_count(total: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    if total <= 0 or page_size <= 0:
        return 0
    return math.ceil(total / page_size)


def unique_roles(resumes: list[ResumeRecord]) -> list[tuple[str, int]]:
    """Sorted distinct roles with counts, for the role filter."""
    counts = Counter(resolved_role(r) for r in resumes)
    return [(role, counts[role]) for role in sorted(counts)]


def role_filter_options(resumes: list[ResumeRecord]) -> dict[str, str]:
    options = {ALL_ROLES: f"All Roles ({len(resumes)})"}
    for role, count in unique_roles(resumes):
        options[role] = f"{role} ({count})"
    return options


def derive_view(records: list[ResumeRecord], filters: ViewFilters, now: dt.datetime | None = None) -> DerivedView:
    resumes = resumes_with_attachments(records, now=now)
    filtered = filter_by_role(search_by_name(resumes, filters.search_query), filters.selected_role)
    return DerivedView(
        resumes=resumes,
        filtered=filtered,
        page_items=paginate(filtered, filters.current_page, filters.page_size),
        page_count=page_count(len(filtered), filters.page_size),
    )
