# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Derived view logic: pure computation, no side effects.
Filtering, role options, pagination and the listing labels.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from user_directory.models.domain import UserRecord

ALL_ROLES = "all"


@dataclass(frozen=True)
class DirectoryView:
    filtered: List[UserRecord]
    roles: List[str]
    page: List[UserRecord]
    page_count: int
    page_index: int


def matches_search(record: UserRecord, term: str) -> bool:
    probe = term.lower()
    return probe in record.name.lower() or probe in record.email.lower()


def matches_role(record: UserRecord, role_filter: str) -> bool:
    return role_filter == ALL_ROLES or record.role == role_filter


def filter_records(records: Sequence[UserRecord], term: str,
                   role_filter: str) -> List[UserRecord]:
    return [r for r in records if matches_search(r, term) and matches_role(r, role_filter)]


def unique_roles(records: Sequence[UserRecord]) -> List[str]:
    """Sentinel first, then each non-empty role once in first-seen order."""
    roles = [ALL_ROLES]
    seen = set()
    for record in records:
        if record.role and record.role not in seen:
            seen.add(record.role)
            roles.append(record.role)
    return roles


def page_count(total: int, page_size: int) -> int:
    # An empty filtered set has zero pages.
    return math.ceil(total / page_size)


def clamp_page(page_index: int, pages: int) -> int:
    return min(max(page_index, 1), max(pages, 1))


def page_slice(items: Sequence[UserRecord], page_index: int,
               page_size: int) -> List[UserRecord]:
    start = (page_index - 1) * page_size
    return list(items[start:start + page_size])


def compute_view(records: Sequence[UserRecord], term: str, role_filter: str,
                 page_index: int, page_size: int) -> DirectoryView:
    """
    Return the filtered set, role options and the requested page.
    The page index is used as given; callers clamp it when navigating.
    """
    filtered = filter_records(records, term, role_filter)
    return DirectoryView(
        filtered=filtered,
        roles=unique_roles(records),
        page=page_slice(filtered, page_index, page_size),
        page_count=page_count(len(filtered), page_size),
        page_index=page_index,
    )


# ── Labels ──

def role_label(role: str) -> str:
    return "All Roles" if role == ALL_ROLES else role


def result_count_label(count: int) -> str:
    return f"{count} result{'' if count == 1 else 's'}"


def search_summary(term: str, count: int) -> Optional[str]:
    if not term:
        return None
    if count == 0:
        return "❌ No users found"
    return f"✅ {count} user{'' if count == 1 else 's'} found"


def empty_state(total: int, filtered: int) -> Optional[str]:
    if filtered:
        return None
    if total == 0:
        return "No users found. Add one to get started."
    return "No users match your search criteria."


@dataclass
class ViewState:
    """Search term, role filter and page index; the page resets on filter changes."""
    page_size: int
    search_term: str = ""
    role_filter: str = ALL_ROLES
    page_index: int = 1
    _records: List[UserRecord] = field(default_factory=list, repr=False)

    def set_records(self, records: Sequence[UserRecord]) -> None:
        self._records = list(records)

    def set_search(self, term: str) -> None:
        if term != self.search_term:
            self.search_term = term
            self.page_index = 1

    def set_role_filter(self, role: str) -> None:
        if role != self.role_filter:
            self.role_filter = role
            self.page_index = 1

    def go_to(self, page_index: int) -> int:
        filtered = filter_records(self._records, self.search_term, self.role_filter)
        self.page_index = clamp_page(page_index, page_count(len(filtered), self.page_size))
        return self.page_index

    def compute(self) -> DirectoryView:
        return compute_view(self._records, self.search_term, self.role_filter,
                            self.page_index, self.page_size)
