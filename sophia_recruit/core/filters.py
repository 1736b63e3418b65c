"""
Dashboard filtering and search
"""
from typing import Iterable, List

from sophia_recruit.models import Applicant, ALL_STATUSES


def matches_status(applicant: Applicant, status_filter: str) -> bool:
    return status_filter == ALL_STATUSES or applicant.status.value == status_filter


def matches_search(applicant: Applicant, search_term: str) -> bool:
    haystack = (applicant.first_name + ' ' + applicant.last_name + applicant.position).lower()
    return search_term.lower() in haystack


def filter_applicants(
    applicants: Iterable[Applicant],
    status_filter: str = ALL_STATUSES,
    search_term: str = "",
) -> List[Applicant]:
    """
    Filter applicants by exact status (or ALL) and a case-insensitive
    substring of "<first> <last><position>". Both predicates must hold.
    """
    return [
        applicant for applicant in applicants
        if matches_status(applicant, status_filter) and matches_search(applicant, search_term)
    ]
