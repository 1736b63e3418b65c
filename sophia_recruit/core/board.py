"""
In-memory applicant board backing the admin dashboard
"""
import logging
from typing import Dict, List, Optional, Set

from sophia_recruit.core.filters import filter_applicants
from sophia_recruit.database import Database
from sophia_recruit.models import Applicant, ApplicationStatus, ALL_STATUSES

logger = logging.getLogger(__name__)


class ApplicantBoard:
    """
    Holds the dashboard's applicant list.

    Status and position edits are applied locally first and then written to
    Supabase. A failed write keeps the local change and marks the applicant
    as unsynced until a later write for it succeeds. Deletions are always
    applied locally; a delete Supabase did not confirm stays hidden across
    reloads. Reloads keep the local copy of unsynced applicants.
    """

    def __init__(self, database: Database):
        self.database = database
        self.applicants: List[Applicant] = []
        self.selected: Optional[Applicant] = None
        self.unsynced: Set[str] = set()
        self.pending_deletes: Set[str] = set()
        self.loaded = False

    def refresh(self) -> List[Applicant]:
        local: Dict[str, Applicant] = {a.id: a for a in self.applicants if a.id in self.unsynced}
        remote = self.database.get_applicants()
        remote_ids = {a.id for a in remote}

        self.pending_deletes &= remote_ids
        self.applicants = [
            local.get(a.id, a) for a in remote
            if a.id not in self.pending_deletes
        ]
        self.unsynced &= {a.id for a in self.applicants}
        self.loaded = True
        if self.selected is not None:
            self.selected = self.get(self.selected.id)
        return self.applicants

    def ensure_loaded(self):
        if not self.loaded:
            self.refresh()

    def add(self, applicant: Applicant):
        """Put a freshly stored applicant at the head of the list"""
        if self.get(applicant.id) is None:
            self.applicants.insert(0, applicant)

    def get(self, applicant_id: str) -> Optional[Applicant]:
        return next((a for a in self.applicants if a.id == applicant_id), None)

    def find(self, applicant_id: str) -> Optional[Applicant]:
        """Look an applicant up, reloading once when it is not on the board"""
        applicant = self.get(applicant_id)
        if applicant is None:
            self.refresh()
            applicant = self.get(applicant_id)
        return applicant

    def select(self, applicant_id: str) -> Optional[Applicant]:
        self.selected = self.find(applicant_id)
        return self.selected

    def visible(self, status_filter: str = ALL_STATUSES, search_term: str = "") -> List[Applicant]:
        return filter_applicants(self.applicants, status_filter, search_term)

    def _replace(self, updated: Applicant) -> bool:
        self.applicants = [updated if a.id == updated.id else a for a in self.applicants]
        if self.selected is not None and self.selected.id == updated.id:
            self.selected = updated

        synced = self.database.update_applicant(updated)
        if synced:
            self.unsynced.discard(updated.id)
        else:
            logger.warning(f"Applicant {updated.id} changed locally but not in Supabase")
            self.unsynced.add(updated.id)
        return synced

    def change_status(self, applicant_id: str, status: ApplicationStatus) -> Optional[Applicant]:
        current = self.find(applicant_id)
        if current is None:
            return None
        updated = current.model_copy(update={'status': status})
        self._replace(updated)
        return updated

    def change_position(self, applicant_id: str, position: str) -> Optional[Applicant]:
        current = self.find(applicant_id)
        if current is None:
            return None
        updated = current.model_copy(update={'position': position})
        self._replace(updated)
        return updated

    def is_synced(self, applicant_id: str) -> bool:
        return applicant_id not in self.unsynced

    def delete(self, applicant_id: str) -> bool:
        """Remove an applicant; returns whether Supabase confirmed the delete"""
        removed = self.database.delete_applicant(applicant_id)
        if not removed:
            self.pending_deletes.add(applicant_id)
        self.applicants = [a for a in self.applicants if a.id != applicant_id]
        self.unsynced.discard(applicant_id)
        if self.selected is not None and self.selected.id == applicant_id:
            self.selected = None
        return removed
