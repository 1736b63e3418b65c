"""Database operations"""
import base64
import logging
import mimetypes
from datetime import datetime, timezone
from typing import Optional, List, BinaryIO
from supabase import create_client, Client
from dateutil.parser import isoparse
from sophia_recruit.config import settings
from sophia_recruit.core.storage_keys import make_storage_key
from sophia_recruit.exceptions import DatabaseNotConnected
from sophia_recruit.models import Applicant, ApplicationStatus
from sophia_recruit.schemas import ApplicantRow

logger = logging.getLogger(__name__)

TABLE_MISSING_CODE = '42P01'


def row_to_applicant(row: ApplicantRow) -> Applicant:
    """Map a storage row onto the application's field names"""
    created_at = row.get('created_at')
    if isinstance(created_at, str):
        submitted_at = isoparse(created_at)
    else:
        submitted_at = created_at or datetime.now(timezone.utc)

    return Applicant(
        id=row['id'],
        first_name=row.get('first_name') or '',
        last_name=row.get('last_name') or '',
        email=row.get('email') or '',
        phone=row.get('phone') or '',
        position=row.get('position') or '',
        start_date=row.get('start_date') or None,
        end_date=row.get('end_date') or None,
        notes=row.get('notes') or '',
        cv_file_name=row.get('cv_file_name'),
        cv_url=row.get('cv_file_path'),
        submitted_at=submitted_at,
        status=row.get('status') or ApplicationStatus.NEW,
    )


def applicant_to_row(applicant: Applicant) -> ApplicantRow:
    """Map an applicant onto insert columns. Status is always NEW on insert."""
    return {
        'id': applicant.id,
        'first_name': applicant.first_name,
        'last_name': applicant.last_name,
        'email': applicant.email,
        'phone': applicant.phone,
        'position': applicant.position,
        'start_date': applicant.start_date.isoformat() if applicant.start_date else None,
        'end_date': applicant.end_date.isoformat() if applicant.end_date else None,
        'notes': applicant.notes,
        'cv_file_name': applicant.cv_file_name,
        'cv_file_path': applicant.cv_url,
        'status': ApplicationStatus.NEW.value,
    }


def to_data_uri(content: bytes, filename: str, content_type: Optional[str] = None) -> str:
    mime = content_type or mimetypes.guess_type(filename)[0] or 'application/octet-stream'
    payload = base64.b64encode(content).decode('ascii')
    return f"data:{mime};base64,{payload}"


class Database:
    def __init__(self, client: Optional[Client] = None):
        self.client: Optional[Client] = client
        if self.client is None:
            self.connect()

    def connect(self):
        try:
            if settings.SUPABASE_URL and settings.SUPABASE_KEY:
                self.client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
                self.client.table(settings.APPLICANTS_TABLE).select("id", count='exact').limit(1).execute()
                logger.info("✅ Database connected")
            else:
                logger.error("❌ Supabase credentials not configured")
        except Exception as e:
            logger.error(f"❌ Database connection failed: {e}")
            self.client = None

    @property
    def is_connected(self):
        return self.client is not None

    def _require_client(self) -> Client:
        if self.client is None:
            raise DatabaseNotConnected("Supabase client is not configured")
        return self.client

    def upload_cv(self, fileobj: BinaryIO, filename: str, content_type: Optional[str] = None) -> Optional[str]:
        """
        Store a resume and return a reference to it.

        Tries the storage bucket first and returns its public URL. When the
        bucket rejects the upload for any reason the file is embedded as a
        base64 data URI instead, which then lands in the cv_file_path column.

        Returns:
            Public URL, data URI, or None when the file could not be read
            for the fallback either.
        """
        key = make_storage_key(filename, settings.STORAGE_KEY_STRATEGY)

        try:
            client = self._require_client()
            fileobj.seek(0)
            content = fileobj.read()
            options = {'content-type': content_type} if content_type else None
            bucket = client.storage.from_(settings.CV_BUCKET)
            bucket.upload(key, content, options)
            return bucket.get_public_url(key)
        except Exception as e:
            logger.info(
                f"Storage unavailable ({e}); storing '{filename}' inline as a data URI"
            )

        try:
            fileobj.seek(0)
            content = fileobj.read()
            return to_data_uri(content, filename, content_type)
        except Exception as e:
            logger.error(f"❌ Could not read resume '{filename}' for inline storage: {e}")
            return None

    def get_applicants(self) -> List[Applicant]:
        try:
            client = self._require_client()
            response = client.table(settings.APPLICANTS_TABLE).select('*').order('created_at', desc=True).execute()
        except Exception as e:
            logger.error(f"Failed to fetch applicants: {e}")
            return []

        applicants = []
        for row in response.data or []:
            try:
                applicants.append(row_to_applicant(row))
            except ValueError as e:
                logger.warning(f"Skipping malformed applicant row {row.get('id')}: {e}")
        return applicants

    def save_applicant(self, applicant: Applicant) -> None:
        try:
            client = self._require_client()
            client.table(settings.APPLICANTS_TABLE).insert([applicant_to_row(applicant)]).execute()
        except Exception as e:
            logger.error(f"Failed to save applicant {applicant.id}: {e}")
            if getattr(e, 'code', None) == TABLE_MISSING_CODE:
                logger.error(
                    f"Table '{settings.APPLICANTS_TABLE}' does not exist. Run the table creation SQL script."
                )
            raise

    def update_applicant(self, applicant: Applicant) -> bool:
        """Write status and position only. Failures are logged, not raised."""
        try:
            client = self._require_client()
            client.table(settings.APPLICANTS_TABLE).update({
                'status': applicant.status.value,
                'position': applicant.position,
            }).eq('id', applicant.id).execute()
            return True
        except Exception as e:
            logger.error(f"Failed to update applicant {applicant.id}: {e}")
            return False

    def delete_applicant(self, applicant_id: str) -> bool:
        try:
            client = self._require_client()
            client.table(settings.APPLICANTS_TABLE).delete().eq('id', applicant_id).execute()
            return True
        except Exception as e:
            logger.error(f"Failed to delete applicant {applicant_id}: {e}")
            return False

db = Database()
