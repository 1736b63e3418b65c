"""
Database schemas
"""
from typing import TypedDict, Optional


class ApplicantRow(TypedDict, total=False):
    """Applicants table schema (snake_case columns)"""
    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    position: str
    start_date: Optional[str]
    end_date: Optional[str]
    notes: Optional[str]
    cv_file_name: Optional[str]
    cv_file_path: Optional[str]
    status: str
    created_at: str
