"""Pydantic models"""
from datetime import date, datetime, timezone
from enum import Enum
from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List


class ApplicationStatus(str, Enum):
    NEW = "NEW"
    REVIEWING = "REVIEWING"
    INTERVIEWING = "INTERVIEWING"
    HIRED = "HIRED"
    REJECTED = "REJECTED"


ALL_STATUSES = "ALL"

STATUS_LABELS = {
    "NEW": "Nouveau",
    "REVIEWING": "En revue",
    "INTERVIEWING": "Entretien",
    "HIRED": "Embauché",
    "REJECTED": "Rejeté",
    "ALL": "Tous les statuts",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Applicant(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    position: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: str = ""
    cv_file_name: Optional[str] = None
    cv_url: Optional[str] = None
    submitted_at: datetime = Field(default_factory=_utcnow)
    status: ApplicationStatus = ApplicationStatus.NEW


class ApplicantSubmission(BaseModel):
    """Fields collected by the public form"""
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=10, max_length=20)
    position: str = Field(..., min_length=1, max_length=100)
    start_date: date
    end_date: date
    notes: str = Field("", max_length=5000)


class FlyerConfig(BaseModel):
    headline: str = "NOUS RECRUTONS"
    subtext: str = "Rejoignez notre équipe passionnée. Scannez pour postuler !"
    accent_color: str = "#145A8B"
    background_image: Optional[str] = "https://picsum.photos/800/800"


class FlyerBackgroundRequest(BaseModel):
    prompt: str = "Un intérieur de restaurant italien confortable et chaleureux avec des lumières bokeh"
    config: FlyerConfig = Field(default_factory=FlyerConfig)


class ChartData(BaseModel):
    name: str
    value: int


class StatusUpdate(BaseModel):
    status: ApplicationStatus


class PositionUpdate(BaseModel):
    position: str = Field(..., min_length=1, max_length=100)


class AdminLogin(BaseModel):
    password: str


class MutationResponse(BaseModel):
    applicant: Applicant
    synced: bool


class ApplicantListResponse(BaseModel):
    applicants: List[Applicant]
    total: int
    status_filter: str
    search: str
    unsynced: List[str]


class StatsResponse(BaseModel):
    total: int
    hired: int
    chart: List[ChartData]


class QrCodeResponse(BaseModel):
    target_url: str
    qr_code_url: str


class HealthResponse(BaseModel):
    status: str
    app: str
    version: str
    database_connected: bool
