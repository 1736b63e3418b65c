"""
API route handlers - public application form and admin dashboard
"""
from datetime import datetime, timezone
from fastapi import APIRouter, File, UploadFile, Form, HTTPException, Request, Response
from fastapi.responses import HTMLResponse
from pydantic import ValidationError
import logging
from typing import Optional

from sophia_recruit.models import (
    Applicant, ApplicantSubmission, ApplicationStatus, ALL_STATUSES,
    AdminLogin, ApplicantListResponse, FlyerBackgroundRequest, FlyerConfig,
    HealthResponse, MutationResponse, PositionUpdate, QrCodeResponse,
    StatsResponse, StatusUpdate,
)
from sophia_recruit.config import settings
from sophia_recruit.database import db
from sophia_recruit.exceptions import ExportError
from sophia_recruit.middleware import check_admin_password
from sophia_recruit.api.pages import render_form
from sophia_recruit.core.assistant import analyze_applicant, generate_flyer_background
from sophia_recruit.core.board import ApplicantBoard
from sophia_recruit.core.export import render_flyer, render_qr_panel
from sophia_recruit.core.qr import application_url, dashboard_qr_code_url
from sophia_recruit.core.stats import dashboard_stats
from sophia_recruit.utils.validators import clean_text, validate_cv_file, validate_file_size, validate_mobile
from sophia_recruit.utils.helpers import generate_uuid, attachment_headers

logger = logging.getLogger(__name__)
router = APIRouter()

board = ApplicantBoard(db)

SUBMISSION_FAILED = "Échec de l'envoi de la candidature. Vérifiez votre connexion ou réessayez plus tard."
EXPORT_FAILED = "Impossible de télécharger l'image."

@router.get("/", response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    return HealthResponse(
        status="active",
        app=settings.APP_NAME,
        version=settings.VERSION,
        database_connected=db.is_connected
    )

@router.get("/health")
async def health():
    """Fast health check without heavy operations"""
    return {"status": "ok"}

# ---------------------------------------------------------------------------
# Public form
# ---------------------------------------------------------------------------

@router.get("/apply", response_class=HTMLResponse)
async def application_form():
    return render_form(
        settings.APP_NAME,
        settings.FORM_POSITIONS,
        settings.ALLOWED_CV_EXTENSIONS,
        settings.MAX_CV_SIZE_MB,
    )

@router.post("/api/applicants", response_model=Applicant, status_code=201)
async def submit_application(
    first_name: str = Form(...),
    last_name: str = Form(...),
    email: str = Form(...),
    phone: str = Form(...),
    position: str = Form(...),
    start_date: str = Form(...),
    end_date: str = Form(...),
    notes: str = Form(""),
    resume: Optional[UploadFile] = File(None),
):
    """Submit an application, with an optional resume"""
    try:
        submission = ApplicantSubmission(
            first_name=clean_text(first_name, 100),
            last_name=clean_text(last_name, 100),
            email=email.strip().lower(),
            phone=clean_text(phone, 20),
            position=clean_text(position, 100),
            start_date=start_date,
            end_date=end_date,
            notes=clean_text(notes, 5000),
        )
    except ValidationError as e:
        fields = sorted({str(err['loc'][0]) for err in e.errors() if err.get('loc')})
        raise HTTPException(status_code=400, detail=f"Invalid fields: {', '.join(fields)}")

    if not validate_mobile(submission.phone):
        raise HTTPException(status_code=400, detail="Invalid phone number")

    has_file = resume is not None and bool(resume.filename)
    if has_file:
        is_valid, msg = validate_cv_file(resume.filename, settings.ALLOWED_CV_EXTENSIONS)
        if not is_valid:
            raise HTTPException(status_code=400, detail=msg)
        if resume.size and not validate_file_size(resume.size, settings.MAX_CV_SIZE_MB):
            raise HTTPException(status_code=400, detail=f"File too large. Max size: {settings.MAX_CV_SIZE_MB}MB")

    try:
        cv_url = None
        if has_file:
            cv_url = db.upload_cv(resume.file, resume.filename, resume.content_type)
            if cv_url is None:
                raise RuntimeError("Resume could not be uploaded nor embedded")

        applicant = Applicant(
            id=generate_uuid(),
            cv_file_name=resume.filename if has_file else None,
            cv_url=cv_url,
            submitted_at=datetime.now(timezone.utc),
            status=ApplicationStatus.NEW,
            **submission.model_dump(),
        )
        db.save_applicant(applicant)
        board.add(applicant)
        logger.info(f"New application {applicant.id} for {applicant.position}")
        return applicant

    except Exception as e:
        logger.error(f"Submission error: {e}")
        raise HTTPException(status_code=500, detail=SUBMISSION_FAILED)

# ---------------------------------------------------------------------------
# Admin dashboard
# ---------------------------------------------------------------------------

@router.post("/api/admin/login")
async def admin_login(payload: AdminLogin):
    """Check the admin password (plaintext gate, not real authentication)"""
    if not check_admin_password(payload.password):
        raise HTTPException(status_code=401, detail="Mot de passe incorrect")
    return {"authenticated": True}

@router.get("/api/admin/applicants", response_model=ApplicantListResponse)
async def list_applicants(status: str = ALL_STATUSES, search: str = "", refresh: bool = True):
    """List applicants, filtered by status and a name/position search"""
    if status != ALL_STATUSES and status not in ApplicationStatus.__members__:
        raise HTTPException(status_code=400, detail=f"Unknown status: {status}")

    if refresh:
        board.refresh()
    else:
        board.ensure_loaded()

    visible = board.visible(status, search)
    return ApplicantListResponse(
        applicants=visible,
        total=len(visible),
        status_filter=status,
        search=search,
        unsynced=sorted(board.unsynced),
    )

@router.get("/api/admin/applicants/{applicant_id}", response_model=Applicant)
async def get_applicant(applicant_id: str):
    applicant = board.select(applicant_id)
    if applicant is None:
        raise HTTPException(status_code=404, detail="Applicant not found")
    return applicant

@router.get("/api/admin/applicants/{applicant_id}/analysis")
async def get_applicant_analysis(applicant_id: str):
    applicant = board.find(applicant_id)
    if applicant is None:
        raise HTTPException(status_code=404, detail="Applicant not found")
    return {"analysis": analyze_applicant(applicant)}

@router.patch("/api/admin/applicants/{applicant_id}/status", response_model=MutationResponse)
async def change_status(applicant_id: str, payload: StatusUpdate):
    updated = board.change_status(applicant_id, payload.status)
    if updated is None:
        raise HTTPException(status_code=404, detail="Applicant not found")
    return MutationResponse(applicant=updated, synced=board.is_synced(applicant_id))

@router.patch("/api/admin/applicants/{applicant_id}/position", response_model=MutationResponse)
async def change_position(applicant_id: str, payload: PositionUpdate):
    updated = board.change_position(applicant_id, payload.position.strip())
    if updated is None:
        raise HTTPException(status_code=404, detail="Applicant not found")
    return MutationResponse(applicant=updated, synced=board.is_synced(applicant_id))

@router.delete("/api/admin/applicants/{applicant_id}")
async def delete_applicant(applicant_id: str):
    if board.find(applicant_id) is None:
        raise HTTPException(status_code=404, detail="Applicant not found")
    removed = board.delete(applicant_id)
    return {"deleted": applicant_id, "synced": removed}

@router.get("/api/admin/stats", response_model=StatsResponse)
async def get_stats():
    """Applicant counts per status"""
    board.refresh()
    return StatsResponse(**dashboard_stats(board.applicants))

@router.get("/api/admin/positions")
async def get_positions():
    return {"positions": settings.DASHBOARD_POSITIONS}

def _target_url(request: Request, target: Optional[str]) -> str:
    return target.strip() if target and target.strip() else application_url(str(request.base_url))

@router.get("/api/admin/qrcode", response_model=QrCodeResponse)
async def get_qrcode(request: Request, target: Optional[str] = None):
    """QR code pointing at the public form"""
    target_url = _target_url(request, target)
    return QrCodeResponse(target_url=target_url, qr_code_url=dashboard_qr_code_url(target_url))

@router.get("/api/admin/qrcode/download")
def download_qrcode(request: Request, target: Optional[str] = None):
    try:
        png = render_qr_panel(_target_url(request, target))
    except ExportError:
        raise HTTPException(status_code=502, detail=EXPORT_FAILED)
    return Response(content=png, media_type="image/png",
                    headers=attachment_headers("sofia-recrutement-qrcode.png"))

@router.post("/api/admin/flyer/download")
def download_flyer(request: Request, config: FlyerConfig, target: Optional[str] = None):
    try:
        png = render_flyer(config, _target_url(request, target))
    except ExportError:
        raise HTTPException(status_code=502, detail=EXPORT_FAILED)
    return Response(content=png, media_type="image/png",
                    headers=attachment_headers("affiche-recrutement.png"))

@router.post("/api/admin/flyer/background", response_model=FlyerConfig)
async def flyer_background(payload: FlyerBackgroundRequest):
    """Generate a flyer background; keeps the current one when nothing comes back"""
    background = generate_flyer_background(payload.prompt)
    if background:
        return payload.config.model_copy(update={"background_image": background})
    return payload.config
