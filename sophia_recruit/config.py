"""Configuration"""
import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    APP_NAME = "Recrutement SOPHIA - Saison 2026"
    VERSION = "1.0.0"
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
    PORT = int(os.getenv("PORT", 8000))

    SUPABASE_URL = os.getenv("SUPABASE_URL", "")
    SUPABASE_KEY = os.getenv("SUPABASE_KEY", "")

    APPLICANTS_TABLE = os.getenv("APPLICANTS_TABLE", "applicants")
    CV_BUCKET = os.getenv("CV_BUCKET", "cv")
    # "timestamp" (epoch ms + random 0..999) or "uuid"
    STORAGE_KEY_STRATEGY = os.getenv("STORAGE_KEY_STRATEGY", "timestamp").lower()

    MAX_CV_SIZE_MB = int(os.getenv("MAX_CV_SIZE_MB", 10))
    ALLOWED_CV_EXTENSIONS = [
        ext.strip().lower()
        for ext in os.getenv("ALLOWED_CV_EXTENSIONS", ".pdf,.doc,.docx,.jpg,.png").split(",")
        if ext.strip()
    ]

    FORM_POSITIONS = ["Serveur", "Cuisinier", "Barman", "Plongeur"]
    DASHBOARD_POSITIONS = ["Serveur", "Cuisinier", "Barman", "Hôte", "Manager", "Plongeur"]

    # Plaintext admin gate. NOT a security boundary.
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "Crokette64")

    PUBLIC_FORM_URL = os.getenv("PUBLIC_FORM_URL", "")
    QR_API_URL = os.getenv("QR_API_URL", "https://api.qrserver.com/v1/create-qr-code/")
    EXPORT_TIMEOUT_SECONDS = int(os.getenv("EXPORT_TIMEOUT_SECONDS", 15))

    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
        if origin.strip()
    ]
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    def validate(self):
        if not self.SUPABASE_URL or not self.SUPABASE_KEY:
            raise ValueError("SUPABASE_URL and SUPABASE_KEY must be set")
        if self.STORAGE_KEY_STRATEGY not in ("timestamp", "uuid"):
            raise ValueError("STORAGE_KEY_STRATEGY must be 'timestamp' or 'uuid'")
        return True

settings = Settings()
