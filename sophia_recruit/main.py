"""Main FastAPI application"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sophia_recruit.config import settings
from sophia_recruit.api.routes import router
from sophia_recruit.database import db
from sophia_recruit.middleware import AdminGateMiddleware

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="Recruitment intake form and applicant dashboard"
)

app.add_middleware(AdminGateMiddleware)

# CORS added last so it wraps the admin gate and answers preflights first
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"]
)

# Include routes
app.include_router(router)

@app.on_event("startup")
async def startup():
    logger.info(f"🚀 Starting {settings.APP_NAME} v{settings.VERSION}")
    try:
        settings.validate()
        logger.info("✅ Settings validated")
    except Exception as e:
        logger.error(f"❌ Settings validation failed: {e}")

    if db.is_connected:
        logger.info("✅ Database connected")
    else:
        logger.error("❌ Database connection failed, resumes and applicants will not be stored")

    logger.warning("⚠️ Admin dashboard uses a plaintext password gate, not real authentication")
    logger.info(f"🌐 Environment: {settings.ENVIRONMENT}")
    logger.info(f"🗂️ Storage key strategy: {settings.STORAGE_KEY_STRATEGY}")
    logger.info("✅ Application started successfully")

@app.on_event("shutdown")
async def shutdown():
    logger.info("👋 Shutting down application")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("sophia_recruit.main:app", host="0.0.0.0", port=settings.PORT, reload=True)
