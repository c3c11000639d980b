# quintave/main.py
import uvicorn
import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from quintave.core.config import settings
from quintave.core.database import engine, Base
from quintave.api.v1.api import api_router
from quintave.api.v1.routes import google_auth, webhooks

# Imported for their table definitions
from quintave.models import bucket, transaction, goal, habit, journal  # noqa: F401

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create missing tables on startup (migrations live in alembic/)
async def create_db_and_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

# ------------------------------------------------------------
# STARTUP
# ------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables and report missing configuration on startup"""
    try:
        await create_db_and_tables()
        logger.info("✅ Database tables created successfully")
        logger.info(f"✅ App URL: {settings.APP_URL}")

        if not settings.REVENUECAT_WEBHOOK_SECRET:
            logger.warning("⚠️ REVENUECAT_WEBHOOK_SECRET not configured - purchase webhook will reject calls")
        if not settings.GOOGLE_CLIENT_ID:
            logger.warning("⚠️ GOOGLE_CLIENT_ID not configured - Google sign-in unavailable")

    except Exception as e:
        logger.error(f"❌ Startup error: {str(e)}")
    yield

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Authentication", "description": "Session and current-user operations"},
        {"name": "Google Authentication", "description": "Google OAuth sign-in for web and the native app"},
        {"name": "buckets", "description": "The five budgeting envelopes"},
        {"name": "purchase", "description": "Trial and one-time purchase status"},
        {"name": "Webhooks", "description": "RevenueCat server callbacks"},
    ],
)

# CORS Configuration
origins = [
    settings.FRONTEND_URL,
    "http://localhost:3000",  # Local development
    "capacitor://localhost",  # iOS app shell
    "http://localhost",       # Android app shell
    "https://localhost",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for better error responses"""
    if isinstance(exc, HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail}
        )

    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )

# ------------------------------------------------------------
# ROUTES
# ------------------------------------------------------------
app.include_router(google_auth.router, prefix="/api/oauth")
app.include_router(webhooks.router, prefix="/api/webhooks")
app.include_router(api_router, prefix="/api/v1")

# ------------------------------------------------------------
# ROOT ENDPOINT
# ------------------------------------------------------------
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return {
        "message": f"{settings.APP_NAME} is running!",
        "version": settings.VERSION
    }

# ------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ------------------------------------------------------------
@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint, including database connectivity"""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        raise HTTPException(status_code=503, detail="Database unavailable")

    return {
        "status": "healthy",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT
    }

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("quintave.main:app", host="0.0.0.0", port=port, reload=False)
