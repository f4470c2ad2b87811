from fastapi import FastAPI, Depends, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session
from sqlalchemy import text
from app.database import get_db
from app.core.config import settings
from app.routers import auth, admin, onboarding, business, program, demo, calendar, voice
from app.core.logging_config import logger

# Schema is managed by Alembic migrations

app = FastAPI(
    title="Frontdesk Receptionist API",
    version="1.0.0",
    redirect_slashes=False  # Disable automatic redirects to prevent POST data loss
)

# Configure CORS for the dashboard
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])
app.include_router(onboarding.router, prefix="/api/onboarding", tags=["Onboarding"])
app.include_router(business.router, prefix="/api/business", tags=["Business"])
app.include_router(program.router, prefix="/api/programs", tags=["Programs"])
app.include_router(demo.router, prefix="/api/demo", tags=["Demo"])
app.include_router(calendar.router, prefix="/api/calendar", tags=["Calendar"])
app.include_router(voice.router, prefix="/api", tags=["Voice Context"])


@app.get("/health")
async def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "database": "connected"
        }
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unhealthy"
        )
