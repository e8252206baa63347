import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from funding_checker.config import settings
from funding_checker.routes import courses_router, eligibility_router, postcodes_router
from funding_checker.services import get_course_service, get_eligibility_service

# Configure logging
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: load reference data once
    get_eligibility_service()
    get_course_service()
    logger.info("Reference data loaded")
    yield


app = FastAPI(
    title=settings.app_name,
    description="Checks which education funding streams a learner qualifies for",
    version=settings.app_version,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(eligibility_router, prefix=settings.api_prefix)
app.include_router(courses_router, prefix=settings.api_prefix)
app.include_router(postcodes_router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {"message": f"{settings.app_name} is running", "version": settings.app_version}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "funding-checker"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("funding_checker.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
