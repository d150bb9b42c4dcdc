from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from reelwave.database import SessionLocal, init_db
from reelwave.routes import auth, movies, preferences, recommendations
from reelwave.services.auth_service import AuthService
from reelwave.services.movie_session import MovieSession
from reelwave.services.storage_service import StateRepository
from reelwave.services.tmdb_service import TMDBService, UpstreamError
import datetime
import os
import logging

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


# ============================================
# Application Lifespan Management
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup:
    - Create persisted state tables
    - Load preferences and the details cache into the session
    """
    logger.info("=" * 60)
    logger.info("ReelWave API Starting...")
    logger.info(f"   Environment: {os.getenv('ENVIRONMENT', 'development')}")

    init_db()
    catalog = TMDBService()
    if not catalog.api_key:
        logger.warning("   TMDB_API_KEY is not set; catalog requests will fail")

    app.state.movie_session = MovieSession(catalog, StateRepository(SessionLocal))
    app.state.auth_service = AuthService()
    logger.info("=" * 60)

    yield

    logger.info("ReelWave API Shutting Down...")


app = FastAPI(
    title="ReelWave API",
    description="Movie discovery and recommendations on top of TMDB",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# CORS - Whitelist allowed origins
allowed_origins = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8080",
]
if production_url := os.getenv("FRONTEND_URL"):
    allowed_origins.append(production_url)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


# ============================================
# Exception Handlers
# ============================================

@app.exception_handler(UpstreamError)
async def upstream_exception_handler(request: Request, exc: UpstreamError):
    """TMDB failures that escaped the session are reported as bad gateway"""
    logger.error(f"Upstream error on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=502, content={"detail": exc.message})


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ============================================
# Routes
# ============================================

@app.get("/health", tags=["Health"])
async def health_check():
    """Health check for monitoring"""
    return {
        "status": "healthy",
        "api_version": "1.0.0",
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
    }

app.include_router(movies.router)
app.include_router(preferences.router)
app.include_router(recommendations.router)
app.include_router(auth.router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        log_level="info"
    )
