"""
FastAPI Application Entry Point

CuraLink ingestion API
"""
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from app.core.config import settings
from app.core.dependencies import get_store
from app.core.exceptions import CuraLinkError
from app.core.logging import get_logger, setup_logging
from app.core.rate_limit import limiter, rate_limit_exceeded_handler
from app.api.assist import router as assist_router
from app.api.search import router as search_router
from app.services.store import RecordStore

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Ingests clinical trials, publications and researchers with AI summaries",
    version="1.0.0"
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


@app.exception_handler(CuraLinkError)
async def curalink_error_handler(request: Request, exc: CuraLinkError) -> JSONResponse:
    logger.error(f"Request failed: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc)})


app.include_router(search_router)
app.include_router(assist_router)

origins = [
    "http://localhost:3000",
    "*"
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)


@app.get("/")
async def health_check(store: RecordStore = Depends(get_store)):
    """Root endpoint to verify the server is running."""
    return {
        "status": "active",
        "project": settings.PROJECT_NAME,
        "version": "1.0.0",
        "store": {
            "url": store.url,
            "connected": store.is_connected
        },
        "endpoints": {
            "clinical_trials": "/api/search/clinical-trials",
            "publications": "/api/search/publications",
            "researchers": "/api/search/researchers",
            "extract_disease": "/api/assist/extract-disease",
            "keywords": "/api/assist/keywords",
            "enhance_query": "/api/assist/enhance-query"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
