import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_settings
from .routers.evaluation import router as evaluation_router


# Load environment variables from .env file
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):

    # Startup
    settings = get_settings()
    print("Starting IdeaJudge")
    print(f"   Serper Key:  {' Configured (Google search)' if settings.has_serper else ' Not set (DuckDuckGo only)'}")
    print(f"   OpenAI Key:  {' Configured (' + settings.openai_model + ')' if settings.has_openai else ' Not set (local scoring)'}")
    print("   Ready to judge projects!")

    yield

    print("Shutting down IdeaJudge")


app = FastAPI(
    title="IdeaJudge: AI Judge for Hackathon and Startup Projects",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.include_router(evaluation_router)


@app.get(
    "/",
    summary="API Root",
    description="Welcome endpoint with API information",
    tags=["General"]
)
async def root():
    """Root endpoint with API information."""
    return {
        "name": "IdeaJudge",
        "version": "0.1.0",
        "description": "Research-backed scoring of hackathon and startup projects",
        "docs": "/docs",
        "endpoints": {
            "evaluate": "POST /api/evaluate - Evaluate a project submission",
            "health": "GET /api/health - Service health check"
        }
    }


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors."""
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "detail": str(exc) if os.getenv("DEBUG", "false").lower() == "true" else "An unexpected error occurred"
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ideajudge.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("DEBUG", "false").lower() == "true",
    )
