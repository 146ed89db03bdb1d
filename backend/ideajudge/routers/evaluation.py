"""
Evaluation Router with Timing Instrumentation

Handles ``POST /api/evaluate`` for project submissions.  The route is thin:
required-field checks here, everything else in the project judge.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..agents.project_evaluation import ProjectJudge
from ..agents.project_evaluation.timing import timed_stage
from ..config import Settings, get_settings
from ..constants import SOURCE_LABEL_DUCKDUCKGO, SOURCE_LABEL_SERPER
from ..schemas.evaluation_schema import EvaluationResult
from ..schemas.submission_schema import ProjectSubmission


router = APIRouter(
    prefix="/api",
    tags=["Evaluation"],
    responses={
        400: {"description": "Missing required fields"},
        500: {"description": "Internal server error during evaluation"},
    },
)


def get_judge(settings: Settings = Depends(get_settings)) -> ProjectJudge:
    return ProjectJudge(settings=settings)


@router.post(
    "/evaluate",
    response_model=EvaluationResult,
    status_code=status.HTTP_200_OK,
    summary="Evaluate a Project Submission",
    response_description="Innovation and market scores, overall rating and research findings",
)
async def evaluate_submission(
    submission: ProjectSubmission,
    judge: ProjectJudge = Depends(get_judge),
):
    """
    Research and score a hackathon / startup project.

    Runs 20-22 paced web searches, so expect a response in roughly 10-30
    seconds depending on the search backend.
    """
    missing = submission.missing_required_fields()
    if missing:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Missing required fields", "missingFields": missing},
        )

    async with timed_stage("evaluate_endpoint"):
        result = await judge.evaluate(submission)
    return result


@router.get(
    "/health",
    summary="Health Check",
    description="Check if the evaluation service is running and which backends are active",
)
async def health_check(settings: Settings = Depends(get_settings)):
    return {
        "status": "healthy",
        "service": "project-evaluation",
        "searchSource": SOURCE_LABEL_SERPER if settings.has_serper else SOURCE_LABEL_DUCKDUCKGO,
        "llmEnabled": settings.has_openai,
    }
