"""FastAPI application for the Career Advisor API."""
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn
from config import (
    APP_TITLE,
    APP_VERSION,
    DEFAULT_EXPERIENCE,
    DEFAULT_INDUSTRY,
    DEFAULT_LOCATION,
    DEFAULT_RESUME_TARGET_INDUSTRY,
    DEFAULT_RESUME_TARGET_ROLE,
    DEFAULT_TIME_HORIZON,
    RESUME_ALLOWED_EXTENSIONS,
    RESUME_MAX_FILE_SIZE,
    RESUME_MIN_TEXT_LENGTH,
)
from api_schemas import CareerSimulationRequest, SkillsRadarRequest
from agents.career_simulator import simulate_career_paths
from agents.pipeline import predict_skills_demand
from agents.resume_scoring import analyze_resume_content
from agents.schemas import SimulationProfile, SkillsPredictionInput
from services.llm_client import LLMClient, create_llm_client
from services.resume_parser import get_extension, parse_resume
from services.serpapi_client import SerpApiClient
from services.youtube_client import YouTubeClient
from utils.logging_utils import get_logger

logger = get_logger(__name__)

TIME_HORIZONS = ('1-year', '3-year', '5-year', '10-year')


@lru_cache()
def get_llm_client() -> LLMClient:
    return create_llm_client()


@lru_cache()
def get_search_client() -> SerpApiClient:
    return SerpApiClient()


@lru_cache()
def get_video_client() -> YouTubeClient:
    return YouTubeClient()


def _error(status_code: int, error: str, message: Optional[str] = None) -> JSONResponse:
    content: Dict[str, Any] = {"error": error}
    if message is not None:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=content)


def _clean_list(values: Optional[List[str]]) -> List[str]:
    return [value.strip() for value in values or [] if value.strip()]


def _describe_validation_error(exc: RequestValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location or 'body'}: {error.get('msg')}")
    return "; ".join(problems)


router = APIRouter()


@router.get("/skills-radar")
def describe_skills_radar():
    return {
        "message": "Skills Radar API is running",
        "endpoints": {"POST /api/skills-radar": "Generate personalized skills predictions"},
        "requiredFields": [
            "currentSkills: string[]",
            "targetRole: string",
            "experience?: string",
            "industry?: string",
            "location?: string",
        ],
    }


@router.post("/skills-radar")
def skills_radar(
    body: SkillsRadarRequest,
    llm: LLMClient = Depends(get_llm_client),
    search_client: SerpApiClient = Depends(get_search_client),
    video_client: YouTubeClient = Depends(get_video_client),
):
    """Generate a skills radar report for a profile."""
    logger.info("Skills Radar API called")

    current_skills = _clean_list(body.currentSkills)
    target_role = (body.targetRole or "").strip()
    if not current_skills or not target_role:
        return _error(400, "Missing required fields: currentSkills, targetRole")

    profile: SkillsPredictionInput = {
        "currentSkills": current_skills,
        "targetRole": target_role,
        "experience": body.experience or DEFAULT_EXPERIENCE,
        "industry": body.industry or DEFAULT_INDUSTRY,
        "location": body.location or DEFAULT_LOCATION,
    }

    try:
        report = predict_skills_demand(profile, llm, search_client, video_client)
    except Exception as e:
        logger.error(f"Skills Radar API error: {str(e)}")
        return _error(500, "Failed to generate skills predictions", str(e))

    logger.info("Skills predictions generated successfully")
    return {
        "success": True,
        "data": report,
        "message": "Skills predictions generated successfully",
    }


@router.get("/career-simulator")
def describe_career_simulator():
    return {
        "message": "Career Path Simulator API",
        "version": APP_VERSION,
        "endpoints": {"POST": "/api/career-simulator - Generate career path simulation"},
        "requiredFields": {
            "skills": "Array of current skills",
            "interests": "Array of interests/preferences",
            "experience": 'Experience level (e.g., "Fresher", "1-2 years")',
            "education": "Educational background",
            "location": "Current location",
            "preferredIndustries": "Array of preferred industries (optional)",
            "careerGoals": "Career aspirations (optional)",
            "timeHorizon": "Planning timeframe: 1-year, 3-year, 5-year, 10-year (optional, defaults to 3-year)",
        },
    }


@router.post("/career-simulator")
def career_simulator(
    body: CareerSimulationRequest,
    llm: LLMClient = Depends(get_llm_client),
):
    """Simulate career paths for a student profile."""
    logger.info("Career Simulator API called")

    skills = _clean_list(body.skills)
    interests = _clean_list(body.interests)
    if not skills:
        return _error(400, "Skills array is required and cannot be empty")
    if not interests:
        return _error(400, "Interests array is required and cannot be empty")

    experience = (body.experience or "").strip()
    education = (body.education or "").strip()
    location = (body.location or "").strip()
    if not experience or not education or not location:
        return _error(400, "Experience, education, and location are required")

    profile: SimulationProfile = {
        "skills": skills,
        "interests": interests,
        "experience": experience,
        "education": education,
        "location": location,
        "preferredIndustries": _clean_list(body.preferredIndustries),
        "careerGoals": (body.careerGoals or "").strip(),
        "timeHorizon": body.timeHorizon if body.timeHorizon in TIME_HORIZONS else DEFAULT_TIME_HORIZON,
    }

    try:
        result = simulate_career_paths(profile, llm)
    except Exception as e:
        logger.error(f"Career Simulator API error: {str(e)}")
        return _error(500, "Failed to generate career simulation", str(e))

    return {
        **result,
        "metadata": {
            "userId": body.userId or "anonymous",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "profileSummary": {
                "totalSkills": len(skills),
                "experienceLevel": experience,
                "primaryInterests": interests[:3],
                "targetTimeframe": profile["timeHorizon"],
            },
        },
    }


@router.post("/resume-score")
def resume_score(
    resume: Optional[UploadFile] = File(None),
    targetRole: str = Form(DEFAULT_RESUME_TARGET_ROLE),
    targetIndustry: str = Form(DEFAULT_RESUME_TARGET_INDUSTRY),
    llm: LLMClient = Depends(get_llm_client),
):
    """Score an uploaded PDF, DOCX or TXT resume."""
    logger.info("Resume scoring API called")

    if resume is None or not resume.filename:
        return _error(400, "No resume file provided")

    if get_extension(resume.filename) not in RESUME_ALLOWED_EXTENSIONS:
        return _error(400, "Only PDF, DOCX and TXT files are supported")

    file_content = resume.file.read()
    if len(file_content) > RESUME_MAX_FILE_SIZE:
        return _error(400, "File size must be less than 10MB")

    logger.info(f"Processing resume: {resume.filename} ({round(len(file_content) / 1024)}KB)")

    try:
        extracted_text = parse_resume(file_content, resume.filename)
    except ValueError as e:
        logger.warning(f"Resume could not be parsed: {str(e)}")
        return _error(400, "Unable to read the resume file", str(e))

    if len(extracted_text) < RESUME_MIN_TEXT_LENGTH:
        return _error(
            400,
            "Unable to extract sufficient text from the resume. "
            "Please ensure the file contains readable text.",
        )

    target_role = targetRole.strip() or DEFAULT_RESUME_TARGET_ROLE
    target_industry = targetIndustry.strip() or DEFAULT_RESUME_TARGET_INDUSTRY

    try:
        result = analyze_resume_content(extracted_text, llm, target_role, target_industry)
    except Exception as e:
        logger.error(f"Resume scoring API error: {str(e)}")
        return _error(500, "An unexpected error occurred while analyzing the resume", str(e))

    return {
        "success": True,
        "data": {
            **result,
            "metadata": {
                "fileName": resume.filename,
                "fileSize": len(file_content),
                "targetRole": target_role,
                "targetIndustry": target_industry,
                "processedAt": datetime.now(timezone.utc).isoformat(),
                "textLength": len(extracted_text),
            },
        },
        "message": "Resume analyzed successfully",
    }


def create_app() -> FastAPI:
    app = FastAPI(title=APP_TITLE, version=APP_VERSION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def handle_invalid_body(request: Request, exc: RequestValidationError):
        logger.warning(f"Invalid request body on {request.url.path}")
        return _error(400, "Invalid request body", _describe_validation_error(exc))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}: {str(exc)}")
        return _error(500, "Internal server error", str(exc))

    app.include_router(router, prefix="/api", tags=["career"])
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
