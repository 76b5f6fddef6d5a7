"""Pipeline orchestration for the skills radar report."""
from datetime import datetime, timezone
from typing import Any, Dict, List
from config import DEFAULT_EXPERIENCE, DEFAULT_INDUSTRY, DEFAULT_LOCATION
from agents.job_market import analyze_job_market
from agents.learning_resources import VideoCatalogClient, analyze_learning_resources
from agents.llm_analyzer import analyze_with_llm
from agents.market_trends import synthesize_market_trends
from agents.roadmap import generate_learning_roadmap
from agents.salary import (
    calculate_base_salary,
    calculate_skill_bonus,
    normalize_career_path,
    normalize_skill_gaps,
)
from agents.schemas import SkillsPredictionInput, SkillsPredictionOutput
from agents.trend_collector import analyze_tech_trends
from services.llm_client import LLMClient
from utils.logging_utils import get_logger

logger = get_logger(__name__)

NEW_SKILLS_SALARY_GAIN = 500_000  # ₹5L
TRENDING_SKILLS_FOR_VIDEOS = 3
TOP_TRENDING_TECHNOLOGIES = 10
TOP_HIGH_DEMAND_SKILLS = 10
TOP_EMERGING_FIELDS = 5


def top_skills_by_count(skill_demand: Dict[str, int], limit: int) -> List[str]:
    """Skills ordered by count, ties in first-seen order."""
    return [skill for skill, _ in sorted(skill_demand.items(), key=lambda item: item[1], reverse=True)][:limit]


def with_profile_defaults(profile: SkillsPredictionInput) -> SkillsPredictionInput:
    """Copy of the profile with experience, industry and location filled in."""
    return {
        **profile,
        'experience': profile.get('experience') or DEFAULT_EXPERIENCE,
        'industry': profile.get('industry') or DEFAULT_INDUSTRY,
        'location': profile.get('location') or DEFAULT_LOCATION,
    }


def predict_skills_demand(
    profile: SkillsPredictionInput,
    llm: LLMClient,
    search_client: Any,
    video_client: VideoCatalogClient,
) -> SkillsPredictionOutput:
    """
    Run the complete skills radar pipeline.

    Steps:
    1. Trend Collector queries web search for technology trends
    2. Learning-Resource Collector finds tutorials for current + trending skills
    3. Job-Market Collector aggregates job postings
    4. Market Trend Synthesizer merges demand signals
    5. LLM Analyzer proposes skill gaps and a next role
    6. Salary normalization keeps the numbers realistic
    7. Roadmap Assembler attaches courses, videos and platforms

    Args:
        profile: Skills radar input profile
        llm: LLM client instance
        search_client: Client exposing search_web(query) and search_jobs(query, location)
        video_client: Client exposing search_videos and get_video_details

    Returns:
        Complete skills radar report

    Raises:
        UpstreamError: If a fatal stage (trends, job market, LLM) fails
    """
    profile = with_profile_defaults(profile)
    skills = profile['currentSkills']
    target_role = profile['targetRole']
    location = profile['location']
    logger.info(f"Starting skills prediction for {target_role} with {len(skills)} skills")

    logger.info("Step 1: Collecting technology trends...")
    trend_data = analyze_tech_trends(skills, target_role, search_client, location=location)

    logger.info("Step 2: Collecting learning resources...")
    learning_data = analyze_learning_resources(
        list(skills) + trend_data['trendingTechs'][:TRENDING_SKILLS_FOR_VIDEOS], video_client
    )

    logger.info("Step 3: Collecting job market data...")
    job_data = analyze_job_market(target_role, location, search_client)

    logger.info("Step 4: Synthesizing market trends...")
    market_trends = synthesize_market_trends(trend_data, job_data)
    logger.info(f"Synthesized {len(market_trends)} market trends")

    logger.info("Step 5: Running LLM analysis...")
    analysis = analyze_with_llm(llm, profile, trend_data, job_data, market_trends)

    logger.info("Step 6: Normalizing salaries and career path...")
    base_salary = calculate_base_salary(profile['experience'], target_role, job_data['avgSalary'])
    skill_bonus = calculate_skill_bonus(skills, trend_data['skillDemand'])
    current_salary = base_salary + skill_bonus

    skill_gaps = normalize_skill_gaps(analysis['skillGaps'], trend_data, job_data)
    career_path = normalize_career_path(analysis['careerPath'], current_salary, target_role, job_data)

    logger.info("Step 7: Assembling learning roadmap...")
    learning_roadmap = generate_learning_roadmap(skill_gaps, learning_data)

    report: SkillsPredictionOutput = {
        'skillGaps': skill_gaps,
        'salaryPrediction': {
            'current': current_salary,
            'withNewSkills': current_salary + NEW_SKILLS_SALARY_GAIN,
            'currency': 'INR',
            'location': location,
        },
        'marketInsights': {
            'trendingTechnologies': trend_data['trendingTechs'][:TOP_TRENDING_TECHNOLOGIES],
            'highDemandSkills': top_skills_by_count(job_data['skillDemand'], TOP_HIGH_DEMAND_SKILLS),
            'emergingFields': [trend['skill'] for trend in market_trends[:TOP_EMERGING_FIELDS]],
        },
        'careerPath': career_path,
        'learningRoadmap': learning_roadmap,
        'realDataSources': {
            'googleSearchResults': len(trend_data['relevantResults']),
            'jobPostings': len(job_data['jobPostings']),
            'youtubeResources': len(learning_data['learningResources']),
            'marketDataPoints': len(market_trends),
            'lastUpdated': datetime.now(timezone.utc).isoformat(),
        },
    }

    logger.info(
        f"Skills prediction completed: {len(skill_gaps)} skill gaps, next role {career_path['nextRole']}"
    )
    return report
