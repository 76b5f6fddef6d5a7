"""LLM Analyzer: skill gaps and next career role from real market data."""
import re
from typing import Any, Dict, List, Optional, Tuple
from config import DEFAULT_EXPERIENCE, DEFAULT_INDUSTRY, DEFAULT_LOCATION
from agents.errors import UpstreamError
from agents.schemas import AnalysisResult, JobMarketData, MarketTrend, SkillsPredictionInput, TrendData
from services.llm_client import LLMClient, parse_json_object
from utils.text_cleaning import title_case_skill
from utils.logging_utils import get_logger

logger = get_logger(__name__)

FALLBACK_GAP_COUNT = 8
DEFAULT_CAREER_BASE_SALARY = 1_200_000  # ₹12L
MIN_NEXT_ROLE_SALARY = 1_500_000  # ₹15L
MIN_NEXT_ROLE_INCREASE = 400_000  # ₹4L
BASE_SALARY_INCREASE = 150_000  # ₹1.5L
MAX_DEMAND_BONUS = 500_000  # ₹5L

# Broadly valuable skills used to fill the fallback when market data is thin
PADDING_SKILLS = [
    'system design', 'cloud computing', 'docker', 'kubernetes', 'machine learning',
    'sql', 'aws', 'git', 'typescript', 'data structures', 'ci/cd', 'graphql',
]

ROLE_PROGRESSION: Dict[str, Tuple[str, str]] = {
    'Data Scientist': ('Senior Data Scientist', 'Principal Data Scientist / ML Architect'),
    'Full Stack Developer': ('Senior Full Stack Developer', 'Lead Full Stack Developer'),
    'Frontend Developer': ('Senior Frontend Developer', 'Lead Frontend Developer'),
    'Backend Developer': ('Senior Backend Developer', 'Lead Backend Developer'),
    'Software Developer': ('Senior Software Developer', 'Lead Software Developer'),
    'DevOps Engineer': ('Senior DevOps Engineer', 'Lead DevOps Engineer'),
    'Data Engineer': ('Senior Data Engineer', 'Principal Data Engineer / Data Architect'),
    'Mobile Developer': ('Senior Mobile Developer', 'Lead Mobile Developer'),
    'Product Manager': ('Senior Product Manager', 'Director of Product'),
    'Machine Learning Engineer': ('Senior ML Engineer', 'Principal ML Engineer / AI Architect'),
}

SYSTEM_PROMPT = """You are a career advisor analyzing REAL Indian tech market data. Return ONLY valid JSON.
Do not include markdown code blocks or explanations."""


def _lookup_progression(role: str) -> Optional[Tuple[str, str]]:
    role_lower = role.lower()
    for known_role, progression in ROLE_PROGRESSION.items():
        if known_role.lower() == role_lower:
            return progression
    return None


def build_analysis_prompt(
    profile: SkillsPredictionInput,
    trend_data: TrendData,
    job_data: JobMarketData,
    market_trends: List[MarketTrend],
) -> Tuple[str, str]:
    """
    Compose the analysis prompt from the profile and collected market data.

    Returns:
        (system_prompt, user_prompt)
    """
    skills = profile['currentSkills']
    target_role = profile['targetRole']

    skill_demand_text = ", ".join(
        f"{skill}: {trend_data['skillDemand'].get(skill, 0)}" for skill in skills
    )
    job_skills_text = ", ".join(
        f"{skill}({count})" for skill, count in list(job_data['skillDemand'].items())[:8]
    )
    trends_text = "\n".join(
        f"{trend['skill']}: {round(trend['demand_score'])}% demand, "
        f"₹{round(trend['avg_salary_inr'] / 100_000)}L avg"
        for trend in market_trends[:8]
    )

    user_prompt = f"""USER PROFILE:
- Current Skills: {', '.join(skills)}
- Target Role: {target_role}
- Experience: {profile.get('experience') or DEFAULT_EXPERIENCE}
- Industry: {profile.get('industry') or DEFAULT_INDUSTRY}
- Location: {profile.get('location') or DEFAULT_LOCATION}

REAL SEARCH DATA ({len(trend_data['relevantResults'])} search results analyzed):
- Top Trending: {', '.join(trend_data['trendingTechs'][:8])}
- User Skills Demand: {skill_demand_text}

REAL JOB MARKET DATA ({len(job_data['jobPostings'])} postings):
- Average Salary: ₹{round(job_data['avgSalary'] / 100_000)}L
- High Demand Skills: {job_skills_text}

MARKET TRENDS FROM REAL DATA:
{trends_text}

CAREER PROGRESSION RULES:
- {target_role} → Senior {target_role} (if not already senior)
- Senior {target_role} → Lead/Principal {target_role}
- Salary must ALWAYS be higher than current: minimum 40% increase
- Indian market ranges: Entry ₹4-8L, Mid ₹8-20L, Senior ₹20-35L, Lead ₹35L+

IMPORTANT: Generate AT LEAST 4-6 skill gaps for meaningful career growth, even if user has strong foundation.
Focus on emerging/advanced skills and specializations within their target role.

Return JSON with:
{{
  "skillGaps": [
    {{
      "skill": "skill_name",
      "importance": 1-10,
      "currentDemand": actual_demand_number,
      "avgSalaryIncrease": realistic_inr_amount_200000_to_800000,
      "learningPath": ["step1", "step2", "step3"],
      "timeToLearn": "X months"
    }}
  ],
  "careerPath": {{
    "nextRole": "proper_next_role_always_higher_than_current",
    "timeline": "12-18 months",
    "requiredSkills": ["skill1", "skill2"],
    "expectedSalary": realistic_higher_inr_amount_minimum_1400000
  }}
}}

Base recommendations on the REAL data above. Use Indian salary ranges. NEVER make next role lower than current.
ENSURE minimum 4-6 skills for comprehensive growth roadmap."""

    return SYSTEM_PROMPT, user_prompt


def parse_analysis_response(text: str) -> Dict[str, Any]:
    """
    Parse the analyzer's JSON reply (markdown fences allowed).

    Raises:
        ValueError: If the reply is not a JSON object
    """
    return parse_json_object(text)


def extract_skill_gaps_from_data(
    trend_data: TrendData,
    job_data: JobMarketData,
    user_skills: List[str],
) -> List[Dict[str, Any]]:
    """
    Build skill gaps straight from collector data when the LLM reply is unusable.

    Candidates are every skill either collector saw that the user doesn't
    already have, ranked by search demand + 100 x job-posting count.
    """
    search_demand: Dict[str, int] = {}
    for skill, count in list(trend_data.get('techFrequency', {}).items()) + list(trend_data['skillDemand'].items()):
        search_demand[skill.lower()] = max(search_demand.get(skill.lower(), 0), count)
    job_demand = {skill.lower(): count for skill, count in job_data['skillDemand'].items()}

    owned = {skill.lower() for skill in user_skills}
    candidates = [skill for skill in dict.fromkeys(list(search_demand) + list(job_demand)) if skill not in owned]

    def total_demand(skill: str) -> int:
        return search_demand.get(skill, 0) + job_demand.get(skill, 0) * 100

    ranked = sorted(candidates, key=total_demand, reverse=True)[:FALLBACK_GAP_COUNT]
    for skill in PADDING_SKILLS:
        if len(ranked) >= FALLBACK_GAP_COUNT:
            break
        if skill not in owned and skill not in ranked:
            ranked.append(skill)

    gaps = []
    for index, skill in enumerate(ranked):
        demand = total_demand(skill)
        salary_increase = BASE_SALARY_INCREASE + min(demand * 5000, MAX_DEMAND_BONUS)
        gaps.append({
            'skill': title_case_skill(skill),
            'importance': max(6, 10 - index),
            'currentDemand': max(10, demand),
            'avgSalaryIncrease': round(salary_increase),
            'learningPath': [
                f"{skill} fundamentals and syntax",
                f"{skill} intermediate concepts and patterns",
                f"{skill} advanced projects and applications",
                f"{skill} industry best practices and optimization",
            ],
            'timeToLearn': f"{2 + index} months",
        })
    return gaps


def next_role_for(target_role: str) -> Tuple[str, float, str]:
    """
    Work out the next step up from a role.

    Returns:
        (next_role, salary_multiplier, timeline)
    """
    role = target_role.strip()
    role_lower = role.lower()

    if 'senior' in role_lower:
        base_role = re.sub(r'senior\s+', '', role, flags=re.IGNORECASE).strip()
        progression = _lookup_progression(base_role)
        return (progression[1] if progression else f"Lead {base_role}"), 2.0, '18-24 months'

    if 'lead' in role_lower or 'principal' in role_lower:
        base_role = re.sub(r'(?:lead|principal)\s+', '', role, flags=re.IGNORECASE).strip()
        return f"Director / VP of {base_role}", 2.5, '24-36 months'

    progression = _lookup_progression(role)
    return (progression[0] if progression else f"Senior {role}"), 1.6, '12-18 months'


def extract_career_path_from_market(
    target_role: str,
    job_data: JobMarketData,
    fallback_skills: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Derive the next career step and its salary from the role table and market average."""
    next_role, multiplier, timeline = next_role_for(target_role)

    base_salary = job_data.get('avgSalary') or DEFAULT_CAREER_BASE_SALARY
    expected_salary = max(
        round(base_salary * multiplier),
        round(base_salary + MIN_NEXT_ROLE_INCREASE),
        MIN_NEXT_ROLE_SALARY,
    )

    required_skills = list(job_data['skillDemand'].keys())[:4] or list(fallback_skills or [])[:4]

    return {
        'nextRole': next_role,
        'timeline': timeline,
        'requiredSkills': required_skills,
        'expectedSalary': expected_salary,
    }


def build_fallback_analysis(
    text: str,
    profile: SkillsPredictionInput,
    trend_data: TrendData,
    job_data: JobMarketData,
) -> AnalysisResult:
    """Deterministic analysis used when the LLM reply can't be parsed."""
    skill_gaps = extract_skill_gaps_from_data(trend_data, job_data, profile['currentSkills'])
    career_path = extract_career_path_from_market(
        profile['targetRole'], job_data, [gap['skill'] for gap in skill_gaps]
    )
    return {
        'skillGaps': skill_gaps,
        'careerPath': career_path,
        'insights': {'analysis': text},
    }


def analyze_with_llm(
    llm: LLMClient,
    profile: SkillsPredictionInput,
    trend_data: TrendData,
    job_data: JobMarketData,
    market_trends: List[MarketTrend],
) -> AnalysisResult:
    """
    Ask the LLM for skill gaps and a career path grounded in the collected data.

    Raises:
        UpstreamError: If the LLM call itself fails
    """
    logger.info("Running LLM analysis with collected market data...")
    system_prompt, user_prompt = build_analysis_prompt(profile, trend_data, job_data, market_trends)

    try:
        text = llm.chat(system_prompt, user_prompt)
    except Exception as e:
        logger.error(f"LLM analysis error: {str(e)}")
        raise UpstreamError("llm", "Failed to analyze data with AI", e) from e

    try:
        parsed = parse_analysis_response(text)
    except ValueError as e:
        logger.warning(f"AI response parsing failed, using real data fallback: {str(e)}")
        return build_fallback_analysis(text, profile, trend_data, job_data)

    fallback = None
    skill_gaps = parsed.get('skillGaps')
    if isinstance(skill_gaps, list):
        skill_gaps = [gap for gap in skill_gaps if isinstance(gap, dict) and gap.get('skill')]
    if not isinstance(skill_gaps, list) or not skill_gaps:
        logger.warning("AI response has no skillGaps, using real data fallback for skill gaps")
        fallback = build_fallback_analysis(text, profile, trend_data, job_data)
        skill_gaps = fallback['skillGaps']

    career_path = parsed.get('careerPath')
    if not isinstance(career_path, dict):
        logger.warning("AI response has no careerPath, using market-derived career path")
        fallback = fallback or build_fallback_analysis(text, profile, trend_data, job_data)
        career_path = fallback['careerPath']

    logger.info(f"LLM analysis produced {len(skill_gaps)} skill gaps")
    return {
        'skillGaps': skill_gaps,
        'careerPath': career_path,
        'insights': parsed.get('insights') or {},
    }
