"""Salary/Career-Path Normalizer: realistic Indian salaries and sanitized LLM output."""
import math
from typing import Any, Dict, List, Optional
from agents.llm_analyzer import extract_career_path_from_market, next_role_for
from agents.schemas import CareerPath, JobMarketData, SkillGap, TrendData
from utils.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_SALARY_INCREASE = 200_000  # ₹2L
DEFAULT_IMPORTANCE = 5
DEFAULT_DEMAND = 10
DEFAULT_TIME_TO_LEARN = '2-3 months'
DEFAULT_TIMELINE = '12-18 months'

MIN_CAREER_INCREASE = 300_000  # ₹3L
REDERIVED_MIN_INCREASE = 500_000  # ₹5L
MIN_NEXT_ROLE_SALARY = 1_500_000  # ₹15L
MAX_SKILL_BONUS = 1_000_000  # ₹10L
MARKET_AVG_CEILING = 5_000_000

EXPERIENCE_MULTIPLIERS = {
    'Entry-level': 0.6,
    'Student/New Graduate': 0.5,
    'Entry Level (0-2 years)': 0.6,
    'Mid-level': 1.0,
    'Mid Level (2-5 years)': 1.0,
    'Senior': 1.8,
    'Senior Level (5-8 years)': 1.8,
    'Lead': 2.5,
    'Lead/Architect (8+ years)': 2.5,
}

ROLE_MULTIPLIERS = {
    'Full Stack Developer': 1.0,
    'Frontend Developer': 0.9,
    'Backend Developer': 1.1,
    'DevOps Engineer': 1.3,
    'Data Scientist': 1.4,
    'Data Engineer': 1.3,
    'Mobile Developer': 1.0,
    'Product Manager': 1.6,
    'ML Engineer': 1.5,
    'Cloud Architect': 1.8,
}

MINIMUM_SALARIES = {
    'Student/New Graduate': 400_000,
    'Entry-level': 500_000,
    'Entry Level (0-2 years)': 500_000,
    'Mid-level': 800_000,
    'Mid Level (2-5 years)': 800_000,
    'Senior': 1_500_000,
    'Senior Level (5-8 years)': 1_500_000,
    'Lead': 2_500_000,
    'Lead/Architect (8+ years)': 2_500_000,
}


def calculate_base_salary(experience: str, role: str, market_avg: float) -> int:
    """Estimate the user's current salary from experience, role and the market average."""
    if 'Data Scientist' in role:
        base_salary = 1_200_000
    elif 'DevOps' in role:
        base_salary = 1_000_000
    elif 'Product Manager' in role:
        base_salary = 1_400_000
    else:
        base_salary = 800_000

    exp_multiplier = EXPERIENCE_MULTIPLIERS.get(experience, 1.0)
    role_multiplier = ROLE_MULTIPLIERS.get(role, 1.0)

    # Market average is only trusted inside a plausible band
    market_based_salary = market_avg if 0 < market_avg < MARKET_AVG_CEILING else base_salary
    calculated_salary = round(market_based_salary * exp_multiplier * role_multiplier)

    return max(calculated_salary, MINIMUM_SALARIES.get(experience, 800_000))


def calculate_skill_bonus(skills: List[str], skill_demand: Dict[str, int]) -> int:
    bonus = 0
    for skill in skills:
        demand = skill_demand.get(skill, 0)
        if demand > 10:
            bonus += 200_000
        elif demand > 5:
            bonus += 100_000
        elif demand > 1:
            bonus += 50_000
    return min(bonus, MAX_SKILL_BONUS)


def _as_number(value: Any) -> Optional[float]:
    """Coerce ints, floats and numeric strings to a finite float; None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.replace(',', '').strip()
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def normalize_skill_gaps(
    skill_gaps: List[Dict[str, Any]],
    trend_data: TrendData,
    job_data: JobMarketData,
) -> List[SkillGap]:
    """
    Replace missing or non-numeric fields with defaults so every gap is renderable.

    importance is clamped to 1-10 and avgSalaryIncrease is a non-negative int.
    """
    normalized: List[SkillGap] = []
    for gap in skill_gaps:
        skill = str(gap.get('skill', '')).strip()

        salary_increase = _as_number(gap.get('avgSalaryIncrease'))
        if not salary_increase or salary_increase < 0:
            salary_increase = DEFAULT_SALARY_INCREASE

        importance = _as_number(gap.get('importance'))
        if not importance:
            importance = DEFAULT_IMPORTANCE
        importance = min(10, max(1, round(importance)))

        demand = (
            trend_data['skillDemand'].get(skill)
            or job_data['skillDemand'].get(skill.lower())
            or DEFAULT_DEMAND
        )

        learning_path = gap.get('learningPath')
        if isinstance(learning_path, str):
            learning_path = [learning_path]
        elif not isinstance(learning_path, list):
            learning_path = []

        normalized.append({
            'skill': skill,
            'importance': importance,
            'currentDemand': int(demand),
            'avgSalaryIncrease': int(round(salary_increase)),
            'learningPath': [str(step) for step in learning_path],
            'timeToLearn': str(gap.get('timeToLearn') or DEFAULT_TIME_TO_LEARN),
        })
    return normalized


def normalize_career_path(
    career_path: Dict[str, Any],
    current_salary: int,
    target_role: str,
    job_data: JobMarketData,
) -> CareerPath:
    """
    Make sure the next role pays meaningfully more than the current salary.

    The returned expectedSalary always exceeds current_salary by at least
    MIN_CAREER_INCREASE.
    """
    expected = _as_number(career_path.get('expectedSalary'))

    if not expected or expected <= current_salary:
        logger.info("Career path salary not above current salary, re-deriving it")
        expected = max(
            round(current_salary * 1.6),
            current_salary + REDERIVED_MIN_INCREASE,
            MIN_NEXT_ROLE_SALARY,
        )
    if expected <= current_salary:
        expected = round(current_salary * 1.5)
    expected = max(int(round(expected)), current_salary + MIN_CAREER_INCREASE)

    next_role = str(career_path.get('nextRole') or '').strip()
    if not next_role:
        next_role = next_role_for(target_role)[0]

    required_skills = career_path.get('requiredSkills')
    if not isinstance(required_skills, list):
        required_skills = extract_career_path_from_market(target_role, job_data)['requiredSkills']

    return {
        'nextRole': next_role,
        'timeline': str(career_path.get('timeline') or DEFAULT_TIMELINE),
        'requiredSkills': [str(skill) for skill in required_skills],
        'expectedSalary': expected,
    }
