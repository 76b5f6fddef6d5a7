"""Job-Market Collector: skills, salaries and seniority from job postings."""
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol
from agents.errors import UpstreamError
from agents.schemas import JobMarketData, JobPosting, SalaryRange
from utils.text_cleaning import clean_text, find_keywords
from utils.logging_utils import get_logger

logger = get_logger(__name__)

LAKH = 100_000
CRORE = 10_000_000
# Unsuffixed figures below this are read as lakhs ("12" -> 12 lakh), above it as rupees
LAKH_THRESHOLD = 1_000
SALARY_MAX_FACTOR = 1.3
MONTHS_PER_YEAR = 12

SALARY_SUFFIX_MULTIPLIERS = {
    'k': 1_000,
    'l': LAKH,
    'lakh': LAKH,
    'lakhs': LAKH,
    'lpa': LAKH,
    'cr': CRORE,
    'crore': CRORE,
    'crores': CRORE,
}

JOB_SKILL_VOCABULARY = [
    'javascript', 'python', 'java', 'react', 'node.js', 'angular', 'vue',
    'typescript', 'sql', 'mongodb', 'postgresql', 'aws', 'azure', 'docker',
    'kubernetes', 'git', 'api', 'rest', 'graphql', 'html', 'css', 'bootstrap',
    'material-ui', 'redux', 'express', 'spring', 'django', 'flask', 'laravel',
]

_SALARY_PATTERN = re.compile(
    r"(?:₹|rs\.?|inr)?\s?(\d+(?:,\d+)*(?:\.\d+)?)\s?(lakhs?|lpa|crores?|cr\b|l\b|k\b)?",
    re.IGNORECASE,
)
_MONTHLY_PATTERN = re.compile(r"(?:a|per|/)\s*month|monthly", re.IGNORECASE)


class JobsSearchClient(Protocol):
    def search_jobs(self, query: str, location: Optional[str] = None) -> List[Dict[str, Any]]:
        ...


def parse_salary(salary_text: str) -> Optional[SalaryRange]:
    """
    Extract the first salary figure from free text.

    "₹12 LPA" -> 1 200 000; "₹8,50,000" -> 850 000; "15 lakhs" -> 1 500 000;
    "1.2 Cr" -> 12 000 000. Monthly pay ("₹15K–₹20K a month") is annualized.

    Returns:
        {min, max, currency} with max estimated at 30% above min, or None
    """
    if not salary_text:
        return None

    match = _SALARY_PATTERN.search(salary_text)
    if not match:
        return None

    amount = float(match.group(1).replace(',', ''))
    suffix = (match.group(2) or '').lower()
    if suffix:
        amount *= SALARY_SUFFIX_MULTIPLIERS[suffix]
    elif amount < LAKH_THRESHOLD:
        amount *= LAKH

    if _MONTHLY_PATTERN.search(salary_text):
        amount *= MONTHS_PER_YEAR

    if amount <= 0:
        return None

    return {
        'min': round(amount),
        'max': round(amount * SALARY_MAX_FACTOR),
        'currency': 'INR',
    }


def extract_job_skills(job_text: str) -> List[str]:
    """Skills from JOB_SKILL_VOCABULARY mentioned anywhere in the posting text."""
    return find_keywords(job_text, JOB_SKILL_VOCABULARY)


def extract_experience_level(job_text: str) -> str:
    """Classify a posting as "Senior", "Mid" or "Entry"; defaults to "Mid"."""
    text = (job_text or "").lower()
    if 'senior' in text or 'lead' in text or 'principal' in text:
        return 'Senior'
    if 'mid' in text or '2-5' in text or '3-6' in text:
        return 'Mid'
    if 'junior' in text or 'entry' in text or 'fresher' in text:
        return 'Entry'
    return 'Mid'


def normalize_job(job: Dict[str, Any]) -> JobPosting:
    """Turn one jobs_results entry into a JobPosting."""
    title = job.get('title') or ''
    description = clean_text(job.get('description') or '')
    job_text = f"{title} {description}"
    extensions = job.get('detected_extensions') or {}

    return {
        'title': title or 'Job Title Not Available',
        'company': job.get('company_name') or 'Company Not Specified',
        'location': job.get('location') or 'Location Not Specified',
        'salaryRange': parse_salary(extensions.get('salary') or ''),
        'skills': sorted(set(extract_job_skills(job_text))),
        'experienceLevel': extract_experience_level(job_text),
        'postedDate': extensions.get('posted_at') or datetime.now(timezone.utc).isoformat(),
    }


def analyze_job_market(
    target_role: str,
    location: str,
    search_client: JobsSearchClient,
) -> JobMarketData:
    """
    Search job postings for the target role and aggregate market signals.

    Args:
        target_role: Role searched for
        location: Location searched in
        search_client: Client exposing search_jobs(query, location)

    Returns:
        JobMarketData with postings, mean salary, skill counts and per-location salary

    Raises:
        UpstreamError: On any jobs API failure
    """
    logger.info("Analyzing job market...")

    query = f"{target_role} {location}".strip()
    try:
        raw_jobs = search_client.search_jobs(query, location=location)
    except Exception as e:
        logger.error(f"Job market API error: {str(e)}")
        raise UpstreamError("google_jobs", "Failed to fetch job market data", e) from e

    job_postings: List[JobPosting] = []
    skill_frequency: Dict[str, int] = {}
    location_salaries: Dict[str, List[int]] = {}
    salaries: List[int] = []

    for raw_job in raw_jobs:
        posting = normalize_job(raw_job)
        job_postings.append(posting)

        for skill in posting['skills']:
            skill_frequency[skill] = skill_frequency.get(skill, 0) + 1

        salary = posting['salaryRange']
        if salary:
            salaries.append(salary['min'])
            location_salaries.setdefault(raw_job.get('location') or location, []).append(salary['min'])

    avg_salary = sum(salaries) / len(salaries) if salaries else 0
    location_data = {
        loc: sum(values) / len(values) for loc, values in location_salaries.items()
    }

    logger.info(
        f"Processed {len(job_postings)} postings, {len(salaries)} with salary, "
        f"{len(skill_frequency)} distinct skills"
    )

    return {
        'jobPostings': job_postings,
        'avgSalary': avg_salary,
        'skillDemand': skill_frequency,
        'locationData': location_data,
    }
