"""Trend Collector: tally technology mentions in web search results."""
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol
from agents.errors import UpstreamError
from agents.schemas import TrendData
from utils.text_cleaning import find_keywords
from utils.logging_utils import get_logger

logger = get_logger(__name__)

# Weight per mention in a search result
SEARCH_MENTION_WEIGHT = 3
TOP_TRENDING_LIMIT = 20
RELEVANT_RESULTS_LIMIT = 20

TECHNOLOGY_VOCABULARY = [
    'javascript', 'python', 'java', 'typescript', 'react', 'angular', 'vue',
    'node.js', 'express', 'django', 'flask', 'spring', 'laravel', 'php',
    'sql', 'mongodb', 'postgresql', 'mysql', 'redis', 'elasticsearch',
    'aws', 'azure', 'gcp', 'docker', 'kubernetes', 'terraform',
    'git', 'ci/cd', 'jenkins', 'github', 'gitlab', 'api', 'rest', 'graphql',
    'machine learning', 'ai', 'data science', 'blockchain', 'cloud computing',
    'nextjs', 'svelte', 'tailwind', 'prisma', 'supabase', 'vercel', 'firebase',
]


class WebSearchClient(Protocol):
    def search_web(self, query: str) -> List[Dict[str, Any]]:
        ...


def build_trend_queries(skills: List[str], target_role: str, location: str, year: Optional[int] = None) -> List[str]:
    """Build the free-text queries issued for a profile."""
    year = year or datetime.now().year
    return [
        f"{target_role} trending technologies {year}",
        f"most demanded programming languages {year}",
        f"{' '.join(skills)} developer jobs {location}",
        f"emerging technologies software development {year}",
    ]


def tally_technology_mentions(results: List[Dict[str, Any]], frequency: Dict[str, int]) -> None:
    """Add SEARCH_MENTION_WEIGHT to `frequency` for every vocabulary term found in each result."""
    for result in results:
        content = f"{result.get('title', '')} {result.get('snippet', '')}"
        for tech in find_keywords(content, TECHNOLOGY_VOCABULARY):
            frequency[tech] = frequency.get(tech, 0) + SEARCH_MENTION_WEIGHT


def analyze_tech_trends(
    skills: List[str],
    target_role: str,
    search_client: WebSearchClient,
    location: str = "India",
) -> TrendData:
    """
    Query web search for technology trends and rank the terms mentioned.

    Each query is isolated: a failed query is logged and skipped. When every
    query fails there is no trend data at all and the request cannot continue.

    Args:
        skills: User's current skills
        target_role: Role the user is aiming for
        search_client: Client exposing search_web(query)
        location: Location used in the job-oriented query

    Returns:
        TrendData with trendingTechs, relevantResults and per-skill demand

    Raises:
        UpstreamError: If all search queries fail
    """
    logger.info("Analyzing technology trends with web search...")

    queries = build_trend_queries(skills, target_role, location)
    all_results: List[Dict[str, Any]] = []
    frequency: Dict[str, int] = {}
    failures = 0
    last_error: Optional[Exception] = None

    for query in queries:
        try:
            results = search_client.search_web(query)
        except Exception as e:
            failures += 1
            last_error = e
            logger.warning(f"Search query failed: {query}: {str(e)}")
            continue

        all_results.extend(results)
        tally_technology_mentions(results, frequency)

    if failures == len(queries):
        logger.error("All trend search queries failed")
        raise UpstreamError("google_search", "Failed to fetch search trends data", last_error)

    # sorted() is stable, so ties keep first-seen order
    trending_techs = [
        tech for tech, _ in sorted(frequency.items(), key=lambda item: item[1], reverse=True)
    ][:TOP_TRENDING_LIMIT]

    skill_demand = {skill: frequency.get(skill.lower(), 0) for skill in skills}

    logger.info(
        f"Collected {len(all_results)} search results, {len(frequency)} distinct technologies "
        f"({failures} failed queries)"
    )

    return {
        "trendingTechs": trending_techs,
        "relevantResults": all_results[:RELEVANT_RESULTS_LIMIT],
        "skillDemand": skill_demand,
        "techFrequency": frequency,
    }
