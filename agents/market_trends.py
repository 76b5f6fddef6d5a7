"""Market Trend Synthesizer: merge collector demand maps into ranked market trends."""
from typing import Dict, List
from agents.schemas import JobMarketData, MarketTrend, TrendData

DEFAULT_BASE_SALARY = 800_000  # ₹8L
MIN_DEMAND_SCORE = 5
MAX_TRENDS = 20
TOP_LOCATIONS = ['Bangalore', 'Mumbai', 'Hyderabad', 'Pune', 'Delhi']


def merge_skill_demand(*demand_maps: Dict[str, int]) -> Dict[str, List[int]]:
    """Union demand maps by lower-cased skill, keeping one summed count per source."""
    merged: Dict[str, List[int]] = {}
    for index, demand_map in enumerate(demand_maps):
        for skill, count in demand_map.items():
            counts = merged.setdefault(skill.lower(), [0] * len(demand_maps))
            counts[index] += count
    return merged


def growth_rate_for(demand_score: float) -> int:
    if demand_score > 50:
        return 15
    if demand_score > 25:
        return 8
    return 3


def synthesize_market_trends(trend_data: TrendData, job_data: JobMarketData) -> List[MarketTrend]:
    """
    Combine search-trend and job-posting demand into a ranked trend list.

    Pure and deterministic: the same inputs always give the same list.
    """
    merged = merge_skill_demand(trend_data['skillDemand'], job_data['skillDemand'])
    base_salary = job_data.get('avgSalary') or DEFAULT_BASE_SALARY

    trends: List[MarketTrend] = []
    for skill, (search_demand, job_demand) in merged.items():
        demand_score = min(100, search_demand * 10 + job_demand * 10)
        if demand_score <= MIN_DEMAND_SCORE:
            continue

        trends.append({
            'skill': skill,
            'demand_score': demand_score,
            'avg_salary_inr': round(base_salary * (1 + demand_score / 100)),
            'job_count': job_demand,
            'growth_rate': growth_rate_for(demand_score),
            'locations': list(TOP_LOCATIONS),
        })

    trends.sort(key=lambda trend: trend['demand_score'], reverse=True)
    return trends[:MAX_TRENDS]
