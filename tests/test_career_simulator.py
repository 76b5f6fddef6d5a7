import pytest
from agents.career_simulator import (
    build_simulation_prompt,
    calculate_match_score,
    estimate_time_to_ready,
    identify_critical_gaps,
    simulate_career_paths,
)
from agents.errors import UpstreamError

PROFILE = {
    'skills': ['JavaScript', 'React', 'Python'],
    'interests': ['Web Development', 'AI/ML'],
    'experience': 'Fresher',
    'education': 'B.Tech Computer Science',
    'location': 'Bangalore, India',
    'preferredIndustries': ['FinTech'],
    'careerGoals': 'Become a senior software engineer',
    'timeHorizon': '5-year',
}


def test_calculate_match_score():
    assert calculate_match_score(['JavaScript', 'React'], ['JavaScript', 'React', 'Node.js']) == 67
    assert calculate_match_score(['Python', 'Statistics', 'Machine Learning'],
                                 ['Python', 'Statistics', 'Machine Learning']) == 100
    assert calculate_match_score(['Java'], ['JavaScript', 'React', 'Node.js']) == 33
    assert calculate_match_score([], ['Strategy']) == 0


def test_match_score_is_capped():
    assert calculate_match_score(['Python', 'python3', 'PyTorch'], ['Python']) == 100


@pytest.mark.parametrize("score, expected", [
    (100, '3-6 months'), (80, '3-6 months'), (67, '6-12 months'), (40, '1-2 years'), (0, '2-3 years'),
])
def test_estimate_time_to_ready(score, expected):
    assert estimate_time_to_ready(score) == expected


def test_identify_critical_gaps():
    assert identify_critical_gaps(['Machine Learning basics', 'Cloud Computing']) == [
        'System Design', 'Data Structures', 'Algorithms', 'API Development', 'Database Design',
    ]


def test_build_simulation_prompt():
    prompt = build_simulation_prompt(PROFILE)
    assert 'Current Skills: JavaScript, React, Python' in prompt
    assert 'Time Horizon: 5-year' in prompt
    assert 'recommendedPaths' in prompt


def test_json_reply_is_returned(fake_llm):
    reply = 'Sure! {"recommendedPaths": [{"id": "ml-engineer", "title": "ML Engineer"}]} Good luck.'
    result = simulate_career_paths(PROFILE, fake_llm(reply=reply))
    assert result == {'recommendedPaths': [{'id': 'ml-engineer', 'title': 'ML Engineer'}]}


def test_unparseable_reply_uses_sample_paths(fake_llm):
    llm = fake_llm(reply="Career paths: 1. Full stack 2. Data science")
    result = simulate_career_paths(PROFILE, llm)

    paths = {path['id']: path for path in result['recommendedPaths']}
    assert list(paths) == ['fullstack-developer', 'data-scientist', 'product-manager']
    assert paths['fullstack-developer']['matchScore'] == 67
    assert paths['fullstack-developer']['totalSkillGap'] == 33
    assert paths['fullstack-developer']['estimatedTimeToReady'] == '6-12 months'
    assert paths['product-manager']['matchScore'] == 0
    assert len(paths['data-scientist']['milestones']) == 2
    assert result['skillGapAnalysis']['criticalGaps'][0] == 'Machine Learning'
    assert set(result['personalizedRecommendations']) == {'immediateActions', 'shortTermGoals', 'longTermStrategy'}

    assert simulate_career_paths(PROFILE, llm) == result


def test_llm_failure_raises(fake_llm):
    with pytest.raises(UpstreamError):
        simulate_career_paths(PROFILE, fake_llm(error=RuntimeError("timeout")))
