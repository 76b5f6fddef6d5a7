import json
import pytest
from agents.errors import UpstreamError
from agents.pipeline import predict_skills_demand, top_skills_by_count, with_profile_defaults


def test_top_skills_by_count():
    assert top_skills_by_count({'sql': 1, 'python': 3, 'aws': 1, 'docker': 2}, 3) == ['python', 'docker', 'sql']


def test_end_to_end_with_empty_upstream_data(fake_search, fake_videos, fake_llm, data_scientist_profile):
    report = predict_skills_demand(
        data_scientist_profile,
        fake_llm(reply="I could not produce JSON this time."),
        fake_search(),
        fake_videos(),
    )

    career_path = report['careerPath']
    salary = report['salaryPrediction']
    assert career_path['nextRole'] == 'Senior Data Scientist'
    assert career_path['expectedSalary'] >= 1_500_000
    assert career_path['expectedSalary'] - salary['current'] >= 300_000

    assert salary == {'current': 1_680_000, 'withNewSkills': 2_180_000, 'currency': 'INR', 'location': 'India'}
    assert len(report['skillGaps']) >= 4
    assert all(1 <= gap['importance'] <= 10 for gap in report['skillGaps'])

    roadmap = report['learningRoadmap']
    assert len(roadmap['recommendedCourses']) == len(report['skillGaps'])
    assert len(roadmap['learningPlatforms']) == 6
    assert roadmap['youtubeVideos'] == []

    sources = report['realDataSources']
    assert (sources['googleSearchResults'], sources['jobPostings'], sources['youtubeResources']) == (0, 0, 0)
    assert sources['marketDataPoints'] == 0
    assert sources['lastUpdated'].endswith('+00:00')
    assert report['marketInsights'] == {'trendingTechnologies': [], 'highDemandSkills': [], 'emergingFields': []}


def test_profile_with_only_required_fields(fake_search, fake_videos, fake_llm):
    search = fake_search()
    llm = fake_llm(reply="")
    report = predict_skills_demand(
        {'currentSkills': ['Python'], 'targetRole': 'Data Scientist'}, llm, search, fake_videos()
    )

    assert report['careerPath']['nextRole'] == 'Senior Data Scientist'
    assert report['salaryPrediction']['current'] == 1_680_000
    assert report['salaryPrediction']['location'] == 'India'
    assert search.job_queries == [('Data Scientist India', 'India')]
    _, user_prompt = llm.calls[0]
    assert '- Experience: Mid-level' in user_prompt
    assert '- Industry: Technology' in user_prompt


def test_with_profile_defaults_keeps_given_values():
    profile = with_profile_defaults(
        {'currentSkills': ['Go'], 'targetRole': 'Backend Developer', 'location': 'Pune', 'industry': ''}
    )
    assert profile == {
        'currentSkills': ['Go'],
        'targetRole': 'Backend Developer',
        'experience': 'Mid-level',
        'industry': 'Technology',
        'location': 'Pune',
    }


def test_end_to_end_with_market_data(fake_search, fake_videos, fake_llm, data_scientist_profile):
    search = fake_search(
        web_results=[{'title': 'Python and Docker lead the pack', 'snippet': 'Kubernetes too'}],
        job_results=[
            {'title': 'Data Scientist', 'location': 'Pune', 'description': 'Python SQL',
             'detected_extensions': {'salary': '₹15 LPA'}},
            {'title': 'Data Scientist', 'location': 'Pune', 'description': 'Python'},
        ],
    )
    videos = fake_videos(videos={'v1': ('Python for beginners', 'Corey', 1000, 'PT20M0S')})
    reply = "```json\n" + json.dumps({
        'skillGaps': [{'skill': 'Docker', 'importance': '8', 'avgSalaryIncrease': 'unknown',
                       'learningPath': ['containers'], 'timeToLearn': '1 month'}],
        'careerPath': {'nextRole': 'Senior Data Scientist', 'timeline': '12 months',
                       'requiredSkills': ['Docker'], 'expectedSalary': 100},
    }) + "\n```"

    report = predict_skills_demand(data_scientist_profile, fake_llm(reply=reply), search, videos)

    assert report['skillGaps'] == [{
        'skill': 'Docker', 'importance': 8, 'currentDemand': 10, 'avgSalaryIncrease': 200_000,
        'learningPath': ['containers'], 'timeToLearn': '1 month',
    }]
    assert report['careerPath']['expectedSalary'] > report['salaryPrediction']['current']
    assert report['marketInsights']['highDemandSkills'] == ['python', 'sql']
    assert report['marketInsights']['trendingTechnologies'][:3] == ['python', 'docker', 'kubernetes']
    assert report['realDataSources']['jobPostings'] == 2
    assert report['realDataSources']['googleSearchResults'] == 4
    # Videos are collected for the user's skill plus the top trending technologies
    assert len(videos.queries) == 4 * 4
    assert report['learningRoadmap']['recommendedCourses'][0]['skill'] == 'Docker'


def test_fatal_stage_failure_propagates(fake_search, fake_videos, fake_llm, data_scientist_profile):
    with pytest.raises(UpstreamError) as excinfo:
        predict_skills_demand(
            data_scientist_profile, fake_llm(reply="{}"), fake_search(fail_jobs=True), fake_videos()
        )
    assert excinfo.value.source == 'google_jobs'
