"""Shared fakes for the injected search, video and LLM clients."""
import pytest


class FakeSearchClient:
    """Stands in for SerpApiClient: canned organic and jobs results."""

    def __init__(self, web_results=None, job_results=None, failing_queries=(), fail_jobs=False):
        self.web_results = web_results or []
        self.job_results = job_results or []
        self.failing_queries = failing_queries
        self.fail_jobs = fail_jobs
        self.web_queries = []
        self.job_queries = []

    def search_web(self, query):
        self.web_queries.append(query)
        if self.failing_queries == "all" or any(fragment in query for fragment in self.failing_queries):
            raise ConnectionError(f"search failed for {query}")
        return list(self.web_results)

    def search_jobs(self, query, location=None):
        self.job_queries.append((query, location))
        if self.fail_jobs:
            raise ConnectionError("jobs search failed")
        return list(self.job_results)


class FakeVideoClient:
    """Stands in for YouTubeClient: every query returns the same videos."""

    def __init__(self, videos=None, fail=False):
        # videoId -> (title, channel, views, duration)
        self.videos = videos or {}
        self.fail = fail
        self.queries = []

    def search_videos(self, query):
        self.queries.append(query)
        if self.fail:
            raise ConnectionError("video search failed")
        return [{'id': {'videoId': video_id}} for video_id in self.videos]

    def get_video_details(self, video_ids):
        details = []
        for video_id in video_ids:
            title, channel, views, duration = self.videos[video_id]
            details.append({
                'id': video_id,
                'snippet': {
                    'title': title,
                    'channelTitle': channel,
                    'description': f"{title} description",
                    'publishedAt': '2025-01-01T00:00:00Z',
                    'thumbnails': {'medium': {'url': f"https://img.example/{video_id}.jpg"}},
                },
                'statistics': {'viewCount': str(views)},
                'contentDetails': {'duration': duration},
            })
        return details


class FakeLLM:
    """Returns a canned reply (or a reply picked by a callable), or raises."""

    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def chat(self, system_prompt, user_prompt):
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        if callable(self.reply):
            return self.reply(user_prompt)
        return self.reply


@pytest.fixture
def fake_search():
    return FakeSearchClient


@pytest.fixture
def fake_videos():
    return FakeVideoClient


@pytest.fixture
def fake_llm():
    return FakeLLM


@pytest.fixture
def empty_trend_data():
    return {'trendingTechs': [], 'relevantResults': [], 'skillDemand': {}, 'techFrequency': {}}


@pytest.fixture
def empty_job_data():
    return {'jobPostings': [], 'avgSalary': 0, 'skillDemand': {}, 'locationData': {}}


@pytest.fixture
def data_scientist_profile():
    return {
        'currentSkills': ['Python'],
        'targetRole': 'Data Scientist',
        'experience': 'Mid-level',
        'location': 'India',
    }
