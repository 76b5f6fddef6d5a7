from agents.learning_resources import (
    DEFAULT_DIFFICULTY,
    analyze_learning_resources,
    calculate_learning_difficulty,
    format_duration,
)


def test_format_duration():
    assert format_duration("PT1H5M30S") == "1:05:30"
    assert format_duration("PT5M0S") == "05:00"
    assert format_duration("PT12M7S") == "12:07"
    assert format_duration("PT2H") == "2:00:00"


def test_format_duration_unparseable():
    assert format_duration("") == "Unknown"
    assert format_duration("PT") == "Unknown"
    assert format_duration("five minutes") == "Unknown"


def test_learning_difficulty_tiers():
    beginner = {'title': 'Rust for beginners', 'description': ''}
    intermediate = {'title': 'Rust deep dive', 'description': ''}
    advanced = {'title': 'Expert Rust', 'description': ''}

    assert calculate_learning_difficulty([beginner, advanced]) == 60
    assert calculate_learning_difficulty([beginner, intermediate]) == 75
    assert calculate_learning_difficulty([advanced]) == 30


def test_learning_difficulty_without_matches():
    assert calculate_learning_difficulty([]) == DEFAULT_DIFFICULTY
    assert calculate_learning_difficulty([{'title': 'Rust', 'description': 'talk'}]) == DEFAULT_DIFFICULTY


def test_analyze_learning_resources_keeps_most_viewed(fake_videos):
    videos = {f"v{i}": (f"Python video {i}", f"Channel {i % 2}", i * 100, "PT10M0S") for i in range(8)}
    client = fake_videos(videos=videos)

    data = analyze_learning_resources(['Python'], client)

    assert len(client.queries) == 4
    recommended = data['recommendedVideos'][0]
    assert recommended['skill'] == 'Python'
    assert [video['videoId'] for video in recommended['videos']] == ['v7', 'v6', 'v5', 'v4', 'v3', 'v2']
    assert recommended['videos'][0]['duration'] == '10:00'
    assert recommended['videos'][0]['description'].endswith('...')

    summary = data['learningResources'][0]
    assert summary['videoCount'] == 6
    assert summary['totalViews'] == 2700
    assert summary['popularChannels'] == ['Channel 1', 'Channel 0']


def test_analyze_learning_resources_limits_skills(fake_videos):
    client = fake_videos(videos={'a': ('Intro', 'C', 1, 'PT1M0S')})
    data = analyze_learning_resources(['A', 'B', 'C', 'D', 'E', 'F', 'G'], client)
    assert len(client.queries) == 20
    assert list(data['skillDifficulty']) == ['A', 'B', 'C', 'D', 'E']


def test_failed_skill_falls_back(fake_videos):
    data = analyze_learning_resources(['Python', 'Elixir'], fake_videos(fail=True))

    assert data['learningResources'] == []
    assert data['skillDifficulty'] == {'Python': DEFAULT_DIFFICULTY, 'Elixir': DEFAULT_DIFFICULTY}
    python_videos = data['recommendedVideos'][0]['videos']
    assert python_videos[0]['channelTitle'] == 'Programming with Mosh'
    assert data['recommendedVideos'][1]['videos'][0]['title'] == 'Learn Elixir - Complete Tutorial'
