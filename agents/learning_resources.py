"""Learning-Resource Collector: tutorial videos per skill and a learning-difficulty estimate."""
import re
from datetime import datetime
from typing import Any, Dict, List, Protocol, Sequence
from agents.schemas import LearningData, Video
from utils.logging_utils import get_logger

logger = get_logger(__name__)

MAX_SKILLS = 5
TOP_VIDEOS_PER_SKILL = 6
DESCRIPTION_PREVIEW_CHARS = 150
DEFAULT_DIFFICULTY = 60

BEGINNER_KEYWORDS = ['beginner', 'basic', 'intro', 'getting started', 'fundamentals', 'crash course', 'tutorial']
INTERMEDIATE_KEYWORDS = ['intermediate', 'advanced beginner', 'next level', 'deep dive', 'complete guide']
ADVANCED_KEYWORDS = ['advanced', 'expert', 'master', 'complex', 'optimization', 'architecture', 'production']

_DURATION_PATTERN = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")

_FALLBACK_VIDEOS = {
    'JavaScript': [
        ('JavaScript Full Course for Beginners', 'freeCodeCamp.org', 'PkZNo7MFNFg', '8:38:00'),
        ('JavaScript Crash Course For Beginners', 'Traversy Media', 'hdI2bqOjy3c', '1:40:25'),
    ],
    'Python': [
        ('Python Full Course for Beginners', 'Programming with Mosh', '_uQrJ0TkZlc', '6:14:07'),
        ('Python Tutorial for Beginners', 'freeCodeCamp.org', 'rfscVS0vtbw', '4:26:52'),
    ],
    'React': [
        ("React Course - Beginner's Tutorial", 'freeCodeCamp.org', 'bMknfKXIFA8', '11:55:27'),
        ('React JS Crash Course', 'Traversy Media', 'w7ejDZ8SWv8', '1:48:49'),
    ],
}


class VideoCatalogClient(Protocol):
    def search_videos(self, query: str) -> List[Dict[str, Any]]:
        ...

    def get_video_details(self, video_ids: Sequence[str]) -> List[Dict[str, Any]]:
        ...


def format_duration(duration: str) -> str:
    """
    Format an ISO-8601 video duration for display.

    "PT1H5M30S" -> "1:05:30", "PT5M0S" -> "05:00"; anything else -> "Unknown".
    """
    match = _DURATION_PATTERN.fullmatch(duration or "")
    if not match or not any(match.groups()):
        return 'Unknown'

    hours, minutes, seconds = match.groups()
    formatted = f"{hours}:" if hours else ""
    formatted += f"{(minutes or '').zfill(2)}:{(seconds or '').zfill(2)}"
    return formatted


def calculate_learning_difficulty(videos: List[Dict[str, Any]]) -> int:
    """
    Estimate how easy a skill is to pick up from its tutorial titles/descriptions.

    Each video counts toward the first tier whose keywords it mentions
    (beginner, then intermediate, then advanced). Higher score = easier.
    """
    beginner_count = intermediate_count = advanced_count = 0

    for video in videos:
        content = f"{video.get('title', '')} {video.get('description', '')}".lower()
        if any(keyword in content for keyword in BEGINNER_KEYWORDS):
            beginner_count += 1
        elif any(keyword in content for keyword in INTERMEDIATE_KEYWORDS):
            intermediate_count += 1
        elif any(keyword in content for keyword in ADVANCED_KEYWORDS):
            advanced_count += 1

    total = beginner_count + intermediate_count + advanced_count
    if total == 0:
        return DEFAULT_DIFFICULTY

    return round((beginner_count * 90 + intermediate_count * 60 + advanced_count * 30) / total)


def get_fallback_videos(skill: str) -> List[Dict[str, str]]:
    """Fixed video suggestions used when the video catalog can't be reached."""
    entries = _FALLBACK_VIDEOS.get(skill) or [
        (f'Learn {skill} - Complete Tutorial', 'Tech Academy', 'dQw4w9WgXcQ', '2:30:00'),
        (f'{skill} Crash Course', 'Code Master', 'dQw4w9WgXcQ', '1:45:00'),
    ]
    return [
        {'title': title, 'channelTitle': channel, 'videoId': video_id, 'duration': duration}
        for title, channel, video_id, duration in entries
    ]


def to_video(item: Dict[str, Any]) -> Video:
    """Convert a `videos` endpoint item into the report's video shape."""
    snippet = item.get('snippet') or {}
    thumbnails = snippet.get('thumbnails') or {}
    thumbnail = (thumbnails.get('medium') or thumbnails.get('default') or {}).get('url', '')
    statistics = item.get('statistics') or {}
    description = snippet.get('description') or ''

    try:
        view_count = int(statistics.get('viewCount', 0))
    except (TypeError, ValueError):
        view_count = 0

    return {
        'title': snippet.get('title', ''),
        'channelTitle': snippet.get('channelTitle', ''),
        'videoId': item.get('id', ''),
        'thumbnail': thumbnail,
        'duration': format_duration((item.get('contentDetails') or {}).get('duration', '')),
        'viewCount': view_count,
        'description': description[:DESCRIPTION_PREVIEW_CHARS] + '...',
        'publishedAt': snippet.get('publishedAt', ''),
    }


def collect_skill_videos(skill: str, video_client: VideoCatalogClient) -> List[Video]:
    """Run the per-skill queries and return every detailed video found."""
    year = datetime.now().year
    queries = [
        f"{skill} tutorial {year} beginners",
        f"{skill} complete course",
        f"learn {skill} step by step",
        f"{skill} project tutorial",
    ]

    skill_videos: List[Video] = []
    seen_ids = set()
    for query in queries:
        items = video_client.search_videos(query)
        video_ids = [
            item['id']['videoId'] for item in items
            if isinstance(item.get('id'), dict) and item['id'].get('videoId')
        ]
        if not video_ids:
            continue
        details = video_client.get_video_details(video_ids)
        for detail in details:
            video = to_video(detail)
            # The same tutorial often comes back for several queries
            if video['videoId'] in seen_ids:
                continue
            seen_ids.add(video['videoId'])
            skill_videos.append(video)
    return skill_videos


def analyze_learning_resources(skills: List[str], video_client: VideoCatalogClient) -> LearningData:
    """
    Find the most-viewed tutorials for up to MAX_SKILLS skills.

    A skill whose lookups fail gets fallback videos and DEFAULT_DIFFICULTY; the
    error is logged and never propagated.

    Args:
        skills: Skills to look up (only the first MAX_SKILLS are used)
        video_client: Client exposing search_videos and get_video_details

    Returns:
        LearningData with per-skill summaries, difficulty and recommended videos
    """
    logger.info("Analyzing learning resources with the video catalog...")

    learning_resources = []
    skill_difficulty: Dict[str, int] = {}
    recommended_videos = []

    for skill in skills[:MAX_SKILLS]:
        try:
            skill_videos = collect_skill_videos(skill, video_client)
        except Exception as e:
            logger.warning(f"Video search failed for {skill}, using fallback videos: {str(e)}")
            skill_difficulty[skill] = DEFAULT_DIFFICULTY
            recommended_videos.append({'skill': skill, 'videos': get_fallback_videos(skill)})
            continue

        top_videos = sorted(skill_videos, key=lambda v: v['viewCount'], reverse=True)[:TOP_VIDEOS_PER_SKILL]
        if not top_videos:
            logger.info(f"No videos found for {skill}")
            continue

        difficulty = calculate_learning_difficulty(top_videos)
        skill_difficulty[skill] = difficulty
        recommended_videos.append({'skill': skill, 'videos': top_videos})

        channels: List[str] = []
        for video in top_videos:
            if video['channelTitle'] not in channels:
                channels.append(video['channelTitle'])

        learning_resources.append({
            'skill': skill,
            'videoCount': len(top_videos),
            'totalViews': sum(video['viewCount'] for video in top_videos),
            'difficultyScore': difficulty,
            'popularChannels': channels[:3],
        })

    logger.info(f"Found learning resources for {len(learning_resources)} skills")

    return {
        'learningResources': learning_resources,
        'skillDifficulty': skill_difficulty,
        'recommendedVideos': recommended_videos,
    }
