"""YouTube Data API v3 client wrapper."""
import requests
from typing import Any, Dict, List, Optional, Sequence
from config import (
    YOUTUBE_DATA_API_URL,
    YOUTUBE_DATA_API_KEY,
    YOUTUBE_TIMEOUT,
    YOUTUBE_RESULTS_PER_QUERY,
)
from utils.logging_utils import get_logger

logger = get_logger(__name__)


class YouTubeClient:
    """Client for the video search and video details endpoints."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: int = YOUTUBE_TIMEOUT,
    ):
        self.api_key = api_key if api_key is not None else YOUTUBE_DATA_API_KEY
        self.base_url = (base_url or YOUTUBE_DATA_API_URL).rstrip('/')
        self.timeout = timeout

        if not self.api_key:
            logger.warning("YOUTUBE_DATA_API_KEY not set. Learning resources will use fallback videos.")

    def _get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        params = dict(params, key=self.api_key)
        response = requests.get(f"{self.base_url}/{endpoint}", params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def search_videos(self, query: str, max_results: int = YOUTUBE_RESULTS_PER_QUERY) -> List[Dict[str, Any]]:
        """
        Search medium-length, relevance-ordered videos.

        Returns:
            The raw `items` list; each item carries `id.videoId` and `snippet`
        """
        data = self._get("search", {
            "q": query,
            "type": "video",
            "part": "snippet",
            "maxResults": max_results,
            "order": "relevance",
            "safeSearch": "strict",
            "videoDuration": "medium",
        })
        return data.get("items") or []

    def get_video_details(self, video_ids: Sequence[str]) -> List[Dict[str, Any]]:
        """
        Fetch statistics, contentDetails and snippet for a batch of video ids.

        Returns:
            The raw `items` list
        """
        if not video_ids:
            return []
        data = self._get("videos", {
            "id": ",".join(video_ids),
            "part": "statistics,contentDetails,snippet",
        })
        return data.get("items") or []
