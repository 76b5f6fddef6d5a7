"""SerpAPI client wrapper for Google web search and Google Jobs search."""
import requests
from typing import Any, Dict, List, Literal, Optional
from config import (
    SERPAPI_BASE_URL,
    SERPAPI_KEY,
    SERPAPI_TIMEOUT,
    SERPAPI_COUNTRY,
    SERPAPI_LANGUAGE,
    SERPAPI_RESULTS_PER_QUERY,
)
from utils.logging_utils import get_logger

logger = get_logger(__name__)

SearchEngine = Literal["google", "google_jobs"]


class SerpApiClient:
    """Thin client over the SerpAPI search endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: int = SERPAPI_TIMEOUT,
    ):
        """
        Initialize SerpAPI client.

        Args:
            api_key: SerpAPI key (defaults to SERPAPI_KEY from config)
            base_url: Search endpoint (defaults to SERPAPI_BASE_URL from config)
            timeout: Per-request timeout in seconds
        """
        self.api_key = api_key if api_key is not None else SERPAPI_KEY
        self.base_url = base_url or SERPAPI_BASE_URL
        self.timeout = timeout

        if not self.api_key:
            logger.warning("SERPAPI_KEY not set. Search requests will most likely be rejected.")

    def search(self, query: str, engine: SearchEngine = "google", **extra_params: Any) -> Dict[str, Any]:
        """
        Call the search endpoint and return the decoded JSON response.

        Args:
            query: Free-text query
            engine: SerpAPI engine name
            **extra_params: Additional query parameters (location, num, gl, hl, ...)

        Returns:
            Decoded JSON body

        Raises:
            requests.exceptions.RequestException: On transport errors or non-success status
            ValueError: If the body is not valid JSON
        """
        params: Dict[str, Any] = {
            "engine": engine,
            "q": query,
            "api_key": self.api_key,
        }
        for key, value in extra_params.items():
            if value is not None:
                params[key] = value

        try:
            response = requests.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()

            try:
                json_data = response.json()
                logger.debug(f"SerpAPI response status: {response.status_code}, engine={engine}")
                return json_data
            except ValueError as e:
                logger.error(f"Failed to parse JSON response: {str(e)}")
                logger.error(f"Response text (first 1000 chars): {response.text[:1000]}")
                raise ValueError(f"Invalid JSON response from SerpAPI: {str(e)}")

        except requests.exceptions.RequestException as e:
            logger.error(f"SerpAPI error ({engine}): {str(e)}")
            if getattr(e, "response", None) is not None:
                logger.error(f"Response status: {e.response.status_code}")
                logger.error(f"Response text: {e.response.text[:500]}")
            raise

    def search_web(self, query: str, num: int = SERPAPI_RESULTS_PER_QUERY) -> List[Dict[str, Any]]:
        """Run a Google web search and return its organic_results list."""
        data = self.search(query, engine="google", num=num, gl=SERPAPI_COUNTRY, hl=SERPAPI_LANGUAGE)
        results = data.get("organic_results") or []
        logger.info(f"Web search '{query}' returned {len(results)} results")
        return results

    def search_jobs(self, query: str, location: Optional[str] = None) -> List[Dict[str, Any]]:
        """Run a Google Jobs search and return its jobs_results list."""
        data = self.search(query, engine="google_jobs", location=location, hl=SERPAPI_LANGUAGE)
        results = data.get("jobs_results") or []
        logger.info(f"Jobs search '{query}' returned {len(results)} postings")
        return results
