"""Configuration constants for the Career Advisor backend."""
import os
from dotenv import load_dotenv

load_dotenv()

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Web search + jobs search (SerpAPI-compatible endpoint)
# engine=google returns organic_results, engine=google_jobs returns jobs_results
SERPAPI_BASE_URL = os.getenv("SERPAPI_BASE_URL", "https://serpapi.com/search.json")
SERPAPI_KEY = os.getenv("SERPAPI_KEY", "")
SERPAPI_TIMEOUT = int(os.getenv("SERPAPI_TIMEOUT", "15"))
SERPAPI_COUNTRY = os.getenv("SERPAPI_COUNTRY", "in")
SERPAPI_LANGUAGE = os.getenv("SERPAPI_LANGUAGE", "en")
SERPAPI_RESULTS_PER_QUERY = 10

# YouTube Data API v3
YOUTUBE_DATA_API_URL = os.getenv("YOUTUBE_DATA_API_URL", "https://youtube.googleapis.com/youtube/v3")
YOUTUBE_DATA_API_KEY = os.getenv("YOUTUBE_DATA_API_KEY", "")
YOUTUBE_TIMEOUT = int(os.getenv("YOUTUBE_TIMEOUT", "10"))
YOUTUBE_RESULTS_PER_QUERY = 5

# LLM Configuration
# Supported providers: "gemini" (google-genai SDK) or "ollama" (local server)
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "gemini")
LLM_TIMEOUT_SECONDS = int(os.getenv("LLM_TIMEOUT_SECONDS", "60"))

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL_NAME = os.getenv("GEMINI_MODEL_NAME", "gemini-2.5-flash")

# To see available models: ollama list
OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
OLLAMA_MODEL_NAME = os.getenv("OLLAMA_MODEL_NAME", "llama3")

# Application Configuration
APP_TITLE = "Career Advisor API"
APP_VERSION = "1.0.0"
DEFAULT_EXPERIENCE = "Mid-level"
DEFAULT_INDUSTRY = "Technology"
DEFAULT_LOCATION = "India"
DEFAULT_TIME_HORIZON = "3-year"

# Resume scoring
DEFAULT_RESUME_TARGET_ROLE = "Software Engineer"
DEFAULT_RESUME_TARGET_INDUSTRY = "Software Engineering"
RESUME_MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
RESUME_MIN_TEXT_LENGTH = 100
RESUME_ALLOWED_EXTENSIONS = ("pdf", "docx", "txt")
