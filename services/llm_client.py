"""LLM client abstraction for Gemini and Ollama."""
import json
import re
from typing import Any, Dict, List, Optional, Protocol
import requests
from google import genai
from google.genai import types
from config import (
    LLM_PROVIDER,
    LLM_TIMEOUT_SECONDS,
    GEMINI_API_KEY,
    GEMINI_MODEL_NAME,
    OLLAMA_BASE_URL,
    OLLAMA_MODEL_NAME,
)
from utils.logging_utils import get_logger

logger = get_logger(__name__)

_FENCE_PATTERN = re.compile(r"```(?:json)?\s*(.*?)(?:```|$)", re.DOTALL | re.IGNORECASE)


class LLMClient(Protocol):
    """Protocol for LLM clients."""

    def chat(self, system_prompt: str, user_prompt: str) -> str:
        """
        Send a chat message to the LLM.

        Args:
            system_prompt: System/instruction prompt
            user_prompt: User message

        Returns:
            Assistant's response text
        """
        ...


def strip_code_fences(text: str) -> str:
    """
    Remove a markdown code-fence wrapper (```json ... ``` or ``` ... ```) if present.

    An unterminated fence keeps everything after the opening backticks.
    """
    if not text:
        return ""
    if "```" not in text:
        return text.strip()
    match = _FENCE_PATTERN.search(text)
    return match.group(1).strip() if match else text.strip()


def parse_json_object(text: str) -> Dict[str, Any]:
    """
    Parse an LLM response that is expected to be a single JSON object.

    Raises:
        ValueError: If the (fence-stripped) text is empty, not JSON, or not an object
    """
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise ValueError("LLM returned empty response.")
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse JSON response from LLM: {str(e)}") from e
    if not isinstance(parsed, dict):
        raise ValueError(f"Parsed JSON is not an object. Got type: {type(parsed).__name__}")
    return parsed


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """
    Pull the outermost {...} span out of free text and parse it.

    Returns:
        The parsed object, or None when no parseable object is present
    """
    if not text:
        return None
    first_brace = text.find("{")
    last_brace = text.rfind("}")
    if first_brace == -1 or last_brace <= first_brace:
        return None
    try:
        parsed = json.loads(text[first_brace:last_brace + 1])
    except json.JSONDecodeError:
        logger.debug("Outermost brace span is not valid JSON")
        return None
    return parsed if isinstance(parsed, dict) else None


def list_available_models(base_url: Optional[str] = None) -> List[str]:
    """
    List all available Ollama models.

    Args:
        base_url: Ollama base URL (defaults to OLLAMA_BASE_URL from config)

    Returns:
        List of available model names
    """
    url = (base_url or OLLAMA_BASE_URL).rstrip('/')
    try:
        response = requests.get(f"{url}/api/tags", timeout=LLM_TIMEOUT_SECONDS)
        response.raise_for_status()
        data = response.json()
        return [model["name"] for model in data.get("models", [])]
    except requests.exceptions.RequestException as e:
        logger.error(f"Error listing models: {str(e)}")
        raise RuntimeError(f"Failed to list available models. Make sure Ollama is running at {url}. Error: {str(e)}")


class GeminiClient:
    """Gemini client built on the google-genai SDK."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        timeout: int = LLM_TIMEOUT_SECONDS,
    ):
        """
        Initialize Gemini client.

        Raises:
            ValueError: If no API key is configured
        """
        self.api_key = api_key or GEMINI_API_KEY
        self.model_name = model_name or GEMINI_MODEL_NAME
        self.timeout = timeout

        if not self.api_key:
            raise ValueError("GEMINI_API_KEY not set. Please set it in environment or .env file.")

        # HttpOptions.timeout is in milliseconds
        self.client = genai.Client(
            api_key=self.api_key,
            http_options=types.HttpOptions(timeout=self.timeout * 1000),
        )

    def chat(self, system_prompt: str, user_prompt: str) -> str:
        """
        Send a single-turn request with the system prompt as system instruction.

        Raises:
            RuntimeError: If the API call fails or returns no text
        """
        logger.debug(
            f"Making Gemini request: model={self.model_name}, "
            f"prompt_length={len(system_prompt) + len(user_prompt)} chars"
        )

        try:
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=user_prompt,
                config=types.GenerateContentConfig(system_instruction=system_prompt),
            )
        except Exception as e:
            raise RuntimeError(f"Gemini API error: {str(e)}") from e

        text = response.text
        if not text:
            raise RuntimeError(f"Gemini returned no text for model {self.model_name}")
        return text.strip()


class OllamaClient:
    """Ollama LLM client implementation."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        model_name: Optional[str] = None,
        timeout: int = LLM_TIMEOUT_SECONDS,
    ):
        """
        Initialize Ollama client.

        Raises:
            RuntimeError: If Ollama server is not reachable
        """
        self.base_url = (base_url or OLLAMA_BASE_URL).rstrip('/')
        self.model_name = model_name or OLLAMA_MODEL_NAME
        self.timeout = timeout

        available_models = list_available_models(self.base_url)
        if self.model_name not in available_models:
            # Don't raise here - let it fail on first use if model really doesn't exist
            logger.warning(
                f"Model '{self.model_name}' not found in available models "
                f"({', '.join(available_models[:5])}). To pull it, run: ollama pull {self.model_name}"
            )

    def chat(self, system_prompt: str, user_prompt: str) -> str:
        """
        Send a chat message to Ollama.

        Raises:
            RuntimeError: If the API call fails
        """
        url = f"{self.base_url}/api/chat"
        payload = {
            "model": self.model_name,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt}
            ],
            "stream": False
        }

        try:
            response = requests.post(url, json=payload, timeout=self.timeout)
            if response.status_code == 404:
                raise RuntimeError(
                    f"Ollama API endpoint not found (404). URL: {url}. "
                    f"Make sure Ollama is running: `ollama serve`"
                )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise RuntimeError(f"Ollama API error: {str(e)}") from e

        if "message" in data and "content" in data["message"]:
            return data["message"]["content"]
        raise RuntimeError(f"Unexpected response format: {str(data)[:300]}")


def create_llm_client(provider: Optional[str] = None) -> LLMClient:
    """
    Build the configured LLM client.

    Args:
        provider: "gemini" or "ollama" (defaults to LLM_PROVIDER from config)
    """
    provider = (provider or LLM_PROVIDER).lower()
    logger.info(f"Initializing LLM client: provider={provider}")
    if provider == "gemini":
        return GeminiClient()
    if provider == "ollama":
        return OllamaClient()
    raise ValueError(f"Unsupported LLM provider: {provider}. Supported: gemini, ollama")
