"""Groq chat-completion client (OpenAI-compatible API)."""

import json
import re
import httpx
import logging
from typing import Any, Dict, Optional

from leadgen.config import settings

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You are a B2B go-to-market strategist. "
    "Always respond with ONLY valid JSON and no extra commentary."
)

LEAD_EXTRACTION_PROMPT = """Extract the lead described in the text below.
Return a JSON object with exactly these keys:
"profile_name", "industry", "revenue", "location".
Use null for anything the text does not mention.

Text:
{raw_content}"""


class GroqServiceError(Exception):
    """Groq request failed or returned an unusable response."""


def extract_json(text: str) -> Dict[str, Any]:
    """
    Extract the JSON object from model output.

    Takes the span from the first "{" to the last "}".

    Raises:
        ValueError: no JSON object in the text (json.JSONDecodeError is a ValueError)
    """
    match = re.search(r"\{[\s\S]*\}", text or "")
    if not match:
        raise ValueError("No JSON object found in model response")
    return json.loads(match.group(0))


class GroqService:
    """Thin async client for Groq chat completions."""

    BASE_URL = "https://api.groq.com/openai/v1"

    def __init__(self, api_key: str, model: str = "llama-3.1-8b-instant"):
        self.api_key = api_key
        self.model = model
        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    async def create_chat_completion(
        self,
        prompt: str,
        max_tokens: int = 700,
        temperature: float = 0.7
    ) -> Dict[str, Any]:
        """
        Call chat completions with a short prompt.

        Returns:
            The full completion response

        Raises:
            GroqServiceError: on transport errors or non-2xx responses
        """
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            # keep well below the tokens-per-minute limit
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    f"{self.BASE_URL}/chat/completions",
                    headers=self.headers,
                    json=payload,
                    timeout=30.0
                )
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Groq API returned {e.response.status_code}: {e.response.text}")
            raise GroqServiceError(f"Groq API returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Groq request failed: {str(e)}")
            raise GroqServiceError(f"Groq request failed: {str(e)}") from e

    @staticmethod
    def completion_text(response: Dict[str, Any]) -> str:
        """Content of the first choice, or the empty string."""
        choices = response.get("choices") or []
        if not choices:
            return ""
        return (choices[0].get("message") or {}).get("content") or ""

    async def complete_json(self, prompt: str, **kwargs) -> Dict[str, Any]:
        """
        Chat completion parsed as a JSON object.

        Raises:
            GroqServiceError: request failed or no JSON object in the answer
        """
        response = await self.create_chat_completion(prompt, **kwargs)
        text = self.completion_text(response)
        try:
            return extract_json(text)
        except ValueError as e:
            raise GroqServiceError(f"Unparseable model response: {e}") from e

    async def extract_lead_details(self, raw_content: str) -> Dict[str, Optional[str]]:
        """
        Pull profile name, industry, revenue and location out of free text.

        Returns:
            dict with keys profile_name, industry, revenue, location
        """
        data = await self.complete_json(
            LEAD_EXTRACTION_PROMPT.format(raw_content=raw_content),
            temperature=0.1
        )
        return {
            key: (str(data[key]).strip() or None) if data.get(key) is not None else None
            for key in ("profile_name", "industry", "revenue", "location")
        }


def get_groq_service(api_key: Optional[str] = None) -> GroqService:
    """
    Get Groq service instance.

    Args:
        api_key: Groq API key (defaults to GROQ_API_KEY)
    """
    key = api_key or settings.GROQ_API_KEY
    if not key:
        raise ValueError("Groq API key not configured")
    return GroqService(key, model=settings.GROQ_MODEL)
