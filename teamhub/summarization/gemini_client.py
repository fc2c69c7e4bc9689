# teamhub/summarization/gemini_client.py
import asyncio
from typing import Any, Iterable, Optional

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from teamhub.config.settings import settings
from teamhub.models.collection import TeamCollection
from teamhub.models.team import TeamRecord
from .prompt import build_prompt

# Define common HTTP status codes that warrant a retry
RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}

REPORT_UNAVAILABLE_MESSAGE = "Análise indisponível."
REPORT_ERROR_MESSAGE = "Ocorreu um erro na análise da IA."


class SummarizationError(Exception):
    """Custom exception for text-generation errors."""

    pass


class AuthenticationError(SummarizationError):
    """Exception raised for authentication failures (401, 403)."""

    pass


class RateLimitError(SummarizationError):
    """Exception raised for rate limit errors (429)."""

    pass


class TransientServerError(SummarizationError):
    """Exception raised for retryable server-side statuses."""

    pass


class GeminiClient:
    """Minimal async client for the Gemini generateContent endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        max_attempts: int = 4,
        wait: Optional[wait_base] = None,
    ):
        self.api_key = api_key or settings.gemini_api_key
        if not self.api_key:
            logger.error("Gemini API key is not set in environment variables.")
            raise SummarizationError("Missing Gemini API key configuration.")

        self.model = model or settings.gemini_model
        self.url = f"{settings.gemini_api_base_url}/models/{self.model}:generateContent"
        self.max_attempts = max_attempts
        # Exponential backoff (1s, 2s, 4s... capped)
        self.wait = wait or wait_exponential(multiplier=1, min=1, max=10)
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.gemini_timeout)
        )
        self.client.headers.update({"x-goog-api-key": self.api_key})
        logger.debug(f"GeminiClient initialized for model {self.model}.")

    async def _post(self, prompt: str) -> httpx.Response:
        response = await self.client.post(
            self.url, json={"contents": [{"parts": [{"text": prompt}]}]}
        )

        if response.status_code in {401, 403}:
            logger.warning(
                f"Authentication error ({response.status_code}) from Gemini. Check the API key."
            )
            raise AuthenticationError(f"Authentication failed ({response.status_code})")

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            logger.warning(f"Rate limit hit (429) on Gemini. Retry-After: {retry_after}")
            raise RateLimitError("Rate limited by Gemini")

        if response.status_code in RETRYABLE_STATUS_CODES:
            logger.warning(f"Retrying Gemini request due to status {response.status_code}")
            raise TransientServerError(f"HTTP error: {response.status_code}")

        if response.is_error:
            logger.error(f"HTTP error from Gemini: {response.status_code}")
            raise SummarizationError(f"HTTP error: {response.status_code}")

        return response

    async def generate(self, prompt: str) -> str:
        """Sends the prompt and returns the generated text ('' when none)."""
        logger.debug(f"Sending prompt to Gemini: {prompt[:200]}")
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=self.wait,
                retry=retry_if_exception_type(
                    (httpx.RequestError, RateLimitError, TransientServerError)
                ),
                reraise=True,  # Reraise the exception after max attempts
            ):
                with attempt:
                    response = await self._post(prompt)
        except httpx.RequestError as e:
            logger.error(f"Network error talking to Gemini after retries: {e}")
            raise SummarizationError("Gemini request failed") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise SummarizationError("Gemini returned a non-JSON body") from e
        return self._extract_text(payload)

    @staticmethod
    def _extract_text(payload: Any) -> str:
        """Joins the text parts of the first candidate.

        Raises:
            SummarizationError: If the body does not have the generateContent shape.
        """
        try:
            candidates = payload.get("candidates") or []
            if not candidates:
                logger.warning("Gemini response contained no candidates.")
                return ""
            parts = (candidates[0].get("content") or {}).get("parts") or []
            text = "".join(part.get("text") or "" for part in parts)
        except (AttributeError, TypeError, KeyError) as e:
            logger.error(f"Unexpected Gemini response body: {str(payload)[:200]}")
            raise SummarizationError("Gemini returned an unexpected body") from e
        return text

    async def close(self):
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.debug("Closed HTTP client for Gemini")


def create_gemini_client() -> Optional[GeminiClient]:
    """Returns a client, or None when no API key is configured."""
    if not settings.gemini_api_key:
        logger.warning("No Gemini API key configured; skipping AI reports.")
        return None
    return GeminiClient()


async def generate_ai_report(
    record: TeamRecord, client: GeminiClient, language: Optional[str] = None
) -> str:
    """Generates the scouting report for one team, never raising."""
    prompt = build_prompt(record, language or settings.report_language)
    try:
        text = await client.generate(prompt)
    except SummarizationError as e:
        logger.exception(f"AI report failed for team '{record.name}': {e}")
        return REPORT_ERROR_MESSAGE
    if not text.strip():
        return REPORT_UNAVAILABLE_MESSAGE
    return text


async def summarize_collection(
    collection: TeamCollection,
    client: GeminiClient,
    team_ids: Optional[Iterable[str]] = None,
) -> TeamCollection:
    """Attaches a report to each selected team (all teams by default)."""
    wanted = set(team_ids) if team_ids is not None else None
    targets = [t for t in collection.teams if wanted is None or t.id in wanted]

    reports = await asyncio.gather(*(generate_ai_report(t, client) for t in targets))
    for team, report in zip(targets, reports):
        collection = collection.attach_report(team.id, report)
    logger.info(f"Attached AI reports to {len(targets)} team(s)")
    return collection
