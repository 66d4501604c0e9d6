"""
Nutrition Lookup Adapter - estimates macros for a food name via a chat completions API.

The adapter only returns data; pre-filling and issuing the add command is the
caller's job. No retries are attempted: the caller decides whether to ask again.
Abandoning a lookup is done by cancelling the awaiting task.

Example:
    >>> async with NutritionLookupAdapter(api_key="sk-...") as adapter:
    ...     estimate = await adapter.lookup("김치찌개")
    ...     print(estimate.calories)
"""

import asyncio
import enum
import logging
from typing import Any, Optional

import httpx

from app.config import settings
from app.exceptions import (
    DecodingFailedError,
    InvalidResponseError,
    MissingCredentialError,
)
from domain.schemas.nutrition_schemas import NutritionEstimate

logger = logging.getLogger("mealledger.nutrition")

PLACEHOLDER_API_KEY = "YOUR_API_KEY_HERE"

PROMPT_TEMPLATE = """You are a nutrition expert.

For the Korean food name "{food_name}", output ONLY four integers separated by commas in this exact order:

calories (kcal), carbohydrates (g), protein (g), fat (g)

Example output:
530, 60, 20, 10

If you are not sure, reply exactly:
0, 0, 0, 0
"""

TEMPERATURE = 0.1
MAX_COMPLETION_TOKENS = 64


class LookupState(str, enum.Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    RESOLVED = "resolved"
    FAILED = "failed"


def parse_nutrition_reply(content: str) -> NutritionEstimate:
    """
    Parse ``"530, 60, 20, 10"`` style replies.

    Each comma-separated token keeps only its ASCII digits; tokens without
    digits are dropped. Exactly four numbers must remain.

    Raises:
        DecodingFailedError: If the reply does not yield four integers
    """
    numbers = []
    for token in content.split(","):
        digits = "".join(ch for ch in token.strip() if ch in "0123456789")
        if digits:
            numbers.append(int(digits))

    if len(numbers) != 4:
        raise DecodingFailedError(
            "Expected four integers in nutrition reply",
            details={"content": content[:200], "found": len(numbers)},
        )

    calories, carbs, protein, fat = numbers
    return NutritionEstimate(calories=calories, carbs=carbs, protein=protein, fat=fat)


class NutritionLookupAdapter:
    """Resolves a food name to estimated calories, carbs, protein and fat"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.base_url = (base_url or settings.openai_base_url).rstrip("/")
        self.model = model or settings.nutrition_model
        self.timeout = timeout or settings.nutrition_lookup_timeout_sec
        self._client = client
        self._owns_client = client is None
        self.state = LookupState.IDLE

    async def __aenter__(self) -> "NutritionLookupAdapter":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout))
        return self._client

    def _has_credential(self) -> bool:
        key = (self.api_key or "").strip()
        return bool(key) and key != PLACEHOLDER_API_KEY

    def _request_body(self, food_name: str) -> dict:
        return {
            "model": self.model,
            "messages": [
                {"role": "user", "content": PROMPT_TEMPLATE.format(food_name=food_name)}
            ],
            "temperature": TEMPERATURE,
            "max_completion_tokens": MAX_COMPLETION_TOKENS,
        }

    async def lookup(self, food_name: str) -> NutritionEstimate:
        """
        Estimate the macros of ``food_name``.

        A reply of ``0, 0, 0, 0`` means the service does not know the food;
        it is returned as a successful all-zero estimate.

        Raises:
            MissingCredentialError: If no API key is configured
            InvalidResponseError: On transport errors, timeouts, non-2xx
                statuses or an unusable payload
            DecodingFailedError: If the reply is not four integers
        """
        if not self._has_credential():
            self.state = LookupState.FAILED
            raise MissingCredentialError()

        self.state = LookupState.REQUESTING
        try:
            content = await self._request(food_name)
            estimate = parse_nutrition_reply(content)
        except asyncio.CancelledError:
            logger.info("Nutrition lookup cancelled food_name=%s", food_name)
            self.state = LookupState.IDLE
            raise
        except Exception:
            self.state = LookupState.FAILED
            raise

        self.state = LookupState.RESOLVED
        logger.info(
            "Nutrition lookup resolved food_name=%s calories=%d unknown=%s",
            food_name, estimate.calories, estimate.is_unknown,
        )
        return estimate

    async def _request(self, food_name: str) -> str:
        url = f"{self.base_url}/chat/completions"
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        try:
            response = await self._get_client().post(
                url,
                json=self._request_body(food_name),
                headers=headers,
                timeout=self.timeout,
            )
        except httpx.TimeoutException as exc:
            logger.warning("Nutrition lookup timed out after %.1fs", self.timeout)
            raise InvalidResponseError("Nutrition lookup timed out") from exc
        except httpx.HTTPError as exc:
            logger.warning("Nutrition lookup transport error: %s", exc)
            raise InvalidResponseError(f"Nutrition lookup failed: {exc}") from exc

        if not response.is_success:
            logger.warning("Nutrition lookup returned HTTP %d", response.status_code)
            raise InvalidResponseError(
                f"Nutrition lookup returned HTTP {response.status_code}",
                details={"status": response.status_code},
            )
        if not response.content:
            raise InvalidResponseError("Nutrition lookup returned an empty body")

        try:
            payload = response.json()
        except ValueError as exc:
            raise InvalidResponseError("Nutrition lookup returned non-JSON payload") from exc

        logger.debug("Nutrition lookup raw response: %s", payload)

        try:
            content = payload["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise DecodingFailedError("Nutrition reply has no message content") from exc
        if not isinstance(content, str):
            raise DecodingFailedError("Nutrition reply content is not text")
        return content
