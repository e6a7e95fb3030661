"""
AI service for structuring product ideas into a Lean Canvas
"""
import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

import openai
from openai import AsyncOpenAI

from idea_canvas.config import settings
from idea_canvas.errors import LLMFailure, LLMJSONError, LLMParseError
from idea_canvas.logging_config import logger
from idea_canvas.models import CANVAS_FIELDS, LeanCanvas


# Greedy: first "{" up to the last "}" of the reply
JSON_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)

PROMPT_TEMPLATE = """You are a business analyst. Analyze the following product idea and extract structured information for a Lean Canvas:

Idea Title: {title}
Idea Description: {description}

Respond ONLY with valid JSON (no markdown, no extra text) in this exact format:
{{
  "problem": "the main problem this solves",
  "customer_segments": "target customer segments",
  "unique_value_proposition": "what makes this unique",
  "solution": "how the product solves the problem",
  "channels": "how users will find/access this",
  "revenue_streams": "how you'll make money",
  "cost_structure": "main cost drivers",
  "key_metrics": "key success metrics"
}}

Ensure all values are strings and the JSON is valid."""


@dataclass(frozen=True)
class StructureResult:
    """Outcome of one structuring attempt: a canvas or the failure that prevented it"""

    canvas: Optional[LeanCanvas] = None
    failure: Optional[LLMFailure] = None

    @property
    def ok(self) -> bool:
        return self.canvas is not None


class AIService:
    """Service for turning a free-text idea into Lean Canvas sections"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
    ):
        """
        Initialize AI service

        Args:
            api_key: Bearer token (uses settings if not provided)
            model: Model identifier (uses settings if not provided)
            base_url: Chat completion API base URL (uses settings if not provided)
        """
        self.api_key = api_key or settings.LLM_API_KEY
        self.model = model or settings.LLM_MODEL
        self.base_url = base_url or settings.LLM_API_BASE_URL
        self.max_tokens = 1000
        self.temperature = 0.7

        if self.api_key:
            self.client: Optional[AsyncOpenAI] = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                max_retries=0,
            )
        else:
            # Every idea gets the fallback canvas until a key is configured
            self.client = None
            logger.warning("LLM_API_KEY not set, ideas will use the fallback canvas")

        logger.info(f"AI service initialized with model {self.model}")

    def build_prompt(self, title: str, description: str) -> str:
        return PROMPT_TEMPLATE.format(title=title, description=description)

    async def structure(self, title: str, description: str) -> LeanCanvas:
        """
        Structure an idea into a Lean Canvas

        Never raises: any LLM failure is logged and replaced by the
        deterministic fallback canvas.

        Args:
            title: Idea title
            description: Idea description

        Returns:
            The LLM's canvas, or LeanCanvas.fallback(title, description)
        """
        result = await self.try_structure(title, description)
        if result.ok:
            return result.canvas

        logger.warning(
            f"Using fallback canvas for '{title}': "
            f"{type(result.failure).__name__}: {result.failure}"
        )
        return LeanCanvas.fallback(title, description)

    async def try_structure(self, title: str, description: str) -> StructureResult:
        """
        Ask the LLM for a canvas, reporting failures as a value

        Returns:
            StructureResult holding either the canvas or the LLMFailure
        """
        try:
            content = await self._call_llm_api(self.build_prompt(title, description))
            return StructureResult(canvas=self._parse_response(content))
        except LLMFailure as e:
            return StructureResult(failure=e)
        except Exception as e:
            failure = LLMFailure(f"Unexpected error calling LLM: {str(e)}")
            failure.__cause__ = e
            return StructureResult(failure=failure)

    async def _call_llm_api(self, prompt: str) -> str:
        """
        Make the chat completion call

        Args:
            prompt: The prompt to send

        Returns:
            Text of the first completion choice

        Raises:
            LLMFailure: On a missing key, network error, timeout or non-2xx status
        """
        if self.client is None:
            raise LLMFailure("LLM API key not configured")

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )

        except openai.APIStatusError as e:
            raise LLMFailure(f"LLM API returned status {e.status_code}: {e.message}") from e

        except openai.APITimeoutError as e:
            raise LLMFailure(f"LLM API request timed out: {str(e)}") from e

        except openai.OpenAIError as e:
            raise LLMFailure(f"LLM API request failed: {str(e)}") from e

        if response.usage:
            logger.debug(f"LLM call completed, tokens used: {response.usage.total_tokens}")

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise LLMParseError("LLM response has no completion choices") from e

        if not content:
            raise LLMParseError("LLM response is empty")

        return content

    def _parse_response(self, content: str) -> LeanCanvas:
        """
        Extract the canvas from the model's free-text reply

        Raises:
            LLMParseError: If no brace-delimited substring is present
            LLMJSONError: If that substring is not a JSON object with canvas sections
        """
        match = JSON_OBJECT_PATTERN.search(content)
        if not match:
            raise LLMParseError("No JSON found in response")

        try:
            data: Any = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise LLMJSONError(f"Invalid JSON response: {str(e)}") from e

        if not isinstance(data, dict):
            raise LLMJSONError("JSON response is not an object")

        return self._to_canvas(data)

    def _to_canvas(self, data: Dict[str, Any]) -> LeanCanvas:
        present = [name for name in CANVAS_FIELDS if name in data]
        if not present:
            raise LLMJSONError("JSON response has none of the Lean Canvas fields")

        missing = len(CANVAS_FIELDS) - len(present)
        if missing:
            logger.warning(f"LLM response is missing {missing} Lean Canvas field(s), defaulting them to empty")

        return LeanCanvas.from_llm_fields(data)
