"""
Suggestion Client

Asks a text-generation service for chart directives and extracts them from
its free-form response. The model output is untrusted: every failure mode
degrades to "no suggestions" so the fallback can take over.
"""

from typing import List, Optional
import asyncio
import json
import logging

from pydantic import ValidationError

from .models import ChartDirective, DirectivePayload, TypedColumn, ChartSettings
from .exceptions import DirectiveShapeError, SuggestionUnavailableError
from ..llm import TextGenerationService
from ..prompts import get_chart_suggestion_prompt

logger = logging.getLogger(__name__)


def extract_json_array(text: str) -> Optional[str]:
    """Return the text from the first '[' through the last ']', or None."""
    start, end = text.find("["), text.rfind("]")
    if start < 0 or end <= start:
        return None
    return text[start:end + 1]


def describe_columns(columns: List[TypedColumn]) -> str:
    return "\n".join(f"- {column.name} ({column.kind.value})" for column in columns)


class SuggestionClient:
    """Requests chart directives from a language model."""

    def __init__(self, service: Optional[TextGenerationService] = None, settings: ChartSettings = None):
        self.service = service
        self.settings = settings or ChartSettings()

    def build_prompt(self, columns: List[TypedColumn]) -> str:
        return get_chart_suggestion_prompt(
            describe_columns(columns),
            max_charts=self.settings.max_chart_recommendations
        )

    async def suggest(self, columns: List[TypedColumn]) -> List[ChartDirective]:
        """
        Ask the model for directives over the given columns.

        Returns:
            Parsed directives; empty when the model is unavailable or its
            response holds nothing usable
        """
        if self.service is None:
            logger.info("No text generation service configured; skipping suggestions")
            return []

        try:
            raw = await asyncio.wait_for(
                self.service.complete(self.build_prompt(columns)),
                timeout=self.settings.suggestion_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"Chart suggestion timed out after {self.settings.suggestion_timeout}s")
            return []
        except Exception as e:
            logger.warning(f"Chart suggestion request failed: {type(e).__name__}: {e}")
            return []

        try:
            return self.parse_response(raw)
        except SuggestionUnavailableError as e:
            logger.info(e.reason)
            return []

    def parse_response(self, raw: str) -> List[ChartDirective]:
        """
        Extract directives from a raw model response.

        Unknown chart kinds are skipped and malformed entries are dropped
        individually.

        Raises:
            SuggestionUnavailableError: If no non-empty JSON array can be read
        """
        payload = extract_json_array(raw or "")
        if payload is None:
            raise SuggestionUnavailableError("no JSON array in model response")

        try:
            items = json.loads(payload)
        except (ValueError, RecursionError) as e:
            # Also covers oversized integer literals and excessive nesting
            raise SuggestionUnavailableError(f"model response is not valid JSON: {type(e).__name__}") from e

        if not isinstance(items, list) or not items:
            raise SuggestionUnavailableError("model suggested no charts")

        directives = []
        for item in items:
            try:
                directive = DirectivePayload.model_validate(item).to_directive()
            except (ValidationError, DirectiveShapeError) as e:
                logger.warning(f"Dropped malformed directive {item!r}: {e}")
                continue
            if directive is None:
                logger.debug(f"Skipped unknown chart kind in {item!r}")
                continue
            directives.append(directive)

        logger.info(f"Model suggested {len(directives)} usable directive(s)")
        return directives
