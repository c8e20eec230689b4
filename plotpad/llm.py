"""
Text generation service used for chart suggestions.

Any OpenAI-compatible chat endpoint works, including a local model server
reached through ``OPENAI_BASE_URL``.
"""

from typing import Optional, Protocol, runtime_checkable
import logging

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage
from langchain_openai import ChatOpenAI
from openai import RateLimitError, APIError

from .config import AppConfig, get_config
from .exceptions import OpenAIRateLimitError, OpenAIAPIError, ConfigurationError

logger = logging.getLogger(__name__)


@runtime_checkable
class TextGenerationService(Protocol):
    """Best-effort prompt completion; any response shape is possible."""

    async def complete(self, prompt: str) -> str:
        ...


class LangChainTextService:
    """Streams a chat completion through LangChain and concatenates the chunks."""

    def __init__(self, llm: Optional[BaseChatModel] = None, app_config: Optional[AppConfig] = None):
        self.config = app_config or get_config()
        self._llm = llm

    @property
    def llm(self) -> BaseChatModel:
        if self._llm is None:
            self._llm = self._create_llm()
        return self._llm

    def _create_llm(self) -> BaseChatModel:
        if not self.config.OPENAI_API_KEY and not self.config.OPENAI_BASE_URL:
            raise ConfigurationError("OPENAI_API_KEY or OPENAI_BASE_URL must be set for chart suggestions")
        logger.info(f"Creating chat model {self.config.OPENAI_MODEL}")
        return ChatOpenAI(
            model=self.config.OPENAI_MODEL,
            temperature=self.config.LLM_TEMPERATURE,
            max_tokens=self.config.LLM_MAX_TOKENS,
            # Local OpenAI-compatible servers accept any key
            api_key=self.config.OPENAI_API_KEY or "not-needed",
            base_url=self.config.OPENAI_BASE_URL,
        )

    async def complete(self, prompt: str) -> str:
        """
        Send a prompt and return the full response text.

        Raises:
            OpenAIRateLimitError: If the API rate limit is exceeded
            OpenAIAPIError: If the API returns an error
        """
        if not prompt or not prompt.strip():
            raise ValueError("Prompt cannot be empty")

        parts = []
        try:
            async for chunk in self.llm.astream([HumanMessage(content=prompt)]):
                if isinstance(chunk.content, str):
                    parts.append(chunk.content)
        except RateLimitError as e:
            raise OpenAIRateLimitError("OpenAI API rate limit exceeded") from e
        except APIError as e:
            raise OpenAIAPIError("OpenAI API error occurred") from e

        response = "".join(parts)
        logger.debug(f"Model returned {len(response)} characters")
        return response
