"""Base class for Pydantic AI agents."""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Generic, TypeVar, cast

from pydantic_ai import Agent
from pydantic_ai.messages import UserContent

from aquarium_analyser.config import Settings, settings

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")

Prompt = str | Sequence[UserContent]


class BaseAgent(ABC, Generic[InputT, OutputT]):
    """Abstract base class for Pydantic AI agents.

    Each agent should:
    1. Define the system_prompt property
    2. Define the output_type property
    3. Implement _build_prompt to construct the user prompt
    """

    # Explicit model override at the class level
    model: str | None = None
    temperature: float = 0.7
    max_tokens: int | None = None
    # Unset values fall back to the injected settings
    max_retries: int | None = None
    timeout_seconds: float | None = None

    def __init__(
        self,
        model_override: str | None = None,
        *,
        app_settings: Settings | None = None,
    ) -> None:
        """Initialize the agent.

        Model resolution priority:
        1. model_override parameter (explicit runtime override)
        2. model class attribute (if set by subclass)
        3. self._default_model() (settings-driven)
        """
        self.settings = app_settings or settings
        if self.max_retries is None:
            self.max_retries = self.settings.llm_max_retries
        if self.timeout_seconds is None:
            self.timeout_seconds = self.settings.llm_timeout_seconds

        if model_override:
            self._model = model_override
        elif self.model:
            self._model = self.model
        else:
            self._model = self._default_model()
        self._agent: Agent[None, OutputT] | None = None

        logger.info(
            "Agent initialized",
            extra={
                "agent": self.__class__.__name__,
                "model": self._model,
                "temperature": self.temperature,
                "timeout_seconds": self.timeout_seconds,
            },
        )

    def _default_model(self) -> str:
        return self.settings.rewrite_model

    @property
    def agent(self) -> Agent[None, OutputT]:
        """Lazily initialize and return the Pydantic AI agent."""
        if self._agent is None:
            self._agent = cast(
                Agent[None, OutputT],
                Agent(
                    model=self._model,
                    output_type=self.output_type,
                    system_prompt=self.system_prompt,
                    retries=self.max_retries,
                ),
            )
        return self._agent

    @property
    @abstractmethod
    def system_prompt(self) -> str:
        """System prompt for the agent."""
        pass

    @property
    @abstractmethod
    def output_type(self) -> type[OutputT]:
        """Type for structured output."""
        pass

    def _model_settings(self) -> dict[str, Any]:
        model_settings: dict[str, Any] = {"temperature": self.temperature}
        if self.max_tokens:
            model_settings["max_tokens"] = self.max_tokens
        return model_settings

    async def run(self, input_data: InputT) -> OutputT:
        """Run the agent with input data.

        Raises:
            asyncio.TimeoutError: if the model does not answer within timeout_seconds.
        """
        agent_name = self.__class__.__name__
        logger.info(
            "Agent run started",
            extra={
                "agent": agent_name,
                "input_type": type(input_data).__name__,
                "model": self._model,
            },
        )

        prompt = self._build_prompt(input_data)

        t0 = time.perf_counter()
        result = await asyncio.wait_for(
            self.agent.run(prompt, model_settings=cast(Any, self._model_settings())),
            timeout=self.timeout_seconds,
        )
        elapsed = time.perf_counter() - t0

        logger.info(
            "Agent run completed",
            extra={
                "agent": agent_name,
                "duration_s": round(elapsed, 2),
                "total_tokens": result.usage().total_tokens,
                "output_type": type(result.output).__name__,
            },
        )

        return result.output

    @abstractmethod
    def _build_prompt(self, input_data: InputT) -> Prompt:
        """Build the user prompt from input data."""
        pass
