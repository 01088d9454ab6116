"""Minutes-of-meeting generation.

The generator selects a Gemini model by transcript length: the fast model
for short transcripts and the larger one at or above the configured
threshold. The agent returns a validated ``MinutesContent``; the name of
the selected model is attached as ``model_used``.

Tests pass a pydantic-ai ``TestModel``/``FunctionModel`` through ``model=``
so no request leaves the process.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from pydantic_ai import Agent, ModelSettings
from pydantic_ai.models import Model
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.providers.google import GoogleProvider

from meridian.core.models.domain.enums import MeetingType
from meridian.core.models.io.meetings import GeneratedMinutes, MinutesContent
from meridian.core.monitoring import log_llm_call
from meridian.server.core.config import GoogleConfig, settings
from meridian.server.services.errors import LLMServiceError, ValidationError

from .prompts import FULL_MOM_PROMPT, QUICK_SUMMARY_PROMPT

logger = logging.getLogger(__name__)

MINUTES_MODEL_SETTINGS = ModelSettings(temperature=0.3, top_p=0.8, max_tokens=4096)


def select_model_name(transcript: str, config: Optional[GoogleConfig] = None) -> str:
    config = config or settings.google
    if len(transcript) < config.long_transcript_threshold:
        return config.minutes_model
    return config.minutes_long_model


def create_google_model(model_name: str, model_settings: ModelSettings, config: Optional[GoogleConfig] = None) -> Model:
    """Create a Gemini model using Pydantic AI."""
    config = config or settings.google
    if not config.api_key:
        raise LLMServiceError("GOOGLE_API_KEY environment variable is not set")
    logger.debug(f"Creating Google model: {model_name} with Pydantic AI")
    return GoogleModel(model_name, provider=GoogleProvider(api_key=config.api_key), settings=model_settings)


class MinutesGenerator:
    """Generate structured minutes from a meeting transcript."""

    def __init__(self, *, model: Model | None = None, config: Optional[GoogleConfig] = None) -> None:
        """
        Args:
            model: Model to run instead of the configured Gemini model.
            config: Google configuration; defaults to the application settings.
        """
        self._model = model
        self._config = config or settings.google

    async def generate(self, transcript: str, mode: str = MeetingType.full_mom.value) -> GeneratedMinutes:
        if not transcript or not transcript.strip():
            raise ValidationError("transcript is required")

        model_name = select_model_name(transcript, self._config)
        model = self._model or create_google_model(model_name, MINUTES_MODEL_SETTINGS, self._config)
        system_prompt = QUICK_SUMMARY_PROMPT if mode == MeetingType.quick_summary.value else FULL_MOM_PROMPT

        agent: Agent = Agent(
            model,
            output_type=MinutesContent,
            system_prompt=system_prompt,
            model_settings=MINUTES_MODEL_SETTINGS,
        )

        logger.info(f"Generating {mode} minutes with {model_name} ({len(transcript)} chars)")
        start_time = time.time()
        try:
            result = await agent.run(f"TRANSCRIPT:\n{transcript}")
        except Exception as e:
            log_llm_call("minutes", model_name, (time.time() - start_time) * 1000, succeeded=False)
            logger.error(f"Minutes generation failed: {e}", exc_info=True)
            raise LLMServiceError(f"Gemini API error: {e}") from e

        log_llm_call("minutes", model_name, (time.time() - start_time) * 1000)
        return GeneratedMinutes(**result.output.model_dump(), model_used=model_name)
