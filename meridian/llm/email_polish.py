"""Rewrite an issue comment as an email draft.

A failing model call never reaches the caller: the polisher logs it and
returns a plain templated draft with ``fallback=True``.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from pydantic_ai import Agent, ModelSettings
from pydantic_ai.models import Model

from meridian.core.models.domain.enums import (
    ISSUE_STATUS_LABELS,
    ISSUE_TYPE_LABELS,
    STAGE_LABELS,
    label_for,
)
from meridian.core.models.io.ai import EmailContext, EmailDraft, PolishedEmail
from meridian.core.monitoring import log_llm_call
from meridian.server.core.config import GoogleConfig, settings

from .minutes import create_google_model
from .prompts import EMAIL_PROMPT

logger = logging.getLogger(__name__)

EMAIL_MODEL_SETTINGS = ModelSettings(temperature=0.4, top_p=0.8, max_tokens=1024)
MAX_SUBJECT_LENGTH = 80


def build_email_prompt(comment: str, context: EmailContext) -> str:
    lines = [
        "ISSUE CONTEXT:",
        f"- Issue Title: {context.issue_title}",
        f"- Object: {context.object_name}",
        f"- Type: {context.issue_type}",
        f"- Lifecycle Stage: {context.lifecycle_stage}",
        f"- Status: {context.status}",
    ]
    if context.owner_alias:
        lines.append(f"- Owner: {context.owner_alias}")
    lines += ["", f"COMMENT (by {context.comment_author}):", comment]
    return "\n".join(lines)


def fallback_email(comment: str, context: EmailContext) -> PolishedEmail:
    """Templated draft used when the model is unavailable."""
    subject = f"{context.issue_title} ({context.object_name})"
    if len(subject) > MAX_SUBJECT_LENGTH:
        subject = subject[: MAX_SUBJECT_LENGTH - 3] + "..."

    summary = (
        f"This is an update on the {label_for(ISSUE_TYPE_LABELS, context.issue_type)} issue "
        f'"{context.issue_title}" for {context.object_name}, currently in '
        f"{label_for(STAGE_LABELS, context.lifecycle_stage)} with status "
        f"{label_for(ISSUE_STATUS_LABELS, context.status)}."
    )
    paragraphs = [summary, f"{context.comment_author} noted:\n{comment.strip()}"]
    if context.owner_alias:
        paragraphs.append(f"Owner: {context.owner_alias}")
    return PolishedEmail(subject=subject, body="\n\n".join(paragraphs), fallback=True)


class EmailPolisher:
    def __init__(self, *, model: Model | None = None, config: Optional[GoogleConfig] = None) -> None:
        self._model = model
        self._config = config or settings.google

    async def polish(self, comment: str, context: EmailContext) -> PolishedEmail:
        start_time = time.time()
        try:
            model = self._model or create_google_model(self._config.email_model, EMAIL_MODEL_SETTINGS, self._config)
            agent: Agent = Agent(
                model,
                output_type=EmailDraft,
                system_prompt=EMAIL_PROMPT,
                model_settings=EMAIL_MODEL_SETTINGS,
            )
            result = await agent.run(build_email_prompt(comment, context))
        except Exception as e:
            logger.warning(f"Email polishing failed, using templated draft: {e}")
            log_llm_call("email_polish", self._config.email_model, (time.time() - start_time) * 1000, succeeded=False)
            return fallback_email(comment, context)

        log_llm_call("email_polish", self._config.email_model, (time.time() - start_time) * 1000)
        draft = result.output
        return PolishedEmail(subject=draft.subject, body=draft.body)
