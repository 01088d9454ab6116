"""Unit tests for email polishing and its templated fallback."""

import pytest
from pydantic_ai.messages import ModelMessage, ModelResponse
from pydantic_ai.models.function import AgentInfo, FunctionModel
from pydantic_ai.models.test import TestModel

from meridian.core.models.io.ai import EmailContext
from meridian.llm.email_polish import MAX_SUBJECT_LENGTH, EmailPolisher, build_email_prompt, fallback_email
from meridian.server.core.config import GoogleConfig

pytestmark = pytest.mark.asyncio


@pytest.fixture
def context() -> EmailContext:
    return EmailContext(
        issue_title="Duplicate customer IDs",
        object_name="Customer Master",
        issue_type="data_quality",
        lifecycle_stage="extraction",
        status="in_progress",
        owner_alias="Sam",
        comment_author="Alex",
    )


@pytest.fixture
def google_config() -> GoogleConfig:
    return GoogleConfig(api_key=None, email_model="email-model")


class TestBuildEmailPrompt:
    def test_contains_context_and_comment(self, context):
        prompt = build_email_prompt("Dedup script is ready", context)
        assert "- Issue Title: Duplicate customer IDs" in prompt
        assert "- Owner: Sam" in prompt
        assert prompt.endswith("COMMENT (by Alex):\nDedup script is ready")

    def test_owner_line_omitted_when_unset(self, context):
        context.owner_alias = None
        assert "Owner:" not in build_email_prompt("x", context)


class TestFallbackEmail:
    def test_template(self, context):
        email = fallback_email("  Dedup script is ready  ", context)

        assert email.fallback is True
        assert email.subject == "Duplicate customer IDs (Customer Master)"
        assert email.body == (
            'This is an update on the Data Quality issue "Duplicate customer IDs" for Customer Master, '
            "currently in Extraction with status In Progress.\n\n"
            "Alex noted:\nDedup script is ready\n\n"
            "Owner: Sam"
        )

    def test_long_subject_is_truncated(self, context):
        context.issue_title = "A" * 100
        subject = fallback_email("x", context).subject
        assert len(subject) == MAX_SUBJECT_LENGTH
        assert subject.endswith("...")


class TestEmailPolisher:
    async def test_polished_draft(self, context, google_config):
        model = TestModel(custom_output_args={"subject": "Customer IDs update", "body": "Dedup is ready."})
        polisher = EmailPolisher(model=model, config=google_config)

        email = await polisher.polish("Dedup script is ready", context)

        assert email.subject == "Customer IDs update"
        assert email.body == "Dedup is ready."
        assert email.fallback is False

    async def test_model_failure_falls_back(self, context, google_config):
        def respond(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
            raise RuntimeError("service unavailable")

        polisher = EmailPolisher(model=FunctionModel(respond), config=google_config)

        email = await polisher.polish("Dedup script is ready", context)

        assert email.fallback is True
        assert email.subject == "Duplicate customer IDs (Customer Master)"

    async def test_missing_api_key_falls_back(self, context, google_config):
        email = await EmailPolisher(config=google_config).polish("Dedup script is ready", context)
        assert email.fallback is True
