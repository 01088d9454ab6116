"""
LLM helpers backed by Google Gemini through pydantic-ai.

- minutes: structured minutes of meeting from a transcript
- email_polish: turn an issue comment into an email draft
"""
