"""
Gemini Insight Provider

Sends the insight request to Google Gemini and returns the response text.

The model is asked for JSON output; the shape (insights[] + forecast) is
spelled out in the instruction and checked by the agent, not here.
"""

import json
from typing import Optional

import google.generativeai as genai

from finnai.config import GeminiSettings, get_settings
from finnai.models.insight import InsightRequest
from finnai.services.insights.interface import InsightProvider, InsightProviderError


def build_prompt(request: InsightRequest) -> str:
    """Instruction followed by the JSON-encoded transaction history."""
    history = json.dumps(request.transactions_payload())
    return f"{request.instruction}\n\nTransaction History: {history}"


class GeminiInsightProvider(InsightProvider):
    """Insight provider backed by google-generativeai."""

    def __init__(self, settings: Optional[GeminiSettings] = None):
        self._settings = settings or get_settings().gemini
        self._configure_genai()

    def _configure_genai(self):
        """Configure Google Generative AI."""
        genai.configure(api_key=self._settings.api_key)
        self._model = genai.GenerativeModel(
            model_name=self._settings.model_name,
            generation_config={
                "temperature": self._settings.temperature,
                "max_output_tokens": self._settings.max_tokens,
                "response_mime_type": "application/json",
            }
        )

    async def generate(self, request: InsightRequest) -> str:
        try:
            response = await self._model.generate_content_async(build_prompt(request))
            return response.text
        except Exception as e:
            raise InsightProviderError(f"Gemini request failed: {e}") from e
