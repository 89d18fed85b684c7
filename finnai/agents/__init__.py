"""AI Agents package."""

from finnai.agents.insight_agent import (
    DEFAULT_FORECAST,
    INSIGHT_INSTRUCTION,
    InsightAgent,
    MalformedResponseError,
    fallback_report,
    placeholder_report,
)

__all__ = [
    "DEFAULT_FORECAST",
    "INSIGHT_INSTRUCTION",
    "InsightAgent",
    "MalformedResponseError",
    "fallback_report",
    "placeholder_report",
]
