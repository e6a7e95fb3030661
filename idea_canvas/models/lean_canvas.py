import json
from typing import Any, Dict, List, Mapping

from pydantic import BaseModel, ConfigDict


CANVAS_FIELDS = [
    "problem",
    "customer_segments",
    "unique_value_proposition",
    "solution",
    "channels",
    "revenue_streams",
    "cost_structure",
    "key_metrics",
]

PLACEHOLDER = "To be determined"

FALLBACK_PROBLEM_LENGTH = 100


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return ", ".join(_as_text(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value)
    return str(value)


class LeanCanvas(BaseModel):
    """Lean Canvas sections extracted from an idea"""

    model_config = ConfigDict(frozen=True)

    problem: str = ""
    customer_segments: str = ""
    unique_value_proposition: str = ""
    solution: str = ""
    channels: str = ""
    revenue_streams: str = ""
    cost_structure: str = ""
    key_metrics: str = ""

    @classmethod
    def from_llm_fields(cls, data: Mapping[str, Any]) -> "LeanCanvas":
        """
        Normalise a decoded LLM object into a canvas

        Keys outside the eight canvas sections are dropped, missing sections
        become empty strings and non-string values are rendered as text.
        """
        return cls(**{name: _as_text(data.get(name)) for name in CANVAS_FIELDS})

    @classmethod
    def fallback(cls, title: str, description: str) -> "LeanCanvas":
        """Deterministic canvas used whenever the LLM cannot provide one"""
        return cls(
            problem=description[:FALLBACK_PROBLEM_LENGTH],
            customer_segments=PLACEHOLDER,
            unique_value_proposition=PLACEHOLDER,
            solution=title,
            channels=PLACEHOLDER,
            revenue_streams=PLACEHOLDER,
            cost_structure=PLACEHOLDER,
            key_metrics=PLACEHOLDER,
        )

    def to_row(self) -> List[str]:
        """Canvas sections in LeanCanvas tab column order"""
        return [getattr(self, name) or "" for name in CANVAS_FIELDS]

    def merged_with(self, submission_fields: Dict[str, str]) -> Dict[str, str]:
        """Combine with the submitted idea; submitted keys win on collision"""
        return {**self.model_dump(), **submission_fields}
