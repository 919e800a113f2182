from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


# ── Context ──────────────────────────────────────────────────────────────────

class ContextType(str, Enum):
    personal = "personal"
    academic = "academic"
    creative = "creative"
    professional = "professional"

    @classmethod
    def resolve(cls, value: Union[ContextType, str, None]) -> ContextType:
        """Map a caller-supplied tag onto a ContextType; unknown tags mean personal."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.personal


# ── Tree ─────────────────────────────────────────────────────────────────────

def _fill_node_defaults(data: Any, default_key_point: str) -> Any:
    """Resolve empty explanation/example and missing keyPoints in one place."""
    if not isinstance(data, dict):
        return data

    data = dict(data)
    title = data.get("title", "")

    if not data.get("explanation"):
        data["explanation"] = f"About {title}"

    key_points = data.pop("keyPoints", None)
    snake_key_points = data.pop("key_points", None)
    if key_points is None:
        key_points = snake_key_points
    data["keyPoints"] = key_points if key_points is not None else [default_key_point]

    if not data.get("example"):
        data["example"] = "Example"
    return data


class _MapModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SubBranch(_MapModel):
    """Leaf node: one frequent term under a branch."""
    title: str
    explanation: str
    key_points: Tuple[str, ...]
    example: str

    @model_validator(mode="before")
    @classmethod
    def _defaults(cls, data: Any) -> Any:
        if isinstance(data, str):
            # Legacy shape: sub-branches sent as bare labels
            return {
                "title": data,
                "explanation": f"Detail about {data}",
                "keyPoints": ["Supporting detail"],
                "example": "Example",
            }
        return _fill_node_defaults(data, "Detail")


class Branch(_MapModel):
    """First-level node radiating from the central idea."""
    title: str
    explanation: str
    key_points: Tuple[str, ...]
    example: str
    sub_branches: Tuple[SubBranch, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _defaults(cls, data: Any) -> Any:
        return _fill_node_defaults(data, "Key point")


class MindMap(_MapModel):
    """Central idea plus its ordered branches. `branches` may be empty."""
    central_idea: str = Field(..., max_length=40)
    branches: Tuple[Branch, ...] = ()


# ── Request ──────────────────────────────────────────────────────────────────

class AnalyzeRequest(BaseModel):
    """Request body for raw-text analysis."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    text: Optional[str] = Field(default=None, description="Notes to turn into a mind map")
    context_type: Optional[str] = Field(
        default=None,
        description="personal | academic | creative | professional (anything else means personal)",
    )


# ── Response ─────────────────────────────────────────────────────────────────

class MindMapResponse(MindMap):
    """Success envelope for /upload and /analyze."""
    success: bool = True
    filename: Optional[str] = None
    text_length: Optional[int] = None
