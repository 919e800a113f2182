from __future__ import annotations

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.schemas.mindmap import MindMap

MIN_ZOOM = 0.5
MAX_ZOOM = 2.0
ZOOM_STEP = 0.1


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Session ──────────────────────────────────────────────────────────────────

class RenderSession(_CamelModel):
    """Per-client view state: canvas size, zoom level and focused node."""
    model_config = ConfigDict(frozen=True)

    width: float = Field(default=800, gt=0)
    height: float = Field(default=600, gt=0)
    zoom: float = 1.0
    focused_node_id: Optional[str] = None

    @field_validator("zoom")
    @classmethod
    def clamp_zoom(cls, v: float) -> float:
        return round(min(max(v, MIN_ZOOM), MAX_ZOOM), 2)

    def zoom_in(self) -> RenderSession:
        return self.model_copy(update={"zoom": round(min(self.zoom + ZOOM_STEP, MAX_ZOOM), 2)})

    def zoom_out(self) -> RenderSession:
        return self.model_copy(update={"zoom": round(max(self.zoom - ZOOM_STEP, MIN_ZOOM), 2)})

    def focus(self, node_id: str) -> RenderSession:
        return self.model_copy(update={"focused_node_id": node_id})

    def clear_focus(self) -> RenderSession:
        return self.model_copy(update={"focused_node_id": None})


# ── Layout ───────────────────────────────────────────────────────────────────

class PopupData(_CamelModel):
    """What the click-to-inspect popup shows for a node."""
    explanation: str
    key_points: Tuple[str, ...]
    example: str


class LayoutNode(_CamelModel):
    id: str
    label: str
    kind: Literal["center", "branch", "sub"]
    x: float
    y: float
    z_index: int
    color_index: Optional[int] = None
    animation_delay: float = 0.0
    focused: bool = False
    dimmed: bool = False
    popup: PopupData


class Connector(_CamelModel):
    source: str
    target: str
    path: str


class MindMapLayout(_CamelModel):
    width: float
    height: float
    zoom: float
    nodes: List[LayoutNode]
    connectors: List[Connector]


class LayoutRequest(_CamelModel):
    mind_map: MindMap
    session: RenderSession = Field(default_factory=RenderSession)
