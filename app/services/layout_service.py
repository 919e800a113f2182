"""
Radial mind-map layout.

Places the central idea at the canvas centre, branches on a circle around
it and each branch's sub-branches on a small fan pointing away from the
centre. Connectors are quadratic SVG paths. Focus/dim flags come from the
RenderSession passed in; nothing here keeps state between calls.
"""

import math
import logging
from typing import List, Optional, Tuple

from app.schemas.layout import (
    Connector,
    LayoutNode,
    MindMapLayout,
    PopupData,
    RenderSession,
)
from app.schemas.mindmap import MindMap

logger = logging.getLogger(__name__)

BRANCH_RADIUS = 180
SUB_BRANCH_RADIUS = 90
SUB_BRANCH_SPREAD = 0.4  # radians between neighbouring sub-branches
COLOR_SLOTS = 6

# Half the rendered box size of each node kind; x/y are top-left corners
CENTER_OFFSET = 50
BRANCH_OFFSET = 42.5
SUB_BRANCH_OFFSET = 35

BRANCH_DELAY = 0.05
SUB_BRANCH_DELAY = 0.03


def _point(cx: float, cy: float, radius: float, angle: float) -> Tuple[float, float]:
    return cx + radius * math.cos(angle), cy + radius * math.sin(angle)


def connector_path(x1: float, y1: float, x2: float, y2: float) -> str:
    """Quadratic curve whose control point is the segment midpoint."""
    mx, my = (x1 + x2) / 2, (y1 + y2) / 2
    return f"M {_fmt(x1)} {_fmt(y1)} Q {_fmt(mx)} {_fmt(my)} {_fmt(x2)} {_fmt(y2)}"


def _fmt(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _node(
    node_id: str,
    label: str,
    kind: str,
    centre: Tuple[float, float],
    offset: float,
    z_index: int,
    popup: PopupData,
    color_index: Optional[int] = None,
    animation_delay: float = 0.0,
) -> LayoutNode:
    return LayoutNode(
        id=node_id,
        label=label,
        kind=kind,
        x=round(centre[0] - offset, 2),
        y=round(centre[1] - offset, 2),
        z_index=z_index,
        color_index=color_index,
        animation_delay=round(animation_delay, 2),
        popup=popup,
    )


def compute_layout(mind_map: MindMap, session: Optional[RenderSession] = None) -> MindMapLayout:
    session = session or RenderSession()
    cx, cy = session.width / 2, session.height / 2

    nodes: List[LayoutNode] = [
        _node(
            "root",
            mind_map.central_idea,
            "center",
            (cx, cy),
            CENTER_OFFSET,
            10,
            PopupData(
                explanation=f"Central topic: {mind_map.central_idea}",
                key_points=("Main focus",),
                example="Starting point",
            ),
        )
    ]
    connectors: List[Connector] = []

    count = len(mind_map.branches)
    for i, branch in enumerate(mind_map.branches):
        angle = 2 * math.pi * i / count
        bx, by = _point(cx, cy, BRANCH_RADIUS, angle)
        branch_id = f"branch-{i}"

        connectors.append(Connector(source="root", target=branch_id, path=connector_path(cx, cy, bx, by)))
        nodes.append(_node(
            branch_id,
            branch.title,
            "branch",
            (bx, by),
            BRANCH_OFFSET,
            5,
            PopupData(
                explanation=branch.explanation,
                key_points=branch.key_points,
                example=branch.example,
            ),
            color_index=i % COLOR_SLOTS,
            animation_delay=i * BRANCH_DELAY,
        ))

        subs = len(branch.sub_branches)
        for j, sub in enumerate(branch.sub_branches):
            sub_angle = angle + (j - (subs - 1) / 2) * SUB_BRANCH_SPREAD
            sx, sy = _point(bx, by, SUB_BRANCH_RADIUS, sub_angle)
            sub_id = f"sub-{i}-{j}"

            connectors.append(Connector(source=branch_id, target=sub_id, path=connector_path(bx, by, sx, sy)))
            nodes.append(_node(
                sub_id,
                sub.title,
                "sub",
                (sx, sy),
                SUB_BRANCH_OFFSET,
                3,
                PopupData(
                    explanation=sub.explanation,
                    key_points=sub.key_points,
                    example=sub.example,
                ),
                color_index=i % COLOR_SLOTS,
                animation_delay=i * BRANCH_DELAY + j * SUB_BRANCH_DELAY,
            ))

    focused = session.focused_node_id
    if focused and any(node.id == focused for node in nodes):
        nodes = [
            node.model_copy(update={"focused": node.id == focused, "dimmed": node.id != focused})
            for node in nodes
        ]
    elif focused:
        logger.debug(f"[LAYOUT] Ignoring unknown focused node '{focused}'")

    return MindMapLayout(
        width=session.width,
        height=session.height,
        zoom=session.zoom,
        nodes=nodes,
        connectors=connectors,
    )
