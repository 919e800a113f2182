import logging

from fastapi import APIRouter

from app.schemas.layout import LayoutRequest, MindMapLayout
from app.services.layout_service import compute_layout

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Rendering"])


@router.post(
    "/layout",
    response_model=MindMapLayout,
    summary="Compute radial canvas positions for a mind map",
)
async def layout_mind_map(request: LayoutRequest):
    """Positions, connectors and popup data for every node, honouring the session's focus."""
    layout = compute_layout(request.mind_map, request.session)
    logger.info(
        f"[LAYOUT] ✓ {len(layout.nodes)} nodes, {len(layout.connectors)} connectors "
        f"on {request.session.width:g}x{request.session.height:g}"
    )
    return layout
