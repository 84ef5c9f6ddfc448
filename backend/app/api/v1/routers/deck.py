from fastapi import APIRouter, Response, status

from app.controllers import deck_controller
from app.core.pptx_renderer import PPTX_MEDIA_TYPE
from app.schemas.deck import Deck
from app.schemas.generation import (
    DeckRequest,
    GammaAsyncRequest,
    GammaRequest,
    GammaResponse,
    QueuedResponse,
    SendDeckRequest,
    SuccessResponse,
)

router = APIRouter(prefix="/deck", tags=["deck"])


@router.post("/assemble", response_model=Deck)
async def assemble(payload: DeckRequest):
    """Return the fully resolved slide layout as JSON."""
    return deck_controller.build_deck(payload.brand, payload.project_data)


@router.post("/pptx")
async def download_pptx(payload: DeckRequest):
    content, filename = await deck_controller.export_pptx(payload.brand, payload.project_data)
    return Response(
        content=content,
        media_type=PPTX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/gamma", response_model=GammaResponse)
async def generate_gamma(payload: GammaRequest):
    result = await deck_controller.generate_gamma(payload)
    return GammaResponse(gamma_url=result.gamma_url, export_url=result.export_url, credits=result.credits)


@router.post("/gamma/async", response_model=QueuedResponse, status_code=status.HTTP_202_ACCEPTED)
async def queue_gamma(payload: GammaAsyncRequest):
    """Queue a Gamma generation; the result is emailed when it finishes."""
    return deck_controller.queue_gamma(payload)


@router.post("/send", response_model=SuccessResponse)
async def send_deck(payload: SendDeckRequest):
    return await deck_controller.send_deck(payload)
