from fastapi import APIRouter

from app.controllers import feedback_controller
from app.schemas.feedback import FeedbackCreate, FeedbackResponse

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post("", response_model=FeedbackResponse)
async def submit_feedback(payload: FeedbackCreate):
    return await feedback_controller.submit_feedback(payload)
