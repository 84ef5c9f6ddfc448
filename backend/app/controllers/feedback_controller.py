from app.core.mailer import deliver_feedback
from app.schemas.feedback import FeedbackCreate


async def submit_feedback(payload: FeedbackCreate) -> dict:
    delivered = await deliver_feedback(
        payload.category,
        payload.feedback,
        project_name=payload.project_name,
        submitted_at=payload.timestamp,
    )
    return {"success": True, "delivered": delivered}
