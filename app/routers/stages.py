"""Stage vocabulary router."""

from fastapi import APIRouter

from app.core.config import settings
from app.schemas.order import StageVocabularyRead
from app.services.order_view import describe_vocabulary
from app.utils.stages import get_vocabulary

router = APIRouter(prefix="/stages", tags=["stages"])


@router.get("", response_model=StageVocabularyRead)
async def list_stages():
    """Stages of the active vocabulary with labels, descriptions and badge colours."""
    return describe_vocabulary(get_vocabulary(settings.STAGE_VOCABULARY))
