"""즐겨찾기 API."""

from fastapi import APIRouter, Depends

from tottrot.api.dependencies import get_app_session
from tottrot.schemas.session import FavoriteStatus, FavoriteToggle
from tottrot.state.session import AppSession

router = APIRouter(prefix="/api/v1/favorites", tags=["favorites"])


@router.post("/toggle", response_model=FavoriteStatus)
def toggle_favorite(body: FavoriteToggle, session: AppSession = Depends(get_app_session)) -> FavoriteStatus:  # noqa: B008
    """즐겨찾기 여부를 뒤집습니다."""
    favorited = session.toggle_favorite(body.activity_id)
    return FavoriteStatus(activity_id=body.activity_id, is_favorite=favorited)


@router.get("/{activity_id}", response_model=FavoriteStatus)
def get_favorite(activity_id: str, session: AppSession = Depends(get_app_session)) -> FavoriteStatus:  # noqa: B008
    return FavoriteStatus(activity_id=activity_id, is_favorite=session.is_favorite(activity_id))
