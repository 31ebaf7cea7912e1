"""User endpoints: admin listing and deletion, self-service profile and avatar updates."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile, status
from sqlalchemy.orm import Session

from crisisconnect.api.auth import get_current_user, require_admin
from crisisconnect.core.config import get_settings
from crisisconnect.core.database import get_db
from crisisconnect.models import User
from crisisconnect.schemas.auth import (
    AvatarResponse,
    CurrentUser,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    UserOut,
)
from crisisconnect.schemas.report import MessageResponse
from crisisconnect.services.avatars import AvatarValidationError, store_avatar
from crisisconnect.services.users import (
    AdminDeletionError,
    EmailInUseError,
    UserNotFoundError,
    delete_user_cascade,
    set_avatar,
    update_profile,
)

router = APIRouter()


def _is_upload_file(obj: object) -> bool:
    """True if obj is an uploaded file (UploadFile or file-like with filename and read)."""
    if isinstance(obj, UploadFile):
        return True
    return (
        hasattr(obj, "read")
        and callable(getattr(obj, "read", None))
        and hasattr(obj, "filename")
    )


@router.get("", response_model=list[UserOut])
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserOut]:
    """List all users (admin only)."""
    users = db.query(User).order_by(User.id).all()
    return [UserOut.model_validate(u) for u in users]


@router.post("/update-profile", response_model=ProfileUpdateResponse)
def post_update_profile(
    body: ProfileUpdateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ProfileUpdateResponse:
    """Change the caller's display name and/or email."""
    try:
        user = update_profile(db, current_user.id, name=body.name, email=body.email)
    except EmailInUseError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    return ProfileUpdateResponse(
        message="Profile updated successfully",
        user=UserOut.model_validate(user),
    )


@router.put("/profile-picture", response_model=AvatarResponse)
async def put_profile_picture(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> AvatarResponse:
    """
    Replace the caller's avatar.

    Send `Content-Type: multipart/form-data` with the image in a field named
    `avatar` (JPEG, PNG or WebP, at most AVATAR_MAX_BYTES).
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type != "multipart/form-data":
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Content-Type must be multipart/form-data.",
        )
    form = await request.form()
    file = form.get("avatar")
    if file is None or not _is_upload_file(file):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded",
        )
    content = await file.read()
    try:
        avatar_url = store_avatar(content, getattr(file, "content_type", None), get_settings())
    except AvatarValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.message,
        ) from e
    user = set_avatar(db, current_user.id, avatar_url)
    return AvatarResponse(
        message="Profile picture updated successfully",
        avatar=avatar_url,
        user=UserOut.model_validate(user),
    )


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a user and all of their reports (admin only). Admin accounts are refused."""
    try:
        reports_deleted = delete_user_cascade(db, user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except AdminDeletionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message) from e
    return MessageResponse(
        message=f"User deleted along with {reports_deleted} report(s)",
    )
