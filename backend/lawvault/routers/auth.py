from typing import Any, Optional
from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile
from lawvault.database import get_db
from lawvault.deps import get_account_service
from lawvault.exceptions import ValidationError
from lawvault.schemas.user import LoginRequest, SignupRequest, SignupResponse, UserPublic
from lawvault.services.account_service import AccountService

router = APIRouter()

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


async def _read_payload(request: Request) -> tuple[dict[str, Any], Optional[UploadFile]]:
    """
    Read a form or JSON body. Returns the plain fields and the uploaded
    ``photo`` file, if one was sent as a real (non-empty) file part.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        fields = {k: v for k, v in form.items() if isinstance(v, str)}
        photo = form.get("photo")
        # Browsers send an empty part when no file was picked
        if not isinstance(photo, UploadFile) or not photo.filename or not photo.size:
            photo = None
        return fields, photo

    try:
        body = await request.json()
    except ValueError:
        raise ValidationError("Request body must be JSON or form data")
    if not isinstance(body, dict):
        raise ValidationError("Request body must be an object")
    return body, None


def _parse(model, fields: dict[str, Any]):
    try:
        return model.model_validate(fields)
    except PydanticValidationError:
        raise ValidationError("Invalid field values")


@router.post("/signup", response_model=SignupResponse, status_code=201)
async def signup(
    request: Request,
    db: AsyncSession = Depends(get_db),
    accounts: AccountService = Depends(get_account_service),
):
    """
    Register a user. Accepts multipart form (optional ``photo`` file),
    urlencoded form, or JSON. ``username`` is accepted in place of ``name``.
    """
    fields, photo = await _read_payload(request)
    user = await accounts.signup(_parse(SignupRequest, fields), db, photo=photo)
    return SignupResponse.model_validate(user)


@router.post("/login", response_model=UserPublic)
async def login(
    request: Request,
    db: AsyncSession = Depends(get_db),
    accounts: AccountService = Depends(get_account_service),
):
    fields, _ = await _read_payload(request)
    user = await accounts.login(_parse(LoginRequest, fields), db)
    return UserPublic.model_validate(user)
