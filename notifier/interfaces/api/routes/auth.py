"""Authentication endpoints."""

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from notifier.application.use_cases.users import AuthenticationStatus, authenticate_user
from notifier.config import get_settings
from notifier.infrastructure.database import get_db
from notifier.infrastructure.security import create_access_token, password_signature
from notifier.interfaces.api.schemas import Token

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Authenticate by email and password and return a bearer JWT."""

    result = authenticate_user(db, form_data.username, form_data.password)

    if result.status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if result.status is AuthenticationStatus.INACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = result.user
    access_token = create_access_token(
        data={
            "sub": user.email,
            "tenant_id": user.tenant_id,
            "pwd_sig": password_signature(user.password, user.is_active),
        },
        expires_delta=timedelta(minutes=get_settings().access_token_expire_minutes),
    )
    logger.info("User %s signed in for tenant %s", user.id, user.tenant_id)
    return Token(
        access_token=access_token,
        token_type="bearer",
        role=user.role.alias,
        tenant_id=user.tenant_id,
    )
