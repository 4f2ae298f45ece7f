"""账户 API：注册、登录、登出."""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hubreader.api.deps import SESSION_USER_KEY, get_current_user, get_session
from hubreader.api.schemas import LoginRequest, RegisterRequest, user_to_dict
from hubreader.core.accounts import AccountService
from hubreader.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register")
async def register(
    body: RegisterRequest,
    session: AsyncSession = Depends(get_session),
) -> dict:
    """注册新账户."""
    user = await AccountService(session).register(body.name, body.email, body.password)
    return user_to_dict(user)


@router.post("/login")
async def login(
    body: LoginRequest,
    request: Request,
    session: AsyncSession = Depends(get_session),
) -> dict:
    """邮箱密码登录，写入会话 cookie."""
    user = await AccountService(session).authenticate(body.email, body.password)
    request.session[SESSION_USER_KEY] = user.id
    logger.info(f"用户登录: {user.email}")
    return user_to_dict(user)


@router.post("/logout")
async def logout(request: Request) -> dict:
    """清除会话."""
    request.session.clear()
    return {"success": True}


@router.get("/me")
async def me(user: User = Depends(get_current_user)) -> dict:
    """当前登录用户."""
    return user_to_dict(user)
