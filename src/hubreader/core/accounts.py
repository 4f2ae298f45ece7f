"""账户服务：注册与登录校验."""

import logging

import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from hubreader.errors import EmailTakenError, UnauthorizedError, ValidationError
from hubreader.models.user import User

logger = logging.getLogger(__name__)

# bcrypt 只接受不超过 72 字节的密码
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    """密码按 UTF-8 编码后是否超过 bcrypt 的长度上限."""
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    """bcrypt 哈希（自动加盐）."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=10)).decode(
        "utf-8"
    )


def verify_password(password: str, hashed: str) -> bool:
    """校验明文密码与哈希是否匹配，超长密码一律不匹配."""
    if password_too_long(password):
        return False
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))


class AccountService:
    """用户注册与凭据校验."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_email(self, email: str) -> User | None:
        """按邮箱查找用户."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def register(self, name: str, email: str, password: str) -> User:
        """注册新用户，邮箱不可重复."""
        name, email = name.strip(), email.strip().lower()
        if not name or not email or not password:
            raise ValidationError("请填写所有必填字段")
        if password_too_long(password):
            raise ValidationError(f"密码长度不能超过 {MAX_PASSWORD_BYTES} 字节")

        if await self.get_by_email(email):
            raise EmailTakenError()

        user = User(name=name, email=email, password=hash_password(password))
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise EmailTakenError() from e

        logger.info(f"新用户注册: {email}")
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """校验邮箱和密码，失败时抛出 UnauthorizedError."""
        user = await self.get_by_email(email.strip().lower())
        if user is None or not verify_password(password, user.password):
            raise UnauthorizedError("邮箱或密码错误")
        return user
