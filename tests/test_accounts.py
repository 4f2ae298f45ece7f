"""测试账户服务."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from hubreader.core.accounts import AccountService, hash_password, verify_password
from hubreader.errors import EmailTakenError, UnauthorizedError, ValidationError


class TestPasswordHash:
    """测试密码哈希."""

    def test_hash_and_verify(self) -> None:
        hashed = hash_password("secret")
        assert hashed != "secret"
        assert verify_password("secret", hashed)
        assert not verify_password("wrong", hashed)

    def test_salted(self) -> None:
        assert hash_password("secret") != hash_password("secret")


class TestRegister:
    """测试注册."""

    async def test_creates_user(self, async_session: AsyncSession) -> None:
        user = await AccountService(async_session).register(
            "Alice", "Alice@Example.com", "secret"
        )

        assert user.id is not None
        assert user.email == "alice@example.com"
        assert user.password != "secret"
        assert verify_password("secret", user.password)

    async def test_duplicate_email(self, async_session: AsyncSession) -> None:
        service = AccountService(async_session)
        await service.register("Alice", "alice@example.com", "secret")

        with pytest.raises(EmailTakenError):
            await service.register("Other", "alice@example.com", "another")

    @pytest.mark.parametrize(
        ("name", "email", "password"),
        [("", "a@example.com", "x"), ("A", "  ", "x"), ("A", "a@example.com", "")],
    )
    async def test_missing_fields(
        self, async_session: AsyncSession, name: str, email: str, password: str
    ) -> None:
        with pytest.raises(ValidationError):
            await AccountService(async_session).register(name, email, password)


class TestAuthenticate:
    """测试登录校验."""

    async def test_success(self, async_session: AsyncSession) -> None:
        service = AccountService(async_session)
        registered = await service.register("Alice", "alice@example.com", "secret")

        user = await service.authenticate("ALICE@example.com", "secret")

        assert user.id == registered.id

    async def test_wrong_password(self, async_session: AsyncSession) -> None:
        service = AccountService(async_session)
        await service.register("Alice", "alice@example.com", "secret")

        with pytest.raises(UnauthorizedError):
            await service.authenticate("alice@example.com", "wrong")

    async def test_unknown_email(self, async_session: AsyncSession) -> None:
        with pytest.raises(UnauthorizedError):
            await AccountService(async_session).authenticate("nobody@example.com", "x")


class TestPasswordLength:
    """测试 bcrypt 的 72 字节上限."""

    LONG_PASSWORD = "密" * 25  # 75 字节

    def test_verify_rejects_long_password(self) -> None:
        assert not verify_password(self.LONG_PASSWORD, hash_password("secret"))

    async def test_register_rejects_long_password(
        self, async_session: AsyncSession
    ) -> None:
        with pytest.raises(ValidationError):
            await AccountService(async_session).register(
                "Alice", "alice@example.com", self.LONG_PASSWORD
            )

    async def test_register_accepts_72_bytes(self, async_session: AsyncSession) -> None:
        password = "密" * 24
        service = AccountService(async_session)

        await service.register("Alice", "alice@example.com", password)

        user = await service.authenticate("alice@example.com", password)
        assert user.email == "alice@example.com"

    async def test_authenticate_long_password(self, async_session: AsyncSession) -> None:
        service = AccountService(async_session)
        await service.register("Alice", "alice@example.com", "secret")

        with pytest.raises(UnauthorizedError):
            await service.authenticate("alice@example.com", self.LONG_PASSWORD)
