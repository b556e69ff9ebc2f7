import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from eclinic.models.user import User
from eclinic.auth import hash_password, verify_password, verify_recovery_answer, create_token
from eclinic.exceptions import InvalidCredentials, NotFound, WrongAnswer

logger = logging.getLogger(__name__)


class AuthService:
    async def _get_by_username(self, username: str, db: AsyncSession):
        result = await db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def login(self, username: str, password: str, db: AsyncSession) -> tuple[User, str]:
        """
        Returns the user and a bearer token. Unknown username and wrong
        password fail the same way.
        """
        user = await self._get_by_username(username, db)
        if not user or not verify_password(password, user.password_hash):
            raise InvalidCredentials()
        logger.info("User %s logged in", user.id)
        return user, create_token(user)

    async def get_recovery_question(self, username: str, db: AsyncSession) -> str:
        user = await self._get_by_username(username, db)
        if not user:
            raise NotFound()
        return user.recovery_question

    async def reset_password(self, username: str, answer, new_password: str, db: AsyncSession) -> None:
        user = await self._get_by_username(username, db)
        if not user:
            raise NotFound()
        if not verify_recovery_answer(answer, user.recovery_answer_hash):
            raise WrongAnswer()
        user.password_hash = hash_password(new_password)
        await db.commit()
        logger.info("Password reset for user %s", user.id)


auth_service = AuthService()
