import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from eclinic.models.user import User
from eclinic.auth import UserPrincipal, hash_password, hash_recovery_answer
from eclinic.exceptions import InvalidCredentials, NotFound, UsernameTaken, InternalError

logger = logging.getLogger(__name__)


def _is_unique_violation(error: IntegrityError) -> bool:
    text = str(error.orig).lower()
    return "unique" in text or "duplicate" in text


class ProfileService:
    async def resolve_user(self, principal: Optional[UserPrincipal], db: AsyncSession) -> Optional[User]:
        """
        The authenticated user, or the first row of the table when the request
        carried no token (single-account deployments).
        """
        if principal is not None:
            return await db.get(User, principal.user_id)
        result = await db.execute(select(User).order_by(User.id).limit(1))
        return result.scalar_one_or_none()

    async def get_current_profile(self, principal: Optional[UserPrincipal], db: AsyncSession) -> User:
        user = await self.resolve_user(principal, db)
        if not user:
            raise NotFound("User not found")
        return user

    async def update_profile(
        self,
        principal: Optional[UserPrincipal],
        db: AsyncSession,
        username: str,
        name: str,
        password: Optional[str] = None,
        recovery_question: Optional[str] = None,
        recovery_answer: Optional[str] = None,
    ) -> User:
        if principal is None:
            raise InvalidCredentials("Not authenticated")
        user = await db.get(User, principal.user_id)
        if not user:
            raise NotFound("User not found")
        user_id = user.id

        user.username = username
        user.name = name
        if password:
            user.password_hash = hash_password(password)
        if recovery_question:
            user.recovery_question = recovery_question
        if recovery_answer:
            user.recovery_answer_hash = hash_recovery_answer(recovery_answer)

        try:
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            if _is_unique_violation(e):
                raise UsernameTaken()
            logger.error("Profile update failed for user %s: %s", user_id, e)
            raise InternalError()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Profile update failed for user %s: %s", user_id, e)
            raise InternalError()
        logger.info("Profile updated for user %s", user_id)
        return user

    async def check_username_available(self, username: str, exclude_id: Optional[int], db: AsyncSession) -> bool:
        """True iff no other user (id != exclude_id) already has `username`."""
        result = await db.execute(
            select(User.id).where(User.username == username, User.id != (exclude_id or 0)).limit(1)
        )
        return result.scalar_one_or_none() is None


profile_service = ProfileService()
