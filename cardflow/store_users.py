import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cardflow import errors
from cardflow.auth import hash_password, pwd_context, verify_password
from cardflow.config import PRIMARY_WORKSPACE_NAME, PRIMARY_WORKSPACE_ORDER, THEMES
from cardflow.models import User, Workspace
from cardflow.schemas import UserCreate

logger = logging.getLogger(__name__)


async def get_user(db: AsyncSession, user_id: uuid.UUID) -> User | None:
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, body: UserCreate) -> User:
    """Create a user together with its primary workspace.

    Both rows are written in one transaction, so a user never exists
    without its "Main" workspace.
    """
    if await get_user_by_email(db, body.email):
        raise errors.DuplicateEmail()

    user = User(email=body.email, password_hash=hash_password(body.password), name=body.name)
    db.add(user)
    try:
        await db.flush()
        db.add(
            Workspace(
                user_id=user.id,
                name=PRIMARY_WORKSPACE_NAME,
                order=PRIMARY_WORKSPACE_ORDER,
            )
        )
        await db.commit()
    except IntegrityError:
        # lost a race against a concurrent registration for the same email
        await db.rollback()
        raise errors.DuplicateEmail()

    await db.refresh(user)
    logger.info("Registered user %s (%s)", user.id, user.email)
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> User:
    user = await get_user_by_email(db, email)
    if user is None:
        # unknown emails cost one bcrypt verify, same as known ones
        pwd_context.dummy_verify()
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Failed login for %s", email)
        raise errors.InvalidCredentials()
    return user


async def update_settings(db: AsyncSession, user: User, theme: str) -> User:
    if theme not in THEMES:
        raise errors.ValidationError.for_field("theme", "Theme must be either light or dark")

    # reassign so the JSON column is flagged dirty
    user.settings = {**(user.settings or {}), "theme": theme}
    await db.commit()
    await db.refresh(user)
    return user


async def change_password(db: AsyncSession, user: User, current_password: str, new_password: str) -> User:
    if not verify_password(current_password, user.password_hash):
        raise errors.InvalidCredentials()

    user.password_hash = hash_password(new_password)
    await db.commit()
    await db.refresh(user)
    logger.info("Password changed for user %s", user.id)
    return user
