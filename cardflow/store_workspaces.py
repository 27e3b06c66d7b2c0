import logging
import uuid

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cardflow import errors
from cardflow.config import MAX_WORKSPACES, PRIMARY_WORKSPACE_ORDER
from cardflow.models import Card, Workspace
from cardflow.schemas import WorkspaceCreate, WorkspaceUpdate

logger = logging.getLogger(__name__)

RESERVED_ORDER_MESSAGE = "Order 0 is reserved for the main workspace"


async def find_workspace(db: AsyncSession, user_id: uuid.UUID, workspace_id: uuid.UUID) -> Workspace | None:
    """Existence and ownership in one query; other users' workspaces look absent."""
    result = await db.execute(
        select(Workspace).where(
            Workspace.id == workspace_id,
            Workspace.user_id == user_id,
        )
    )
    return result.scalar_one_or_none()


async def get_workspace(db: AsyncSession, user_id: uuid.UUID, workspace_id: uuid.UUID) -> Workspace:
    ws = await find_workspace(db, user_id, workspace_id)
    if ws is None:
        raise errors.NotFound("Workspace not found")
    return ws


async def list_workspaces(db: AsyncSession, user_id: uuid.UUID) -> list[Workspace]:
    result = await db.execute(
        select(Workspace)
        .where(Workspace.user_id == user_id)
        .order_by(Workspace.order, Workspace.created_at)
    )
    return list(result.scalars().all())


async def count_workspaces(db: AsyncSession, user_id: uuid.UUID) -> int:
    result = await db.execute(
        select(func.count()).select_from(Workspace).where(Workspace.user_id == user_id)
    )
    return result.scalar()


async def create_workspace(db: AsyncSession, user_id: uuid.UUID, body: WorkspaceCreate) -> Workspace:
    if body.order == PRIMARY_WORKSPACE_ORDER:
        raise errors.ValidationError.for_field("order", RESERVED_ORDER_MESSAGE)
    if await count_workspaces(db, user_id) >= MAX_WORKSPACES:
        raise errors.CapacityExceeded(f"Maximum number of workspaces reached ({MAX_WORKSPACES})")

    ws = Workspace(user_id=user_id, name=body.name, order=body.order)
    db.add(ws)
    await db.commit()
    await db.refresh(ws)
    logger.info("User %s created workspace %s", user_id, ws.id)
    return ws


async def update_workspace(
    db: AsyncSession, user_id: uuid.UUID, workspace_id: uuid.UUID, body: WorkspaceUpdate
) -> Workspace:
    ws = await get_workspace(db, user_id, workspace_id)
    if body.order is not None:
        # exactly one primary per user: it keeps order 0 and nothing else may take it
        if ws.is_primary and body.order != PRIMARY_WORKSPACE_ORDER:
            raise errors.ValidationError.for_field("order", "Main workspace must keep order 0")
        if not ws.is_primary and body.order == PRIMARY_WORKSPACE_ORDER:
            raise errors.ValidationError.for_field("order", RESERVED_ORDER_MESSAGE)
        ws.order = body.order
    if body.name is not None:
        ws.name = body.name
    await db.commit()
    await db.refresh(ws)
    return ws


async def delete_workspace(db: AsyncSession, user_id: uuid.UUID, workspace_id: uuid.UUID) -> None:
    """Delete a workspace and every card in it, atomically.

    The primary workspace (``order == 0``) cannot be deleted.
    """
    ws = await get_workspace(db, user_id, workspace_id)
    if ws.is_primary:
        raise errors.ProtectedResource()

    result = await db.execute(delete(Card).where(Card.workspace_id == ws.id))
    await db.execute(delete(Workspace).where(Workspace.id == ws.id))
    await db.commit()
    logger.info("User %s deleted workspace %s with %d card(s)", user_id, workspace_id, result.rowcount)
