import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cardflow import errors
from cardflow.config import DEFAULT_BACKGROUND_COLOR, DEFAULT_DESCRIPTION_COLOR, DEFAULT_TITLE_COLOR
from cardflow.models import Card
from cardflow.schemas import CardCreate, CardUpdate, Position
from cardflow.store_workspaces import get_workspace

logger = logging.getLogger(__name__)


async def find_card(db: AsyncSession, user_id: uuid.UUID, card_id: uuid.UUID) -> Card | None:
    # a card's user_id is copied from its workspace at creation, so this
    # filter covers workspace ownership as well
    result = await db.execute(
        select(Card).where(
            Card.id == card_id,
            Card.user_id == user_id,
        )
    )
    return result.scalar_one_or_none()


async def get_card(db: AsyncSession, user_id: uuid.UUID, card_id: uuid.UUID) -> Card:
    card = await find_card(db, user_id, card_id)
    if card is None:
        raise errors.NotFound("Card not found")
    return card


async def list_cards(db: AsyncSession, user_id: uuid.UUID, workspace_id: uuid.UUID) -> list[Card]:
    """Cards of one workspace in reading order: top to bottom, then left to right."""
    await get_workspace(db, user_id, workspace_id)
    result = await db.execute(
        select(Card)
        .where(Card.workspace_id == workspace_id, Card.user_id == user_id)
        .order_by(Card.position_y, Card.position_x, Card.created_at)
    )
    return list(result.scalars().all())


async def create_card(db: AsyncSession, user_id: uuid.UUID, body: CardCreate) -> Card:
    ws = await get_workspace(db, user_id, body.workspace_id)
    position = body.position or Position(x=0, y=0)

    card = Card(
        workspace_id=ws.id,
        user_id=ws.user_id,
        title=body.title,
        title_color=body.title_color or DEFAULT_TITLE_COLOR,
        description=body.description,
        description_color=body.description_color or DEFAULT_DESCRIPTION_COLOR,
        content=body.content or "",
        background_color=body.background_color or DEFAULT_BACKGROUND_COLOR,
        position_x=position.x,
        position_y=position.y,
    )
    db.add(card)
    try:
        await db.commit()
    except IntegrityError:
        # workspace deleted between the ownership check and the insert
        await db.rollback()
        logger.warning("Workspace %s vanished while creating a card for user %s", body.workspace_id, user_id)
        raise errors.InvalidReference()

    await db.refresh(card)
    return card


async def update_card(db: AsyncSession, user_id: uuid.UUID, card_id: uuid.UUID, body: CardUpdate) -> Card:
    """Sparse merge: only fields present (and not null) in the request change."""
    card = await get_card(db, user_id, card_id)
    changes = body.model_dump(exclude_unset=True, exclude_none=True)

    position = changes.pop("position", None)
    for field, value in changes.items():
        setattr(card, field, value)
    if position is not None:
        card.position = position

    await db.commit()
    await db.refresh(card)
    return card


async def update_card_position(db: AsyncSession, user_id: uuid.UUID, card_id: uuid.UUID, position: Position) -> Card:
    card = await get_card(db, user_id, card_id)
    card.position_x = position.x
    card.position_y = position.y
    await db.commit()
    await db.refresh(card)
    return card


async def delete_card(db: AsyncSession, user_id: uuid.UUID, card_id: uuid.UUID) -> None:
    card = await get_card(db, user_id, card_id)
    await db.delete(card)
    await db.commit()
    logger.info("User %s deleted card %s", user_id, card_id)
