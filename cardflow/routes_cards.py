from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cardflow import store_cards
from cardflow.auth import get_current_user
from cardflow.database import get_db
from cardflow.models import User
from cardflow.schemas import (
    CardCreate,
    CardListResponse,
    CardResponse,
    CardUpdate,
    MessageResponse,
    PositionUpdate,
)

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("/workspace/{workspace_id}", response_model=CardListResponse)
async def list_cards(
    workspace_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return {"cards": await store_cards.list_cards(db, user.id, workspace_id)}


@router.get("/{card_id}", response_model=CardResponse)
async def get_card(
    card_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return {"card": await store_cards.get_card(db, user.id, card_id)}


@router.post("", response_model=CardResponse, status_code=201)
async def create_card(
    body: CardCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return {"card": await store_cards.create_card(db, user.id, body)}


@router.put("/{card_id}", response_model=CardResponse)
async def update_card(
    card_id: UUID,
    body: CardUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return {"card": await store_cards.update_card(db, user.id, card_id, body)}


@router.patch("/{card_id}/position", response_model=CardResponse)
async def update_card_position(
    card_id: UUID,
    body: PositionUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return {"card": await store_cards.update_card_position(db, user.id, card_id, body.position)}


@router.delete("/{card_id}", response_model=MessageResponse)
async def delete_card(
    card_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await store_cards.delete_card(db, user.id, card_id)
    return {"message": "Card deleted"}
