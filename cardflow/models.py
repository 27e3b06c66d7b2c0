import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime, Float, Integer, ForeignKey, JSON, Uuid
from sqlalchemy.orm import relationship, declarative_base

from cardflow.config import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_DESCRIPTION_COLOR,
    DEFAULT_SETTINGS,
    DEFAULT_TITLE_COLOR,
    PRIMARY_WORKSPACE_ORDER,
)

Base = declarative_base()


def utcnow():
    return datetime.now(timezone.utc)


def default_settings():
    return dict(DEFAULT_SETTINGS)


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(320), unique=True, nullable=False, index=True)
    password_hash = Column(String(128), nullable=False)
    name = Column(String(255), nullable=False)
    settings = Column(JSON, nullable=False, default=default_settings)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    workspaces = relationship("Workspace", back_populates="owner", order_by="Workspace.order")


class Workspace(Base):
    __tablename__ = "workspaces"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    owner = relationship("User", back_populates="workspaces")

    @property
    def is_primary(self) -> bool:
        return self.order == PRIMARY_WORKSPACE_ORDER


class Card(Base):
    __tablename__ = "cards"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    workspace_id = Column(Uuid, ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    title_color = Column(String(9), nullable=False, default=DEFAULT_TITLE_COLOR)
    description = Column(Text, nullable=False)
    description_color = Column(String(9), nullable=False, default=DEFAULT_DESCRIPTION_COLOR)
    content = Column(Text, nullable=False, default="")
    background_color = Column(String(9), nullable=False, default=DEFAULT_BACKGROUND_COLOR)
    position_x = Column(Float, nullable=False, default=0)
    position_y = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    @property
    def position(self) -> dict:
        return {"x": self.position_x, "y": self.position_y}

    @position.setter
    def position(self, value) -> None:
        self.position_x = value["x"]
        self.position_y = value["y"]
