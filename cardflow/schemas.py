import re
from datetime import datetime
from typing import Annotated, Literal
from uuid import UUID

from pydantic import AfterValidator, BaseModel, BeforeValidator, EmailStr, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

HEX_COLOR = re.compile(r"^#?([0-9A-F]{3}|[0-9A-F]{4}|[0-9A-F]{6}|[0-9A-F]{8})$", re.IGNORECASE)

COLOR_LABELS = {
    "title_color": "Title color",
    "description_color": "Description color",
    "background_color": "Background color",
}


class CamelModel(BaseModel):
    """Snake-case attributes in Python, camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def check_password_strength(value: str) -> str:
    if not re.search(r"\d", value):
        raise ValueError("Password must contain a number")
    if not re.search(r"[a-zA-Z]", value):
        raise ValueError("Password must contain a letter")
    return value


StrongPassword = Annotated[
    str, Field(min_length=8, max_length=100), AfterValidator(check_password_strength)
]


# ── Auth ──────────────────────────────────────────────
class UserCreate(CamelModel):
    email: EmailStr
    password: StrongPassword
    confirm_password: str
    name: str = Field(min_length=1, max_length=255)

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        password = info.data.get("password")
        if password is not None and value != password:
            raise ValueError("Passwords do not match")
        return value


class UserLogin(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class PasswordChange(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: StrongPassword


class SettingsUpdate(CamelModel):
    theme: Literal["light", "dark"]


class UserSettings(BaseModel):
    theme: str = "light"


class UserOut(CamelModel):
    id: UUID
    email: str
    name: str
    settings: UserSettings
    created_at: datetime


class AuthResponse(CamelModel):
    token: str
    user: UserOut


class UserResponse(CamelModel):
    user: UserOut


class MessageResponse(CamelModel):
    message: str


# ── Workspace ─────────────────────────────────────────
class WorkspaceCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    order: int


class WorkspaceUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    order: int | None = None


class WorkspaceOut(CamelModel):
    id: UUID
    user_id: UUID
    name: str
    order: int
    created_at: datetime
    updated_at: datetime


class WorkspaceResponse(CamelModel):
    workspace: WorkspaceOut


class WorkspaceListResponse(CamelModel):
    workspaces: list[WorkspaceOut]


# ── Card ──────────────────────────────────────────────
def reject_bool(value):
    # JSON true/false would otherwise coerce to 1.0/0.0
    if isinstance(value, bool):
        raise ValueError("Position must be a number")
    return value


Coordinate = Annotated[float, Field(allow_inf_nan=False), BeforeValidator(reject_bool)]


class Position(CamelModel):
    x: Coordinate
    y: Coordinate


class CardColors(CamelModel):
    title_color: str | None = None
    description_color: str | None = None
    background_color: str | None = None

    @field_validator("title_color", "description_color", "background_color")
    @classmethod
    def check_hex(cls, value: str | None, info: ValidationInfo) -> str | None:
        if value is not None and not HEX_COLOR.match(value):
            raise ValueError(f"{COLOR_LABELS[info.field_name]} must be a valid hex color")
        return value


class CardCreate(CardColors):
    workspace_id: UUID
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    content: str | None = None
    position: Position | None = None


class CardUpdate(CardColors):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    content: str | None = None
    position: Position | None = None


class PositionUpdate(CamelModel):
    position: Position


class CardOut(CamelModel):
    id: UUID
    workspace_id: UUID
    user_id: UUID
    title: str
    title_color: str
    description: str
    description_color: str
    content: str
    background_color: str
    position: Position
    created_at: datetime
    updated_at: datetime


class CardResponse(CamelModel):
    card: CardOut


class CardListResponse(CamelModel):
    cards: list[CardOut]
