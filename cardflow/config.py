import os

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    "postgresql+asyncpg://cardflow:cardflow@db:5432/cardflow",
)

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-in-production")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 7))  # 7 days
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 12))

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# ── Domain limits & defaults ──────────────────────────
MAX_WORKSPACES = 7
PRIMARY_WORKSPACE_NAME = "Main"
PRIMARY_WORKSPACE_ORDER = 0

DEFAULT_BACKGROUND_COLOR = "#3F51B5"
DEFAULT_TITLE_COLOR = "#FFFFFF"
DEFAULT_DESCRIPTION_COLOR = "#FFFFFF"

THEMES = ("light", "dark")
DEFAULT_SETTINGS = {"theme": "light"}


def is_production() -> bool:
    return ENVIRONMENT == "production"
