from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator, ValidationInfo
from pathlib import Path
from functools import lru_cache
from typing import List, Optional

# Package root directory
BASE_DIR = Path(__file__).resolve().parent.parent

def _resolve_path(path_str: str) -> str:
    """
    Return the path as-is when absolute, otherwise resolve it against BASE_DIR
    """
    path = Path(path_str)
    return str(path if path.is_absolute() else BASE_DIR / path)

class Settings(BaseSettings):
    """
    Application settings
    - values come from the environment, then from config/settings.env
    """
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / "config" / "settings.env"),
        env_file_encoding="utf-8",
        extra='ignore',
    )

    # Database
    DB_USER:     str = "format"
    DB_PASSWORD: str = "format_pw"
    DB_HOST:     str = "localhost"
    DB_PORT:     int = 3306
    DB_NAME:     str = "format"
    DATABASE_URL: Optional[str] = Field(
        None,
        validate_default=True,
        description="Full database URL (env wins over the assembled one)",
    )

    # Media uploads
    UPLOAD_DIR: str = Field(
        default=str(BASE_DIR / "uploads"),
        description="Directory where accepted post images are written",
    )
    UPLOAD_URL_PREFIX: str = Field(
        "/uploads",
        description="Public path prefix of stored media references",
    )
    MAX_UPLOAD_BYTES: int = Field(
        5 * 1024 * 1024,
        description="Largest accepted attachment, in bytes",
    )
    ALLOWED_IMAGE_EXTENSIONS: List[str] = Field(
        default=[".jpg", ".jpeg", ".png", ".gif"],
        description="Accepted attachment extensions (lower case, with dot)",
    )

    # Identity & users
    IDENTITY_HEADER: str = Field(
        "X-User-Id",
        description="Request header carrying the caller-asserted user id",
    )
    DEFAULT_ROLE_ID: int = Field(
        2,
        description="Role assigned to newly registered users",
    )

    # HTTP
    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    @field_validator("UPLOAD_DIR", mode="before")
    @classmethod
    def _validate_upload_dir(cls, v: str) -> str:
        """
        Relative upload directories are resolved against BASE_DIR
        """
        return _resolve_path(v)

    @field_validator("DATABASE_URL", mode="after")
    @classmethod
    def _assemble_database_url(cls, v: Optional[str], info: ValidationInfo) -> str:
        """
        Use DATABASE_URL when set, otherwise build it from the DB_* values
        """
        if v:
            return v
        values = info.data
        user = values.get("DB_USER")
        pw   = values.get("DB_PASSWORD")
        host = values.get("DB_HOST")
        port = values.get("DB_PORT")
        name = values.get("DB_NAME")
        return f"mysql+asyncmy://{user}:{pw}@{host}:{port}/{name}?charset=utf8mb4"

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """
        Connection string under the name SQLAlchemy tooling expects
        """
        return self.DATABASE_URL

@lru_cache()
def get_settings() -> Settings:
    """
    Return the process-wide Settings instance, built on first call
    """
    return Settings()

# Global settings instance
settings = get_settings()
