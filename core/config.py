"""
Application settings (pydantic-settings v2, nested env keys with ``__``).
"""
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field, field_validator


class CatalogSettings(BaseModel):
    path: str = "courses.json"


class AuditSettings(BaseModel):
    dir: str = "logs"


class Settings(BaseSettings):
    """Project settings"""

    PROJECT_NAME: str = Field(default="Course Payment Relay")
    VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="development")

    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000)

    # The checkout page is served from arbitrary origins
    CORS_ORIGINS: list = Field(default=["*"])

    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    audit: AuditSettings = Field(default_factory=AuditSettings)

    # Logging; LOG_LEVEL overrides the DEBUG-derived default
    LOG_LEVEL: Optional[str] = Field(default=None)
    LOG_REQUEST_BODY_ENABLE_BY_DEFAULT: bool = Field(default=True)
    LOG_REQUEST_BODY_MAX_BYTES: int = Field(default=2048)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        """Accept either a JSON array string or a comma-separated string."""
        if isinstance(v, list):
            return v
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("[") and s.endswith("]"):
                import json
                try:
                    arr = json.loads(s)
                    if isinstance(arr, list):
                        return arr
                except Exception:
                    pass
            if "," in s:
                return [item.strip() for item in s.split(",") if item.strip()]
            return [s]
        return v


settings = Settings()
