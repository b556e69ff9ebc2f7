from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings."""

    # Database
    database_url: str = Field(default="sqlite+aiosqlite:///./clinic.db", env="DATABASE_URL")
    seed_demo_data: bool = Field(default=True, env="SEED_DEMO_DATA")

    # Auth
    jwt_secret_key: str = Field(default="change-me-in-production", env="JWT_SECRET_KEY")
    token_expire_seconds: int = Field(default=86400, env="TOKEN_EXPIRE_SECONDS")

    # AWS Bedrock
    aws_access_key_id: str = Field(default="", env="AWS_ACCESS_KEY_ID")
    aws_secret_access_key: str = Field(default="", env="AWS_SECRET_ACCESS_KEY")
    aws_region: str = Field(default="us-east-1", env="AWS_REGION")
    aws_bedrock_model_id: str = Field(
        default="us.anthropic.claude-sonnet-4-5-20250929-v1:0",
        env="AWS_BEDROCK_MODEL_ID",
    )

    # Inventory
    low_stock_threshold: int = Field(default=100, env="LOW_STOCK_THRESHOLD")

    # Server
    host: str = Field(default="0.0.0.0", env="HOST")
    port: int = Field(default=3000, env="PORT")
    static_dir: str = Field(default="dist", env="STATIC_DIR")
    log_level: str = Field(default="INFO", env="LOG_LEVEL")

    # Client
    api_base_url: str = Field(default="http://localhost:3000", env="API_BASE_URL")

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
