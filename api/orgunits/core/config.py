"""Application configuration."""
import sys
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./organizations.db"

    # Environment configuration
    ENVIRONMENT: str = "development"  # "development" or "production"

    # CORS configuration - comma-separated origins, empty disables cross-origin access
    # e.g. CORS_ORIGINS="https://admin.example.com,http://localhost:3000"
    CORS_ORIGINS: str = ""

    # Bind address for the bundled server entry point (orgunits-api)
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8001

    LOG_LEVEL: str = "INFO"

    # Schema creation on startup - disabled by default, use the seed script instead
    CREATE_TABLES_ON_STARTUP: bool = False

    class Config:
        env_file = ".env"

    def get_cors_origins(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def validate_production_settings(self) -> None:
        """Warn about settings that are unsafe outside development."""
        if self.ENVIRONMENT == "production":
            if self.DATABASE_URL.startswith("sqlite"):
                print("WARNING: SQLite DATABASE_URL configured in production!", file=sys.stderr)
                print("Concurrent writes are serialized by a file lock.", file=sys.stderr)

            if self.CREATE_TABLES_ON_STARTUP:
                print("WARNING: CREATE_TABLES_ON_STARTUP is enabled in production!", file=sys.stderr)


settings = Settings()
# Validate on startup
settings.validate_production_settings()
