from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str
    jwt_secret_key: str = "your-secret-key-change-in-production"  # Default for development
    access_token_expire_minutes: int = 60 * 12  # one shift

    log_level: str = "INFO"

    # Comma-separated, e.g. "http://localhost:3000,https://queue.example.com"
    cors_origins: str = ""

    # Booking grid granularity; independent of service duration
    slot_step_minutes: int = 10

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
