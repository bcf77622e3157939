from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BACKEND_BASE_URL: str | None = None
    BACKEND_API_TOKEN: str | None = None
    HTTP_TIMEOUT_SECONDS: float = 10.0

    SUPERVISOR_PRICING_RULE: str = "per_supervisor"  # "per_supervisor" | "first_free"
    MAX_SUPERVISORS: int = 5
    SUPERVISOR_PERSONAL_NUMBER_REQUIRED: bool = True

    DEFAULT_PAYMENT_METHOD: str = "swish"
    PAYMENT_HUB_URL: str = "/betalhubben"

    DRAFT_TTL_MINUTES: int = 30
    DRAFT_STORE_DIR: str = "./data/drafts"


settings = Settings()
