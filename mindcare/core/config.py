from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_ENV: str = "dev"
    API_VERSION: str = "v1.0.0"
    DATABASE_URL: str = "sqlite:///./mindcare.db"
    LOG_LEVEL: str = "INFO"

    JWT_ISSUER: str = "mindcare"
    JWT_AUDIENCE: str = "mindcare-web"
    JWT_ACCESS_TTL_SECONDS: int = 3600
    JWT_SECRET: str = "change_me_super_secret"

    # cosmetic "thinking" pause before paced bot messages reach the client
    TYPING_DELAY_MIN_SECONDS: float = 1.0
    TYPING_DELAY_MAX_SECONDS: float = 2.0

    # where the client is routed once a plan is accepted
    PLAN_ACCEPT_REDIRECT: str = "/therapy-modules"

    ALLOW_DEV_DEBUG_META: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
