from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from typing import Optional

load_dotenv()


class Settings(BaseSettings):
    DATABASE_URL: str
    API_BASE_URL: str
    WEB_BASE_URL: str

    # Mail delivery
    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 465
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_USE_SSL: bool = True
    MAIL_SENDER_NAME: str = "plann.er team"
    MAIL_SENDER_ADDRESS: str = "hello@plann.er"

    # Redis settings, caching is disabled when REDIS_URL is unset
    REDIS_URL: Optional[str] = None
    PARTICIPANT_CACHE_TTL: int = 600

    PROJECT_NAME: str = "plann.er API"
    PROJECT_VERSION: str = "1.0.0"
    PROJECT_DESCRIPTION: str = "Trip planning with participant invites and confirmations"

    class Config:
        env_file = ".env"


settings = Settings()
