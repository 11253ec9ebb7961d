from dotenv import load_dotenv
load_dotenv()
from pydantic import BaseModel
import os


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    APP_TITLE: str = os.getenv("APP_TITLE", "Loyalty Service")
    # comma separated; "*" allows any origin
    CORS_ORIGINS: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    SEED_CUSTOMERS: bool = _flag("SEED_CUSTOMERS", "true")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "8000"))

settings = Settings()
