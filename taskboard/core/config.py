from pydantic_settings import BaseSettings
from typing import List, Literal
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

class Settings(BaseSettings):
    # Database settings
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./taskboard.db")
    SQL_ECHO: bool = False

    # Project settings
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Taskboard")
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Frontend origins allowed by CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # "skip" ignores unknown tag ids on attach, "strict" rejects the whole call
    TAG_ATTACH_POLICY: Literal["skip", "strict"] = "skip"

    class Config:
        env_file = ".env"
        # Variables in .env that aren't defined here are ignored.
        extra = "ignore"

settings = Settings()
