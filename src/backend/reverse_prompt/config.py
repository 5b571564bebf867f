import os
import yaml
from pydantic import BaseModel, Field
from typing import Optional
from pathlib import Path


class AppConfig(BaseModel):
    PROJECT_ID: Optional[str] = None
    LOCATION: str = "global"
    GEMINI_MODEL: str = "gemini-3-flash-preview"
    GEMINI_API_KEY: Optional[str] = Field(default_factory=lambda: os.environ.get("GEMINI_API_KEY"))
    TEMPERATURE: Optional[float] = None
    MAX_UPLOAD_BYTES: int = 20 * 1024 * 1024
    COPY_ACK_SECONDS: float = 2.0
    FRONTEND_URL: str = "http://localhost:7860"
    TASK_WORKERS: int = 4
    SESSION_TTL_SECONDS: int = 7200
    TASK_TTL_SECONDS: int = 3600


def load_config() -> AppConfig:
    default_path = Path(__file__).parent / 'configs' / 'app-config.yaml'
    config_path = Path(os.environ.get("APP_CONFIG_PATH", default_path))
    with open(config_path, 'r') as config_file:
        config_data = yaml.safe_load(config_file) or {}
    return AppConfig(**config_data)


settings = load_config()
