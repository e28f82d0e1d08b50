from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    APP_NAME: str = "Dresswell API"
    APP_ENV: str = "dev"
    API_PREFIX: str = "/v1"
    CORS_ORIGINS: str = "*"
    # Vision provider (OPENAI_API_KEY is read by the client from the environment)
    VISION_ENABLED: bool = True
    VISION_PROVIDER: str = "openai"
    VISION_MODEL_ANALYSIS: str = "gpt-4o"
    VISION_MODEL_DETECT: str = "gpt-4o-mini"
    VISION_MODEL_DESCRIBE: str = "gpt-4o"
    VISION_MODEL_SUGGEST: str = "gpt-4o-mini"
    VISION_MODEL_MATCH: str = "gpt-4o"
    VISION_TIMEOUT_MS: int = 30000
    VISION_IMAGE_MAX_SIDE: int = 1024
    # Outfit ideas
    OUTFIT_MIN_ITEMS: int = 2

    @property
    def cors_origin_list(self) -> List[str]:
        val = self.CORS_ORIGINS
        if not val: return []
        if val == "*": return ["*"]
        return [v.strip() for v in val.split(",")]

settings = Settings()
