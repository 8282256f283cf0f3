# app/core/config.py

from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./social.db"

    # JWT 設定，token 由外部身分服務簽發
    SECRET_KEY: str = "CHANGE_THIS_TO_A_SUPER_SECRET_KEY"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # "你可能認識的人" 一次抽樣幾個
    SUGGESTION_SAMPLE_SIZE: int = 10

    class Config:
        """
        告訴 Pydantic 從執行目錄的 .env 讀取設定
        """
        env_file = ".env"

# 建立一個全域實例
settings = Settings()
