from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- DB 設定 ---
    DATABASE_URL: str = "sqlite:///./credits.db"

    # --- テンプレート取得先 ---
    TEMPLATE_BASE_URL: str = "http://localhost:8000/static/templates"

    # --- 判定 ---
    GRADUATION_TOTAL: int = 126

    # --- ログ ---
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"          # 空文字ならファイル出力しない

    # --- CORS ---
    FRONTEND_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # 設定ファイル
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True
    )

settings = Settings()
