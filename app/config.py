# app/config.py

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    アプリ全体で使う設定クラス。
    .env / 環境変数（SEO_ プレフィックス）から読み込み、属性として参照できるようにする。
    """

    # ---------- アプリ ----------
    app_title: str = "SEO Checker"

    # SEO_LOG_LEVEL=DEBUG などで上書き
    log_level: str = "INFO"

    # ---------- HTTP 取得 ----------
    # None のままなら requests 側のデフォルト（タイムアウトなし）に任せる
    request_timeout: float | None = None

    user_agent: str = "seo-checker/0.1 (+https://example.com/bot)"

    # ---------- Pydantic Settings 設定 ----------
    model_config = SettingsConfigDict(
        env_prefix="SEO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Settings をシングルトン的に使うためのヘルパ。"""
    return Settings()


# 他のモジュールからは `from app.config import settings` で利用
settings = get_settings()
