# app/logging_config.py

import logging

from app.config import settings


def setup_logging(level: str | None = None) -> None:
    """
    ルートロガーを設定する。app/main.py の起動時に一度だけ呼ぶ。
    既にハンドラがある場合（uvicorn 等）は basicConfig は何もしない。
    """
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
