# services/crawler.py

from __future__ import annotations

import logging
import threading

import requests

from app.config import settings
from models.seo_models import FetchedPage, ValidatedUrl

logger = logging.getLogger(__name__)

_session: requests.Session | None = None
# FastAPI のスレッドプールから同時に初回呼び出しされても 1 つだけ作る
_session_lock = threading.Lock()


class FetchFailedError(RuntimeError):
    """通信エラー、または 2xx 以外のレスポンスだった場合に送出。"""


def get_session() -> requests.Session:
    """
    接続プール用の Session を使い回す。
    解析ロジックからは状態を持たないものとして扱う。
    """
    global _session
    with _session_lock:
        if _session is None:
            session = requests.Session()
            session.headers.update(
                {
                    "User-Agent": settings.user_agent,
                    "Accept": "text/html,application/xhtml+xml,*/*;q=0.8",
                }
            )
            _session = session
    return _session


def fetch_page(target: ValidatedUrl) -> FetchedPage:
    """
    単純な GET を 1 回だけ行う。リトライはしない。
    2xx 以外は「取得失敗」として扱い、解析までは進ませない。
    """
    logger.info("[crawler] GET %s", target.url)
    try:
        resp = get_session().get(target.url, timeout=settings.request_timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        logger.warning("[crawler] fetch failed url=%s error=%s", target.url, e)
        raise FetchFailedError(str(e)) from e

    # raise_for_status は 4xx/5xx しか見ないので 1xx/3xx もここで弾く
    if not 200 <= resp.status_code < 300:
        message = f"Unexpected status code {resp.status_code} for url: {target.url}"
        logger.warning("[crawler] %s", message)
        raise FetchFailedError(message)

    # 宣言されたエンコーディングが怪しくても、とりあえず text として扱う
    html = resp.text
    logger.info(
        "[crawler] fetched url=%s status=%s length=%s",
        target.url,
        resp.status_code,
        len(html),
    )
    return FetchedPage(html=html, status_code=resp.status_code)
