# services/url_validator.py

from __future__ import annotations

import logging
from urllib.parse import urlsplit

from models.seo_models import ValidatedUrl

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http", "https")


class InvalidUrlError(ValueError):
    """絶対 URL でない、または http/https 以外のスキームの場合に送出。"""


def validate_url(raw_url: str) -> ValidatedUrl:
    """
    文字列が http/https の絶対 URL であることを確認して ValidatedUrl を返す。
    ネットワークアクセスは行わない。
    """
    candidate = (raw_url or "").strip()
    if not candidate:
        raise InvalidUrlError("URL is empty")

    try:
        parts = urlsplit(candidate)
        host = parts.hostname
        # 数字以外・範囲外のポートはここで ValueError になる
        parts.port
    except ValueError as e:
        # "http://[::1" のような壊れた IPv6 リテラルなど
        raise InvalidUrlError(f"URL could not be parsed: {e}") from e

    scheme = parts.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        raise InvalidUrlError(f"Unsupported URL scheme: {parts.scheme!r}")
    if not host:
        raise InvalidUrlError("URL has no host")
    if any(ch.isspace() for ch in host):
        raise InvalidUrlError(f"URL host contains whitespace: {host!r}")

    logger.debug("[url_validator] accepted url=%s host=%s", candidate, host)
    return ValidatedUrl(url=candidate, scheme=scheme, host=host.lower())
