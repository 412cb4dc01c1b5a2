# services/html_metrics.py

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup

from models.seo_models import HeadingStats, ImageStats, LinkStats, OpenGraphStats

logger = logging.getLogger(__name__)

# ============================================================
# 既定値（見つからなかった場合に返す文字列）
# ============================================================

NO_TITLE = "No title found"
NO_META_DESCRIPTION = "No meta description found"

MAX_H1_TAGS = 5

# ============================================================
# パターン
# DOM パーサではなく、生 HTML への正規表現マッチで割り切る。
# 入れ子や壊れたタグは多少数え間違えても良い前提。
# ============================================================

_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title\s*>", re.IGNORECASE | re.DOTALL)

# 属性値: "..." または '...'（グループ 1 か 2 のどちらかに入る）
_ATTR_VALUE = r"""(?:"([^"]*)"|'([^']*)')"""

# name → content の順と content → name の順の両方を見て、先に出た方を採用
_META_DESC_RES = (
    re.compile(
        r"""<meta\s[^>]*?(?<![\w-])name\s*=\s*["']description["'][^>]*?"""
        rf"""(?<![\w-])content\s*=\s*{_ATTR_VALUE}""",
        re.IGNORECASE,
    ),
    re.compile(
        rf"""<meta\s[^>]*?(?<![\w-])content\s*=\s*{_ATTR_VALUE}[^>]*?"""
        r"""(?<![\w-])name\s*=\s*["']description["']""",
        re.IGNORECASE,
    ),
)

_HEADING_RES = {
    level: re.compile(rf"<h{level}(?:\s[^>]*)?>", re.IGNORECASE)
    for level in (1, 2, 3)
}
_H1_TEXT_RE = re.compile(r"<h1(?:\s[^>]*)?>(.*?)</h1\s*>", re.IGNORECASE | re.DOTALL)

_IMG_RE = re.compile(r"<img\b[^>]*>", re.IGNORECASE)
_ALT_RE = re.compile(r"""(?<![\w-])alt\s*=\s*(?:"[^"]+"|'[^']+')""", re.IGNORECASE)

_LINK_RE = re.compile(
    rf"""<a\s[^>]*?(?<![\w-])href\s*=\s*{_ATTR_VALUE}""",
    re.IGNORECASE,
)

_SCRIPT_STYLE_RE = re.compile(
    r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL
)
_WORD_RE = re.compile(r"\w+")

_STRUCTURED_DATA_MARKERS = ("application/ld+json", "itemtype=")


def _og_pattern(prop: str) -> re.Pattern[str]:
    return re.compile(
        rf"""<meta\s[^>]*?(?<![\w-])property\s*=\s*["']{re.escape(prop)}["']""",
        re.IGNORECASE,
    )


_OG_TITLE_RE = _og_pattern("og:title")
_OG_DESCRIPTION_RE = _og_pattern("og:description")
_OG_IMAGE_RE = _og_pattern("og:image")


def _attr_value(m: re.Match[str]) -> str:
    return m.group(1) if m.group(1) is not None else m.group(2)


# ============================================================
# title / meta description
# ============================================================

def find_title(html: str) -> Optional[str]:
    """最初の <title> の中身（trim 済み）。無い・空なら None。"""
    m = _TITLE_RE.search(html or "")
    if not m:
        return None
    return m.group(1).strip() or None


def extract_title(html: str) -> str:
    return find_title(html) or NO_TITLE


def find_meta_description(html: str) -> Optional[str]:
    """
    最初の <meta name="description" content="..."> の content を返す。
    属性の順序は問わない。クォートはシングル/ダブルどちらでも可。
    """
    matches = [m for m in (p.search(html or "") for p in _META_DESC_RES) if m]
    if not matches:
        return None
    first = min(matches, key=lambda m: m.start())
    return _attr_value(first).strip() or None


def extract_meta_description(html: str) -> str:
    return find_meta_description(html) or NO_META_DESCRIPTION


# ============================================================
# 見出し / 画像 / リンク
# ============================================================

def analyze_headings(html: str) -> HeadingStats:
    """
    h1/h2/h3 の開始タグ数（属性は無視）と、
    先頭から最大 5 件の h1 テキストを返す。
    """
    html = html or ""
    h1_tags = [
        m.group(1).strip()
        for _, m in zip(range(MAX_H1_TAGS), _H1_TEXT_RE.finditer(html))
    ]
    return HeadingStats(
        h1_count=len(_HEADING_RES[1].findall(html)),
        h2_count=len(_HEADING_RES[2].findall(html)),
        h3_count=len(_HEADING_RES[3].findall(html)),
        h1_tags=h1_tags,
    )


def analyze_images(html: str) -> ImageStats:
    img_tags = _IMG_RE.findall(html or "")
    with_alt = sum(1 for tag in img_tags if _ALT_RE.search(tag))
    return ImageStats(
        total_images=len(img_tags),
        images_with_alt=with_alt,
        images_without_alt=len(img_tags) - with_alt,
    )


def _resolve_host(href: str, base_url: str) -> Optional[str]:
    """
    href をページ URL 基準で絶対 URL に解決し、そのホスト名（小文字）を返す。
    mailto: / javascript: のようにホストを持たないもの、
    パースできないものは None（= 分類しない）。
    """
    try:
        parts = urlsplit(urljoin(base_url, href.strip()))
        host = parts.hostname
    except ValueError:
        return None
    if not parts.scheme or not host:
        return None
    return host


def classify_links(html: str, base_url: str) -> LinkStats:
    """
    <a href="..."> をすべて数え、解決できたものだけ内部/外部に振り分ける。
    internal_links + external_links <= total_links
    """
    base_host = _resolve_host(base_url, base_url)
    total = internal = external = 0

    for m in _LINK_RE.finditer(html or ""):
        total += 1
        host = _resolve_host(_attr_value(m), base_url)
        if host is None:
            continue
        if host == base_host:
            internal += 1
        else:
            external += 1

    logger.debug(
        "[html_metrics] links total=%s internal=%s external=%s",
        total,
        internal,
        external,
    )
    return LinkStats(total_links=total, internal_links=internal, external_links=external)


# ============================================================
# 本文 / OGP / 構造化データ
# ============================================================

def count_words(html: str) -> int:
    """script/style を除去 → タグを剥がす → \\w+ の連続を数える。"""
    stripped = _SCRIPT_STYLE_RE.sub(" ", html or "")
    text = BeautifulSoup(stripped, "html.parser").get_text(separator=" ")
    return len(_WORD_RE.findall(text))


def detect_open_graph(html: str) -> OpenGraphStats:
    html = html or ""
    return OpenGraphStats(
        has_og_title=bool(_OG_TITLE_RE.search(html)),
        has_og_description=bool(_OG_DESCRIPTION_RE.search(html)),
        has_og_image=bool(_OG_IMAGE_RE.search(html)),
    )


def has_structured_data(html: str) -> bool:
    # JSON-LD / microdata の有無だけを見る粗い判定（中身はパースしない）
    lowered = (html or "").lower()
    return any(marker in lowered for marker in _STRUCTURED_DATA_MARKERS)
