# services/recommendations.py

from __future__ import annotations

import logging
from typing import List

from services import html_metrics

logger = logging.getLogger(__name__)

# ============================================================
# しきい値
# ============================================================

TITLE_MAX_LENGTH: int = 60
TITLE_MIN_LENGTH: int = 30
META_DESCRIPTION_MAX_LENGTH: int = 160

NO_ISSUES_MESSAGE = "Great! No major SEO issues detected."


def _title_rule(html: str) -> List[str]:
    title = html_metrics.find_title(html)
    if title is None:
        return ["Add a title tag to your page."]
    if len(title) > TITLE_MAX_LENGTH:
        return [
            f"Title is too long ({len(title)} characters). "
            f"Keep it under {TITLE_MAX_LENGTH} characters."
        ]
    if len(title) < TITLE_MIN_LENGTH:
        return [
            f"Title is too short ({len(title)} characters). "
            f"Aim for {TITLE_MIN_LENGTH}-{TITLE_MAX_LENGTH} characters."
        ]
    return []


def _meta_description_rule(html: str) -> List[str]:
    description = html_metrics.find_meta_description(html)
    if description is None:
        return ["Add a meta description to your page."]
    if len(description) > META_DESCRIPTION_MAX_LENGTH:
        return [
            f"Meta description is too long ({len(description)} characters). "
            f"Keep it under {META_DESCRIPTION_MAX_LENGTH} characters."
        ]
    return []


def _h1_rule(html: str) -> List[str]:
    h1_count = html_metrics.analyze_headings(html).h1_count
    if h1_count == 0:
        return ["Add an H1 heading to your page."]
    if h1_count > 1:
        return [f"Use only one H1 heading per page (found {h1_count})."]
    return []


def _image_alt_rule(html: str) -> List[str]:
    missing = html_metrics.analyze_images(html).images_without_alt
    if missing > 0:
        return [f"Add alt text to {missing} image(s) missing it."]
    return []


def _structured_data_rule(html: str) -> List[str]:
    if not html_metrics.has_structured_data(html):
        return ["Consider adding structured data (JSON-LD or Schema.org markup)."]
    return []


# 評価順 = 出力順
RULES = (
    _title_rule,
    _meta_description_rule,
    _h1_rule,
    _image_alt_rule,
    _structured_data_rule,
)


def build_recommendations(html: str) -> List[str]:
    """
    生 HTML からルールを順番に評価し、改善メッセージのリストを返す。

    - 各ルールは 0 件か 1 件のメッセージを返す
    - どのルールにも引っかからなければ、ポジティブなメッセージを 1 件だけ返す
    - 抽出は html_metrics を毎回呼び直す（副作用なし・軽量なので）
    """
    recommendations: List[str] = []
    for rule in RULES:
        recommendations.extend(rule(html))

    if not recommendations:
        recommendations.append(NO_ISSUES_MESSAGE)

    logger.debug("[recommendations] count=%s", len(recommendations))
    return recommendations
