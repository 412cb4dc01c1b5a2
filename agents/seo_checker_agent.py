# agents/seo_checker_agent.py

from __future__ import annotations

import logging

from models.seo_models import (
    AnalysisRequest,
    AnalysisResult,
    ErrorResult,
    FetchedPage,
    SeoCheckResult,
    ValidatedUrl,
)
from services import html_metrics
from services.crawler import FetchFailedError, fetch_page
from services.recommendations import build_recommendations
from services.url_validator import InvalidUrlError, validate_url

logger = logging.getLogger(__name__)

INVALID_URL_MESSAGE = "Invalid URL format. Please provide a valid http or https URL."


def build_report(target: ValidatedUrl, page: FetchedPage) -> AnalysisResult:
    """
    取得済み HTML から各指標を抽出し、AnalysisResult にまとめる。
    ここから先はネットワークアクセスなし（同期・CPU のみ）。
    """
    html = page.html
    return AnalysisResult(
        url=target.url,
        status_code=page.status_code,
        title=html_metrics.extract_title(html),
        meta_description=html_metrics.extract_meta_description(html),
        headings=html_metrics.analyze_headings(html),
        images=html_metrics.analyze_images(html),
        links=html_metrics.classify_links(html, target.url),
        content_length=len(html),
        word_count=html_metrics.count_words(html),
        open_graph_tags=html_metrics.detect_open_graph(html),
        structured_data=html_metrics.has_structured_data(html),
        recommendations=build_recommendations(html),
    )


def check_seo(request: AnalysisRequest) -> SeoCheckResult:
    """
    seochecker ツール本体。

    1) URL バリデーション（不正なら通信せずにエラー）
    2) HTML 取得（2xx 以外はエラー）
    3) 指標抽出 + 改善提案 → AnalysisResult

    どのケースでも例外は外に出さず、AnalysisResult か ErrorResult のどちらかを返す。
    """
    logger.info("[seo_checker] start url=%s", request.url)

    try:
        target = validate_url(request.url)
    except InvalidUrlError as e:
        logger.warning("[seo_checker] invalid url=%r reason=%s", request.url, e)
        return ErrorResult(error=INVALID_URL_MESSAGE)

    try:
        page = fetch_page(target)
        result = build_report(target, page)
    except FetchFailedError as e:
        return ErrorResult(error=f"Failed to fetch URL: {e}")
    except Exception as e:
        logger.exception("[seo_checker] unexpected failure url=%s", target.url)
        return ErrorResult(error=f"An error occurred while analyzing the page: {e}")

    logger.info(
        "[seo_checker] done url=%s status=%s words=%s recommendations=%s",
        target.url,
        result.status_code,
        result.word_count,
        len(result.recommendations),
    )
    return result
