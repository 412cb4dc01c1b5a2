# models/seo_models.py

from __future__ import annotations

from typing import Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    """
    解析結果の共通ベース。
    - 1 回の呼び出しごとに生成して返すだけなので frozen にしておく
    - JSON 上のフィールド名は camelCase（statusCode, h1Count など）
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class AnalysisRequest(_Record):
    """seochecker ツールの入力パラメータ。"""

    url: str = Field(..., description="The URL of the page to analyze")


class ValidatedUrl(_Record):
    """
    URL バリデータだけが生成する、検証済みの絶対 URL。
    host はリンクの内部/外部判定に使う（小文字化済み）。
    """

    url: str
    scheme: str
    host: str


class FetchedPage(_Record):
    html: str
    status_code: int


class HeadingStats(_Record):
    h1_count: int = 0
    h2_count: int = 0
    h3_count: int = 0
    # 先頭 5 件までの h1 テキスト
    h1_tags: Tuple[str, ...] = ()


class ImageStats(_Record):
    # total_images == images_with_alt + images_without_alt
    total_images: int = 0
    images_with_alt: int = 0
    images_without_alt: int = 0


class LinkStats(_Record):
    # 解決できなかった href は total_links にだけ数える
    total_links: int = 0
    internal_links: int = 0
    external_links: int = 0


class OpenGraphStats(_Record):
    has_og_title: bool = False
    has_og_description: bool = False
    has_og_image: bool = False


class AnalysisResult(_Record):
    """1 ページ分の SEO 解析レポート。"""

    url: str
    status_code: int
    title: str
    meta_description: str
    headings: HeadingStats
    images: ImageStats
    links: LinkStats
    content_length: int
    word_count: int
    open_graph_tags: OpenGraphStats
    structured_data: bool
    recommendations: Tuple[str, ...] = ()


class ErrorResult(_Record):
    """AnalysisResult の代わりに返すエラー（どちらか一方だけを返す）。"""

    error: str


SeoCheckResult = Union[AnalysisResult, ErrorResult]
