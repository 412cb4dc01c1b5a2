# app/tools/seo_checker.py
from __future__ import annotations

from agents.seo_checker_agent import check_seo
from app.tools.registry import ToolRegistry
from models.seo_models import AnalysisRequest, SeoCheckResult

registry = ToolRegistry()


@registry.tool(
    name="seochecker",
    description="Checks a url for SEO statistics",
    parameters=AnalysisRequest,
)
def seochecker(params: AnalysisRequest) -> SeoCheckResult:
    return check_seo(params)
