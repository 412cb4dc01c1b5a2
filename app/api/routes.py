# app/api/routes.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, HTTPException
from pydantic import BaseModel, ValidationError

from app.tools.registry import ToolNotFoundError
from app.tools.seo_checker import registry

logger = logging.getLogger(__name__)

router = APIRouter()


# --------- Response モデル ---------


class DiscoveryResponse(BaseModel):
    functions: List[Dict[str, Any]]


# --------- エンドポイント ---------


@router.get("/discovery", response_model=DiscoveryResponse)
def api_discovery() -> DiscoveryResponse:
    """登録済みツールの一覧（名前・説明・パラメータ・エンドポイント）を返す。"""
    return DiscoveryResponse(
        functions=[tool.describe() for tool in registry.list_tools()]
    )


@router.post("/tools/{name}")
def api_invoke_tool(name: str, payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """
    ツール呼び出し。

    body は {"parameters": {...}} 形式を基本とし、
    パラメータを直接 {...} で渡された場合もそのまま受け付ける。
    ツール側のエラー（ErrorResult）は 200 で返す。
    """
    raw_params = payload.get("parameters", payload)
    if not isinstance(raw_params, dict):
        raise HTTPException(status_code=422, detail="parameters must be an object")

    logger.info("[api.tools] name=%s params=%s", name, sorted(raw_params))

    try:
        result = registry.invoke(name, raw_params)
    except ToolNotFoundError:
        raise HTTPException(status_code=404, detail=f"Tool not found: {name}")
    except ValidationError as e:
        logger.warning("[api.tools] invalid parameters name=%s errors=%s", name, e.errors())
        raise HTTPException(
            status_code=422, detail=e.errors(include_url=False, include_context=False)
        )

    return result.model_dump(mode="json", by_alias=True)
