# app/tools/registry.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Type

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ToolNotFoundError(KeyError):
    """登録されていないツール名で呼び出された場合に送出。"""


@dataclass(frozen=True)
class ToolDefinition:
    """
    ツール 1 件分の定義。
    - parameters: 入力を検証する pydantic モデル
    - handler: parameters のインスタンスを受け取り、結果モデルを返す関数
    """

    name: str
    description: str
    parameters: Type[BaseModel]
    handler: Callable[[Any], BaseModel]

    @property
    def endpoint(self) -> str:
        return f"/tools/{self.name}"

    def describe(self) -> Dict[str, Any]:
        """/discovery 用の JSON 形式に変換する。"""
        schema = self.parameters.model_json_schema(by_alias=True)
        required = set(schema.get("required", []))
        params: List[Dict[str, Any]] = []
        for name, prop in schema.get("properties", {}).items():
            params.append(
                {
                    "name": name,
                    "type": prop.get("type", "string"),
                    "description": prop.get("description", ""),
                    "required": name in required,
                }
            )
        return {
            "name": self.name,
            "description": self.description,
            "parameters": params,
            "endpoint": self.endpoint,
            "http_method": "POST",
        }


class ToolRegistry:
    """ツール名 → ToolDefinition の対応表。"""

    def __init__(self) -> None:
        self._tools: Dict[str, ToolDefinition] = {}

    def register(self, tool: ToolDefinition) -> ToolDefinition:
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = tool
        logger.info("[registry] registered tool=%s", tool.name)
        return tool

    def tool(
        self, name: str, description: str, parameters: Type[BaseModel]
    ) -> Callable[[Callable[[Any], BaseModel]], Callable[[Any], BaseModel]]:
        """デコレータ版の register。関数自体はそのまま返す。"""

        def decorator(func: Callable[[Any], BaseModel]) -> Callable[[Any], BaseModel]:
            self.register(ToolDefinition(name, description, parameters, func))
            return func

        return decorator

    def get(self, name: str) -> ToolDefinition:
        try:
            return self._tools[name]
        except KeyError:
            raise ToolNotFoundError(name) from None

    def list_tools(self) -> List[ToolDefinition]:
        return list(self._tools.values())

    def invoke(self, name: str, raw_params: Mapping[str, Any]) -> BaseModel:
        """
        生パラメータを pydantic で検証してからハンドラを呼ぶ。
        検証エラー（pydantic.ValidationError）は呼び出し側で扱う。
        """
        tool = self.get(name)
        params = tool.parameters.model_validate(dict(raw_params))
        logger.info("[registry] invoke tool=%s", name)
        return tool.handler(params)
