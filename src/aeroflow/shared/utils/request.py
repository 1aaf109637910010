from typing import TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


def parse_body(body: str | None, model: type[T]) -> T:
    """リクエストボディ(JSON文字列)を pydantic モデルで検証する"""
    return model.model_validate_json(body or "{}")
