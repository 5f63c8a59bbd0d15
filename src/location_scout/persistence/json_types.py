# ABOUTME: TypeAdapter-backed JSON column type for the persistence layer
# ABOUTME: Stores any pydantic-validatable value in a JSON column and validates it on the way out

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter
from sqlalchemy import JSON, TypeDecorator
from sqlalchemy.engine import Dialect


class PydanticJson(TypeDecorator[Any]):
    """
    A SQLAlchemy TypeDecorator that converts values through a pydantic TypeAdapter.

    Values are dumped to JSON-compatible Python before the JSON impl serializes
    them, and validated back into ``pydantic_type`` when rows are loaded.
    """

    impl = JSON
    cache_ok = True

    def __init__(self, pydantic_type: Any) -> None:
        super().__init__()
        self.type_adapter = TypeAdapter(pydantic_type)

    def process_bind_param(self, value: Any, dialect: Dialect) -> Any:
        if value is None:
            return None
        return self.type_adapter.dump_python(value, mode="json")

    def process_result_value(self, value: Any, dialect: Dialect) -> Any:
        if value is None:
            return None
        return self.type_adapter.validate_python(value)
