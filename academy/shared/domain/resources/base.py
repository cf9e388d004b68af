"""Common plumbing for the resource clients."""

from __future__ import annotations

import logging
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from academy.shared.core.errors import Operation, RequestFailed
from academy.shared.infrastructure.http.api_client import ApiClient

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ResourceClient:
    """One resource family, one HTTP call per method, no business rules."""

    def __init__(self, api: ApiClient) -> None:
        self.api = api

    @staticmethod
    def _parse(model: Type[ModelT], data: Any, operation: Operation) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"{operation.value}: unexpected response shape: {e}")
            raise RequestFailed(operation, "Unexpected response from server") from e

    @staticmethod
    def _parse_list(model: Type[ModelT], data: Any, operation: Operation) -> List[ModelT]:
        try:
            return TypeAdapter(List[model]).validate_python(data)  # type: ignore[valid-type]
        except ValidationError as e:
            logger.error(f"{operation.value}: unexpected response shape: {e}")
            raise RequestFailed(operation, "Unexpected response from server") from e
