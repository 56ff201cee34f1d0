# sales_dashboard/core/base_service.py
"""Generic base service converting DAO rows into response schemas."""

from typing import Generic, Iterable, List, Optional, Type, TypeVar
from pydantic import BaseModel
from abc import ABC

ModelType = TypeVar("ModelType")
ResponseSchemaType = TypeVar("ResponseSchemaType", bound=BaseModel)


class BaseService(Generic[ModelType, ResponseSchemaType], ABC):
    """Subclasses set ``response_model`` to the schema their rows are returned as."""

    response_model: Optional[Type[ResponseSchemaType]] = None

    def _to_response(self, record: ModelType) -> ResponseSchemaType:
        """Convert database model to response schema."""
        if self.response_model is None:
            raise NotImplementedError(f"{type(self).__name__} must set response_model")
        return self.response_model.model_validate(record)

    def _to_responses(self, records: Iterable[ModelType]) -> List[ResponseSchemaType]:
        return [self._to_response(record) for record in records]
