from typing import Any, ClassVar, Dict, FrozenSet

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake-case attributes exposed as camelCase JSON (``exercise_ids`` -> ``exerciseIds``)."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class PartialUpdate(CamelModel):
    """Whitelisted partial update: only declared fields that the client actually sent."""

    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    def changes(self) -> Dict[str, Any]:
        return {
            field: value
            for field, value in self.model_dump(exclude_unset=True).items()
            if value is not None or field in self.nullable_fields
        }
