"""Shared schema building blocks"""

from typing import ClassVar, Generic, TypeVar
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UpdateModel(CamelModel):
    """
    Base schema for partial updates.

    At least one field must be present, and fields listed in
    `non_nullable_fields` may be omitted but not explicitly set to null.
    """

    non_nullable_fields: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def check_update_fields(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        for name in self.non_nullable_fields:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self


class ApiResponse(BaseModel, Generic[DataT]):
    """Success envelope returned by every endpoint"""
    status: str = Field(default="success", description="Always 'success'")
    data: DataT


class MessageResponse(CamelModel):
    message: str
