"""Shared schema base.

Learn: The wire format is camelCase (userId, createdAt) while Python
attributes stay snake_case. The alias generator bridges the two;
populate_by_name lets requests use either spelling, and FastAPI
serializes responses by alias.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class MessageResponse(BaseModel):
    message: str
