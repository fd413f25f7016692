"""Shared DTO configuration"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON uses camelCase keys; snake_case is accepted on input as well"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class MessageResponse(CamelModel):
    message: str
