from typing import Generic, Optional, TypeVar
from pydantic import AliasGenerator, BaseModel
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Base for response bodies: read from ORM attributes, emit camelCase keys
class CamelResponse(BaseModel):
    class Config:
        from_attributes = True
        alias_generator = AliasGenerator(serialization_alias=to_camel)

# Base for request bodies: accept camelCase (wire) or snake_case names
class CamelRequest(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True
        use_enum_values = True
        validate_default = True

# Envelope shared by every endpoint
class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
    error: Optional[str] = None
