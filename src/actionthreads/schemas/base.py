from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base for request bodies: camelCase on the wire, snake_case accepted too."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ORMBase(APIModel):
    """Base schema enabling attribute (ORM) population for Pydantic v2 models.

    Inherit from this class for any read/response schema that will be constructed
    directly from ORM / domain objects rather than plain dicts.
    """
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class ErrorDetail(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    """``{"error": {"code": ..., "message": ...}}`` body shared by every failure."""
    error: ErrorDetail
