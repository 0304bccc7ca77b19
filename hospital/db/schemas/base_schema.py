# hospital/db/schemas/base_schema.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Wire shapes use the browser client's camelCase document keys
    (patientName, isActive, createdAt); Python code uses snake_case.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,  # Tells Pydantic to read SQLAlchemy objects
        str_strip_whitespace=True,
    )


__all__ = ["CamelModel"]
