"""Shared base for records read from the document store."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StoreModel(BaseModel):
    """Accepts camelCase storage keys as well as snake_case field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
