"""Shared pydantic base for every wire-facing model.

Field names are snake_case in Python and camelCase on the wire, matching
the JSON the form posts and the report the frontend renders.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
