from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Required string field: absent, null and "" are all rejected (→ 400).
RequiredStr = Annotated[str, Field(min_length=1)]


class CamelModel(BaseModel):
    """
    Request bodies arrive camelCased from the React frontend
    (societyId, fullName, tempPass…); Python code uses snake_case.
    Numbers are accepted where strings are expected (phone, flat number).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )
