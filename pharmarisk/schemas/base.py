"""Shared pydantic configuration for engine records."""

from types import MappingProxyType
from typing import Annotated, Mapping

from pydantic import AfterValidator, BaseModel, PlainSerializer
from pydantic.alias_generators import to_camel

# Read-only str -> int mapping that still serialises as a plain JSON object
FrozenCounts = Annotated[
    Mapping[str, int],
    AfterValidator(lambda v: MappingProxyType(dict(v))),
    PlainSerializer(dict, return_type=dict[str, int]),
]


class Record(BaseModel):
    """Immutable record that serialises with camelCase keys.

    Attributes are snake_case in Python; ``model_dump(by_alias=True)`` and the
    HTTP layer emit the camelCase names the mobile app consumes.  Either form
    is accepted on construction.  Sequence fields are tuples and count maps
    are read-only, so a record handed to a caller cannot change underneath
    another.
    """

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }
