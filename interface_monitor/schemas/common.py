from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from interface_monitor.core.datetime_utils import to_utc_isoformat

# Stored as naive UTC, emitted as "...Z" so clients don't read it as local time
UTCDateTime = Annotated[
    datetime,
    PlainSerializer(to_utc_isoformat, return_type=str, when_used="json"),
]


class CamelModel(BaseModel):
    """Base model that reads snake_case and emits camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MessageResponse(CamelModel):
    """Plain confirmation message."""

    message: str
