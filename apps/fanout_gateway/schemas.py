"""
Pydantic schemas for the Fan-Out Gateway.

JSON field names are camelCase on the wire (``api2Delay``), snake_case in
Python; both spellings are accepted on input.
"""

from pydantic import BaseModel, ConfigDict, StrictInt
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Api1Response(_CamelModel):
    """Composed result of /api/1: one value per downstream call."""

    api2_value: int
    api3_value: int


class Api1PostRequest(_CamelModel):
    """Delays (ms) to forward to POST /api/2 and POST /api/3."""

    api2_delay: StrictInt
    api3_delay: StrictInt


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str


class ServiceInfoResponse(BaseModel):
    """Root endpoint response."""

    service: str
    version: str
    downstream_base_url: str
    deadline_ms: int
