"""Response schemas shared by every router."""

from pydantic import BaseModel


class StatusResponse(BaseModel):
    status: str = "ok"


class IdResponse(BaseModel):
    id: str
