from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict, StrictFloat, StrictStr

class DecisionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
    identifier: StrictStr
    fraction: Optional[StrictFloat] = None

class DecisionResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")
    ok: bool = True
    bucket: int
    fraction: float
    inside: bool

class ErrorResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")
    ok: bool = False
    error: str
