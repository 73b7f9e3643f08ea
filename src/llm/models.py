# src/llm/models.py — v1
"""Remote inference outcome types.

A remote call never raises to its caller: it returns either RemoteSuccess
carrying the decoded result, or RemoteFailure carrying the error class that
decides the next fallback tier.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict

from facetier.core.models import FaceAnalysis, MedicalRecommendation


class ErrorClass(str, Enum):
    QUOTA = "quota"
    TRANSIENT = "transient"
    UNREACHABLE = "unreachable"
    MALFORMED_RESPONSE = "malformed_response"


class RemoteSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    result: Union[FaceAnalysis, MedicalRecommendation]
    status_code: int = 200
    raw_body: str = ""

    @property
    def ok(self) -> bool:
        return True


class RemoteFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    error_class: ErrorClass
    status_code: int | None = None
    raw_body: str = ""
    detail: str = ""

    @property
    def ok(self) -> bool:
        return False


RemoteOutcome = Union[RemoteSuccess, RemoteFailure]
