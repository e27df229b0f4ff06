"""
API data models for LexiClear.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class Explanation(BaseModel):
    """Plain-English explanation of a legal term."""
    definition: str
    example: str
    implications: List[str]

    class Config:
        frozen = True


class ExplainRequest(BaseModel):
    """Body of POST /explain."""
    term: Optional[str] = ""


class ExplainResponse(BaseModel):
    result: Explanation


class SimplifyRequest(BaseModel):
    """Body of POST /simplify."""
    text: Optional[str] = ""


class SimplifyResponse(BaseModel):
    simplified: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


class StatusReport(BaseModel):
    """Outcome of the OpenAI credential diagnostic."""
    status: str = "error"
    message: str = ""
    key_exists: bool = Field(default=False, alias="keyExists")
    key_format: bool = Field(default=False, alias="keyFormat")
    api_access: bool = Field(default=False, alias="apiAccess")

    class Config:
        populate_by_name = True


class TermsResponse(BaseModel):
    terms: List[str]
