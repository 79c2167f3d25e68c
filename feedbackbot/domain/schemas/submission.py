from __future__ import annotations

from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class Submission(_CamelModel):
    id: str
    rating: int = Field(ge=1, le=5)
    review: str = ""
    user_response: str
    summary: str
    recommended_actions: str
    timestamp: str


class SubmitRequest(BaseModel):
    # rating is checked by the service so bad values answer 400 rather than 422
    model_config = ConfigDict(extra="ignore")
    rating: Any = None
    review: Optional[str] = None


class SubmitResponse(_CamelModel):
    success: bool = True
    message: str
    submission_id: str


class SubmissionStats(_CamelModel):
    total: int = 0
    by_rating: Dict[str, int] = Field(
        default_factory=lambda: {str(r): 0 for r in range(1, 6)}
    )
    # "4.50" when there are submissions, the number 0 otherwise
    average_rating: Union[str, int] = 0


class SubmissionList(_CamelModel):
    submissions: List[Submission] = Field(default_factory=list)
    stats: SubmissionStats = Field(default_factory=SubmissionStats)


class ServiceStatus(_CamelModel):
    status: str = "API is running"
    endpoints: List[str] = Field(default_factory=list)
    total_submissions: int = 0


class ErrorBody(BaseModel):
    error: str
    message: Optional[str] = None
    detail: Optional[Any] = None
