from fastapi import APIRouter, Depends, Request

from feedbackbot.domain.schemas.submission import (
    ErrorBody,
    ServiceStatus,
    SubmissionList,
    SubmitRequest,
    SubmitResponse,
)
from feedbackbot.services.submission_service import SubmissionService


router = APIRouter()


def get_submission_service(request: Request) -> SubmissionService:
    return request.app.state.submission_service


@router.get("/", response_model=ServiceStatus)
async def root(service: SubmissionService = Depends(get_submission_service)):
    return service.status()


@router.post(
    "/api/submit",
    response_model=SubmitResponse,
    responses={400: {"model": ErrorBody}, 500: {"model": ErrorBody}},
)
async def submit(req: SubmitRequest, service: SubmissionService = Depends(get_submission_service)):
    return await service.submit(req)


@router.get(
    "/api/submissions",
    response_model=SubmissionList,
    responses={500: {"model": ErrorBody}},
)
async def list_submissions(service: SubmissionService = Depends(get_submission_service)):
    return service.list_submissions()
