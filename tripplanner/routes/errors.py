from fastapi import Request, status
from fastapi.responses import JSONResponse

from tripplanner.core.errors import ErrorKind, TripPlannerError

STATUS_BY_KIND = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_DATE_RANGE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.DEPENDENCY_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def trip_planner_error_handler(request: Request, exc: TripPlannerError) -> JSONResponse:
    # Internal details of collaborator failures stay in the logs
    detail = exc.message if exc.is_client_error else exc.user_message
    return JSONResponse(
        status_code=STATUS_BY_KIND[exc.kind],
        content={"detail": detail, "code": exc.kind.value},
    )
