"""FastAPI dependency injection and shared response helpers."""

from fastapi import HTTPException

from moneylab.api.schemas import EngineErrorResponse, ErrorDetail, ScheduleResponse
from moneylab.engine.amortization import payoff_warning
from moneylab.models.errors import EngineError
from moneylab.models.schedules import Schedule
from moneylab.tracking import LoggingUsageTracker, UsageTracker


def get_usage_tracker() -> UsageTracker:
    return LoggingUsageTracker()


def engine_error(error: EngineError) -> HTTPException:
    """Map an engine error value onto a 422 response."""
    return HTTPException(
        status_code=422,
        detail=EngineErrorResponse(
            kind=error.kind.value,
            message=error.message,
            errors=[ErrorDetail(field=e.field, message=e.message) for e in error.errors],
        ).model_dump(),
    )


def schedule_response(schedule: Schedule) -> ScheduleResponse:
    response = ScheduleResponse.model_validate(schedule)
    warning = payoff_warning(schedule)
    response.warning = warning.message if warning else None
    return response
