"""
SLA Controllers (API Routes)
=============================

FastAPI routes for SLA checking endpoints.

Controllers are thin - they delegate to application services.
Route handlers are plain functions: FastAPI runs them in its threadpool,
so the blocking holiday client does not stall the event loop.
"""

from fastapi import APIRouter, Depends, HTTPException, Path, Request, status
from pydantic import ValidationError

from sla_checker.core.exceptions import (
    ConfigurationException,
    HolidaySourceException,
    ValidationException,
)
from sla_checker.shared.infrastructure.logging import get_logger
from sla_checker.sla.domain import SLAProfile
from sla_checker.sla.application import (
    HolidayListResponse,
    IHolidayProvider,
    ProfileCheckRequest,
    SLACheckRequest,
    SLACheckResponse,
    SLAService,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/sla", tags=["SLA"])


# ========== Example payloads for Swagger ==========

SLA_CHECK_RESPONSE_EXAMPLE = {
    "isWithinSLA": True,
    "deadline": "2024-09-02T12:00:00Z",
    "remaining": "67:00:00",
    "overage": "00:00:00",
    "workingTimeRemaining": "03:00:00"
}


# ========== Dependencies ==========

def get_holiday_provider(request: Request) -> IHolidayProvider:
    """Holiday client created during application startup."""
    return request.app.state.holiday_provider


def get_sla_service(
    request: Request,
    holiday_provider: IHolidayProvider = Depends(get_holiday_provider)
) -> SLAService:
    """Get SLA service instance."""
    settings = request.app.state.settings
    return SLAService(holiday_provider, settings.holiday_country_code)


def get_sla_profile(request: Request) -> SLAProfile:
    """SLA profile loaded during application startup (defaults when absent)."""
    return getattr(request.app.state, "sla_profile", None) or SLAProfile()


# ========== Route Handlers ==========

@router.post(
    "/check",
    response_model=SLACheckResponse,
    summary="Check an SLA against business hours",
    description="""
    Compute the business-time deadline of an SLA and report where `now`
    stands against it.

    - `remaining` / `overage`: wall-clock gap to the deadline (`HH:MM:SS`)
    - `workingTimeRemaining`: business time left before the deadline

    Public holidays for `country_code` are fetched (and cached for a week)
    unless `ignore_holidays` is set.
    """,
    responses={
        200: {
            "description": "SLA evaluated",
            "content": {"application/json": {"example": SLA_CHECK_RESPONSE_EXAMPLE}}
        },
        422: {"description": "Invalid SLA configuration"},
        502: {"description": "Holiday source unavailable"}
    }
)
def check_sla(
    request: SLACheckRequest,
    http_request: Request,
    sla_service: SLAService = Depends(get_sla_service)
):
    correlation_id = getattr(http_request.state, "correlation_id", "unknown")
    try:
        config = sla_service.build_config(
            request.to_profile(),
            request.start_time,
            extra_holidays=request.holidays,
            country_code=request.country_code,
        )
        result = sla_service.check_sla(config, request.now)
    except (ConfigurationException, ValidationException, ValidationError) as e:
        logger.warning(
            "Rejected SLA configuration",
            extra={"correlation_id": correlation_id, "error": str(e)}
        )
        raise HTTPException(
            status_code=422,
            detail=str(e)
        ) from e
    except HolidaySourceException as e:
        logger.error(
            "Holiday lookup failed",
            extra={"correlation_id": correlation_id, "error": e.message, **e.details}
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=e.message
        ) from e

    return SLACheckResponse.from_result(result)


@router.get(
    "/holidays/{year}/{country_code}",
    response_model=HolidayListResponse,
    summary="List public holidays",
    responses={502: {"description": "Holiday source unavailable"}}
)
def list_holidays(
    year: int = Path(..., ge=1900, le=2200),
    country_code: str = Path(..., min_length=2, max_length=2),
    holiday_provider: IHolidayProvider = Depends(get_holiday_provider)
):
    try:
        holidays = holiday_provider.fetch_holidays(year, country_code)
    except HolidaySourceException as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=e.message
        ) from e

    return HolidayListResponse(
        year=year,
        country_code=country_code.upper(),
        holidays=holidays
    )


@router.get(
    "/profile",
    response_model=SLAProfile,
    summary="Show the server's SLA profile"
)
def get_profile(profile: SLAProfile = Depends(get_sla_profile)):
    return profile


@router.post(
    "/profile/check",
    response_model=SLACheckResponse,
    summary="Check an SLA using the server's profile",
    responses={
        422: {"description": "Invalid SLA profile"},
        502: {"description": "Holiday source unavailable"}
    }
)
def check_with_profile(
    request: ProfileCheckRequest,
    http_request: Request,
    profile: SLAProfile = Depends(get_sla_profile),
    sla_service: SLAService = Depends(get_sla_service)
):
    try:
        config = sla_service.build_config(
            profile,
            request.start_time,
            extra_holidays=request.holidays,
            country_code=request.country_code,
        )
        result = sla_service.check_sla(config, request.now)
    except (ConfigurationException, ValidationException, ValidationError) as e:
        logger.warning(
            "Rejected SLA profile check",
            extra={
                "correlation_id": getattr(http_request.state, "correlation_id", "unknown"),
                "error": str(e),
            }
        )
        raise HTTPException(
            status_code=422,
            detail=str(e)
        ) from e
    except HolidaySourceException as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=e.message
        ) from e

    return SLACheckResponse.from_result(result)
