from fastapi.responses import JSONResponse

from print_relay.errors import RequestError
from print_relay.models import RelayOutcome

UNKNOWN_ERROR = "Unknown error occurred"


def outcome_response(outcome: RelayOutcome) -> JSONResponse:
    status_code = 200 if outcome.success else 500
    return JSONResponse(outcome.to_body(), status_code=status_code)


def request_error_response(exc: RequestError) -> JSONResponse:
    return JSONResponse(exc.to_body(), status_code=exc.status_code)


def unexpected_error_response(exc: BaseException) -> JSONResponse:
    return JSONResponse(
        {"success": False, "error": str(exc) or UNKNOWN_ERROR},
        status_code=500,
    )
