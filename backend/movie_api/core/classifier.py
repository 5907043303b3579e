"""Fault -> (HTTP status, response envelope).

Expected faults are echoed to the client with their own codes. Anything else is
logged in full and answered with the same generic 500 body every time.
"""

from __future__ import annotations

import logging

from movie_api.core.error_codes import GeneralErrorCode
from movie_api.core.errors import (
    ApiError,
    ApiResponse,
    DomainFault,
    NestedFault,
    ValidationFault,
    fault_kinds,
    flatten,
)
from movie_api.core.logging import log_event


INTERNAL_SERVER_ERROR = 500


def _codes(errors: list[ApiError]) -> list[int]:
    return [e.code for e in errors]


def classify(
    fault: BaseException, *, correlation_id: str | None
) -> tuple[int, ApiResponse]:
    if isinstance(fault, ValidationFault):
        errors = list(fault.errors)
        log_event(
            correlation_id,
            logging.WARNING,
            f"Validation failed: {fault}",
            error_codes=_codes(errors),
            status_code=fault.status_code,
        )
        return fault.status_code, ApiResponse.failure(errors)

    if isinstance(fault, DomainFault):
        errors = list(fault.errors)
        log_event(
            correlation_id,
            logging.WARNING,
            f"Domain fault: {fault}",
            error_codes=_codes(errors),
            status_code=fault.status_code,
        )
        return fault.status_code, ApiResponse.failure(errors, data=fault.payload)

    if isinstance(fault, NestedFault):
        errors = flatten(fault)
        kinds = fault_kinds(fault)
        details = ", ".join(
            f"{kind}/{e.code}: {e.message}" for kind, e in zip(kinds, errors)
        )
        log_event(
            correlation_id,
            logging.WARNING,
            f"Nested fault {fault.code} ({fault.description}): {details}",
            error_codes=_codes(errors),
            status_code=fault.status_code,
            fault_kind=fault.kind.value,
        )
        return fault.status_code, ApiResponse.failure(errors)

    log_event(
        correlation_id,
        logging.ERROR,
        f"Unhandled {type(fault).__name__}: {fault}",
        cause=fault,
        status_code=INTERNAL_SERVER_ERROR,
    )
    generic = ApiError.from_code(GeneralErrorCode.UNEXPECTED)
    return INTERNAL_SERVER_ERROR, ApiResponse.failure([generic])
