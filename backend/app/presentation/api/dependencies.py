from fastapi import Request

from app.core.di.service_locator import ServiceLocator
from app.domain.exceptions import ErrorKind


STATUS_BY_ERROR_KIND = {
    ErrorKind.NOT_CONFIGURED: 503,
    ErrorKind.PROVIDER_FAILURE: 500,
    ErrorKind.INVALID_INPUT: 400,
}


def get_locator(request: Request) -> ServiceLocator:
    return request.app.state.locator
