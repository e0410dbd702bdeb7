from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """Raised when request validation fails."""

    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=message,
        )


class UpstreamFailure(HTTPException):
    """Raised when GitHub could not serve the data a request depends on."""

    def __init__(self, message: str, rate_limited: bool = False):
        super().__init__(
            status_code=(
                status.HTTP_429_TOO_MANY_REQUESTS if rate_limited else status.HTTP_502_BAD_GATEWAY
            ),
            detail=message,
        )
