"""Error taxonomy shared by the services and the HTTP layer.

Services raise these; ``app.main`` renders them as ``{"detail": code}`` with
the matching status, the same body shape as ``HTTPException``.
"""


class AppError(Exception):
    status_code = 500
    detail = "internal_error"

    def __init__(self, detail: str | None = None):
        if detail:
            self.detail = detail
        super().__init__(self.detail)


class Unauthenticated(AppError):
    status_code = 401
    detail = "unauthorized"


class Forbidden(AppError):
    status_code = 403
    detail = "forbidden"


class NotFound(AppError):
    status_code = 404
    detail = "not_found"


class Conflict(AppError):
    status_code = 409
    detail = "conflict"


class UpstreamSyncFailure(AppError):
    """The user directory could not be updated from a fresh provider profile.

    Raised inside sign-in and logged there; never reaches a client.
    """

    status_code = 502
    detail = "directory_sync_failed"


class ProviderError(AppError):
    status_code = 502
    detail = "provider_error"

    def __init__(self, detail: str | None = None, status_code: int | None = None):
        if status_code:
            self.status_code = status_code
        super().__init__(detail)
