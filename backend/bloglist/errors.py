"""Error taxonomy shared by services and HTTP controllers.

Services raise these exceptions; `bloglist.main` registers a single
handler that turns any of them into an HTTP response with the class
status code and a `{"error": message}` JSON body.
"""

from http import HTTPStatus


class BlogListError(Exception):
    """Base class for errors that map onto an HTTP status."""
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message = "internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(BlogListError):
    status = HTTPStatus.BAD_REQUEST
    default_message = "invalid request"


class AuthenticationError(BlogListError):
    status = HTTPStatus.UNAUTHORIZED
    default_message = "token invalid"


class AuthorizationError(BlogListError):
    status = HTTPStatus.FORBIDDEN
    default_message = "forbidden"


class NotFoundError(BlogListError):
    status = HTTPStatus.NOT_FOUND
    default_message = "not found"


class StoreError(BlogListError):
    """Underlying persistence failure. Never retried."""
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message = "database operation failed"
