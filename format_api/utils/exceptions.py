class ApiError(Exception):
    """
    Root of every API exception
    - all custom API exceptions derive from this class
    - rendered by the exception handler registered in main.py
    """
    def __init__(self, message: str):
        """
        - message: text returned to the caller
        """
        self.message = message
        super().__init__(message)


class BadRequestError(ApiError):
    """400 Bad Request (invalid input)"""
    pass


class UnauthorizedError(ApiError):
    """401 Unauthorized (missing or malformed identity)"""
    pass


class ForbiddenError(ApiError):
    """403 Forbidden (identity is not the owner)"""
    pass


class NotFoundError(ApiError):
    """404 Not Found"""
    pass


class ConflictError(ApiError):
    """409 Conflict"""
    pass
