"""
Repository layer exceptions
"""

from format_api.utils.exceptions import ApiError


class RepositoryError(ApiError):
    """Base repository exception"""
    pass


class DatabaseCommitError(RepositoryError):
    """Commit failed for a reason other than a constraint violation"""
    pass


class QueryExecutionError(RepositoryError):
    """Query execution failed"""
    pass
