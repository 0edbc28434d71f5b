import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from format_api.repositories.exceptions import DatabaseCommitError
from format_api.utils.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


def is_foreign_key_violation(error: IntegrityError) -> bool:
    """
    True when the driver reports a missing referenced row
    - SQLite: "FOREIGN KEY constraint failed"
    - MySQL: 1452 "... a foreign key constraint fails"
    """
    return "foreign key" in str(error.orig).lower()


class BaseRepository:
    """Repository base class: owns the request session and its commit"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(
        self,
        conflict_message: str = "Resource already exists",
        missing_message: str = "Referenced resource not found.",
    ) -> None:
        """
        Commit the transaction, rolling back on failure.
        The store has the final word on races lost after the service pre-checks:
        - a unique constraint violation is a ConflictError
        - a foreign key violation (parent deleted meanwhile) is a NotFoundError
        """
        try:
            await self.session.commit()
            logger.debug("DB commit succeeded")
        except IntegrityError as e:
            logger.warning("Constraint violation on commit: %s", e.orig)
            await self.session.rollback()
            if is_foreign_key_violation(e):
                raise NotFoundError(missing_message)
            raise ConflictError(conflict_message)
        except SQLAlchemyError as e:
            logger.error("DB commit failed: %s", e)
            await self.session.rollback()
            raise DatabaseCommitError(f"Error while committing: {e}")
