"""
Units of work over the Flask-SQLAlchemy session.
"""

from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, scoped_session

from accounts.core.extensions import db
from accounts.repositories import RepositoryError, UserRepository
from accounts.uow.base import UnitOfWork


def _default_session(session: Session | None) -> Session:
    return session if session is not None else db.session


class _SessionBound(UnitOfWork):
    """Hold the session and the repositories bound to it."""

    def __init__(self, session: Session | None = None) -> None:
        self.session = _default_session(session)
        self.users = UserRepository(session=self.session)

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyUnitOfWork(_SessionBound):
    """
    Read-write unit of work.

    A clean exit commits; an exception, or a failed commit, rolls back. Commit
    failures surface as :class:`~accounts.repositories.errors.RepositoryError`.
    """

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except RepositoryError:
            self.rollback()
            raise

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            raise RepositoryError("Failed to commit transaction") from exc


class SQLAlchemyReadOnlyUnitOfWork(_SessionBound):
    """
    Read-only unit of work.

    Flushing pending ORM changes raises ``RuntimeError`` while the block is
    active. If the session was idle on entry the transaction opened inside the
    block is rolled back on exit; an already running transaction is left to
    its owner.
    """

    def __init__(self, session: Session | None = None) -> None:
        super().__init__(session)
        self._owns_transaction = False
        self._guarded: Session | None = None

    def _concrete_session(self) -> Session:
        # scoped_session proxies neither in_transaction() nor instance-level events.
        if isinstance(self.session, scoped_session):
            return self.session()
        return self.session

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        self._guarded = self._concrete_session()
        self._owns_transaction = not self._guarded.in_transaction()
        event.listen(self._guarded, "before_flush", self._refuse_flush)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        guarded, self._guarded = self._guarded, None
        try:
            if self._owns_transaction:
                self.rollback()
        finally:
            self._owns_transaction = False
            if guarded is not None and event.contains(guarded, "before_flush", self._refuse_flush):
                event.remove(guarded, "before_flush", self._refuse_flush)

    def commit(self) -> None:
        """
        Refuse to commit.

        :raises RuntimeError: always.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    @staticmethod
    def _refuse_flush(session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError(
                "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
            )
