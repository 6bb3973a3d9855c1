"""Keyed CRUD over one mapped model (SQLAlchemy 2.x).

Repositories stage and flush; units of work commit. Driver exceptions never
escape: they are re-raised as :mod:`accounts.repositories.errors` types.
Listings sort only on whitelisted columns and always end with the primary
key, so equal sort keys still come back in a stable order.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import InstrumentedAttribute, Session

from accounts.core.extensions import db
from accounts.repositories.errors import RepositoryError

E = TypeVar("E")  # SQLAlchemy mapped entity type


@dataclass(frozen=True, slots=True)
class DeleteResult:
    """Outcome of a keyed delete.

    :param affected: Number of rows removed.
    :type affected: int
    """

    affected: int


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """Split ``["-created_at", "name"]`` into ``[("created_at", True), ("name", False)]``."""
    tokens = (token.strip() for token in raw)
    return [(token.lstrip("-"), token.startswith("-")) for token in tokens if token.lstrip("-")]


def apply_sorting(
    stmt: Select[Any],
    sortable_fields: Mapping[str, InstrumentedAttribute[Any]],
    tokens: Iterable[str],
    *,
    pk_attr: InstrumentedAttribute[Any] | None,
) -> Select[Any]:
    """Apply whitelisted ``ORDER BY`` clauses plus a primary-key tiebreaker.

    Unknown sort tokens are ignored silently.

    :param stmt: Base selectable.
    :param sortable_fields: Public field -> ORM attribute mapping.
    :param tokens: Public sort tokens.
    :param pk_attr: Primary-key attribute appended last, ascending.
    :returns: Modified select.
    """
    clauses = [
        column.desc() if descending else column.asc()
        for name, descending in parse_sort_tokens(tokens)
        if (column := sortable_fields.get(name)) is not None
    ]
    if pk_attr is not None:
        clauses.append(pk_attr.asc())
    return stmt.order_by(*clauses) if clauses else stmt


class BaseRepository(Generic[E]):
    """Generic, persistence-only repository for a single aggregate.

    Subclasses MUST define ``model``. They MAY override ``_sortable_fields``,
    ``_default_sort`` and ``_translate_integrity_error``.

    This class never opens, commits or rolls back transactions.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """Bind the repository to ``session`` or, when omitted, the Flask-scoped session."""
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Return the injected session, falling back to ``db.session``."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        return getattr(self.model, "id", None)

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        """Whitelist mapping of public sort keys to model attributes."""
        return {}

    def _default_sort(self) -> list[str]:
        """Sort tokens applied when a caller does not pass any."""
        return []

    def _translate_integrity_error(self, exc: IntegrityError) -> RepositoryError:
        """Map an ``IntegrityError`` to a structured repository error.

        Subclasses override this to recognise their own named constraints.
        """
        return RepositoryError(f"{self.model.__name__} violates a database constraint")

    # --------------------------------- CRUD ----------------------------------

    def create(self, **fields: Any) -> E:
        """Build an unsaved entity; nothing touches the session."""
        return self.model(**fields)

    def add(self, instance: E) -> E:
        """Stage a new entity and flush so constraint failures surface here.

        :raises RepositoryError: When the flush fails.
        """
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        """Retrieve a single entity by primary key, or ``None``."""
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get requires a detectable PK attribute.")
        try:
            result = self.session.execute(select(self.model).where(pk_attr == entity_id))
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Failed to load {self.model.__name__}") from exc
        return cast(E | None, result.scalars().first())

    def list_all(self, *, sort: Iterable[str] | None = None) -> list[E]:
        """Return every entity ordered by ``sort`` (or the default sort)."""
        stmt: Select[Any] = select(self.model)
        tokens = list(sort) if sort else self._default_sort()
        stmt = apply_sorting(stmt, self._sortable_fields(), tokens, pk_attr=self._pk_attr())
        try:
            rows = self.session.execute(stmt).scalars().all()
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Failed to list {self.model.__name__}") from exc
        return cast(list[E], list(rows))

    def delete_by_id(self, entity_id: Any) -> DeleteResult | None:
        """Issue a keyed ``DELETE`` and report how many rows it removed.

        :returns: :class:`DeleteResult`, or ``None`` when no primary key is mapped.
        """
        pk_attr = self._pk_attr()
        if pk_attr is None:
            return None
        stmt = delete(self.model).where(pk_attr == entity_id)
        try:
            result = self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Failed to delete {self.model.__name__}") from exc
        rowcount = getattr(result, "rowcount", None)
        if rowcount is None:
            return None
        return DeleteResult(affected=int(rowcount))

    def flush(self) -> None:
        """Flush pending changes, translating driver errors.

        :raises RepositoryError: Subclass chosen by ``_translate_integrity_error``
            for constraint failures; plain ``RepositoryError`` otherwise.
        """
        try:
            self.session.flush()
        except IntegrityError as exc:
            raise self._translate_integrity_error(exc) from exc
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Failed to persist {self.model.__name__}") from exc
