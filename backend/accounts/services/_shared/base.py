from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from accounts.core import errors as api_errors
from accounts.services._shared.errors import (
    ConflictError,
    InvalidFieldError,
    InvalidProfileError,
    NotFoundError,
    PersistenceError,
    ServiceError,
)
from accounts.uow.base import UnitOfWork
from accounts.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

UowFactory = Callable[[], UnitOfWork]


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data.

    :param request_id: Correlation id for logging/tracing.
    """

    request_id: str | None = None


class BaseService:
    """
    Shared plumbing for account services.

    Subclasses open units of work through :meth:`rw_uow` and :meth:`ro_uow`
    rather than touching ``db.session``. Both factories can be swapped at
    construction, which is how tests run services against in-memory fakes.
    :meth:`translate_exceptions` maps :class:`ServiceError` to the HTTP
    error types in :mod:`accounts.core.errors`.
    """

    def __init__(
        self,
        *,
        ctx: ServiceContext | None = None,
        uow_factory: UowFactory | None = None,
        ro_uow_factory: UowFactory | None = None,
    ) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context.
        :param uow_factory: Builds read-write units of work. Defaults to
            :class:`SQLAlchemyUnitOfWork`.
        :param ro_uow_factory: Builds read-only units of work. Defaults to
            :class:`SQLAlchemyReadOnlyUnitOfWork`, or to ``uow_factory`` when
            only that one is given.
        """
        self.ctx = ctx or ServiceContext()
        self._uow_factory: UowFactory = uow_factory or SQLAlchemyUnitOfWork
        self._ro_uow_factory: UowFactory = (
            ro_uow_factory or uow_factory or SQLAlchemyReadOnlyUnitOfWork
        )

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> UnitOfWork:
        """Create a read-write Unit of Work."""
        return self._uow_factory()

    def ro_uow(self) -> UnitOfWork:
        """Create a read-only Unit of Work."""
        return self._ro_uow_factory()

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        if isinstance(exc, NotFoundError):
            return api_errors.NotFound(exc.message)

        if isinstance(exc, ConflictError):
            return api_errors.Conflict(exc.message, field=exc.field)

        if isinstance(exc, InvalidFieldError):
            return api_errors.UnprocessableEntity(exc.message, field=exc.field)

        if isinstance(exc, InvalidProfileError):
            return api_errors.UnprocessableEntity(exc.message, field="profile")

        if isinstance(exc, PersistenceError):
            return api_errors.PersistenceFailure(exc.message)

        # Any other ServiceError subclass → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.APIError(message=exc.message, status_code=400, code="bad_request")

        return exc
