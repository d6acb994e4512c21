# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Database unit of work used by the ledger repositories."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from types import TracebackType

from sqlalchemy.orm import Session

from fintrack.shared.logging import logger


class SqlAlchemyUnitOfWork:
    """Commit on clean exit, roll back when the block raises.

    ``read_only`` units skip the commit and always roll back, so listing
    queries never write.
    """

    def __init__(self, session_factory: Callable[[], Session], *, read_only: bool = False) -> None:
        self._session_factory = session_factory
        self._read_only = read_only
        self._session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._session_factory()
        logger.debug(f"uow: session opened (read_only={self._read_only})")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        assert self._session is not None
        try:
            if exc is not None:
                logger.debug(f"uow: rollback due to {exc_type.__name__ if exc_type else exc}")
                self._session.rollback()
            elif self._read_only:
                self._session.rollback()
            else:
                self._session.commit()
                logger.debug("uow: committed")
        except Exception:
            logger.exception("uow: exception while finalising")
            self._session.rollback()
            raise
        finally:
            self._session.close()
            self._session = None

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("UnitOfWork session accessed before entering context")
        return self._session

    def flush(self) -> None:
        self.session.flush()


@contextmanager
def unit_of_work_scope(
    factory: Callable[[], Session], *, read_only: bool = False
) -> Iterator[Session]:
    with SqlAlchemyUnitOfWork(factory, read_only=read_only) as uow:
        yield uow.session
