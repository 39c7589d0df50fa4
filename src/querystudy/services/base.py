"""BaseService: foundation for querystudy services.

Every service receives a :class:`Database` at construction time and owns
its session scope: ``self._db.session()`` for reads,
``self._db.transaction()`` for writes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from querystudy.infrastructure.database.engine import Database


class BaseService:
    """Base for service-layer classes.

    Usage::

        class MemberService(BaseService):
            def search(self, ...) -> ServiceResult:
                with self._db.session() as session:
                    ...
    """

    def __init__(self, db: Database) -> None:
        self._db = db
