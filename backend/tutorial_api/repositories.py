"""Repository classes encapsulating database operations.

`TutorialRepository` is the store for `Tutorial` records. Every query
the API needs is an explicit predicate here; repositories return
SQLModel objects and perform commits/refreshes where appropriate.
"""

import logging
from typing import List, Optional
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select
from . import models
from .config import settings
from .exceptions import PersistenceError

logger = logging.getLogger("app.db")

# MySQL and MariaDB compare under case-insensitive collations by default
BINARY_COLLATIONS = {"mysql": "utf8mb4_bin", "mariadb": "utf8mb4_bin"}


def title_contains(fragment: str, case_sensitive: bool, dialect_name: str = "sqlite"):
    """Build the `title` substring predicate for `dialect_name`.

    `%` and `_` in the fragment are escaped so they match literally.
    SQLite gets its case-sensitive `LIKE` from a connection pragma (see
    `database.make_engine`) and PostgreSQL `LIKE` is case-sensitive already.
    """
    column = models.Tutorial.title
    if not case_sensitive:
        return column.icontains(fragment, autoescape=True)
    collation = BINARY_COLLATIONS.get(dialect_name)
    if collation:
        column = column.collate(collation)
    return column.contains(fragment, autoescape=True)


class TutorialRepository:
    """CRUD operations and filtered lookups for `Tutorial` objects.

    `case_sensitive` controls title substring matching. It defaults to
    `settings.TITLE_SEARCH_CASE_SENSITIVE`.
    """
    def __init__(self, session: Session, case_sensitive: Optional[bool] = None):
        self.session = session
        self.case_sensitive = settings.TITLE_SEARCH_CASE_SENSITIVE if case_sensitive is None else case_sensitive

    def create(self, title: str, description: str, published: bool = False) -> models.Tutorial:
        """Persist a new tutorial and return the managed instance with its id."""
        tutorial = models.Tutorial(title=title, description=description, published=published)
        self.session.add(tutorial)
        self._commit("create", tutorial)
        return tutorial

    def find_by_id(self, tutorial_id: int) -> Optional[models.Tutorial]:
        """Return a `Tutorial` by primary key or `None` if not found."""
        return self._run("find_by_id", lambda: self.session.get(models.Tutorial, tutorial_id))

    def find_all(self) -> List[models.Tutorial]:
        """Return every tutorial in insertion order."""
        return self._list("find_all", select(models.Tutorial))

    def find_by_published(self, published: bool) -> List[models.Tutorial]:
        """Return tutorials whose `published` flag equals `published`."""
        stmt = select(models.Tutorial).where(models.Tutorial.published == published)
        return self._list("find_by_published", stmt)

    def find_by_title_containing(self, fragment: str) -> List[models.Tutorial]:
        """Return tutorials whose title contains `fragment`.

        An empty fragment matches every row.
        """
        stmt = select(models.Tutorial).where(self._title_contains(fragment))
        return self._list("find_by_title_containing", stmt)

    def find_by_title_and_published(self, fragment: str, published: bool) -> List[models.Tutorial]:
        """Return tutorials whose title contains `fragment` AND whose flag equals `published`."""
        stmt = select(models.Tutorial).where(
            self._title_contains(fragment),
            models.Tutorial.published == published
        )
        return self._list("find_by_title_and_published", stmt)

    def update(self, tutorial_id: int, title: str, description: str, published: bool) -> Optional[models.Tutorial]:
        """Replace title, description and published of an existing tutorial.

        Returns `None` and changes nothing when `tutorial_id` is unknown.
        All three fields are always assigned, so `published=False`
        unpublishes. The id is never touched.
        """
        tutorial = self.find_by_id(tutorial_id)
        if tutorial is None:
            return None
        tutorial.title = title
        tutorial.description = description
        tutorial.published = published
        self.session.add(tutorial)
        self._commit("update", tutorial)
        return tutorial

    def delete_by_id(self, tutorial_id: int) -> None:
        """Delete a tutorial if present; unknown ids are ignored."""
        stmt = delete(models.Tutorial).where(models.Tutorial.id == tutorial_id)
        self._run("delete_by_id", lambda: self.session.exec(stmt))
        self._commit("delete_by_id")

    def delete_all(self) -> None:
        """Remove every tutorial."""
        self._run("delete_all", lambda: self.session.exec(delete(models.Tutorial)))
        self._commit("delete_all")

    def _title_contains(self, fragment: str):
        dialect_name = self.session.get_bind().dialect.name
        return title_contains(fragment, self.case_sensitive, dialect_name)

    def _list(self, operation: str, stmt) -> List[models.Tutorial]:
        stmt = stmt.order_by(models.Tutorial.id)
        return self._run(operation, lambda: list(self.session.exec(stmt).all()))

    def _run(self, operation: str, fn):
        try:
            return fn()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("tutorial %s failed", operation)
            raise PersistenceError(f"tutorial {operation} failed", operation=operation) from e

    def _commit(self, operation: str, instance=None) -> None:
        def work():
            self.session.commit()
            if instance is not None:
                self.session.refresh(instance)
        self._run(operation, work)
