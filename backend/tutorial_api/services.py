"""Business logic services used by HTTP controllers.

`TutorialService` is a thin, request-shaped facade over
`TutorialRepository`. Every call returns one of three outcomes:

- `Ok(payload)`: the operation succeeded
- `NotFound()`: the requested id does not exist
- `NoContent()`: a listing produced no rows (not an error)

Each call is stateless and makes a single repository round trip.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Union
from sqlmodel import Session
from . import models, repositories

logger = logging.getLogger("app.tutorials")


@dataclass(frozen=True)
class Ok:
    payload: Any = None


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class NoContent:
    pass


ListOutcome = Union[Ok, NoContent]
ItemOutcome = Union[Ok, NotFound]


def _listing(tutorials: List[models.Tutorial]) -> ListOutcome:
    if not tutorials:
        return NoContent()
    return Ok(tutorials)


class TutorialService:
    """Tutorial operations exposed to the HTTP layer."""
    def __init__(self, session: Session, repo: Optional[repositories.TutorialRepository] = None):
        self.session = session
        self.repo = repo or repositories.TutorialRepository(session)

    def list_all(self, title: Optional[str] = None) -> ListOutcome:
        """List every tutorial, or only those whose title contains `title`."""
        if title is None:
            return _listing(self.repo.find_all())
        return _listing(self.repo.find_by_title_containing(title))

    def list_published(self) -> ListOutcome:
        """List tutorials with `published=True`."""
        return _listing(self.repo.find_by_published(True))

    def search(self, title: str, published: bool) -> ListOutcome:
        """List tutorials whose title contains `title` and whose flag equals `published`."""
        return _listing(self.repo.find_by_title_and_published(title, published))

    def get_by_id(self, tutorial_id: int) -> ItemOutcome:
        tutorial = self.repo.find_by_id(tutorial_id)
        if tutorial is None:
            return NotFound()
        return Ok(tutorial)

    def create(self, title: str, description: str, published: bool = False) -> Ok:
        """Create a tutorial; the payload carries the id assigned by the store."""
        tutorial = self.repo.create(title, description, published)
        logger.info("created tutorial %s (published=%s)", tutorial.id, tutorial.published)
        return Ok(tutorial)

    def update(self, tutorial_id: int, title: str, description: str, published: bool) -> ItemOutcome:
        """Replace title, description and published of an existing tutorial.

        `published` is carried through as given, so `False` unpublishes.
        """
        if self.repo.find_by_id(tutorial_id) is None:
            return NotFound()
        updated = self.repo.update(tutorial_id, title, description, published)
        # row deleted between the lookup and the write
        if updated is None:
            return NotFound()
        logger.info("updated tutorial %s (published=%s)", updated.id, updated.published)
        return Ok(updated)

    def delete_by_id(self, tutorial_id: int) -> Ok:
        self.repo.delete_by_id(tutorial_id)
        logger.info("deleted tutorial %s", tutorial_id)
        return Ok()

    def delete_all(self) -> Ok:
        self.repo.delete_all()
        logger.info("deleted all tutorials")
        return Ok()
