"""SQLModel data models.

This module defines the application's database tables using SQLModel.
The service manages a single entity, `Tutorial`.
"""

from typing import Optional
from sqlmodel import SQLModel, Field


class Tutorial(SQLModel, table=True):
    """A titled, described, publishable unit of content.

    Fields:
    - `id`: assigned by the database on insert and never reused
    - `published`: always True or False, False unless set at creation
    """
    __tablename__ = "tutorials"
    # AUTOINCREMENT keeps SQLite from handing out ids of deleted rows again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(nullable=False)
    description: str = Field(default="", nullable=False)
    published: bool = Field(default=False, nullable=False)
