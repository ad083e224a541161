"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable and provide validation for
controller handlers and tests.
"""

from pydantic import BaseModel, ConfigDict


class TutorialIn(BaseModel):
    """Payload for create/update. A client supplied `id` is ignored."""
    title: str
    description: str = ""
    published: bool = False


class TutorialOut(BaseModel):
    """Tutorial representation returned to clients."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    published: bool
