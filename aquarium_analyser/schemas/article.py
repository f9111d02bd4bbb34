"""Article endpoint schemas."""

from typing import Literal

from pydantic import BaseModel


class ArticleResponse(BaseModel):
    """Successful article payload."""

    success: Literal[True] = True
    content: str


class ArticleErrorResponse(BaseModel):
    """Failed article payload; ``content`` carries the in-page error fragment."""

    success: Literal[False] = False
    error: str
    content: str
