"""Card model for the review stage."""

from pydantic import BaseModel, Field


class Card(BaseModel):
    """A titled story fragment derived from one section of the document."""

    id: str = Field(
        ...,
        description="Identifier unique within one parse pass (generation order)"
    )

    title: str = Field(
        ...,
        description="Card title (first-level heading, section heading or 'Story N')"
    )

    content: str = Field(
        ...,
        description="Markdown body with the title heading removed, trimmed"
    )

    model_config = {"frozen": True}
