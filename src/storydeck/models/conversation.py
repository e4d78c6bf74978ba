"""ConversationEntry model for the refinement chat."""

from pydantic import BaseModel, Field
from typing import Literal


class ConversationEntry(BaseModel):
    """A single message in the conversation log."""

    role: Literal["user", "assistant"] = Field(
        ...,
        description="Who authored the message"
    )

    content: str = Field(
        ...,
        description="Message text as typed or generated"
    )

    model_config = {"frozen": True}
