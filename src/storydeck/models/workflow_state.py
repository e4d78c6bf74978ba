"""WorkflowState model holding everything the story widget accumulates."""

from pydantic import BaseModel, Field
from typing import List

from storydeck.models.card import Card
from storydeck.models.conversation import ConversationEntry
from storydeck.models.stage import Stage


class WorkflowState(BaseModel):
    """Current stage plus the data accumulated per stage."""

    stage: Stage = Field(
        default=Stage.IDLE,
        description="Currently visible stage"
    )

    command: str = Field(
        default="",
        description="Pending command text shared by the command and chat inputs"
    )

    conversation: List[ConversationEntry] = Field(
        default_factory=list,
        description="Append-only conversation log"
    )

    document: str = Field(
        default="",
        description="Editable markdown buffer shown in the editor pane"
    )

    cards: List[Card] = Field(
        default_factory=list,
        description="Cards parsed from the document at the last review submit"
    )

    model_config = {"frozen": False}  # Mutated in place by ViewStateMachine
