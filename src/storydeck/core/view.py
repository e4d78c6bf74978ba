"""Pure projection from workflow state to what the widget should display."""

from typing import List, Literal

from pydantic import BaseModel, Field

from storydeck.models.card import Card
from storydeck.models.conversation import ConversationEntry
from storydeck.models.stage import Stage
from storydeck.models.workflow_state import WorkflowState


Panel = Literal["launcher", "command-entry", "conversation", "review"]
Layout = Literal["button", "compact", "panel"]

_PANELS = {
    Stage.IDLE: "launcher",
    Stage.COMMAND_ENTRY: "command-entry",
    Stage.CONVERSATION: "conversation",
    Stage.REVIEW: "review",
}

_LAYOUTS = {
    Stage.IDLE: "button",
    Stage.COMMAND_ENTRY: "compact",
    Stage.CONVERSATION: "panel",
    Stage.REVIEW: "panel",
}


class ViewDescriptor(BaseModel):
    """Everything the rendering layer needs to draw one stage."""

    stage: Stage = Field(..., description="Stage being displayed")

    panel: Panel = Field(..., description="ID of the panel to show")

    layout: Layout = Field(
        ...,
        description="Size variant: a bare button, a one-line input, or the full panel"
    )

    dismissible: bool = Field(
        ...,
        description="Whether Escape and outside clicks collapse the widget"
    )

    can_go_back: bool = Field(..., description="Whether a Back control is shown")

    can_submit_review: bool = Field(..., description="Whether the Submit control is shown")

    command: str = Field(default="", description="Pending command input value")

    messages: List[ConversationEntry] = Field(
        default_factory=list,
        description="Conversation entries for the message list"
    )

    document: str = Field(default="", description="Editor buffer")

    cards: List[Card] = Field(default_factory=list, description="Cards for the review list")

    model_config = {"frozen": True}


def render(state: WorkflowState) -> ViewDescriptor:
    """
    Project workflow state onto a view descriptor.

    Recomputed from scratch on every state change; same state in, same
    descriptor out.

    Args:
        state: Current workflow state

    Returns:
        Frozen ViewDescriptor for the rendering layer
    """
    stage = state.stage
    return ViewDescriptor(
        stage=stage,
        panel=_PANELS[stage],
        layout=_LAYOUTS[stage],
        dismissible=stage != Stage.IDLE,
        can_go_back=stage in (Stage.CONVERSATION, Stage.REVIEW),
        can_submit_review=stage == Stage.CONVERSATION,
        command=state.command,
        messages=list(state.conversation),
        document=state.document,
        cards=list(state.cards),
    )
