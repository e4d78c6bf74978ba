"""Configuration models for Storydeck."""

from pydantic import BaseModel, Field, field_validator
from typing import Optional


DEFAULT_DOCUMENT_TEMPLATE = (
    "# User Story: {command}\n"
    "\n"
    "## Description\n"
    "\n"
    "This is a placeholder for the AI-generated user story."
)


class WidgetConfig(BaseModel):
    """Configuration for the story widget's inputs and launcher."""

    launcher_label: str = Field(
        default="feedback",
        min_length=1,
        description="Label of the button shown while the widget is idle"
    )

    command_placeholder: str = Field(
        default="Type your command...",
        description="Placeholder text for the command and chat inputs"
    )

    clear_command_on_submit: bool = Field(
        default=False,
        description="Clear the pending command after it is submitted"
    )

    model_config = {"frozen": True}


class PlaceholderConfig(BaseModel):
    """Configuration for the stand-in document generator."""

    document_template: str = Field(
        default=DEFAULT_DOCUMENT_TEMPLATE,
        description="Markdown template formatted with {command}"
    )

    @field_validator('document_template')
    @classmethod
    def validate_document_template(cls, v: str) -> str:
        """Validate template formats with only the {command} field."""
        try:
            v.format(command="")
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(
                f"Document template must only reference {{command}}: {e}\n"
                f"Escape literal braces as {{{{ and }}}}"
            ) from e
        return v

    model_config = {"frozen": True}


class RetentionConfig(BaseModel):
    """Configuration for how much conversation history is kept."""

    max_conversation_entries: Optional[int] = Field(
        default=None,
        ge=1,
        description="Keep only the newest N conversation entries (None keeps everything)"
    )

    model_config = {"frozen": True}


class Config(BaseModel):
    """Root configuration for Storydeck application."""

    widget: WidgetConfig = Field(default_factory=WidgetConfig, description="Widget settings")
    placeholder: PlaceholderConfig = Field(
        default_factory=PlaceholderConfig,
        description="Placeholder document settings"
    )
    retention: RetentionConfig = Field(
        default_factory=RetentionConfig,
        description="Conversation retention settings"
    )

    model_config = {"frozen": True}
