"""Custom exceptions for the Storydeck core."""

from typing import Iterable

from storydeck.models.stage import Stage


class StorydeckError(Exception):
    """Base class for Storydeck errors."""


class WrongStageError(StorydeckError):
    """Raised when an operation is invoked from a stage that does not allow it.

    The state machine rejects the call before touching any state, so the
    widget is left exactly as it was.

    Attributes:
        operation: Name of the rejected operation
        stage: Stage the widget was in
        allowed: Stages from which the operation is valid
    """

    def __init__(self, operation: str, stage: Stage, allowed: Iterable[Stage]):
        """Initialize WrongStageError.

        Args:
            operation: Name of the rejected operation
            stage: Stage the widget was in
            allowed: Stages from which the operation is valid
        """
        self.operation = operation
        self.stage = stage
        self.allowed = tuple(allowed)
        allowed_names = ", ".join(s.value for s in self.allowed)
        super().__init__(
            f"Cannot {operation} from stage '{stage.value}' (allowed: {allowed_names})"
        )
