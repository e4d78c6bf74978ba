"""Stand-in document generator used until a real content backend exists."""

from storydeck.models.config import DEFAULT_DOCUMENT_TEMPLATE


def generate_placeholder_document(command: str, template: str = DEFAULT_DOCUMENT_TEMPLATE) -> str:
    """
    Build the markdown document shown in the editor after a command is submitted.

    The result depends only on the command and template, so submitting the
    same command twice produces the same document.

    Args:
        command: Command text as submitted
        template: Markdown template containing a {command} field

    Returns:
        Markdown document text
    """
    return template.format(command=command)
