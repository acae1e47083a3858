"""Custom exceptions for the authoring context with source file references."""

from pathlib import Path
from typing import Optional

from folio.utils.text_processing import truncate


class FrontMatterError(ValueError):
    """
    Exception raised when a document's front-matter cannot be split, parsed or coerced.

    Attributes:
        message: Error description
        source_path: Content file the error was found in
        field: Front-matter key at fault (e.g., 'date'), if any
        line: 1-based line number in the source file, if known
        original_error: The underlying YAML/OmegaConf error, if any
    """

    def __init__(
        self,
        message: str,
        source_path: Optional[Path] = None,
        field: Optional[str] = None,
        line: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.source_path = source_path
        self.field = field
        self.line = line
        self.original_error = original_error

        parts = [message]

        if field:
            parts.append(f"Field: {field}")

        if source_path:
            location = f"{source_path}:{line}" if line else str(source_path)
            parts.append(f"Source: {location}")

        if original_error:
            parts.append(f"Original error: {truncate(str(original_error))}")

        super().__init__("\n".join(parts))
