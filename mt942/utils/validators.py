"""Checks for MT942 message files and report directories."""

import os

from mt942.config.settings import MAX_FILE_SIZE_MB
from mt942.utils.exceptions import ValidationError


def validate_file_path(file_path: str) -> None:
    """Make sure a message file can be opened for reading.

    Raises:
        ValidationError: If the path is empty, missing, not a regular file
            or not readable.
    """
    if not file_path:
        raise ValidationError("No message file given")

    if not os.path.exists(file_path):
        raise ValidationError(f"Message file not found: {file_path}")

    if not os.path.isfile(file_path):
        raise ValidationError(f"Expected a message file, got: {file_path}")

    if not os.access(file_path, os.R_OK):
        raise ValidationError(f"No read permission on message file: {file_path}")


def validate_file_size(file_path: str, max_size_mb: int = MAX_FILE_SIZE_MB) -> None:
    """Reject files above `max_size_mb` megabytes."""
    size_mb = os.path.getsize(file_path) / (1024 * 1024)

    if size_mb > max_size_mb:
        raise ValidationError(
            f"Message file is {size_mb:.2f}MB, the limit is {max_size_mb}MB"
        )


def validate_input_file(file_path: str, max_size_mb: int = MAX_FILE_SIZE_MB) -> None:
    """Validate an MT942 message file before it is read.

    Args:
        file_path: Path to the message file.
        max_size_mb: Maximum allowed file size in MB.

    Raises:
        ValidationError: If any validation fails.
    """
    validate_file_path(file_path)
    validate_file_size(file_path, max_size_mb)

    if os.path.getsize(file_path) == 0:
        raise ValidationError(f"Message file is empty: {file_path}")


def validate_directory_path(dir_path: str) -> None:
    """Ensure the report directory exists, creating it when missing.

    Raises:
        ValidationError: If the directory cannot be created or written to.
    """
    if not dir_path:
        raise ValidationError("No report directory given")

    if not os.path.exists(dir_path):
        try:
            os.makedirs(dir_path, exist_ok=True)
        except OSError as e:
            raise ValidationError(f"Could not create report directory {dir_path}: {e}")

    if not os.path.isdir(dir_path):
        raise ValidationError(f"Report path exists but is not a directory: {dir_path}")

    if not os.access(dir_path, os.W_OK):
        raise ValidationError(f"No write permission on report directory: {dir_path}")
