"""Typed exceptions for rejected file selections."""

from __future__ import annotations


class FileValidationError(ValueError):
    """Base exception for file selections rejected before any network call.

    Attributes:
        title: Short user-facing notification title.
        detail: User-facing notification detail.
    """

    title = "Invalid selection"
    detail = "Please upload a CSV file."


class NoFileSelectedError(FileValidationError):
    """Raised when the file source delivered no file."""

    title = "No file selected"
    detail = "Please choose a CSV file to upload."


class TooManyFilesError(FileValidationError):
    """Raised when more than one file was offered in one submission."""

    title = "Too many files"
    detail = "Please upload only one CSV file at a time."

    def __init__(self, file_count: int):
        super().__init__(f"expected exactly one file, got {file_count}")
        self.file_count = file_count


class InvalidExtensionError(FileValidationError):
    """Raised when the single offered file is not named `*.csv`."""

    title = "Invalid file type"
    detail = "Please upload a CSV file."

    def __init__(self, file_name: str):
        super().__init__(f"file name must end with .csv: {file_name!r}")
        self.file_name = file_name
