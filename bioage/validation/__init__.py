"""Validation package for pre-submission file checks."""

from .errors import FileValidationError, InvalidExtensionError, NoFileSelectedError, TooManyFilesError
from .file_validator import REQUIRED_FILE_SUFFIX, validation_validate_candidates

__all__ = [
	"FileValidationError",
	"InvalidExtensionError",
	"NoFileSelectedError",
	"REQUIRED_FILE_SUFFIX",
	"TooManyFilesError",
	"validation_validate_candidates",
]
