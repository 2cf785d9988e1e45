"""Pre-submission file selection gate."""

from __future__ import annotations

from typing import Final, Sequence

from bioage.domain import CandidateFile

from .errors import InvalidExtensionError, NoFileSelectedError, TooManyFilesError

REQUIRED_FILE_SUFFIX: Final[str] = ".csv"


def validation_validate_candidates(candidates: Sequence[CandidateFile]) -> CandidateFile:
    """Accept exactly one `.csv`-named file from a drop or picker selection.

    The suffix check is case-sensitive and is the only gate: file content is
    never inspected, so a mislabelled file fails later at the backend.

    Args:
        candidates: Files delivered by the file source for one submission attempt.

    Returns:
        CandidateFile: The single accepted file.

    Raises:
        NoFileSelectedError: Raised when no file was delivered.
        TooManyFilesError: Raised when more than one file was delivered.
        InvalidExtensionError: Raised when the file name does not end in `.csv`.
    """

    if len(candidates) > 1:
        raise TooManyFilesError(file_count=len(candidates))
    if not candidates:
        raise NoFileSelectedError("no file was selected")

    candidate = candidates[0]
    if not candidate.name.endswith(REQUIRED_FILE_SUFFIX):
        raise InvalidExtensionError(file_name=candidate.name)
    return candidate
