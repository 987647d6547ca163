"""Exception taxonomy for the pagination engine.

WHY: Callers (the chunk-processing service, the CLI) must tell apart
"this chunk has no words" from "this text is too flat to paginate" from
"the word-timestamp file is malformed". Each failure gets its own type
so the caller can react without parsing messages.

HOW: A single base class, PaginationError, subclasses ValueError so that
generic ``except ValueError`` handlers keep working. Specific failures
derive from it.

RULES:
- Every error raised by the engine is a PaginationError
- No error is ever downgraded to a silent single-page result
- Errors carry a human-readable message; no retry policy lives here
"""

from __future__ import annotations


class PaginationError(ValueError):
    """Base class for all pagination failures."""


class EmptyInputError(PaginationError):
    """Raised when the word list is empty or yields no text.

    WHY: An empty chunk is an input-validation failure, unrecoverable for
    that chunk. Returning ``{"pages": []}`` would hide an upstream bug in
    the synthesis/alignment step.

    RULES:
    - Raised before any detector runs
    - No partial result is produced
    """


class NoBreaksFoundError(PaginationError):
    """Raised when no usable break point exists anywhere in the text.

    WHY: A text without punctuation cannot be paginated by these
    heuristics. This is distinct from empty input so callers can tell
    "nothing to paginate" from "text too flat for this heuristic".
    """


class InvalidWordTimestampsError(PaginationError):
    """Raised when word-timestamp JSON fails schema validation.

    HOW: The adapter wraps the jsonschema.ValidationError, keeping its
    message and the JSON path of the offending element.

    RULES:
    - ``path`` is a list of keys/indices into the input document
    """

    def __init__(self, message: str, path: list | None = None) -> None:
        self.path = list(path or [])
        if self.path:
            location = "/".join(str(p) for p in self.path)
            super().__init__("Invalid word timestamps at {}: {}".format(location, message))
        else:
            super().__init__("Invalid word timestamps: {}".format(message))


class InvalidThresholdsError(PaginationError):
    """Raised when the caller's thresholds object is unusable.

    WHY: A negative breathing gap turns every pause into a split point,
    and a non-numeric one only fails once detection has already run.
    Both are caller mistakes and are rejected before any work is done.

    RULES:
    - thresholds must be a mapping (or PaginationThresholds) or None
    - breakPauseSecond must be a non-negative number; 0 means the default
    """
