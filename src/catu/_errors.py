"""The single error kind raised by the claim layer."""

from __future__ import annotations


class InvalidCatuError(Exception):
    """A URI claim is malformed or could not be evaluated.

    Raised for unknown component or match-type identifiers, match values
    of the wrong shape, and comparator failures. When the error wraps a
    foreign failure, ``context`` holds that failure's message.
    """

    def __init__(self, message: str, context: str | None = None) -> None:
        self.message = message
        self.context = context
        if context is not None:
            super().__init__(f"{message}: {context}")
        else:
            super().__init__(message)
