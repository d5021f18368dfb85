"""
Error taxonomy for stache.

Lookup misses are NOT errors: the resolver returns None and callers treat
that as empty/falsy. Exceptions are reserved for structural failures that
must abort a render.
"""


class StacheError(Exception):
    """Base class for all stache errors."""
    pass


class StructuralError(StacheError):
    """
    Raised when the scope stack or a section contradicts itself.

    Examples:
        - entering a section whose name no longer resolves
        - entering an array section at an index past its end
        - popping the root frame
    """
    pass


class DocumentError(StacheError):
    """Raised when JSON/YAML text cannot be loaded as a document."""
    pass


class RenderError(StacheError):
    """
    Raised when a render aborts.

    The text emitted before the failure is kept in `partial`; it is never
    rolled back. The underlying StructuralError is chained as __cause__.
    """

    def __init__(self, message: str, partial: str = ""):
        super().__init__(message)
        self.partial = partial
