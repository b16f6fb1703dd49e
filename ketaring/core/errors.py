class KetaringError(Exception):
    """Base class for every error raised by the ring and cluster model."""


class InvariantViolation(KetaringError):
    """
    Raised when a freshly built ring does not satisfy its structural
    invariants (e.g. its size does not match the expected vnode count).

    This always signals a hashing or construction defect, never bad input,
    and is not recoverable.
    """


class UnsupportedOperation(KetaringError):
    """
    Raised when a caller asks a cluster model for something it cannot do:
    reconfiguring a static ring, serving an unsupported cluster type, or
    running with a hash function that lacks the chunked Ketama interface.
    """


class EmptyRingError(KetaringError, LookupError):
    """Raised when a lookup is attempted on a ring with no vnodes."""
