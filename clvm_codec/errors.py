from __future__ import annotations


class ClvmError(Exception):
    """ Base class for all clvm_codec errors"""
    pass


class FromClvmError(ClvmError):
    """ Raised when a node cannot be decoded into the requested type.

    `path` records where in the value the failure happened, outermost first,
    e.g. ``["LineageProof", "amount"]`` or ``["coins", 3]``.
    """

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message
        self.path: list[str | int] = []

    def with_context(self, segment: str | int) -> FromClvmError:
        self.path.insert(0, segment)
        return self

    def __str__(self) -> str:
        if not self.path:
            return self.message
        where = ".".join(f"[{p}]" if isinstance(p, int) else p for p in self.path)
        return f"{where}: {self.message}"


class ExpectedAtom(FromClvmError):
    """ Raised when a pair was found where an atom was required"""

    def __init__(self):
        super().__init__("expected atom")


class ExpectedPair(FromClvmError):
    """ Raised when an atom was found where a pair was required"""

    def __init__(self):
        super().__init__("expected pair")


class ExpectedNil(FromClvmError):
    """ Raised when a list terminator is missing or is not nil"""

    def __init__(self):
        super().__init__("expected nil")


class WrongAtomLength(FromClvmError):
    """ Raised when an atom does not fit a fixed-width type"""

    def __init__(self, expected: int, found: int):
        super().__init__(f"expected atom of length {expected}, but found length {found}")
        self.expected = expected
        self.found = found


class WrongDiscriminant(FromClvmError):
    """ Raised when a tagged enum discriminant matches no variant"""

    def __init__(self, discriminant: int):
        super().__init__(f"unknown enum variant discriminant {discriminant}")
        self.discriminant = discriminant


class InvalidCurryForm(FromClvmError):
    """ Raised when a node deviates from the curried argument shape"""

    def __init__(self, detail: str = ""):
        super().__init__(f"invalid curry form{': ' + detail if detail else ''}")


class NoMatchingVariant(FromClvmError):
    """ Raised when no variant of an untagged enum decodes the node"""

    def __init__(self, enum_name: str):
        super().__init__(f"no variant of {enum_name} matched")
        self.enum_name = enum_name


class Custom(FromClvmError):
    """ Raised for primitive-specific validation failures"""


class DepthLimitExceeded(FromClvmError):
    """ Raised when decoding nests deeper than the configured limit"""

    def __init__(self, limit: int):
        super().__init__(f"decode depth limit of {limit} exceeded")
        self.limit = limit


class ToClvmError(ClvmError):
    """ Raised when a value is not well-formed for its declared type"""


class SerdeError(ClvmError):
    """ Raised when serialized bytes are not a valid node"""


class ValidationError(ClvmError):
    """ Raised when a spend's conditions are rejected"""

    def __init__(self, message: str, cause: ClvmError | None = None):
        super().__init__(message)
        self.cause = cause
