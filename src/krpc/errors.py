"""
Errors raised when a bencode value is not a valid KRPC message.
"""
from bencode.decoder import BencodeDecodeError


class KRPCDecodeError(BencodeDecodeError):
    """Raised when well-formed bencode does not have the shape of a KRPC message."""


class NotADictionary(KRPCDecodeError):
    def __init__(self, found: str):
        super().__init__(f"Top-level value must be a dictionary, got {found}")
        self.found = found


class MissingField(KRPCDecodeError):
    def __init__(self, name: str):
        super().__init__(f"Missing required field {name!r}")
        self.name = name


class UnknownMethod(KRPCDecodeError):
    def __init__(self, name: bytes):
        super().__init__(f"Unknown query method {name!r}")
        self.name = name


class UnknownMessageType(KRPCDecodeError):
    def __init__(self, value: bytes):
        super().__init__(f"Unknown message type {value!r}")
        self.value = value


class MalformedError(KRPCDecodeError):
    """The 'e' value is not a [code, message] list."""


class InvalidField(KRPCDecodeError, ValueError):
    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid field {field!r}: {reason}")
        self.field = field


class InvalidFieldType(InvalidField):
    def __init__(self, field: str, expected: str, found: str):
        super().__init__(field, f"expected {expected}, got {found}")


class InvalidLength(InvalidField):
    def __init__(self, field: str, expected: str, found: int):
        super().__init__(field, f"expected {expected} bytes, got {found}")
        self.length = found
