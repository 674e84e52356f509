from __future__ import annotations


class PrefsError(Exception):
    """Base class for every recoverable editor error.

    The UI catches this and reports ``str(exc)`` to the user.
    """


class SubstrateUnavailable(PrefsError):
    """The raw storage backing the preference store cannot be read."""


class TypeMismatch(PrefsError):
    def __init__(self, key: str, expected: str, actual: str):
        super().__init__(f"Key '{key}' is stored as {actual}, not {expected}.")
        self.key = key
        self.expected = expected
        self.actual = actual


class ParseFailure(PrefsError):
    def __init__(self, kind: str, text: str):
        super().__init__(f"Value {text!r} does not match type '{kind}'.")
        self.kind = kind
        self.text = text


class EmptyKey(PrefsError):
    def __init__(self) -> None:
        super().__init__("Key cannot be empty.")


class DuplicateKey(PrefsError):
    def __init__(self, key: str):
        super().__init__(f"Key '{key}' already exists.")
        self.key = key
