"""Errors raised while driving generators and converting their output."""

from __future__ import annotations

from typing import Any

__all__ = [
    "GenError",
    "TypeMismatchError",
    "DeserializeError",
    "SerializeError",
    "CustomError",
    "custom",
    "type_mismatch",
]


class GenError(Exception):
    """Base class of every error raised by this package.

    Errors compare equal when they are of the same kind and carry the
    same fields, and they can be hashed.
    """

    def _fields(self) -> tuple[Any, ...]:
        return tuple(self.args)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GenError):
            return NotImplemented
        return type(self) is type(other) and self._fields() == other._fields()

    def __hash__(self) -> int:
        return hash((type(self), self._fields()))

    def __repr__(self) -> str:
        fields = ", ".join(repr(field) for field in self._fields())
        return f"{type(self).__name__}({fields})"


class TypeMismatchError(GenError):
    """A value of one type was expected but another was found."""

    def __init__(self, expected: object, got: object) -> None:
        self.expected = str(expected)
        self.got = str(got)
        super().__init__(f"expected {self.expected}, got {self.got}")

    def _fields(self) -> tuple[Any, ...]:
        return (self.expected, self.got)


class _MessageError(GenError):
    """An error that carries a single message."""

    def __init__(self, msg: object) -> None:
        self.msg = str(msg)
        super().__init__(self.msg)

    def _fields(self) -> tuple[Any, ...]:
        return (self.msg,)


class DeserializeError(_MessageError):
    """Turning a stream of tokens into a value failed."""


class SerializeError(_MessageError):
    """Turning a stream of tokens into serialized output failed."""


class CustomError(_MessageError):
    """Any other failure, described by its message."""


def custom(msg: object) -> CustomError:
    """Build a :class:`CustomError` from anything that has a string form."""
    return CustomError(msg)


def type_mismatch(expected: object, got: object) -> TypeMismatchError:
    """Build a :class:`TypeMismatchError`; both sides are turned into strings."""
    return TypeMismatchError(expected, got)