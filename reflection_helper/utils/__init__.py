"""Utility modules for Reflection Helper."""

from .errors import (
    ErrorKind,
    ReflectionHelperError,
    NullTargetError,
    MemberNotFoundError,
    OverloadNotFoundError,
    ReadonlyOverrideFailed,
    InvocationFailedError,
    TypeCastError,
    InvalidScopeError,
)

__all__ = [
    "ErrorKind",
    "ReflectionHelperError",
    "NullTargetError",
    "MemberNotFoundError",
    "OverloadNotFoundError",
    "ReadonlyOverrideFailed",
    "InvocationFailedError",
    "TypeCastError",
    "InvalidScopeError",
]
