"""Error hierarchy for Reflection Helper.

These are raised by member resolution and caught at the boundary of every
public accessor operation, where they become an AccessResult plus a log line.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure causes reported by accessor operations."""

    NULL_TARGET = "null_target"
    MEMBER_NOT_FOUND = "member_not_found"
    OVERLOAD_NOT_FOUND = "overload_not_found"
    READONLY_OVERRIDE_FAILED = "readonly_override_failed"
    INVOCATION_FAILED = "invocation_failed"
    TYPE_CAST_FAILED = "type_cast_failed"
    INVALID_SCOPE = "invalid_scope"


class ReflectionHelperError(Exception):
    """Base exception for all Reflection Helper errors."""

    kind: ErrorKind = ErrorKind.INVOCATION_FAILED

    def __init__(self, message: str, member: Optional[str] = None):
        super().__init__(message)
        self.member = member


class NullTargetError(ReflectionHelperError):
    """Raised when the target object is None."""

    kind = ErrorKind.NULL_TARGET

    def __init__(self, message: str = "Target object is None", member: Optional[str] = None):
        super().__init__(message, member)


class MemberNotFoundError(ReflectionHelperError):
    """Raised when no field or method matches the name and scope."""

    kind = ErrorKind.MEMBER_NOT_FOUND

    def __init__(
        self,
        message: str,
        member: Optional[str] = None,
        owner: Optional[type] = None,
    ):
        super().__init__(message, member)
        self.owner = owner


class OverloadNotFoundError(ReflectionHelperError):
    """Raised when a method exists but no overload accepts the arguments.

    Also covers ambiguous lookups where more than one overload matches.
    """

    kind = ErrorKind.OVERLOAD_NOT_FOUND

    def __init__(
        self,
        message: str,
        member: Optional[str] = None,
        arg_types: tuple = (),
    ):
        super().__init__(message, member)
        self.arg_types = arg_types


class ReadonlyOverrideFailed(ReflectionHelperError):
    """Raised when a read-only marker cannot be lifted.

    Never fatal: the write is still attempted afterwards.
    """

    kind = ErrorKind.READONLY_OVERRIDE_FAILED


class InvocationFailedError(ReflectionHelperError):
    """Raised when the target's own code fails during get/set/invoke."""

    kind = ErrorKind.INVOCATION_FAILED

    def __init__(
        self,
        message: str,
        member: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, member)
        self.cause = cause


class TypeCastError(ReflectionHelperError):
    """Raised when a value is not an instance of the requested type."""

    kind = ErrorKind.TYPE_CAST_FAILED

    def __init__(
        self,
        message: str,
        member: Optional[str] = None,
        expected_type: Optional[type] = None,
        actual_type: Optional[type] = None,
    ):
        super().__init__(message, member)
        self.expected_type = expected_type
        self.actual_type = actual_type


class InvalidScopeError(ReflectionHelperError):
    """Raised when a scope argument is not a Scope or one of its values."""

    kind = ErrorKind.INVALID_SCOPE

    def __init__(self, message: str, member: Optional[str] = None, scope: object = None):
        super().__init__(message, member)
        self.scope = scope
