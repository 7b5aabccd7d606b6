"""Types shared by member resolution and the accessor operations.

Handles (ReflectedField, ReflectedMethod) are produced per call and dropped
with it; nothing here is cached.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field

from reflection_helper.utils.errors import ErrorKind, ReflectionHelperError


class Scope(str, Enum):
    """Which members a lookup may see."""

    PUBLIC_INSTANCE = "public_instance"
    NON_PUBLIC_INSTANCE = "non_public_instance"
    PUBLIC_STATIC = "public_static"

    @property
    def is_static(self) -> bool:
        return self is Scope.PUBLIC_STATIC

    @property
    def is_public(self) -> bool:
        return self is not Scope.NON_PUBLIC_INSTANCE


class FieldStorage(str, Enum):
    """Where a field's value lives."""

    INSTANCE_DICT = "instance_dict"
    SLOT = "slot"
    CLASS_ATTRIBUTE = "class_attribute"


@dataclass(frozen=True)
class MemberLookupKey:
    """Type, member name and scope of one lookup."""

    owner: type
    name: str
    scope: Scope


@dataclass
class ReflectedField:
    """A resolved field.

    storage_name differs from key.name when a private name was mangled
    (``__secret`` -> ``_Owner__secret``).
    """

    key: MemberLookupKey
    declaring_type: type
    storage_name: str
    storage: FieldStorage
    readonly: bool = False


@dataclass
class ReflectedMethod:
    """A resolved method overload, already bound to its target."""

    key: MemberLookupKey
    declaring_type: type
    function: Callable[..., Any]
    dispatch_type: Optional[type] = None


class AccessResult(BaseModel):
    """Outcome of one accessor operation.

    On failure ``value`` holds the default for the requested type and
    ``error`` tells why the operation failed.
    """

    ok: bool = Field(..., description="Whether the operation succeeded")
    value: Any = Field(None, description="Field value, return value or default")
    error: Optional[ErrorKind] = Field(None, description="Failure cause")
    message: Optional[str] = Field(None, description="Failure description")
    member: Optional[str] = Field(None, description="Member name the call targeted")

    @classmethod
    def success(cls, value: Any, member: Optional[str] = None) -> "AccessResult":
        return cls(ok=True, value=value, member=member)

    @classmethod
    def failure(cls, error: ReflectionHelperError, default: Any = None) -> "AccessResult":
        return cls(
            ok=False,
            value=default,
            error=error.kind,
            message=str(error),
            member=error.member,
        )
