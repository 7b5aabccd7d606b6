"""Read-only override for fields marked immutable.

Python has no per-field init-only flag to clear. A field counts as read-only
when its class is frozen (dataclass or pydantic), when it is annotated
``typing.Final``, or, for class attributes, when the metaclass guards
assignment. Lifting the marker records the field in a process-wide registry;
writes to lifted fields go through the base setter (``object.__setattr__`` or
``type.__setattr__``) and skip the guard.

Once lifted, a field stays lifted for the rest of the process. Lifting is
idempotent and needs no lock.

Lifting only fails for owners that are not heap types (builtin and extension
types). Every class created by a class statement is a heap type, so for
ordinary classes ReadonlyOverrideFailed is never raised.
"""

import logging
from typing import Any, Set, Tuple

from reflection_helper.utils.errors import InvocationFailedError, ReadonlyOverrideFailed

from .models import FieldStorage, ReflectedField

logger = logging.getLogger(__name__)

# CPython type flag set on classes created by class statements
Py_TPFLAGS_HEAPTYPE = 1 << 9

_lifted: Set[Tuple[type, str]] = set()


def supports_override(owner: type) -> bool:
    """Check if attributes of owner can be rewritten through the base setter.

    Builtin and extension types are static types whose attributes are fixed.
    """
    return bool(owner.__flags__ & Py_TPFLAGS_HEAPTYPE)


def lift_readonly(field: ReflectedField) -> None:
    """Clear the read-only marker of a field.

    Raises:
        ReadonlyOverrideFailed: If the declaring type cannot be overridden
    """
    if not field.readonly:
        return

    owner = field.declaring_type
    if not supports_override(owner):
        raise ReadonlyOverrideFailed(
            f"Failed to lift read-only constraint on {owner.__name__}.{field.storage_name}: "
            f"{owner.__name__} is an immutable type",
            member=field.key.name,
        )

    _lifted.add((owner, field.storage_name))
    logger.debug(f"Lifted read-only marker on {owner.__name__}.{field.storage_name}")


def is_lifted(field: ReflectedField) -> bool:
    return (field.declaring_type, field.storage_name) in _lifted


def write_field(target: Any, field: ReflectedField, value: Any) -> None:
    """Write a resolved field.

    Args:
        target: Instance for instance fields; ignored for class attributes
        field: Resolved field handle
        value: New value

    Raises:
        InvocationFailedError: If the assignment itself fails
    """
    bypass = field.readonly and is_lifted(field)
    try:
        if field.storage is FieldStorage.CLASS_ATTRIBUTE:
            if bypass:
                type.__setattr__(field.declaring_type, field.storage_name, value)
            else:
                setattr(field.declaring_type, field.storage_name, value)
        elif bypass:
            object.__setattr__(target, field.storage_name, value)
        else:
            setattr(target, field.storage_name, value)
    except Exception as e:
        raise InvocationFailedError(
            f"Exception while setting field: {e}",
            member=field.key.name,
            cause=e,
        ) from e
