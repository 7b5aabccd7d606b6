"""Field get/set and method invocation by name and scope."""

from .models import (
    AccessResult,
    FieldStorage,
    MemberLookupKey,
    ReflectedField,
    ReflectedMethod,
    Scope,
)
from .helper import (
    ReflectionHelper,
    default_for,
    set_field,
    get_field,
    invoke_method,
    patched_field,
    set_private_instance_field,
    set_public_instance_field,
    set_public_static_readonly_field,
    get_private_instance_field,
    get_public_instance_field,
    get_public_static_field,
    invoke_private_instance_method,
    invoke_public_instance_method,
)

__all__ = [
    "AccessResult",
    "FieldStorage",
    "MemberLookupKey",
    "ReflectedField",
    "ReflectedMethod",
    "Scope",
    "ReflectionHelper",
    "default_for",
    "set_field",
    "get_field",
    "invoke_method",
    "patched_field",
    "set_private_instance_field",
    "set_public_instance_field",
    "set_public_static_readonly_field",
    "get_private_instance_field",
    "get_public_instance_field",
    "get_public_static_field",
    "invoke_private_instance_method",
    "invoke_public_instance_method",
]
