"""Reflection Helper - read, write and invoke object members by name."""

__version__ = "0.1.0"

from reflection_helper.accessor import (
    AccessResult,
    ReflectionHelper,
    Scope,
    set_private_instance_field,
    set_public_instance_field,
    set_public_static_readonly_field,
    get_private_instance_field,
    get_public_instance_field,
    get_public_static_field,
    invoke_private_instance_method,
    invoke_public_instance_method,
)
from reflection_helper.diagnostics import DiagnosticsConfig, DiagnosticsSink, setup_logging
from reflection_helper.utils.errors import ErrorKind

__all__ = [
    "__version__",
    "AccessResult",
    "ReflectionHelper",
    "Scope",
    "ErrorKind",
    "DiagnosticsConfig",
    "DiagnosticsSink",
    "setup_logging",
    "set_private_instance_field",
    "set_public_instance_field",
    "set_public_static_readonly_field",
    "get_private_instance_field",
    "get_public_instance_field",
    "get_public_static_field",
    "invoke_private_instance_method",
    "invoke_public_instance_method",
]
