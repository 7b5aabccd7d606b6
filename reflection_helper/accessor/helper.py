"""Field and method access by name, with errors converted to results.

Every operation resolves one member, performs one get/set/invoke, writes one
line to the diagnostics sink and returns. Nothing is raised to the caller:
result-returning operations report the failure cause in an AccessResult, and
the bool/value wrappers return False or the default for the requested type.

Usage:
    helper = ReflectionHelper()
    helper.set_private_instance_field(counter, "_count", 5)   # True
    helper.get_private_instance_field(counter, "_count", int)  # 5

    result = helper.get_field(counter, "missing", Scope.PUBLIC_INSTANCE, int)
    result.ok, result.error, result.value   # False, member_not_found, 0
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from reflection_helper.diagnostics.sink import DiagnosticsSink
from reflection_helper.utils.errors import (
    InvalidScopeError,
    InvocationFailedError,
    ReadonlyOverrideFailed,
    ReflectionHelperError,
    TypeCastError,
)

from .models import AccessResult, Scope
from .readonly import lift_readonly, write_field
from .resolver import read_field, resolve_instance_field, resolve_method, resolve_static_field

LOG_PREFIX = "[ReflectionHelper]"
ERROR_PREFIX = "Error:"

_MISSING = object()

# Types whose default is their zero value rather than None
_ZERO_VALUE_TYPES = (int, float, complex, bool)


def default_for(expected_type: Optional[type]) -> Any:
    """Default value of a requested type: zero for numbers, else None."""
    if expected_type in _ZERO_VALUE_TYPES:
        return expected_type()
    return None


def _describe(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return object.__repr__(value)


def _cast(value: Any, expected_type: Optional[type], member: str) -> Any:
    if expected_type is None:
        return value
    try:
        matches = isinstance(value, expected_type)
    except TypeError:
        # Subscripted generics such as list[int]
        matches = isinstance(value, getattr(expected_type, "__origin__", object))
    if not matches:
        raise TypeCastError(
            f"Cannot cast {type(value).__name__} to {getattr(expected_type, '__name__', expected_type)}",
            member=member,
            expected_type=expected_type,
            actual_type=type(value),
        )
    return value


def _coerce_scope(scope: Any, member: str) -> Scope:
    """Accept a Scope or its string value."""
    try:
        return Scope(scope)
    except (ValueError, TypeError) as e:
        raise InvalidScopeError(
            f"Invalid scope: {scope!r}", member=member, scope=scope
        ) from e


class ReflectionHelper:
    """Reads, writes and invokes members by name.

    Args:
        sink: Where outcome lines go; defaults to the process-wide sink,
            looked up on first log call
    """

    def __init__(self, sink: Optional[DiagnosticsSink] = None):
        self._sink = sink

    @property
    def sink(self) -> DiagnosticsSink:
        return self._sink if self._sink is not None else DiagnosticsSink.instance()

    def _log_success(self, message: str) -> None:
        self.sink.write(f"{LOG_PREFIX} {message}", logging.DEBUG)

    def _log_error(self, message: str) -> None:
        self.sink.write(f"{LOG_PREFIX} {ERROR_PREFIX} {message}", logging.WARNING)

    # --- Generic operations -------------------------------------------------

    def set_field(
        self,
        target: Any,
        field_name: str,
        value: Any,
        scope: Scope = Scope.NON_PUBLIC_INSTANCE,
    ) -> AccessResult:
        """Write a field, lifting a read-only marker first if present.

        For Scope.PUBLIC_STATIC, target is the class declaring the field.
        """
        try:
            scope = _coerce_scope(scope, field_name)
            if scope.is_static:
                field = resolve_static_field(target, field_name)
            else:
                field = resolve_instance_field(target, field_name, scope)

            try:
                lift_readonly(field)
            except ReadonlyOverrideFailed as e:
                # Logged only; the write below decides the outcome
                self._log_error(str(e))

            write_field(target, field, value)
        except ReflectionHelperError as e:
            self._log_error(str(e))
            return AccessResult.failure(e, default=False)

        kind = "static field" if scope.is_static else "field"
        self._log_success(f"Set {kind} [{field_name}] succeeded, new value: {_describe(value)}")
        return AccessResult.success(value, member=field_name)

    def get_field(
        self,
        target: Any,
        field_name: str,
        scope: Scope = Scope.NON_PUBLIC_INSTANCE,
        expected_type: Optional[type] = None,
        default: Any = _MISSING,
    ) -> AccessResult:
        """Read a field, checking it against expected_type when given."""
        if default is _MISSING:
            default = default_for(expected_type)

        try:
            scope = _coerce_scope(scope, field_name)
            if scope.is_static:
                field = resolve_static_field(target, field_name)
            else:
                field = resolve_instance_field(target, field_name, scope)

            try:
                raw = read_field(target, field)
            except Exception as e:
                raise InvocationFailedError(
                    f"Exception while reading field: {e}", member=field_name, cause=e
                ) from e

            value = _cast(raw, expected_type, field_name)
        except ReflectionHelperError as e:
            self._log_error(str(e))
            return AccessResult.failure(e, default=default)

        self._log_success(f"Get field [{field_name}] succeeded, value: {_describe(value)}")
        return AccessResult.success(value, member=field_name)

    def invoke_method(
        self,
        target: Any,
        method_name: str,
        *args: Any,
        scope: Scope = Scope.NON_PUBLIC_INSTANCE,
        expected_type: Optional[type] = None,
        default: Any = _MISSING,
        **kwargs: Any,
    ) -> AccessResult:
        """Call an instance method whose parameters match the arguments' types.

        Positional arguments after method_name are passed to the method, so
        scope is keyword-only.
        """
        if default is _MISSING:
            default = default_for(expected_type)

        try:
            scope = _coerce_scope(scope, method_name)
            method = resolve_method(target, method_name, scope, args, kwargs)
            try:
                raw = method.function(*args, **kwargs)
            except Exception as e:
                raise InvocationFailedError(
                    f"Method invocation raised {type(e).__name__}: {e}",
                    member=method_name,
                    cause=e,
                ) from e

            value = _cast(raw, expected_type, method_name)
        except ReflectionHelperError as e:
            self._log_error(str(e))
            return AccessResult.failure(e, default=default)

        self._log_success(f"Invoke method [{method_name}] succeeded, returned: {_describe(value)}")
        return AccessResult.success(value, member=method_name)

    @contextmanager
    def patched_field(
        self,
        target: Any,
        field_name: str,
        value: Any,
        scope: Scope = Scope.NON_PUBLIC_INSTANCE,
    ) -> Iterator[AccessResult]:
        """Set a field for the duration of a with block, then restore it.

        Yields the result of the write. If the field cannot be read, nothing
        is written and the read failure is yielded instead.
        """
        original = self.get_field(target, field_name, scope)
        if not original.ok:
            yield original
            return

        result = self.set_field(target, field_name, value, scope)
        try:
            yield result
        finally:
            if result.ok:
                self.set_field(target, field_name, original.value, scope)

    # --- Public API ---------------------------------------------------------

    def set_private_instance_field(self, target: Any, name: str, value: Any) -> bool:
        return self.set_field(target, name, value, Scope.NON_PUBLIC_INSTANCE).ok

    def set_public_instance_field(self, target: Any, name: str, value: Any) -> bool:
        return self.set_field(target, name, value, Scope.PUBLIC_INSTANCE).ok

    def set_public_static_readonly_field(self, owner: type, name: str, value: Any) -> bool:
        """Write a public class attribute, lifting Final or metaclass guards."""
        return self.set_field(owner, name, value, Scope.PUBLIC_STATIC).ok

    def get_private_instance_field(
        self,
        target: Any,
        name: str,
        expected_type: Optional[type] = None,
        default: Any = _MISSING,
    ) -> Any:
        return self.get_field(target, name, Scope.NON_PUBLIC_INSTANCE, expected_type, default).value

    def get_public_instance_field(
        self,
        target: Any,
        name: str,
        expected_type: Optional[type] = None,
        default: Any = _MISSING,
    ) -> Any:
        return self.get_field(target, name, Scope.PUBLIC_INSTANCE, expected_type, default).value

    def get_public_static_field(
        self,
        owner: type,
        name: str,
        expected_type: Optional[type] = None,
        default: Any = _MISSING,
    ) -> Any:
        return self.get_field(owner, name, Scope.PUBLIC_STATIC, expected_type, default).value

    def invoke_private_instance_method(
        self,
        target: Any,
        name: str,
        *args: Any,
        expected_type: Optional[type] = None,
        default: Any = _MISSING,
        **kwargs: Any,
    ) -> Any:
        return self.invoke_method(
            target,
            name,
            *args,
            scope=Scope.NON_PUBLIC_INSTANCE,
            expected_type=expected_type,
            default=default,
            **kwargs,
        ).value

    def invoke_public_instance_method(
        self,
        target: Any,
        name: str,
        *args: Any,
        expected_type: Optional[type] = None,
        default: Any = _MISSING,
        **kwargs: Any,
    ) -> Any:
        return self.invoke_method(
            target,
            name,
            *args,
            scope=Scope.PUBLIC_INSTANCE,
            expected_type=expected_type,
            default=default,
            **kwargs,
        ).value


# Module-level API backed by the process-wide diagnostics sink
_default_helper = ReflectionHelper()

set_field = _default_helper.set_field
get_field = _default_helper.get_field
invoke_method = _default_helper.invoke_method
patched_field = _default_helper.patched_field
set_private_instance_field = _default_helper.set_private_instance_field
set_public_instance_field = _default_helper.set_public_instance_field
set_public_static_readonly_field = _default_helper.set_public_static_readonly_field
get_private_instance_field = _default_helper.get_private_instance_field
get_public_instance_field = _default_helper.get_public_instance_field
get_public_static_field = _default_helper.get_public_static_field
invoke_private_instance_method = _default_helper.invoke_private_instance_method
invoke_public_instance_method = _default_helper.invoke_public_instance_method
