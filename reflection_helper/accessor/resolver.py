"""Member resolution by name and scope.

Python has no access modifiers, so visibility follows naming convention:
a name with a leading underscore (other than a dunder) is non-public.
Private names written as ``self.__name`` inside a class body are stored
under their mangled form and are found by their source name.

Read-only markers differ by side. Class attributes are read-only when
annotated ``Final`` or when the metaclass overrides ``__setattr__``. Instance
fields are read-only only when annotated ``Final`` or when the class is a
frozen dataclass or frozen pydantic model; an instance-level ``__setattr__``
override is not a marker, since validating classes (pydantic models among
them) override it without being immutable. Writes to such classes go through
their own ``__setattr__``. Frozen ``attrs`` classes are not detected.
"""

import inspect
import logging
import re
import types
from functools import singledispatchmethod
from typing import Any, Dict, Final, Iterator, List, Optional, Tuple, Union, get_args, get_origin

from reflection_helper.utils.errors import (
    MemberNotFoundError,
    NullTargetError,
    OverloadNotFoundError,
)

from .models import (
    FieldStorage,
    MemberLookupKey,
    ReflectedField,
    ReflectedMethod,
    Scope,
)

logger = logging.getLogger(__name__)


def is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def is_non_public(name: str) -> bool:
    """Check if a member name is non-public by convention."""
    return name.startswith("_") and not is_dunder(name)


def is_visible(name: str, scope: Scope) -> bool:
    if scope.is_public:
        return not is_non_public(name)
    return is_non_public(name)


def _storage_names(owner: type, name: str, scope: Scope) -> Iterator[Tuple[type, str]]:
    """Yield (class, attribute name) pairs to try, in MRO order."""
    mangle = not scope.is_public and name.startswith("__") and not is_dunder(name)
    for klass in owner.__mro__:
        if mangle:
            stripped = klass.__name__.lstrip("_")
            if stripped:
                yield klass, f"_{stripped}{name}"
        yield klass, name


def class_annotations(klass: type) -> Dict[str, Any]:
    """Annotations declared directly in a class body."""
    try:
        return inspect.get_annotations(klass)
    except NameError:
        # Unresolvable forward references
        return {}


def _mentions_final(annotation: Any) -> bool:
    if annotation is Final:
        return True
    if isinstance(annotation, str):
        return re.search(r"\bFinal\b", annotation) is not None
    if get_origin(annotation) is Final:
        return True
    return any(_mentions_final(arg) for arg in get_args(annotation))


def _declaring_type(owner: type, storage_name: str) -> type:
    for klass in owner.__mro__:
        if storage_name in class_annotations(klass):
            return klass
    return owner


def _is_frozen_type(owner: type) -> bool:
    params = getattr(owner, "__dataclass_params__", None)
    if params is not None and params.frozen:
        return True
    # Frozen pydantic models
    config = getattr(owner, "model_config", None)
    return isinstance(config, dict) and bool(config.get("frozen"))


def _instance_field_readonly(owner: type, declaring: type, storage_name: str) -> bool:
    if _is_frozen_type(owner):
        return True
    return _mentions_final(class_annotations(declaring).get(storage_name))


def _static_field_readonly(declaring: type, name: str) -> bool:
    if _mentions_final(class_annotations(declaring).get(name)):
        return True
    # A metaclass guarding attribute assignment
    return type(declaring).__setattr__ is not type.__setattr__


def _is_plain_class_attribute(attr: Any) -> bool:
    """Class attribute that is data rather than a method or descriptor."""
    return not hasattr(type(attr), "__get__")


def resolve_instance_field(target: Any, name: str, scope: Scope) -> ReflectedField:
    """Find an instance field held in ``__dict__`` or a ``__slots__`` slot.

    Raises:
        NullTargetError: If target is None
        MemberNotFoundError: If no field matches name and scope
    """
    if target is None:
        raise NullTargetError(member=name)

    owner = type(target)
    key = MemberLookupKey(owner=owner, name=name, scope=scope)
    if scope.is_static or is_dunder(name) or not is_visible(name, scope):
        raise MemberNotFoundError(f"Field not found: {name}", member=name, owner=owner)

    instance_dict = getattr(target, "__dict__", None)
    for klass, storage_name in _storage_names(owner, name, scope):
        if isinstance(instance_dict, dict) and storage_name in instance_dict:
            declaring = klass if storage_name != name else _declaring_type(owner, storage_name)
            return ReflectedField(
                key=key,
                declaring_type=declaring,
                storage_name=storage_name,
                storage=FieldStorage.INSTANCE_DICT,
                readonly=_instance_field_readonly(owner, declaring, storage_name),
            )
        if isinstance(klass.__dict__.get(storage_name), types.MemberDescriptorType):
            return ReflectedField(
                key=key,
                declaring_type=klass,
                storage_name=storage_name,
                storage=FieldStorage.SLOT,
                readonly=_instance_field_readonly(owner, klass, storage_name),
            )

    raise MemberNotFoundError(f"Field not found: {name}", member=name, owner=owner)


def resolve_static_field(owner: Any, name: str) -> ReflectedField:
    """Find a public class attribute on owner or one of its bases.

    ``owner`` may be a class or an instance of it.
    """
    if owner is None:
        raise NullTargetError(member=name)
    if not isinstance(owner, type):
        owner = type(owner)

    key = MemberLookupKey(owner=owner, name=name, scope=Scope.PUBLIC_STATIC)
    if is_dunder(name) or not is_visible(name, Scope.PUBLIC_STATIC):
        raise MemberNotFoundError(f"Static field not found: {name}", member=name, owner=owner)

    for klass in owner.__mro__:
        if name not in klass.__dict__:
            continue
        if not _is_plain_class_attribute(klass.__dict__[name]):
            # Shadowed by a method or descriptor
            break
        return ReflectedField(
            key=key,
            declaring_type=klass,
            storage_name=name,
            storage=FieldStorage.CLASS_ATTRIBUTE,
            readonly=_static_field_readonly(klass, name),
        )

    raise MemberNotFoundError(f"Static field not found: {name}", member=name, owner=owner)


def read_field(target: Any, field: ReflectedField) -> Any:
    if field.storage is FieldStorage.INSTANCE_DICT:
        return vars(target)[field.storage_name]
    if field.storage is FieldStorage.SLOT:
        descriptor = field.declaring_type.__dict__[field.storage_name]
        return descriptor.__get__(target, type(target))
    return field.declaring_type.__dict__[field.storage_name]


# --- Methods -----------------------------------------------------------------


def _is_instance_method(attr: Any) -> bool:
    if isinstance(attr, (staticmethod, classmethod)):
        return False
    if isinstance(attr, singledispatchmethod):
        return True
    return callable(attr) and hasattr(type(attr), "__get__")


def _overloads(attr: Any, target: Any) -> List[Tuple[Any, Any]]:
    """Bound callables for every overload of a method, with dispatch types."""
    owner = type(target)
    if isinstance(attr, singledispatchmethod):
        return [
            (func.__get__(target, owner), dispatch_type)
            for dispatch_type, func in attr.dispatcher.registry.items()
        ]
    return [(attr.__get__(target, owner), None)]


def _annotation_matches(annotation: Any, value: Any) -> bool:
    """Exact runtime type match against a parameter annotation."""
    if annotation is inspect.Parameter.empty or annotation is Any:
        return True
    value_type = type(value)
    if isinstance(annotation, str):
        return annotation in (value_type.__name__, value_type.__qualname__)
    if isinstance(annotation, type):
        return value_type is annotation
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return any(_annotation_matches(arg, value) for arg in get_args(annotation))
    if isinstance(origin, type):
        return value_type is origin
    # TypeVars and other special forms are not checked
    return True


def _signature_accepts(func: Any, args: tuple, kwargs: dict) -> bool:
    try:
        try:
            # String annotations (from __future__ import annotations) are evaluated
            signature = inspect.signature(func, eval_str=True)
        except NameError:
            # Unresolvable forward references stay strings and match by type name
            signature = inspect.signature(func)
    except (TypeError, ValueError):
        # No introspectable signature (some builtins); let the call decide
        return True

    try:
        bound = signature.bind(*args, **kwargs)
    except TypeError:
        return False

    for param_name, value in bound.arguments.items():
        param = signature.parameters[param_name]
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        if not _annotation_matches(param.annotation, value):
            return False
    return True


def _describe_arg_types(args: tuple, kwargs: dict) -> str:
    names = [type(a).__name__ for a in args]
    names += [f"{k}={type(v).__name__}" for k, v in kwargs.items()]
    return ", ".join(names)


def resolve_method(
    target: Any,
    name: str,
    scope: Scope,
    args: tuple = (),
    kwargs: Optional[dict] = None,
) -> ReflectedMethod:
    """Find the instance method overload matching the arguments exactly.

    Without arguments only the name and scope are used, and the method must
    be callable with no arguments. More than one matching overload is
    rejected as ambiguous.

    Raises:
        NullTargetError: If target is None
        MemberNotFoundError: If no method has this name in scope
        OverloadNotFoundError: If no single overload accepts the arguments
    """
    kwargs = kwargs or {}
    if target is None:
        raise NullTargetError(member=name)

    owner = type(target)
    key = MemberLookupKey(owner=owner, name=name, scope=scope)
    if scope.is_static or not is_visible(name, scope):
        raise MemberNotFoundError(f"Method not found: {name}", member=name, owner=owner)

    attr = None
    declaring = owner
    for klass, storage_name in _storage_names(owner, name, scope):
        if storage_name in klass.__dict__:
            candidate = klass.__dict__[storage_name]
            if _is_instance_method(candidate):
                attr = candidate
                declaring = klass
            break

    if attr is None:
        raise MemberNotFoundError(f"Method not found: {name}", member=name, owner=owner)

    arg_types = tuple(type(a) for a in args)
    matches = []
    for func, dispatch_type in _overloads(attr, target):
        if dispatch_type is not None and (not args or type(args[0]) is not dispatch_type):
            continue
        if _signature_accepts(func, args, kwargs):
            matches.append((func, dispatch_type))

    if not matches:
        raise OverloadNotFoundError(
            f"Method not found: {name}({_describe_arg_types(args, kwargs)})",
            member=name,
            arg_types=arg_types,
        )
    if len(matches) > 1:
        raise OverloadNotFoundError(
            f"Ambiguous method: {name}({_describe_arg_types(args, kwargs)}) "
            f"matches {len(matches)} overloads",
            member=name,
            arg_types=arg_types,
        )

    func, dispatch_type = matches[0]
    logger.debug(f"Resolved {owner.__name__}.{name} on {declaring.__name__}")
    return ReflectedMethod(
        key=key,
        declaring_type=declaring,
        function=func,
        dispatch_type=dispatch_type,
    )
