"""Tests for error hierarchy."""

import pytest
from reflection_helper.utils.errors import (
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


class TestErrorHierarchy:
    """Tests for error class hierarchy."""

    def test_all_errors_inherit_from_base(self):
        """All errors should inherit from ReflectionHelperError."""
        errors = [
            NullTargetError(),
            MemberNotFoundError("test"),
            OverloadNotFoundError("test"),
            ReadonlyOverrideFailed("test"),
            InvocationFailedError("test"),
            TypeCastError("test"),
            InvalidScopeError("test"),
        ]
        for error in errors:
            assert isinstance(error, ReflectionHelperError)

    def test_each_error_has_distinct_kind(self):
        """Every error class should map to its own ErrorKind."""
        kinds = {
            NullTargetError.kind,
            MemberNotFoundError.kind,
            OverloadNotFoundError.kind,
            ReadonlyOverrideFailed.kind,
            InvocationFailedError.kind,
            TypeCastError.kind,
            InvalidScopeError.kind,
        }
        assert kinds == set(ErrorKind)


class TestNullTargetError:
    """Tests for NullTargetError."""

    def test_default_message(self):
        """Should have a default message."""
        error = NullTargetError(member="_count")
        assert "None" in str(error)
        assert error.member == "_count"


class TestMemberNotFoundError:
    """Tests for MemberNotFoundError."""

    def test_captures_owner(self):
        """Should capture member name and owner type."""
        error = MemberNotFoundError("Field not found: x", member="x", owner=dict)
        assert error.member == "x"
        assert error.owner is dict
        assert error.kind == ErrorKind.MEMBER_NOT_FOUND


class TestOverloadNotFoundError:
    """Tests for OverloadNotFoundError."""

    def test_captures_arg_types(self):
        """Should capture the argument types that failed to match."""
        error = OverloadNotFoundError("Method not found: add(str)", member="add", arg_types=(str,))
        assert error.arg_types == (str,)
        assert "add(str)" in str(error)


class TestInvocationFailedError:
    """Tests for InvocationFailedError."""

    def test_captures_cause(self):
        """Should keep the original exception."""
        cause = RuntimeError("boom")
        error = InvocationFailedError("Method invocation raised RuntimeError: boom", cause=cause)
        assert error.cause is cause


class TestTypeCastError:
    """Tests for TypeCastError."""

    def test_captures_types(self):
        """Should capture expected and actual types."""
        error = TypeCastError("Cannot cast str to int", expected_type=int, actual_type=str)
        assert error.expected_type is int
        assert error.actual_type is str
        assert error.kind == ErrorKind.TYPE_CAST_FAILED

    def test_raisable(self):
        """Should be raisable and catchable via the base class."""
        with pytest.raises(ReflectionHelperError):
            raise TypeCastError("bad cast")


class TestInvalidScopeError:
    """Tests for InvalidScopeError."""

    def test_captures_scope(self):
        """Should keep the rejected scope value."""
        error = InvalidScopeError("Invalid scope: 'nope'", member="label", scope="nope")
        assert error.scope == "nope"
        assert error.kind == ErrorKind.INVALID_SCOPE
