"""Unit tests for domain exceptions."""

import pytest

from modular_di.domain.exceptions import (
    CircularDependencyError,
    DIException,
    InvalidBindingError,
    InvalidKeyError,
    MissingDependencyError,
    MissingFieldError,
    ProductionError,
    UsageError,
)
from modular_di.domain.keys import Token


class TestDIException:
    """Test cases for the base DIException class."""

    def test_di_exception_is_exception(self):
        """Test that DIException inherits from Exception."""
        assert issubclass(DIException, Exception)

    def test_di_exception_can_be_raised(self):
        """Test that DIException can be raised with a message."""
        with pytest.raises(DIException, match="Test error"):
            raise DIException("Test error")

    @pytest.mark.parametrize(
        "exception_class",
        [
            MissingDependencyError,
            ProductionError,
            UsageError,
            CircularDependencyError,
            InvalidKeyError,
            InvalidBindingError,
            MissingFieldError,
        ],
    )
    def test_all_errors_inherit_from_di_exception(self, exception_class):
        """Test the exception hierarchy."""
        assert issubclass(exception_class, DIException)


class TestMissingDependencyError:
    """Test cases for the MissingDependencyError class."""

    def test_lists_every_missing_key(self):
        """Test that all missing keys are kept and reported."""

        class Bar:
            pass

        class Database:
            pass

        token = Token("secret")
        error = MissingDependencyError(Bar, ["foo", Database, token])

        assert error.target is Bar
        assert error.missing_keys == ["foo", Database, token]
        assert "Bar" in str(error)
        assert "'foo', Database, Token(secret)" in str(error)

    def test_target_can_be_a_key(self):
        """Test the message when the target is a name key."""
        error = MissingDependencyError("foo", ["foo"])

        assert str(error) == "Cannot create 'foo': missing dependencies ['foo']"


class TestProductionError:
    """Test cases for the ProductionError class."""

    def test_keeps_key_and_cause(self):
        """Test that the failing key and cause are available."""
        cause = ValueError("boom")
        error = ProductionError("foo", cause)

        assert error.key == "foo"
        assert error.cause is cause
        assert str(error) == "Failed to produce 'foo': ValueError: boom"


class TestCircularDependencyError:
    """Test cases for the CircularDependencyError class."""

    def test_circular_dependency_error_with_simple_chain(self):
        """Test CircularDependencyError with a simple dependency chain."""

        class ServiceA:
            pass

        class ServiceB:
            pass

        chain = [ServiceA, ServiceB, ServiceA]
        error = CircularDependencyError(chain)

        assert error.dependency_chain == chain
        assert "ServiceA -> ServiceB -> ServiceA" in str(error)


class TestMissingFieldError:
    """Test cases for the MissingFieldError class."""

    def test_message_names_owner_and_attribute(self):
        class Scheduler:
            pass

        owner = Scheduler()
        error = MissingFieldError(owner, "clock")

        assert error.owner is owner
        assert error.attribute == "clock"
        assert "'clock' of Scheduler" in str(error)
