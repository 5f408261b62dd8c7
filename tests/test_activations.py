"""
test_activations.py
~~~~~~~~~~~~~~~~~~~

Unit tests for named activation functions.
"""

import math

import pytest

from feedforward import (
    ActivationRegistry,
    UnknownActivationFunctionError,
    default_registry,
    sigmoid,
)
from feedforward.activations import linear, relu, tanh


@pytest.mark.unit
class TestActivationFunctions:
    """Test the built-in functions."""

    def test_sigmoid_formula(self):
        """Test sigmoid against 1 / (1 + e^-x)."""
        for x in (-3.5, -1.0, 0.0, 0.25, 2.0, 10.0):
            assert sigmoid(x) == 1.0 / (1.0 + math.exp(-x))

    def test_sigmoid_midpoint(self):
        assert sigmoid(0.0) == 0.5

    def test_sigmoid_large_negative_input(self):
        """Test that overflow in exp saturates to zero instead of raising."""
        assert sigmoid(-1000.0) == 0.0
        assert sigmoid(1000.0) == 1.0

    def test_other_builtins(self):
        assert tanh(0.5) == math.tanh(0.5)
        assert relu(-2.0) == 0.0
        assert relu(3.0) == 3.0
        assert linear(-4.25) == -4.25


@pytest.mark.unit
class TestActivationRegistry:
    """Test registry lookup and replacement."""

    def test_default_registry_contents(self):
        """Test that the default registry starts with sigmoid."""
        registry = default_registry()
        assert "sigmoid" in registry
        assert registry.get("sigmoid") is sigmoid
        assert registry.names() == ["linear", "relu", "sigmoid", "tanh"]

    def test_default_registry_is_fresh_each_call(self):
        """Test that registering on one registry leaves others untouched."""
        first = default_registry()
        second = default_registry()
        first.register("double", lambda x: 2 * x)
        assert "double" in first
        assert "double" not in second

    def test_unknown_name_raises(self):
        """Test that looking up an unknown name fails cleanly."""
        registry = default_registry()
        with pytest.raises(UnknownActivationFunctionError) as exc_info:
            registry.get("softsign")
        assert exc_info.value.name == "softsign"
        assert "softsign" in str(exc_info.value)

    def test_unknown_name_is_a_key_error(self):
        with pytest.raises(KeyError):
            ActivationRegistry().get("sigmoid")

    def test_register_replaces_by_name(self):
        """Test that a function can be swapped under an existing name."""
        registry = default_registry()
        registry.register("sigmoid", linear)
        assert registry.get("sigmoid") is linear
        assert len(registry) == 4

    def test_register_rejects_non_callable(self):
        with pytest.raises(TypeError):
            ActivationRegistry().register("broken", 42)

    def test_unregister(self):
        registry = default_registry()
        registry.unregister("relu")
        assert "relu" not in registry
        with pytest.raises(UnknownActivationFunctionError):
            registry.unregister("relu")
