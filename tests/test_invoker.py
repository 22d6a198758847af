#!/usr/bin/env python3
"""
Unit tests for calling functions and methods with injected parameters.
"""

import unittest

from curia.container import Container, UnresolvableParameterError


class Formatter:
    def format(self, name: str) -> str:
        return f"Hello, {name}!"


class Greeter:
    def __init__(self, formatter: Formatter):
        self.formatter = formatter

    def greet(self, name: str, formatter: Formatter) -> str:
        return formatter.format(name)

    def handle(self) -> str:
        return "handled"


class TestCallCallable(unittest.TestCase):
    """Test calling plain callables."""

    def test_function_dependencies_are_injected(self):
        """Test that typed parameters are resolved from the container."""
        container = Container()

        def render(formatter: Formatter) -> str:
            return formatter.format("world")

        self.assertEqual(container.call(render), "Hello, world!")

    def test_explicit_parameters_win(self):
        """Test that supplied parameters take precedence over resolution."""
        container = Container()
        container.instance(str, "from-container")

        class LoudFormatter(Formatter):
            def format(self, name: str) -> str:
                return name.upper()

        def render(name: str, formatter: Formatter) -> str:
            return formatter.format(name)

        result = container.call(render, {"name": "bob", "formatter": LoudFormatter()})

        self.assertEqual(result, "BOB")

    def test_bound_method(self):
        """Test calling a bound method."""
        container = Container()
        greeter = container.get(Greeter)

        self.assertEqual(container.call(greeter.greet, {"name": "Ada"}), "Hello, Ada!")

    def test_defaults_are_used(self):
        """Test that unresolvable parameters with defaults use them."""
        container = Container()

        def paginate(page: int = 1, per_page: int = 20) -> tuple[int, int]:
            return page, per_page

        self.assertEqual(container.call(paginate, {"page": 3}), (3, 20))

    def test_extra_parameters_pass_through_kwargs(self):
        """Test that undeclared parameters reach **kwargs."""
        container = Container()

        def collect(formatter: Formatter, **options: str) -> dict[str, str]:
            return options

        self.assertEqual(container.call(collect, {"mode": "fast"}), {"mode": "fast"})

    def test_unresolvable_parameter(self):
        """Test that untyped parameters without defaults fail."""
        container = Container()

        def broken(value):
            return value

        with self.assertRaises(UnresolvableParameterError):
            container.call(broken)


class TestCallMethodReference(unittest.TestCase):
    """Test Type@method references and method bindings."""

    def test_string_method_reference(self):
        """Test calling ``identifier@method``."""
        container = Container()
        container.bind("greeter", Greeter)

        self.assertEqual(container.call("greeter@greet", {"name": "Bob"}), "Hello, Bob!")

    def test_tuple_with_class(self):
        """Test calling ``(Type, method)`` resolves the target."""
        container = Container()

        self.assertEqual(container.call((Greeter, "handle")), "handled")

    def test_tuple_with_instance(self):
        """Test calling ``(instance, method)`` uses the instance directly."""
        container = Container()
        greeter = Greeter(Formatter())

        self.assertEqual(container.call((greeter, "greet"), {"name": "Eve"}), "Hello, Eve!")

    def test_default_method(self):
        """Test calling a target with a default method."""
        container = Container()
        container.bind("greeter", Greeter)

        self.assertEqual(container.call("greeter", default_method="handle"), "handled")
        self.assertEqual(container.call(Greeter, default_method="handle"), "handled")

    def test_missing_method(self):
        """Test that a string reference without a method fails."""
        container = Container()

        with self.assertRaises(ValueError):
            container.call("greeter")

    def test_method_binding_overrides_dispatch(self):
        """Test that bind_method replaces the method call."""
        container = Container()
        container.singleton("greeter", Greeter)
        received = []

        def override(instance: Greeter, c: Container) -> str:
            received.append((instance, c))
            return "overridden"

        container.bind_method("greeter@greet", override)

        self.assertTrue(container.has_method_binding("greeter@greet"))
        self.assertEqual(container.call("greeter@greet", {"name": "Bob"}), "overridden")
        self.assertEqual(received, [(container.get("greeter"), container)])

    def test_method_binding_for_type(self):
        """Test method bindings keyed by a type."""
        container = Container()
        container.bind_method((Greeter, "handle"), lambda instance, c: "intercepted")

        self.assertEqual(container.call((Greeter, "handle")), "intercepted")
        self.assertEqual(container.call((Greeter(Formatter()), "handle")), "intercepted")
        self.assertEqual(container.call_method_binding((Greeter, "handle"), None), "intercepted")


if __name__ == "__main__":
    unittest.main()
