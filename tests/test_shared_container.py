#!/usr/bin/env python3
"""
Unit tests for the process-wide container accessor.
"""

import unittest

from curia.container import Container, get_instance, has_instance, set_instance


class TestSharedContainer(unittest.TestCase):
    """Test get_instance/set_instance."""

    def setUp(self):
        set_instance(None)

    def tearDown(self):
        set_instance(None)

    def test_lazily_created(self):
        """Test that a container is created on first access."""
        self.assertFalse(has_instance())

        container = get_instance()

        self.assertIsInstance(container, Container)
        self.assertTrue(has_instance())
        self.assertIs(get_instance(), container)

    def test_set_instance(self):
        """Test installing an explicit container."""
        container = Container()

        self.assertIs(set_instance(container), container)
        self.assertIs(get_instance(), container)

    def test_clearing_creates_fresh_container(self):
        """Test that clearing the shared container replaces it on next access."""
        first = get_instance()
        set_instance(None)

        self.assertFalse(has_instance())
        self.assertIsNot(get_instance(), first)

    def test_classmethods_delegate(self):
        """Test Container.get_instance and Container.set_instance."""
        container = Container()
        Container.set_instance(container)

        self.assertIs(Container.get_instance(), container)
        self.assertIs(get_instance(), container)

    def test_registrations_are_shared(self):
        """Test that registrations on the shared container are visible everywhere."""
        get_instance().instance("app.name", "curia")

        self.assertEqual(Container.get_instance().get("app.name"), "curia")


if __name__ == "__main__":
    unittest.main()
