#!/usr/bin/env python3
"""
Unit tests for the container's debug logging.
"""

import logging
import unittest

from curia.container import Container

LOGGER_NAME = "curia.container.container"


class TestContainerLogging(unittest.TestCase):
    """Test that registrations and builds are reported at DEBUG level."""

    def test_bind_is_logged(self):
        """Test that a registration is reported with its sharing mode."""
        container = Container()

        with self.assertLogs(LOGGER_NAME, level=logging.DEBUG) as logs:
            container.singleton("cache", lambda c: {})

        self.assertIn("Bound cache (shared)", logs.output[0])

    def test_alias_is_logged(self):
        """Test that an alias is reported with its target."""
        container = Container()

        with self.assertLogs(LOGGER_NAME, level=logging.DEBUG) as logs:
            container.alias("store", "cache")

        self.assertIn("Aliased store -> cache", logs.output[0])

    def test_cache_hit_is_logged(self):
        """Test that returning a cached instance is reported."""
        container = Container()
        container.instance("config", {})

        with self.assertLogs(LOGGER_NAME, level=logging.DEBUG) as logs:
            container.get("config")

        self.assertTrue(any("from cache" in line for line in logs.output))

    def test_nothing_above_debug(self):
        """Test that failures are raised, not logged as errors."""
        container = Container()
        logger = logging.getLogger(LOGGER_NAME)

        with self.assertLogs(LOGGER_NAME, level=logging.DEBUG) as logs:
            logger.debug("marker")
            with self.assertRaises(Exception):
                container.get("Missing")

        self.assertTrue(all(record.levelno == logging.DEBUG for record in logs.records))


if __name__ == "__main__":
    unittest.main()
