#!/usr/bin/env python3
"""
-----------------------------------------
Overriding environment variables in tests
-----------------------------------------
"""

# Standard libraries.
import typing
import unittest

# Internal modules.
import scoped_env.environment
import scoped_env.guard


class UsesMappingEnvironment(unittest.TestCase):
    """Provides an empty in-memory environment for each test."""

    def __init__(self, *args: typing.Any, **kwargs: typing.Any) -> None:
        super().__init__(*args, **kwargs)
        self.environment: scoped_env.environment.MappingEnvironment

    def setUp(self) -> None:
        super().setUp()
        self.environment = scoped_env.environment.MappingEnvironment()


class UsesScopedEnv(unittest.TestCase):
    """
    Overrides environment variables until the test ends.

    Restoration is registered with :meth:`~unittest.TestCase.addCleanup`
    so it happens even if the test fails.
    Variables live in :attr:`scoped_environment`,
    which is the process environment unless replaced in ``setUp``.
    """

    def __init__(self, *args: typing.Any, **kwargs: typing.Any) -> None:
        super().__init__(*args, **kwargs)
        self.scoped_environment: scoped_env.environment.Environment

    def setUp(self) -> None:
        super().setUp()
        self.scoped_environment = (
            scoped_env.environment.default_environment
        )

    def set_env(self, name: str, value: str) -> scoped_env.guard.ScopedEnv:
        guard = scoped_env.guard.ScopedEnv.set(
            name, value, environment=self.scoped_environment
        )
        self.addCleanup(guard.release)
        return guard

    def unset_env(self, name: str) -> scoped_env.guard.ScopedEnv:
        guard = scoped_env.guard.ScopedEnv.unset(
            name, environment=self.scoped_environment
        )
        self.addCleanup(guard.release)
        return guard
