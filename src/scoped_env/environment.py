#!/usr/bin/env python3
"""
--------------------------------------
Access to environment variable storage
--------------------------------------

Guards in :mod:`scoped_env.guard` only ever read, write and remove
single variables.
This module names that capability as :class:`Environment`
so that the process environment can be swapped out
for an in-memory :class:`MappingEnvironment` in tests.
"""

# Standard libraries.
import os
import typing


class Error(Exception):
    """Base of errors raised by :mod:`scoped_env`."""


class PlatformError(Error):
    """The environment storage rejected a write or a removal."""


class Environment(typing.Protocol):
    """Minimal capability of environment variable storage."""

    def get(self, name: str) -> typing.Optional[str]:
        """Returns the value of ``name``, or :data:`None` if absent."""

    def set(self, name: str, value: str) -> None:
        """Assigns ``value`` to ``name``."""

    def unset(self, name: str) -> None:
        """Removes ``name``. Does nothing if already absent."""


class ProcessEnvironment:
    """
    Environment variables of the running process.

    Writes go through :data:`os.environ`,
    so they are visible to :func:`os.getenv`
    and inherited by child processes.
    There is no synchronisation.
    Concurrent use of the same name from multiple threads is a race.
    """

    def __init__(
        self,
        source_dict: typing.Optional[
            typing.MutableMapping[str, str]
        ] = None,
    ) -> None:
        self._source_dict = (
            os.environ if source_dict is None else source_dict
        )

    def get(self, name: str) -> typing.Optional[str]:
        return self._source_dict.get(name)

    def set(self, name: str, value: str) -> None:
        try:
            self._source_dict[name] = value
        except (OSError, ValueError) as error:
            raise PlatformError(
                "Unable to set environment variable {!r}.".format(name)
            ) from error

    def unset(self, name: str) -> None:
        try:
            # Popping an absent name never reaches `os.unsetenv`.
            check_name(name)
            self._source_dict.pop(name, None)
        except (OSError, ValueError) as error:
            raise PlatformError(
                "Unable to unset environment variable {!r}.".format(name)
            ) from error


def check_name(name: str) -> None:
    # Mirrors the checks done by `os.putenv`.
    if not name or "=" in name or "\0" in name:
        raise ValueError(
            "Illegal environment variable name: {!r}".format(name)
        )


def check_value(value: str) -> None:
    if "\0" in value:
        raise ValueError("Embedded null character in value.")


class MappingEnvironment:
    """
    Environment variables kept in a plain :class:`dict`.

    Rejects the same names and values that :func:`os.putenv` rejects,
    raising :exc:`PlatformError`,
    so that guard behaviour on failure can be tested
    without touching the process environment.
    """

    def __init__(
        self,
        initial: typing.Optional[typing.Mapping[str, str]] = None,
    ) -> None:
        self.variables: dict[str, str] = dict(initial or {})

    def get(self, name: str) -> typing.Optional[str]:
        return self.variables.get(name)

    def set(self, name: str, value: str) -> None:
        try:
            check_name(name)
            check_value(value)
        except ValueError as error:
            raise PlatformError(
                "Unable to set environment variable {!r}.".format(name)
            ) from error
        self.variables[name] = value

    def unset(self, name: str) -> None:
        try:
            check_name(name)
        except ValueError as error:
            raise PlatformError(
                "Unable to unset environment variable {!r}.".format(name)
            ) from error
        self.variables.pop(name, None)


default_environment = ProcessEnvironment()
"""Used by guards when no environment is given."""
