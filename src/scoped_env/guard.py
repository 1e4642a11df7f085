#!/usr/bin/env python3
"""
-------------------------------------
Environment variable overrides scoped
-------------------------------------

A :class:`ScopedEnv` sets an environment variable when it is created
and puts back whatever was there before when it is released.
Releasing happens when the ``with`` block using the guard is left,
however it is left:

.. code-block:: python

    with scoped_env.guard.ScopedEnv("HELLO", "WORLD") as guard:
        assert guard.get() == "WORLD"
    # Now `HELLO` is back to what it was, possibly unset.

Guards on the same name nest,
as long as they are released in the reverse order of creation.
Each guard only remembers the value
that existed immediately before it was created,
so out of order releases restore stale values.

The process environment is shared by all threads
and is not locked here.
Overriding the same name from multiple threads at once is a race,
and the final value is whichever guard was released last.
"""

# Standard libraries.
import dataclasses
import enum
import logging
import os
import types
import typing

# Internal modules.
import scoped_env.environment

_logger = logging.getLogger(__name__)

Error = scoped_env.environment.Error
PlatformError = scoped_env.environment.PlatformError


class NotSet(Error, LookupError):
    """The environment variable is not set."""


class InvalidEncoding(Error, ValueError):
    """The environment variable does not hold valid text."""


@dataclasses.dataclass(frozen=True)
class Absent:
    """The variable was not set."""


@dataclasses.dataclass(frozen=True)
class Present:
    """The variable was set to :attr:`value`."""

    value: str


Prior = typing.Union[Absent, Present]


class State(enum.Enum):
    ACTIVE = enum.auto()
    RELEASED = enum.auto()


def capture(
    environment: scoped_env.environment.Environment, name: str
) -> Prior:
    value = environment.get(name)
    if value is None:
        return Absent()
    return Present(value)


def apply(
    environment: scoped_env.environment.Environment,
    name: str,
    value: typing.Optional[str],
) -> None:
    if value is None:
        environment.unset(name)
    else:
        environment.set(name, value)


class ScopedEnv:
    """
    Sets an environment variable until released.

    :param name: Name of the variable to override. Must not be empty.
    :param value:
        Value to assign to the variable.
        If :data:`None`, the variable is removed instead.
    :param environment:
        Where the variable lives.
        Defaults to the environment of the running process.
    :raises ValueError: If ``name`` is empty.
    :raises PlatformError:
        If the environment rejects the new value.
        The environment is left untouched in that case.

    The variable is changed immediately,
    not when the ``with`` block is entered.
    """

    __Self = typing.TypeVar("__Self", bound="ScopedEnv")

    def __init__(
        self,
        name: str,
        value: typing.Optional[str],
        *,
        environment: typing.Optional[
            scoped_env.environment.Environment
        ] = None,
    ) -> None:
        if not name:
            raise ValueError("Environment variable name must not be empty.")
        if environment is None:
            environment = scoped_env.environment.default_environment
        prior = capture(environment, name)
        # Only record anything once the new value is in place.
        apply(environment, name, value)
        self._environment = environment
        self._name = name
        self._prior = prior
        self._state = State.ACTIVE
        self._value = value
        # Never log values.
        _logger.debug(
            "Overriding %s, previously %s.", name, type(prior).__name__
        )

    @classmethod
    def set(
        cls: typing.Type[__Self],
        name: str,
        value: str,
        *,
        environment: typing.Optional[
            scoped_env.environment.Environment
        ] = None,
    ) -> __Self:
        return cls(name, value, environment=environment)

    @classmethod
    def unset(
        cls: typing.Type[__Self],
        name: str,
        *,
        environment: typing.Optional[
            scoped_env.environment.Environment
        ] = None,
    ) -> __Self:
        """Removes the variable until released."""
        return cls(name, None, environment=environment)

    @property
    def environment(self) -> scoped_env.environment.Environment:
        return self._environment

    @property
    def name(self) -> str:
        return self._name

    @property
    def prior(self) -> Prior:
        """State of the variable just before the guard was created."""
        return self._prior

    @property
    def state(self) -> State:
        return self._state

    @property
    def value(self) -> typing.Optional[str]:
        """Value installed by the guard. :data:`None` if removed."""
        return self._value

    def get(self) -> str:
        """
        Returns the current value of the variable.

        :raises NotSet: If the variable is not set.
        :raises InvalidEncoding:
            If the value contains bytes that could not be decoded
            and so is not representable as text.
        """
        value = self._environment.get(self._name)
        if value is None:
            raise NotSet(self._name)
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as error:
            raise InvalidEncoding(
                "Environment variable {!r} is not valid text.".format(
                    self._name
                )
            ) from error
        return value

    def get_raw(self) -> typing.Optional[bytes]:
        """
        Returns the current value of the variable as bytes.

        Returns :data:`None` if the variable is not set.
        Bytes that failed to decode are given back as they were.
        """
        value = self._environment.get(self._name)
        if value is None:
            return None
        return os.fsencode(value)

    def release(self) -> None:
        """
        Restores the variable to what it was before the guard.

        Only the first call has any effect.
        The state is marked released before restoring,
        so a :exc:`PlatformError` from restoring is not retried.
        """
        if self._state is State.RELEASED:
            return
        self._state = State.RELEASED
        prior = self._prior
        _logger.debug(
            "Restoring %s to %s.", self._name, type(prior).__name__
        )
        if isinstance(prior, Present):
            apply(self._environment, self._name, prior.value)
        else:
            apply(self._environment, self._name, None)

    def __enter__(self: __Self) -> __Self:
        if self._state is State.RELEASED:
            raise RuntimeError(
                "Guard for {!r} is already released.".format(self._name)
            )
        return self

    def __exit__(
        self,
        exc_type: typing.Optional[typing.Type[BaseException]],
        exc_value: typing.Optional[BaseException],
        traceback: typing.Optional[types.TracebackType],
    ) -> None:
        del traceback
        try:
            self.release()
        except PlatformError:
            if exc_type is None:
                raise
            # Let the exception already unwinding through the block win.
            _logger.warning(
                "Unable to restore %s while handling %r.",
                self._name,
                exc_value,
                exc_info=True,
            )

    def __repr__(self) -> str:
        return "{}(name={!r}, value={!r}, prior={!r}, state={})".format(
            type(self).__name__,
            self._name,
            self._value,
            self._prior,
            self._state.name,
        )
