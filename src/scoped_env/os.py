#!/usr/bin/env python3
"""
------------------------------------------------
Overriding several environment variables at once
------------------------------------------------
"""

# Standard libraries.
import logging
import types
import typing

# Internal modules.
import scoped_env.configuration
import scoped_env.environment
import scoped_env.guard

_logger = logging.getLogger(__name__)


class Environ:
    """
    For using environment variables and restoring later.

    Each assignment creates a :class:`~scoped_env.guard.ScopedEnv`.
    They are released in the reverse order of creation,
    so assigning the same name more than once
    still restores the value from before the first assignment.
    """

    __Self = typing.TypeVar("__Self", bound="Environ")

    def __init__(
        self,
        *,
        environment: typing.Optional[
            scoped_env.environment.Environment
        ] = None,
    ) -> None:
        self._environment = environment
        self._guards: list[scoped_env.guard.ScopedEnv] = []

    @property
    def guards(self) -> tuple[scoped_env.guard.ScopedEnv, ...]:
        """Guards not yet restored, oldest first."""
        return tuple(self._guards)

    def restore(self) -> None:
        """
        Releases every guard, newest first.

        :raises ~scoped_env.guard.PlatformError:
            The first failure to restore a variable,
            raised only after all other guards are released.
        """
        guards = self._guards
        first_error: typing.Optional[scoped_env.guard.PlatformError] = None
        while guards:
            guard = guards.pop()
            try:
                guard.release()
            except scoped_env.guard.PlatformError as error:
                if first_error is None:
                    first_error = error
                else:
                    _logger.warning(
                        "Unable to restore %s.", guard.name, exc_info=True
                    )
        if first_error is not None:
            raise first_error

    def set(self, **kwargs: typing.Optional[str]) -> None:
        """Assigns each keyword. A value of :data:`None` unsets it."""
        self.set_items(kwargs)

    def set_items(
        self, overrides: typing.Mapping[str, typing.Optional[str]]
    ) -> None:
        guards = self._guards
        environment = self._environment
        for key, value in overrides.items():
            guards.append(
                scoped_env.guard.ScopedEnv(
                    key, value, environment=environment
                )
            )

    def __enter__(self: __Self) -> __Self:
        return self

    def __exit__(
        self,
        exc_type: typing.Optional[typing.Type[BaseException]],
        exc_value: typing.Optional[BaseException],
        traceback: typing.Optional[types.TracebackType],
    ) -> None:
        del traceback
        try:
            self.restore()
        except scoped_env.guard.PlatformError:
            if exc_type is None:
                raise
            _logger.warning(
                "Unable to restore environment while handling %r.",
                exc_value,
                exc_info=True,
            )


def use_profile(
    profile_name: str,
    *,
    entries: typing.Optional[scoped_env.configuration.Entries] = None,
    environment: typing.Optional[
        scoped_env.environment.Environment
    ] = None,
) -> Environ:
    """
    Applies the overrides of a profile from the configuration.

    :param profile_name: Key in :attr:`Entries.profiles` to apply.
    :param entries:
        Configuration to find the profile in.
        Loaded using :func:`scoped_env.configuration.load` if not given.
    :raises KeyError: If there is no profile named ``profile_name``.
    :returns: The :class:`Environ` to restore the variables with.
    """
    if entries is None:
        entries = scoped_env.configuration.load()
    overrides = entries.profiles[profile_name]
    _logger.debug("Applying profile %s.", profile_name)
    environ = Environ(environment=environment)
    try:
        environ.set_items(overrides)
    except BaseException as error:
        try:
            environ.restore()
        except scoped_env.guard.PlatformError:
            _logger.warning(
                "Unable to roll back profile %s after %r.",
                profile_name,
                error,
                exc_info=True,
            )
        raise
    return environ
