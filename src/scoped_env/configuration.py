#!/usr/bin/env python3
"""
------------------------
Configuration management
------------------------

The configuration file is JSON holding named profiles,
each a set of environment variable overrides:

.. code-block:: json

    {
      "profiles": {
        "offline": {"HTTP_PROXY": "http://localhost:9", "PIP_INDEX_URL": null}
      }
    }

A ``null`` value unsets the variable for as long as the profile is used.
See :func:`scoped_env.os.use_profile`.
"""

# Standard library.
import os
import pathlib
import typing

# External dependencies.
import appdirs
import pydantic

# Internal modules.
import scoped_env.environment

configuration_path_variable = "SCOPED_ENV_CONFIGURATION_PATH"
"""Environment variable that overrides the configuration file path."""

_app_dirs = appdirs.AppDirs(appname="scoped-env")


def get_default_configuration_path() -> pathlib.Path:
    return pathlib.Path(_app_dirs.user_config_dir) / "config.json"


Profile = dict[str, typing.Optional[str]]


class Entries(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(extra="allow")

    configuration_path: pathlib.Path = pydantic.Field(
        default_factory=get_default_configuration_path
    )
    profiles: dict[str, Profile] = {}

    @pydantic.field_validator("profiles")
    @classmethod
    def check_profiles(
        cls, profiles: dict[str, Profile]
    ) -> dict[str, Profile]:
        for overrides in profiles.values():
            for name, value in overrides.items():
                scoped_env.environment.check_name(name)
                if value is not None:
                    scoped_env.environment.check_value(value)
        return profiles


def load(
    configuration_path: typing.Optional[pathlib.Path] = None,
) -> Entries:
    """
    Reads the configuration file.

    :param configuration_path:
        File to read. If not given,
        uses the value of ``SCOPED_ENV_CONFIGURATION_PATH``
        or ``config.json`` in the user configuration directory.
    :raises pydantic.ValidationError: If the file content is invalid.

    A missing file is the same as an empty configuration.
    """
    if configuration_path is None:
        configuration_path = pathlib.Path(
            os.environ.get(configuration_path_variable)
            or get_default_configuration_path()
        )
    if not configuration_path.exists():
        return Entries(configuration_path=configuration_path)
    entries = Entries.model_validate_json(configuration_path.read_text())
    return entries.model_copy(
        update={"configuration_path": configuration_path}
    )
