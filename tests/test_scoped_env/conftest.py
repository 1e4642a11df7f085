#!/usr/bin/env python3

# Standard libraries.
import uuid

# External dependencies.
import pytest

# Internal modules.
import scoped_env.environment


@pytest.fixture
def variable_name(monkeypatch: pytest.MonkeyPatch) -> str:
    """A process environment variable name that is unset, and reset after."""
    name = "SCOPED_ENV_TEST_" + uuid.uuid4().hex.upper()
    # Deleting an absent variable registers no undo, so set it first.
    monkeypatch.setenv(name, "")
    monkeypatch.delenv(name)
    return name


@pytest.fixture
def mapping_environment() -> scoped_env.environment.MappingEnvironment:
    return scoped_env.environment.MappingEnvironment()
