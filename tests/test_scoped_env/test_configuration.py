#!/usr/bin/env python3

# Standard libraries.
import pathlib

# External dependencies.
import pydantic
import pytest

# Internal modules.
import scoped_env.configuration


def test_default_path_is_in_user_config_directory() -> None:
    path = scoped_env.configuration.get_default_configuration_path()
    assert path.name == "config.json"
    assert "scoped-env" in path.parts


class TestEntries:
    def test_defaults_to_no_profiles(self) -> None:
        entries = scoped_env.configuration.Entries()
        assert entries.profiles == {}
        assert (
            entries.configuration_path
            == scoped_env.configuration.get_default_configuration_path()
        )

    def test_accepts_unset_values(self) -> None:
        entries = scoped_env.configuration.Entries(
            profiles={"a": {"B": None, "C": ""}}
        )
        assert entries.profiles["a"] == {"B": None, "C": ""}

    @pytest.mark.parametrize("name", ["", "A=B", "A\0B"])
    def test_rejects_illegal_names(self, name: str) -> None:
        with pytest.raises(pydantic.ValidationError):
            scoped_env.configuration.Entries(profiles={"a": {name: "x"}})

    def test_rejects_null_in_value(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            scoped_env.configuration.Entries(profiles={"a": {"B": "\0"}})


class TestLoad:
    def test_missing_file_gives_default_entries(
        self, tmp_path: pathlib.Path
    ) -> None:
        configuration_path = tmp_path / "config.json"
        entries = scoped_env.configuration.load(configuration_path)
        assert entries.profiles == {}
        assert entries.configuration_path == configuration_path

    def test_reads_profiles_from_file(self, tmp_path: pathlib.Path) -> None:
        configuration_path = tmp_path / "config.json"
        configuration_path.write_text(
            '{"profiles": {"offline": {"HTTP_PROXY": "x", "HOME": null}}}'
        )
        entries = scoped_env.configuration.load(configuration_path)
        assert entries.profiles == {
            "offline": {"HTTP_PROXY": "x", "HOME": None}
        }
        assert entries.configuration_path == configuration_path

    def test_uses_path_from_environment_variable(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: pathlib.Path
    ) -> None:
        configuration_path = tmp_path / "other.json"
        configuration_path.write_text('{"profiles": {"a": {}}}')
        monkeypatch.setenv(
            scoped_env.configuration.configuration_path_variable,
            str(configuration_path),
        )
        entries = scoped_env.configuration.load()
        assert entries.configuration_path == configuration_path
        assert entries.profiles == {"a": {}}

    def test_raises_if_file_is_invalid(self, tmp_path: pathlib.Path) -> None:
        configuration_path = tmp_path / "config.json"
        configuration_path.write_text('{"profiles": {"a": {"=": "x"}}}')
        with pytest.raises(pydantic.ValidationError):
            scoped_env.configuration.load(configuration_path)
