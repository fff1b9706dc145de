"""Tests for foundry.framework.profile module."""

import pytest

from foundry.core.errors import ConfigError, MissingSettingsError
from foundry.framework.filters import Exclude
from foundry.framework.operations import OperationSettings
from foundry.framework.profile import Profile


class PurgeSettings(OperationSettings):
    exclude: Exclude = Exclude()
    keep_last: int = 1


class RenameSettings(OperationSettings):
    prefix: str


class TestProfile:
    def test_get(self):
        profile = Profile("default", [PurgeSettings(keep_last=3)])
        assert profile.get(PurgeSettings).keep_last == 3
        assert PurgeSettings in profile
        assert len(profile) == 1

    def test_missing(self):
        with pytest.raises(MissingSettingsError) as exc_info:
            Profile("default").get(RenameSettings)
        assert exc_info.value.settings_type == "RenameSettings"
        assert "profile 'default'" in str(exc_info.value)

    def test_later_record_replaces_earlier(self):
        profile = Profile("p", [PurgeSettings(keep_last=1), PurgeSettings(keep_last=2)])
        assert profile.get(PurgeSettings).keep_last == 2


class TestFromMapping:
    def test_validates_records(self):
        profile = Profile.from_mapping(
            "default",
            {
                "PurgeSettings": {"exclude": {"starting_with": ["Keep"]}},
                "RenameSettings": {"prefix": "PE_", "enabled": False},
            },
            [PurgeSettings, RenameSettings],
        )
        assert profile.get(PurgeSettings).exclude.matches("KeepMe")
        assert not profile.get(RenameSettings).enabled

    def test_unknown_settings_type(self):
        with pytest.raises(ConfigError, match="Unknown settings type 'Nope'"):
            Profile.from_mapping("default", {"Nope": {}}, [PurgeSettings])

    def test_invalid_record_wrapped(self):
        with pytest.raises(ConfigError, match="Invalid settings 'RenameSettings'"):
            Profile.from_mapping("default", {"RenameSettings": {}}, [RenameSettings])

    def test_extra_fields_forbidden(self):
        with pytest.raises(ConfigError):
            Profile.from_mapping("default", {"PurgeSettings": {"keep_first": 1}}, [PurgeSettings])
