"""Profiles: the already-loaded settings records a queue is built from.

Manifesto:
    A queue built against a profile that lacks a settings type fails at
    build time, before anything touches the document. Loading profiles
    from disk belongs to the caller; a ``Profile`` only holds validated
    records keyed by their settings class.

Tags:
    profile, settings, configuration, foundry

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import ValidationError as PydanticValidationError

from foundry.core.errors import ConfigError, MissingSettingsError
from foundry.framework.logging import get_logger
from foundry.framework.operations.base import OperationSettings

logger = get_logger(__name__)

S = TypeVar("S", bound=OperationSettings)


class Profile:
    """
    Settings records keyed by settings type.

    Example:
        profile = Profile("default", [MapParamsSettings(mappings=[...])])
        queue.add(MapParams(profile.get(MapParamsSettings)))
    """

    def __init__(self, name: str, settings: Iterable[OperationSettings] = ()) -> None:
        self.name = name
        self._settings: dict[type[OperationSettings], OperationSettings] = {}
        for record in settings:
            self._settings[type(record)] = record

    def get(self, settings_type: type[S]) -> S:
        """Settings record of ``settings_type``; raises ``MissingSettingsError`` when absent."""
        record = self._settings.get(settings_type)
        if record is None:
            raise MissingSettingsError(settings_type.__name__, profile=self.name)
        return record  # type: ignore[return-value]

    def __contains__(self, settings_type: type[OperationSettings]) -> bool:
        return settings_type in self._settings

    def __len__(self) -> int:
        return len(self._settings)

    @classmethod
    def from_mapping(
        cls,
        name: str,
        raw: Mapping[str, Mapping[str, Any]],
        settings_types: Iterable[type[OperationSettings]],
    ) -> Profile:
        """
        Validate raw dicts keyed by settings class name.

        Unknown keys and invalid records raise ``ConfigError``.
        """
        by_name = {t.__name__: t for t in settings_types}
        records = []
        for key, values in raw.items():
            settings_type = by_name.get(key)
            if settings_type is None:
                raise ConfigError(f"Unknown settings type '{key}' in profile '{name}'").with_context(
                    available=sorted(by_name)
                )
            try:
                records.append(settings_type.model_validate(values))
            except PydanticValidationError as e:
                raise ConfigError(f"Invalid settings '{key}' in profile '{name}'", cause=e) from e
        logger.debug("profile.loaded", profile=name, settings=len(records))
        return cls(name, records)
