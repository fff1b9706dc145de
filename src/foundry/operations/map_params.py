"""Map parameters onto new ones: per-variant value copies, or in-place catalog replacement."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from foundry.core.result import Err, Ok
from foundry.document.catalog import CatalogEntry, ParameterCatalog
from foundry.document.protocol import DocumentHandle
from foundry.framework.logging import get_logger
from foundry.framework.logs import LogEntry, OperationLog
from foundry.framework.operations import (
    DocumentContext,
    DocumentOperation,
    OperationSettings,
    VariantContext,
    VariantOperation,
)
from foundry.mapping import get_registry, map_parameter

logger = get_logger(__name__)


def known_policy(policy: str) -> str:
    """Settings validator: reject policy names the registry does not know."""
    if policy not in get_registry():
        available = ", ".join(get_registry().policies())
        raise ValueError(f"Unknown mapping policy: {policy}. Available policies: {available}")
    return policy


class MappingRule(BaseModel):
    """Map the value of ``current`` into ``new``."""

    model_config = ConfigDict(extra="forbid")

    current: str
    new: str
    policy: str = "AllowStorageTypeCoercion"

    @field_validator("policy")
    @classmethod
    def check_policy(cls, v: str) -> str:
        return known_policy(v)

    @property
    def label(self) -> str:
        return f"{self.current} → {self.new}"


class MapParamsSettings(OperationSettings):
    mappings: list[MappingRule] = Field(default_factory=list)


class MapParams(VariantOperation[MapParamsSettings]):
    description = "Map an old parameter's value to a new parameter for each variant"
    settings_type = MapParamsSettings

    def execute(self, context: VariantContext) -> OperationLog:
        entries: list[LogEntry] = []
        for rule in self.settings.mappings:
            result = map_parameter(context.document, context.variant, rule.current, rule.new, rule.policy)
            match result:
                case Ok(_):
                    entries.append(LogEntry.success(rule.label))
                case Err(error):
                    entries.append(LogEntry.failure(rule.label, error))
        return OperationLog(self.name, tuple(entries))


class MapReplaceParams(DocumentOperation[MapParamsSettings]):
    """
    Replace each mapped parameter with the catalog's definition of the new name.

    The replacement keeps the old parameter's values, formula and every
    reference to it. A rule whose new name is missing from the catalog is a
    failure; a missing, built-in or differently typed current parameter is
    skipped.
    """

    description = "Replace parameters with shared parameters from the catalog"
    settings_type = MapParamsSettings

    def __init__(self, settings: MapParamsSettings, catalog: ParameterCatalog, name: str | None = None):
        super().__init__(settings, name)
        self.catalog = catalog

    def execute(self, context: DocumentContext) -> OperationLog:
        entries: list[LogEntry] = []
        for rule in self.settings.mappings:
            match self.catalog.lookup(rule.new):
                case Err(error):
                    entries.append(LogEntry.failure(rule.new, error))
                case Ok(entry):
                    replaced = self._replace(context.document, rule, entry)
                    if replaced is not None:
                        entries.append(replaced)
        return OperationLog(self.name, tuple(entries))

    @staticmethod
    def _replace(document: DocumentHandle, rule: MappingRule, entry: CatalogEntry) -> LogEntry | None:
        current = document.find_parameter(rule.current)
        if current is None or current.builtin:
            logger.debug("operation.replace_skipped", parameter=rule.current, reason="missing or built-in")
            return None
        if (current.storage, current.spec) != (entry.storage, entry.spec):
            logger.debug("operation.replace_skipped", parameter=rule.current, reason="data type differs")
            return None
        try:
            document.replace_parameter(rule.current, entry.to_definition())
        except Exception as e:
            return LogEntry.failure(rule.new, e)
        return LogEntry.success(rule.label)
