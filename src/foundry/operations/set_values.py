"""Write one value per parameter into every variant."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, field_validator

from foundry.core.result import Err, Ok
from foundry.framework.logs import LogEntry, OperationLog
from foundry.framework.operations import OperationSettings, VariantContext, VariantOperation
from foundry.mapping import map_value
from foundry.operations.map_params import known_policy


class ValueRule(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    value: StrictInt | StrictFloat | StrictStr
    policy: str = "AllowStorageTypeCoercion"
    only_if_empty: bool = False

    @field_validator("policy")
    @classmethod
    def check_policy(cls, v: str) -> str:
        return known_policy(v)


class SetParamValuesSettings(OperationSettings):
    values: list[ValueRule] = Field(default_factory=list)


class SetParamValues(VariantOperation[SetParamValuesSettings]):
    """Set the same value on each variant, coerced through the rule's policy."""

    description = "Set each parameter to the same value for every variant"
    settings_type = SetParamValuesSettings

    def execute(self, context: VariantContext) -> OperationLog:
        document, variant = context.document, context.variant
        entries: list[LogEntry] = []
        for rule in self.settings.values:
            if rule.only_if_empty and document.find_parameter(rule.name) is not None:
                if document.get_value(rule.name, variant) is not None:
                    continue
            match map_value(document, variant, rule.value, rule.name, rule.policy):
                case Ok(_):
                    entries.append(LogEntry.success(rule.name))
                case Err(error):
                    entries.append(LogEntry.failure(rule.name, error))
        return OperationLog(self.name, tuple(entries))
