"""Record the value of every parameter in every variant."""

from __future__ import annotations

from pydantic import Field

from foundry.framework.filters import Include
from foundry.framework.logs import LogEntry, OperationLog
from foundry.framework.operations import OperationSettings, VariantContext, VariantOperation


class LogParamsStateSettings(OperationSettings):
    include: Include = Field(default_factory=Include)
    include_builtin: bool = False


class LogParamsState(VariantOperation[LogParamsStateSettings]):
    description = "Log the state of the document parameters for each variant"
    settings_type = LogParamsStateSettings

    def execute(self, context: VariantContext) -> OperationLog:
        document, variant = context.document, context.variant
        include = self.settings.include
        entries = []
        for param in document.parameters():
            if param.builtin and not self.settings.include_builtin:
                continue
            if not include.is_empty() and not include.matches(param.name):
                continue
            if param.is_determined_by_formula:
                entries.append(LogEntry.success(f"{param.name} = {param.formula} (formula)"))
                continue
            value = document.get_value_string(param.name, variant)
            entries.append(LogEntry.success(f"{param.name} = {value if value is not None else '<empty>'}"))
        return OperationLog(self.name, tuple(entries))
