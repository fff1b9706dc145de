"""Write fixed values as constant formulas, so every variant shares them."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr

from foundry.document.model import ParameterDefinition, ParameterScope, StorageKind
from foundry.framework.logging import get_logger
from foundry.framework.logs import LogEntry, OperationLog
from foundry.framework.operations import DocumentContext, DocumentOperation, OperationSettings

logger = get_logger(__name__)


def value_formula(value: int | float | str, storage: StorageKind) -> str:
    """Constant formula evaluating to ``value``: quoted for text, a bare literal otherwise."""
    if storage is StorageKind.TEXT:
        return f'"{value}"'
    return str(value)


class ValueParamSpec(BaseModel):
    """A parameter and the value its formula should hold."""

    model_config = ConfigDict(extra="forbid")

    name: str
    value: StrictInt | StrictFloat | StrictStr
    storage: StorageKind = StorageKind.TEXT
    spec: str = "text"
    unit: str | None = None
    scope: ParameterScope = ParameterScope.VARIANT

    def to_definition(self) -> ParameterDefinition:
        return ParameterDefinition(
            name=self.name,
            storage=self.storage,
            spec=self.spec,
            unit=self.unit,
            scope=self.scope,
        )


class ValueAsFormulaSettings(OperationSettings):
    parameters: list[ValueParamSpec] = Field(default_factory=list)
    override_existing_values: bool = True


class SetParamValueAsFormula(DocumentOperation[ValueAsFormulaSettings]):
    """Set existing parameters to a constant formula holding the configured value.

    With ``override_existing_values`` off, a parameter that already has a
    formula keeps it.
    """

    description = "Set parameter values as constant formulas"
    settings_type = ValueAsFormulaSettings

    def execute(self, context: DocumentContext) -> OperationLog:
        document = context.document
        entries: list[LogEntry] = []
        for spec in self.settings.parameters:
            current = document.find_parameter(spec.name)
            if current is None:
                entries.append(LogEntry.failure(spec.name, f"Parameter '{spec.name}' not found"))
                continue
            if current.is_determined_by_formula and not self.settings.override_existing_values:
                logger.debug("operation.formula_kept", parameter=spec.name)
                continue
            try:
                document.set_formula(spec.name, value_formula(spec.value, current.storage))
            except Exception as e:
                entries.append(LogEntry.failure(spec.name, e))
                continue
            entries.append(LogEntry.success(spec.name))
        return OperationLog(self.name, tuple(entries))


class AddAndSetValueAsFormula(DocumentOperation[ValueAsFormulaSettings]):
    """Add each parameter, then set it to a constant formula holding its value."""

    description = "Add parameters and set their values as constant formulas"
    settings_type = ValueAsFormulaSettings

    def execute(self, context: DocumentContext) -> OperationLog:
        document = context.document
        entries: list[LogEntry] = []
        for spec in self.settings.parameters:
            try:
                added = document.add_parameter(spec.to_definition())
                document.set_formula(added.name, value_formula(spec.value, added.storage))
            except Exception as e:
                entries.append(LogEntry.failure(spec.name, e))
                continue
            entries.append(LogEntry.success(spec.name))
        return OperationLog(self.name, tuple(entries))
