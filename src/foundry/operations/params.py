"""Document-scoped parameter operations: add, delete, sort, set formulas."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from foundry.document.catalog import ParameterCatalog
from foundry.document.model import ParameterDefinition, ParameterScope, StorageKind
from foundry.framework.filters import Exclude, Include, NameFilter
from foundry.framework.logging import get_logger
from foundry.framework.logs import LogEntry, OperationLog
from foundry.framework.operations import DocumentContext, DocumentOperation, OperationSettings

logger = get_logger(__name__)


class ParamSpec(BaseModel):
    """A parameter to add."""

    model_config = ConfigDict(extra="forbid")

    name: str
    storage: StorageKind
    spec: str
    unit: str | None = None
    scope: ParameterScope = ParameterScope.VARIANT
    formula: str | None = None

    def to_definition(self) -> ParameterDefinition:
        return ParameterDefinition(
            name=self.name,
            storage=self.storage,
            spec=self.spec,
            unit=self.unit,
            scope=self.scope,
        )


# =============================================================================
# ADD
# =============================================================================


class AddParamsSettings(OperationSettings):
    parameters: list[ParamSpec] = Field(default_factory=list)


class AddParams(DocumentOperation[AddParamsSettings]):
    """Add parameters that do not exist yet, then apply their formulas."""

    description = "Add document parameters and set their formulas"
    settings_type = AddParamsSettings

    def execute(self, context: DocumentContext) -> OperationLog:
        document = context.document
        entries: list[LogEntry] = []
        for spec in self.settings.parameters:
            if document.find_parameter(spec.name) is not None:
                logger.debug("operation.parameter_exists", parameter=spec.name)
                continue
            try:
                document.add_parameter(spec.to_definition())
                if spec.formula:
                    document.set_formula(spec.name, spec.formula)
            except Exception as e:
                entries.append(LogEntry.failure(spec.name, e))
                continue
            entries.append(LogEntry.success(spec.name))
        return OperationLog(self.name, tuple(entries))


class AddCatalogParamsSettings(OperationSettings):
    include: Include = Field(default_factory=Include)
    exclude: Exclude = Field(default_factory=Exclude)


class AddCatalogParams(DocumentOperation[AddCatalogParamsSettings]):
    """Add shared parameters resolved from an external catalog."""

    description = "Add shared parameters from the parameter catalog"
    settings_type = AddCatalogParamsSettings

    def __init__(self, settings: AddCatalogParamsSettings, catalog: ParameterCatalog, name: str | None = None):
        super().__init__(settings, name)
        self.catalog = catalog

    def execute(self, context: DocumentContext) -> OperationLog:
        document = context.document
        entries: list[LogEntry] = []
        for entry in self.catalog.select(self.settings.include, self.settings.exclude):
            if document.find_parameter(entry.name) is not None:
                continue
            try:
                document.add_parameter(entry.to_definition())
            except Exception as e:
                entries.append(LogEntry.failure(entry.name, e))
                continue
            entries.append(LogEntry.success(entry.name))
        return OperationLog(self.name, tuple(entries))


# =============================================================================
# DELETE
# =============================================================================


class DeleteParamsSettings(OperationSettings):
    names: NameFilter = Field(default_factory=NameFilter)


class DeleteParams(DocumentOperation[DeleteParamsSettings]):
    """Delete the parameters matched by the name filter."""

    description = "Delete parameters by name"
    settings_type = DeleteParamsSettings

    def execute(self, context: DocumentContext) -> OperationLog:
        document = context.document
        entries: list[LogEntry] = []
        targets = [p.name for p in document.parameters() if self.settings.names.matches(p.name)]
        for name in targets:
            try:
                document.remove_parameter(name)
            except Exception as e:
                entries.append(LogEntry.failure(name, e))
                continue
            entries.append(LogEntry.success(name))
        return OperationLog(self.name, tuple(entries))


# =============================================================================
# FORMULAS
# =============================================================================


class FormulaSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    formula: str | None


class SetFormulasSettings(OperationSettings):
    formulas: list[FormulaSpec] = Field(default_factory=list)


class SetFormulas(DocumentOperation[SetFormulasSettings]):
    description = "Set the formula of existing parameters"
    settings_type = SetFormulasSettings

    def execute(self, context: DocumentContext) -> OperationLog:
        document = context.document
        entries: list[LogEntry] = []
        for spec in self.settings.formulas:
            if document.find_parameter(spec.name) is None:
                entries.append(LogEntry.failure(spec.name, f"Parameter '{spec.name}' not found"))
                continue
            try:
                document.set_formula(spec.name, spec.formula)
            except Exception as e:
                entries.append(LogEntry.failure(spec.name, e))
                continue
            entries.append(LogEntry.success(spec.name))
        return OperationLog(self.name, tuple(entries))


# =============================================================================
# SORT
# =============================================================================


class TypeSortOrder(str, Enum):
    SHARED_FIRST = "shared_first"
    LOCAL_FIRST = "local_first"


class ValueSortOrder(str, Enum):
    VALUES_FIRST = "values_first"
    FORMULAS_FIRST = "formulas_first"


class NameSortOrder(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class SortParamsSettings(OperationSettings):
    """Sort keys in priority order: shared/local, values/formulas, then name."""

    type_order: TypeSortOrder = TypeSortOrder.SHARED_FIRST
    value_order: ValueSortOrder = ValueSortOrder.VALUES_FIRST
    name_order: NameSortOrder = NameSortOrder.ASCENDING


def sort_key_order(params: list[ParameterDefinition], settings: SortParamsSettings) -> list[str]:
    """Parameter names in the order ``settings`` describes."""
    # stable sorts, lowest priority first
    ordered = sorted(params, key=lambda p: p.name, reverse=settings.name_order is NameSortOrder.DESCENDING)
    formulas_first = settings.value_order is ValueSortOrder.FORMULAS_FIRST
    ordered.sort(key=lambda p: p.is_determined_by_formula != formulas_first)
    shared_first = settings.type_order is TypeSortOrder.SHARED_FIRST
    ordered.sort(key=lambda p: p.is_shared != shared_first)
    return [p.name for p in ordered]


class SortParams(DocumentOperation[SortParamsSettings]):
    description = "Sort parameters by shared/local, values/formulas and name"
    settings_type = SortParamsSettings

    def execute(self, context: DocumentContext) -> OperationLog:
        document = context.document
        params = document.parameters()
        document.reorder_parameters(sort_key_order(params, self.settings))
        return OperationLog(self.name, (LogEntry.success(f"Sorted {len(params)} parameters"),))
