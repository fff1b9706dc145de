"""
Foundry Operations - the built-in document transformations.

Document-scoped:
- AddParams, AddCatalogParams, DeleteParams, SetFormulas, SortParams
- MapReplaceParams (catalog replacement)
- SetParamValueAsFormula, AddAndSetValueAsFormula
- DeleteUnusedParams, DeleteUnusedChildObjects (recursive cleanup)

Variant-scoped:
- MapParams, SetParamValues, LogParamsState
"""

from foundry.operations.cleanup import (
    DeleteUnusedChildObjects,
    DeleteUnusedChildObjectsSettings,
    DeleteUnusedParams,
    DeleteUnusedParamsSettings,
    DeletionReport,
    recursive_delete,
)
from foundry.operations.log_state import LogParamsState, LogParamsStateSettings
from foundry.operations.map_params import MappingRule, MapParams, MapParamsSettings, MapReplaceParams
from foundry.operations.params import (
    AddCatalogParams,
    AddCatalogParamsSettings,
    AddParams,
    AddParamsSettings,
    DeleteParams,
    DeleteParamsSettings,
    FormulaSpec,
    NameSortOrder,
    ParamSpec,
    SetFormulas,
    SetFormulasSettings,
    SortParams,
    SortParamsSettings,
    TypeSortOrder,
    ValueSortOrder,
)
from foundry.operations.set_values import SetParamValues, SetParamValuesSettings, ValueRule
from foundry.operations.value_formulas import (
    AddAndSetValueAsFormula,
    SetParamValueAsFormula,
    ValueAsFormulaSettings,
    ValueParamSpec,
    value_formula,
)

ALL_SETTINGS_TYPES = (
    AddParamsSettings,
    AddCatalogParamsSettings,
    DeleteParamsSettings,
    DeleteUnusedParamsSettings,
    DeleteUnusedChildObjectsSettings,
    SetFormulasSettings,
    SortParamsSettings,
    MapParamsSettings,
    SetParamValuesSettings,
    LogParamsStateSettings,
    ValueAsFormulaSettings,
)

__all__ = [
    "recursive_delete",
    "DeletionReport",
    "AddParams",
    "AddParamsSettings",
    "ParamSpec",
    "AddCatalogParams",
    "AddCatalogParamsSettings",
    "DeleteParams",
    "DeleteParamsSettings",
    "DeleteUnusedParams",
    "DeleteUnusedParamsSettings",
    "DeleteUnusedChildObjects",
    "DeleteUnusedChildObjectsSettings",
    "SetFormulas",
    "SetFormulasSettings",
    "FormulaSpec",
    "SortParams",
    "SortParamsSettings",
    "TypeSortOrder",
    "ValueSortOrder",
    "NameSortOrder",
    "MapParams",
    "MapParamsSettings",
    "MappingRule",
    "MapReplaceParams",
    "SetParamValues",
    "SetParamValuesSettings",
    "ValueRule",
    "LogParamsState",
    "LogParamsStateSettings",
    "SetParamValueAsFormula",
    "AddAndSetValueAsFormula",
    "ValueAsFormulaSettings",
    "ValueParamSpec",
    "value_formula",
    "ALL_SETTINGS_TYPES",
]
