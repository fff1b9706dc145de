"""
Foundry Mapping - value coercion through a policy-selected strategy chain.

This module provides:
- MappingContext and the MappingStrategy interface
- Strict, storage-kind and electrical coercion strategies, and chaining
- PolicyRegistry for case-insensitive policy lookup
- map_parameter / map_value entry points returning Result
"""

from foundry.mapping.base import MappingContext, MappingStrategy, storage_of
from foundry.mapping.chained import ChainedStrategy
from foundry.mapping.electrical import DomainUnitCoercionStrategy, standard_voltage
from foundry.mapping.map_value import map_parameter, map_value
from foundry.mapping.numeric import can_extract_float, can_extract_integer, extract_float, extract_integer
from foundry.mapping.registry import DEFAULT_POLICY, PolicyRegistry, get_registry, reset_registry
from foundry.mapping.storage import StorageTypeCoercionStrategy
from foundry.mapping.strict import StrictStrategy

__all__ = [
    "MappingContext",
    "MappingStrategy",
    "storage_of",
    "StrictStrategy",
    "StorageTypeCoercionStrategy",
    "DomainUnitCoercionStrategy",
    "ChainedStrategy",
    "standard_voltage",
    "PolicyRegistry",
    "DEFAULT_POLICY",
    "get_registry",
    "reset_registry",
    "map_parameter",
    "map_value",
    "can_extract_integer",
    "can_extract_float",
    "extract_integer",
    "extract_float",
]
