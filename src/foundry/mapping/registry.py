"""Mapping policy registry for looking up strategies by policy name.

Manifesto:
    Operations name a policy in their settings (``"AllowAllCoercion"``);
    the registry turns that name into a strategy. Names are
    case-insensitive, a blank name means ``Strict`` and an unknown name
    is a configuration error raised at lookup, never a silent default.

Tags:
    mapping, registry, policy-lookup, foundry

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Callable

from foundry.core.errors import UnknownPolicyError
from foundry.framework.logging import get_logger
from foundry.mapping.base import MappingStrategy
from foundry.mapping.chained import ChainedStrategy
from foundry.mapping.electrical import DomainUnitCoercionStrategy
from foundry.mapping.storage import StorageTypeCoercionStrategy
from foundry.mapping.strict import StrictStrategy

logger = get_logger(__name__)

StrategyFactory = Callable[[], MappingStrategy]

DEFAULT_POLICY = "Strict"


class PolicyRegistry:
    """
    Policy name -> strategy factory, one table per call shape.

    ``parameter`` factories serve parameter-to-parameter mapping; ``value``
    factories serve raw-value-to-parameter mapping.
    """

    def __init__(self) -> None:
        self._parameter: dict[str, tuple[str, StrategyFactory]] = {}
        self._value: dict[str, tuple[str, StrategyFactory]] = {}

    def register(
        self,
        name: str,
        factory: StrategyFactory,
        value_factory: StrategyFactory | None = None,
    ) -> None:
        """Register a policy; ``value_factory`` defaults to ``factory``."""
        key = name.strip().lower()
        if not key:
            raise ValueError("Policy name must not be blank")
        if key in self._parameter:
            raise ValueError(f"Mapping policy '{name}' is already registered")
        self._parameter[key] = (name, factory)
        self._value[key] = (name, value_factory or factory)
        logger.debug("mapping.policy_registered", policy=name)

    def resolve(self, policy: str | None, *, from_value: bool = False) -> MappingStrategy:
        """Strategy for ``policy``; raises ``UnknownPolicyError`` for unknown names."""
        key = (policy or "").strip().lower() or DEFAULT_POLICY.lower()
        table = self._value if from_value else self._parameter
        entry = table.get(key)
        if entry is None:
            raise UnknownPolicyError(policy or "", self.policies())
        return entry[1]()

    def canonical_name(self, policy: str | None) -> str:
        """Registered spelling of ``policy``; raises for unknown names."""
        key = (policy or "").strip().lower() or DEFAULT_POLICY.lower()
        entry = self._parameter.get(key)
        if entry is None:
            raise UnknownPolicyError(policy or "", self.policies())
        return entry[0]

    def __contains__(self, policy: str) -> bool:
        return ((policy or "").strip().lower() or DEFAULT_POLICY.lower()) in self._parameter

    def policies(self) -> list[str]:
        return [name for name, _ in self._parameter.values()]

    @classmethod
    def with_builtins(cls) -> PolicyRegistry:
        registry = cls()
        registry.register("Strict", StrictStrategy)
        registry.register("AllowStorageTypeCoercion", StorageTypeCoercionStrategy)
        registry.register(
            "AllowElectricalCoercion",
            lambda: ChainedStrategy(StrictStrategy(), DomainUnitCoercionStrategy(), name="AllowElectricalCoercion"),
        )
        registry.register(
            "AllowAllCoercion",
            lambda: ChainedStrategy(
                DomainUnitCoercionStrategy(), StorageTypeCoercionStrategy(), name="AllowAllCoercion"
            ),
        )
        return registry


_registry: PolicyRegistry | None = None


def get_registry() -> PolicyRegistry:
    """Process-wide registry with the built-in policies."""
    global _registry
    if _registry is None:
        _registry = PolicyRegistry.with_builtins()
    return _registry


def reset_registry() -> None:
    """Drop registered extensions (for testing)."""
    global _registry
    _registry = None
