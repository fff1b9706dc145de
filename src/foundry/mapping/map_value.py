"""Entry points that resolve a policy and map one value."""

from __future__ import annotations

from typing import Any

from foundry.core.errors import CoercionError, NoStrategyError, ParameterNotFoundError
from foundry.core.result import Err, Result
from foundry.document.model import ParameterDefinition, VariantRecord
from foundry.document.protocol import DocumentHandle
from foundry.framework.logging import get_logger
from foundry.mapping.base import MappingContext, storage_of
from foundry.mapping.registry import PolicyRegistry, get_registry

logger = get_logger(__name__)


def map_parameter(
    document: DocumentHandle,
    variant: VariantRecord,
    source_name: str,
    target_name: str,
    policy: str | None = None,
    *,
    registry: PolicyRegistry | None = None,
) -> Result[ParameterDefinition]:
    """Copy the value of ``source_name`` into ``target_name`` under ``policy``.

    ``variant`` must be the active variant. Raises ``UnknownPolicyError``
    for an unregistered policy; every other failure is an ``Err``.
    """
    strategy = (registry or get_registry()).resolve(policy)

    source = document.find_parameter(source_name)
    if source is None:
        return Err(ParameterNotFoundError(source_name).with_context(variant=variant.name))
    target = document.find_parameter(target_name)
    if target is None:
        return Err(ParameterNotFoundError(target_name).with_context(variant=variant.name))

    value = document.get_value(source_name, variant)
    if value is None:
        return Err(
            CoercionError(f"Source parameter '{source_name}' has no value").with_context(
                parameter=target_name, variant=variant.name
            )
        )

    ctx = MappingContext(
        document=document,
        variant=variant,
        source_value=value,
        source=source,
        source_value_string=document.get_value_string(source_name, variant),
        target=target,
    )
    return _apply(strategy, ctx, policy)


def map_value(
    document: DocumentHandle,
    variant: VariantRecord,
    value: Any,
    target_name: str,
    policy: str | None = None,
    *,
    registry: PolicyRegistry | None = None,
) -> Result[ParameterDefinition]:
    """Write a raw ``value`` into ``target_name`` under ``policy``."""
    strategy = (registry or get_registry()).resolve(policy, from_value=True)

    target = document.find_parameter(target_name)
    if target is None:
        return Err(ParameterNotFoundError(target_name).with_context(variant=variant.name))
    try:
        storage_of(value)
    except CoercionError as e:
        return Err(e.with_context(parameter=target_name, variant=variant.name))

    ctx = MappingContext(document=document, variant=variant, source_value=value, target=target)
    return _apply(strategy, ctx, policy)


def _apply(strategy, ctx: MappingContext, policy: str | None) -> Result[ParameterDefinition]:
    if not strategy.can_map(ctx):
        policy_name = policy or "Strict"
        logger.debug(
            "mapping.no_strategy",
            source=ctx.describe_source(),
            target=ctx.describe_target(),
            policy=policy_name,
        )
        return Err(
            NoStrategyError(
                f"Cannot map value from {ctx.describe_source()} to {ctx.describe_target()} "
                f"using policy '{policy_name}'"
            ).with_context(parameter=ctx.target.name, variant=ctx.variant.name, policy=policy_name)
        )
    return strategy.map(ctx)
