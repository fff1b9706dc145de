"""
Foundry - batch transformation of parametric documents.

Callers describe a transformation as an ordered queue of configurable
operations; the processor batches variant-scoped work so each variant is
activated once per batch, isolates failures per item and per operation,
and returns one log per operation.

Example:
    from foundry.framework import OperationQueue, OperationProcessor
    from foundry.operations import DeleteUnusedParams, MapParams

    queue = OperationQueue().add(DeleteUnusedParams(cleanup)).add(MapParams(mapping))
    result = OperationProcessor().process(document, queue)
"""

__version__ = "0.1.0"
