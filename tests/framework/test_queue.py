"""
Tests for foundry.framework.queue module.

Tests cover:
- Register-time filtering of disabled operations
- Internal and group name prefixes on queued copies
- Batch partitioning and its invariants
- Metadata projection
- Building from a profile
"""

import pytest

from foundry.core.errors import MissingSettingsError
from foundry.framework.logs import OperationLog
from foundry.framework.operations import (
    DocumentOperation,
    OperationGroup,
    OperationScope,
    OperationSettings,
    VariantOperation,
)
from foundry.framework.profile import Profile
from foundry.framework.queue import DocumentBatch, MergedVariantBatch, OperationQueue


class DocOp(DocumentOperation[OperationSettings]):
    description = "document op"

    def execute(self, context):
        return OperationLog(self.name)


class VarOp(VariantOperation[OperationSettings]):
    description = "variant op"

    def execute(self, context):
        return OperationLog(self.name)


def doc(name, enabled=True):
    return DocOp(OperationSettings(enabled=enabled), name=name)


def var(name, enabled=True):
    return VarOp(OperationSettings(enabled=enabled), name=name)


def names(batch):
    return [op.name for op in batch.operations]


class TestAdd:
    def test_preserves_order(self):
        queue = OperationQueue().add(doc("A")).add(var("B")).add(doc("C"))
        assert [op.name for op in queue.operations] == ["A", "B", "C"]
        assert len(queue) == 3

    def test_disabled_skipped_at_registration(self):
        queue = OperationQueue().add(doc("A", enabled=False)).add(var("B"))
        assert [op.name for op in queue.operations] == ["B"]

    def test_internal_prefix(self):
        queue = OperationQueue().add(doc("Cleanup"), internal=True)
        assert queue.operations[0].name == "INTERNAL OPERATION: Cleanup"

    def test_same_operation_in_two_queues(self):
        cleanup = doc("Cleanup")
        first = OperationQueue().add(cleanup, internal=True)
        second = OperationQueue().add(cleanup, internal=True)
        assert first.operations[0].name == "INTERNAL OPERATION: Cleanup"
        assert second.operations[0].name == "INTERNAL OPERATION: Cleanup"
        assert cleanup.name == "Cleanup"

    def test_name_defaults_to_class_name(self):
        assert DocOp(OperationSettings()).name == "DocOp"

    def test_group_unwrapped_with_prefix(self):
        class MapAndAdd(OperationGroup):
            description = "map then add"

        skipped = doc("Skipped", enabled=False)
        members = [doc("Add"), var("Map"), skipped]
        group = MapAndAdd(members)
        queue = OperationQueue().add_group(group)
        assert [op.name for op in queue.operations] == ["MapAndAdd: Add", "MapAndAdd: Map"]
        assert [op.name for op in members] == ["Add", "Map", "Skipped"]

    def test_group_added_twice_without_stacked_prefix(self):
        group = OperationGroup([doc("Add")], name="Setup")
        OperationQueue().add_group(group)
        queue = OperationQueue().add_group(group)
        assert [op.name for op in queue.operations] == ["Setup: Add"]


class TestBatches:
    def test_scenario_doc_var_var_doc(self):
        queue = OperationQueue().add(doc("A")).add(var("B")).add(var("C")).add(doc("D"))
        batches = queue.batches()
        assert [type(b) for b in batches] == [DocumentBatch, MergedVariantBatch, DocumentBatch]
        assert [names(b) for b in batches] == [["A"], ["B", "C"], ["D"]]
        assert [b.index for b in batches] == [0, 1, 2]

    def test_document_operations_never_merge(self):
        queue = OperationQueue().add(doc("A")).add(doc("B"))
        assert [names(b) for b in queue.batches()] == [["A"], ["B"]]

    def test_unoptimized_one_variant_op_per_batch(self):
        queue = OperationQueue().add(var("B")).add(var("C"))
        assert [names(b) for b in queue.batches(optimize=False)] == [["B"], ["C"]]

    def test_empty_queue(self):
        assert OperationQueue().batches() == []

    @pytest.mark.parametrize(
        "pattern",
        ["", "D", "V", "DV", "VD", "VVV", "DVVDVDDVV", "VDVDVD", "DDDVVV"],
    )
    def test_partition_invariants(self, pattern):
        queue = OperationQueue()
        for i, kind in enumerate(pattern):
            queue.add(doc(f"{kind}{i}") if kind == "D" else var(f"{kind}{i}"))
        batches = queue.batches()

        # concatenation reproduces the registration order
        flattened = [op for b in batches for op in b.operations]
        assert flattened == list(queue.operations)
        # no two adjacent variant batches
        for left, right in zip(batches, batches[1:]):
            assert not (left.scope is OperationScope.VARIANT and right.scope is OperationScope.VARIANT)
        # each batch is scope-homogeneous
        for b in batches:
            assert {op.scope for op in b.operations} == {b.scope}
        # deterministic
        assert [names(b) for b in queue.batches()] == [names(b) for b in batches]


class TestMetadata:
    def test_projection(self, sample_document):
        queue = OperationQueue().add(doc("A")).add(var("B")).add(var("C"))
        metadata = queue.metadata()
        assert [(m.name, m.scope, m.batch_index, m.merged) for m in metadata] == [
            ("A", OperationScope.DOCUMENT, 0, False),
            ("B", OperationScope.VARIANT, 1, True),
            ("C", OperationScope.VARIANT, 1, True),
        ]
        assert metadata[1].description == "variant op"
        assert metadata[1].label() == "[Batch 1, merged] (variant) B"
        assert sample_document.activation_count == 0

    def test_group_recorded(self):
        class MapAndAdd(OperationGroup):
            description = "map then add"

        queue = OperationQueue().add(doc("Before")).add_group(MapAndAdd([doc("Add"), var("Map")]))
        metadata = queue.metadata()
        assert [m.group for m in metadata] == [None, "MapAndAdd", "MapAndAdd"]
        assert metadata[2].group_description == "map then add"
        assert metadata[2].to_dict()["group"] == "MapAndAdd"
        assert metadata[0].to_dict()["group_description"] == ""


class TestFromProfile:
    class CleanupSettings(OperationSettings):
        prefix: str = "tmp_"

    def test_add_from_profile(self):
        cleanup_settings = self.CleanupSettings

        class Cleanup(DocumentOperation):
            settings_type = cleanup_settings

            def execute(self, context):
                return OperationLog(self.name)

        profile = Profile("default", [cleanup_settings(prefix="old_")])
        queue = OperationQueue().add_from_profile(profile, Cleanup)
        assert queue.operations[0].settings.prefix == "old_"

    def test_missing_settings_fails_fast(self):
        with pytest.raises(MissingSettingsError, match="CleanupSettings"):
            OperationQueue().add_from_profile(Profile("empty"), DocOp, self.CleanupSettings)
