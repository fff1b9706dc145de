"""
Shared pytest fixtures for Foundry tests.

This module provides:
- Log context and policy registry cleanup for test isolation
- A three-variant and a five-variant sample document on the in-memory adapter

Usage:
    def test_something(sample_document):
        assert len(sample_document.variants()) == 3
"""

import sys
from collections.abc import Generator
from pathlib import Path

import pytest

# Ensure foundry package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from foundry.document import InMemoryDocument, ParameterDefinition, ParameterScope, StorageKind
from foundry.framework.logging import clear_context
from foundry.mapping import reset_registry


# =============================================================================
# Cleanup Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_log_context() -> Generator[None, None, None]:
    """Reset the log context before and after each test."""
    clear_context()
    yield
    clear_context()


@pytest.fixture(autouse=True)
def clean_policy_registry() -> Generator[None, None, None]:
    """Drop policies registered by a test."""
    reset_registry()
    yield
    reset_registry()


# =============================================================================
# Sample Documents
# =============================================================================


VARIANTS = ["Type A", "Type B", "Type C"]


def make_parameters() -> list[ParameterDefinition]:
    return [
        ParameterDefinition("Width", StorageKind.REAL, "length", unit="millimeters"),
        ParameterDefinition("Area", StorageKind.REAL, "length", unit="meters", formula="Width * 2"),
        ParameterDefinition("Count", StorageKind.INTEGER, "integer"),
        ParameterDefinition("Label", StorageKind.TEXT, "text"),
        ParameterDefinition("Voltage Text", StorageKind.TEXT, "text"),
        ParameterDefinition("Voltage", StorageKind.REAL, "electrical:potential", unit="volts"),
        ParameterDefinition("Power", StorageKind.REAL, "electrical:power", unit="kilowatts"),
        ParameterDefinition(
            "Manufacturer", StorageKind.TEXT, "text", scope=ParameterScope.SHARED, is_shared=True
        ),
        ParameterDefinition("Category", StorageKind.TEXT, "text", builtin=True),
    ]


@pytest.fixture
def sample_document() -> InMemoryDocument:
    """
    Three variants with one value per variant-scoped parameter.

    Width is stored in internal units (meters) and displayed in millimeters.
    """
    return InMemoryDocument(
        "Door-Single",
        VARIANTS,
        parameters=make_parameters(),
        values={
            "Width": {"Type A": 0.9, "Type B": 1.0, "Type C": 1.2},
            "Count": {"Type A": 1, "Type B": 2, "Type C": 3},
            "Label": {"Type A": "D-1", "Type B": "D-2", "Type C": "D-3"},
            "Voltage Text": {"Type A": "230V", "Type B": "120 V", "Type C": "N/A"},
            "Manufacturer": {"Type A": "Acme"},
            "Category": {"Type A": "Doors"},
        },
    )


@pytest.fixture
def five_variant_document() -> InMemoryDocument:
    return InMemoryDocument(
        "Panel",
        [f"V{i}" for i in range(1, 6)],
        parameters=[ParameterDefinition("Label", StorageKind.TEXT, "text")],
    )
