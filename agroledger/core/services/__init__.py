"""
Core business logic services.

Layer-pure services that depend only on:
- agroledger/core/entities/*
- agroledger/core/interfaces/*
- agroledger/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from agroledger.core.services.inventory_ledger import (
    InventoryLedger,
    MovementResult,
    parse_movement_type,
    validate_quantity,
)

__all__ = [
    "InventoryLedger",
    "MovementResult",
    "parse_movement_type",
    "validate_quantity",
]
