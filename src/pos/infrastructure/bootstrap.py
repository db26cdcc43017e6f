"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Environment:
    POS_DATA_DIR       directory holding the JSON stores (default: <repo>/data)
    POS_RESTAURANT_ID  tenant whose data the CLI works on (default: "default")
    POS_OPERATOR_ID    id of the signed-in operator (default: "admin")
    POS_OPERATOR_NAME  display name of the signed-in operator (default: "Admin")
"""

from __future__ import annotations

import os
from pathlib import Path

from pos.domain.model.transaction import Operator
from pos.infrastructure.persistence.json_customer_repository import (
    JsonCustomerRepository,
)
from pos.infrastructure.persistence.json_menu_repository import (
    JsonCategoryRepository,
    JsonMenuRepository,
)
from pos.infrastructure.persistence.json_settings_repository import (
    JsonSettingsRepository,
)
from pos.infrastructure.persistence.json_transaction_repository import (
    JsonTransactionRepository,
)

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir() -> Path:
    configured = os.environ.get("POS_DATA_DIR")
    return Path(configured) if configured else _DEFAULT_DATA_DIR


def transaction_repository() -> JsonTransactionRepository:
    return JsonTransactionRepository(data_dir() / "transactions.json")


def menu_repository() -> JsonMenuRepository:
    return JsonMenuRepository(data_dir() / "menu.json")


def category_repository() -> JsonCategoryRepository:
    return JsonCategoryRepository(data_dir() / "categories.json")


def settings_repository() -> JsonSettingsRepository:
    return JsonSettingsRepository(data_dir() / "settings.json")


def customer_repository() -> JsonCustomerRepository:
    return JsonCustomerRepository(data_dir() / "customers.json")


def current_operator() -> Operator:
    return Operator(
        id=os.environ.get("POS_OPERATOR_ID", "admin"),
        name=os.environ.get("POS_OPERATOR_NAME", "Admin"),
        restaurant_id=current_restaurant_id(),
    )


def current_restaurant_id() -> str:
    return os.environ.get("POS_RESTAURANT_ID", "default")
