"""
Fixtures compartidas por los tests de todos los módulos.

El ``InMemoryRowStore`` implementa el mismo contrato que
``SqlAlchemyRowStore`` sobre diccionarios, registra cada llamada y permite
inyectar fallos por (operación, tabla).
"""
import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./chantier_test.db")

from copy import deepcopy
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from itertools import count
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from app.common.exceptions import RowStoreError


# (tabla destino, columna local, columna remota, muchos)
RELATIONS = {
    "invoices": {
        "client": ("clients", "client_id", "id", False),
        "items": ("invoice_items", "id", "invoice_id", True),
    },
    "invoice_items": {
        "invoice": ("invoices", "invoice_id", "id", False),
    },
}


class InMemoryRowStore:
    def __init__(self):
        self.tables = {}
        self.calls = []
        self._failures = {}
        self._clock = count()

    # ----- Inyección de fallos -----

    def fail(self, op: str, table: str, after: int = 0):
        """Las llamadas ``op`` sobre ``table`` fallan tras ``after`` llamadas exitosas"""
        self._failures[(op, table)] = after

    def _check(self, op: str, table: str):
        self.calls.append((op, table))
        key = (op, table)
        if key not in self._failures:
            return
        if self._failures[key] > 0:
            self._failures[key] -= 1
            return
        raise RowStoreError(f"{op} on {table} failed")

    def writes(self):
        return [call for call in self.calls if call[0] != "select"]

    def rows(self, table: str):
        return list(self.tables.get(table, {}).values())

    # ----- Contrato RowStore -----

    async def select(self, table, filters=None, order_by=None, descending=False, include=()):
        self._check("select", table)
        rows = [
            row for row in self.rows(table)
            if all(row.get(name) == value for name, value in (filters or {}).items())
        ]
        if order_by:
            rows.sort(key=lambda row: (row.get(order_by) is None, row.get(order_by)), reverse=descending)
        result = []
        for row in rows:
            record = deepcopy(row)
            for name in include:
                record[name] = self._related(table, row, name)
            result.append(record)
        return result

    def _related(self, table, row, name):
        try:
            target, local, remote, many = RELATIONS[table][name]
        except KeyError:
            raise RowStoreError(f"Relación desconocida: {table}.{name}") from None
        matches = [deepcopy(r) for r in self.rows(target) if r.get(remote) == row.get(local)]
        if many:
            return sorted(matches, key=lambda r: r.get("position", 0))
        return matches[0] if matches else None

    async def insert(self, table, record):
        self._check("insert", table)
        now = datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=next(self._clock))
        row = {"id": str(uuid4()), "created_at": now, "updated_at": now, **deepcopy(record)}
        self.tables.setdefault(table, {})[row["id"]] = row
        return deepcopy(row)

    async def update(self, table, record_id, patch):
        self._check("update", table)
        row = self.tables.get(table, {}).get(record_id)
        if row is None:
            raise RowStoreError(f"{table} {record_id} no existe")
        row.update(deepcopy(patch))
        return deepcopy(row)

    async def delete(self, table, record_id):
        self._check("delete", table)
        self.tables.get(table, {}).pop(record_id, None)


# ===== FIXTURES =====

@pytest.fixture
def store():
    return InMemoryRowStore()


@pytest.fixture
async def sample_client(store):
    """Cliente registrado en el store en memoria"""
    client = await store.insert("clients", {
        "name": "Société Hydraulique du Hodna",
        "phone": "+213 35 55 12 34",
        "address": "Route de Bou Saâda, M'Sila",
        "email": "contact@shh.dz",
        "notes": None,
        "total_debt": Decimal("150000.00"),
    })
    store.calls.clear()
    return client


@pytest.fixture
def api_client(store):
    """TestClient con el row store reemplazado por el fake en memoria"""
    from app.main import app
    from app.dependencies.dbDependecies import get_row_store

    app.dependency_overrides[get_row_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
