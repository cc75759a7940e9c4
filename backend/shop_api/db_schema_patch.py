from __future__ import annotations

import logging
from typing import Dict, Optional

from sqlalchemy import Column, Table, text
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

logger = logging.getLogger(__name__)


def _get_existing_columns(engine: Engine, table_name: str) -> Dict[str, str]:
    cols: Dict[str, str] = {}
    with engine.connect() as conn:
        res = conn.execute(text(f'PRAGMA table_info("{table_name}");')).fetchall()
        # PRAGMA table_info returns rows: (cid, name, type, notnull, dflt_value, pk)
        for row in res:
            cols[str(row[1])] = str(row[2])
    return cols


def _default_literal(column: Column) -> Optional[str]:
    """SQL literal for a scalar Python-side default, or None"""
    default = column.default
    if default is None or not getattr(default, "is_scalar", False):
        return None
    value = default.arg
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return "'" + value.replace("'", "''") + "'"
    return None


def _add_column_sql(engine: Engine, table: Table, column: Column) -> str:
    col_type = column.type.compile(dialect=engine.dialect)
    # Added columns stay nullable: existing rows have no value for them
    sql = f'ALTER TABLE "{table.name}" ADD COLUMN "{column.name}" {col_type}'
    default = _default_literal(column)
    if default is not None:
        sql += f" DEFAULT {default}"
    return sql + ";"


def ensure_table_columns(engine: Engine, table: Table) -> None:
    """
    Idempotently adds columns declared on the model but missing from the table.
    Safe to run at every startup. Tables that don't exist yet are skipped.
    """
    try:
        existing = _get_existing_columns(engine, table.name)
        if not existing:
            return

        with engine.begin() as conn:
            for column in table.columns:
                if column.name in existing:
                    continue
                conn.execute(text(_add_column_sql(engine, table, column)))
                logger.info("Added column %s.%s", table.name, column.name)
    except Exception as e:
        # Log error but don't crash the server
        logger.warning(f"Failed to ensure columns for table {table.name}: {e}")


def auto_migrate(engine: Engine) -> None:
    """Create missing tables, then add missing columns to existing ones"""
    # Import all models to ensure they're registered with SQLModel metadata
    from shop_api.models.order import Order  # noqa: F401
    from shop_api.models.product import Product  # noqa: F401
    from shop_api.models.user import User  # noqa: F401

    SQLModel.metadata.create_all(engine)

    for table in SQLModel.metadata.sorted_tables:
        ensure_table_columns(engine, table)
