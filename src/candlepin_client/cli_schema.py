"""Schema describing important fields for CLI table rendering."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

Row = Mapping[str, Any]
ValueFormatter = Callable[[Any], str]
SortKey = Callable[[Row], Any]


@dataclass(frozen=True)
class Column:
    """One table column.

    The cell shows the first non-null value among ``keys``; failing that,
    the value found by walking ``path`` through nested objects (e.g. a pool's
    ``product.name``).
    """

    header: str
    keys: tuple[str, ...] = ()
    path: tuple[str, ...] = ()
    formatter: ValueFormatter | None = None
    justify: str = "left"

    def lookup(self, row: Row) -> Any:
        for key in self.keys:
            if row.get(key) is not None:
                return row[key]
        node: Any = row if self.path else None
        for key in self.path:
            node = node.get(key) if isinstance(node, Mapping) else None
        return node

    def render(self, row: Row) -> str:
        value = self.lookup(row)
        if value is None:
            return ""
        return self.formatter(value) if self.formatter else str(value)


@dataclass(frozen=True)
class TableView:
    """Describe a Rich table for a CLI command."""

    title: str
    columns: tuple[Column, ...]
    sort_key: SortKey | None = None


def _bool_formatter(value: Any) -> str:
    if value is None:
        return ""
    return "Yes" if bool(value) else "No"


def _count_formatter(value: Any) -> str:
    if isinstance(value, (list, tuple, dict)):
        return str(len(value))
    return ""


def _date_formatter(value: Any) -> str:
    # Timestamps come back as full ISO-8601 strings; the date is enough here.
    return str(value)[:10]


def _sort_by(*keys: str) -> SortKey:
    def _key(row: Row) -> str:
        for key in keys:
            if row.get(key):
                return str(row[key]).lower()
        return ""

    return _key


CLI_TABLE_VIEWS: dict[str, TableView] = {
    "owners.list": TableView(
        title="Owners",
        columns=(
            Column("Key", keys=("key",)),
            Column("Display Name", keys=("display_name",)),
            Column("ID", keys=("id",)),
            Column("Parent", path=("parent_owner", "key")),
            Column("Service Level", keys=("default_service_level",)),
        ),
        sort_key=_sort_by("key"),
    ),
    "pools.list": TableView(
        title="Pools",
        columns=(
            Column("Pool ID", keys=("id",)),
            Column("Product ID", keys=("product_id",), path=("product", "id")),
            Column("Product Name", keys=("product_name",), path=("product", "name")),
            Column("Quantity", keys=("quantity",), justify="right"),
            Column("Consumed", keys=("consumed",), justify="right"),
            Column("Ends", keys=("end_date",), formatter=_date_formatter),
        ),
        sort_key=_sort_by("product_name", "product_id", "id"),
    ),
    "users.list": TableView(
        title="Users",
        columns=(
            Column("Username", keys=("username",)),
            Column("ID", keys=("id",)),
            Column(
                "Super Admin",
                keys=("super_admin",),
                formatter=_bool_formatter,
                justify="center",
            ),
        ),
        sort_key=_sort_by("username"),
    ),
    "roles.list": TableView(
        title="Roles",
        columns=(
            Column("Name", keys=("name",)),
            Column("ID", keys=("id",)),
            Column("Users", keys=("users",), formatter=_count_formatter, justify="right"),
            Column(
                "Permissions",
                keys=("permissions",),
                formatter=_count_formatter,
                justify="right",
            ),
        ),
        sort_key=_sort_by("name"),
    ),
}
