"""
Display - plain text rendering of a parsed Schema

Provides:
- table listing (name, columns, primary key)
- table description (columns, indexes, foreign keys, options)
- token stream dump
"""

from typing import List

from .lexer import Token
from .schema import Table, Schema


def format_table_list(schema: Schema) -> str:
    """List all tables"""
    if not schema:
        return "No tables found"

    lines = ["List of tables:", "-" * 60]
    lines.append(f"  {'Table':30} {'Columns':8} {'Primary Key':18}")
    lines.append("-" * 60)
    for table_name in schema.list_tables():
        table = schema[table_name]
        lines.append(f"  {table_name:30} {len(table.columns):<8} {table.primary_key:18}".rstrip())
    lines.append(f"({len(schema)} table{'s' if len(schema) != 1 else ''})")
    return "\n".join(lines)


def _column_key(table: Table, column_name: str) -> str:
    if column_name == table.primary_key:
        return "PRI"
    if column_name in table.unique_keys.values():
        return "UNI"
    if column_name in table.keys.values() or column_name in table.constraints:
        return "MUL"
    return ""


def format_table(table: Table) -> str:
    """Describe table schema"""
    columns = list(table.columns.values())
    rows = []
    for col in columns:
        column_type = f"{col.type}({col.size})" if col.size else col.type
        rows.append([
            col.name,
            column_type,
            "YES" if col.nullable else "NO",
            "NULL" if col.default is None or col.default == "null" else col.default,
            _column_key(table, col.name),
            "auto_increment" if col.auto_increment else "",
        ])

    header = ["Column", "Type", "Nullable", "Default", "Key", "Extra"]

    # Calculate column widths
    widths = [len(name) for name in header]
    for row in rows:
        for i, value in enumerate(row):
            widths[i] = max(widths[i], len(value))

    lines = [f"Table: {table.name}"]
    lines.append(" | ".join(name.ljust(widths[i]) for i, name in enumerate(header)).rstrip())
    lines.append("-+-".join("-" * w for w in widths))
    for row in rows:
        lines.append(" | ".join(value.ljust(widths[i]) for i, value in enumerate(row)))

    if table.primary_key:
        lines.append(f"Primary Key: {table.primary_key}")

    indexes = []
    for index, column_name in table.unique_keys.items():
        indexes.append(f"  {index} on ({column_name}) UNIQUE")
    for index, column_name in table.keys.items():
        indexes.append(f"  {index} on ({column_name})")
    if indexes:
        lines.append("Indexes:")
        lines.extend(indexes)

    if table.constraints:
        lines.append("Foreign Keys:")
        for constraint in table.constraints.values():
            lines.append(
                f"  {constraint.index} ({constraint.foreign_key}) "
                f"REFERENCES {constraint.table_name} ({constraint.column_name})"
            )

    if table.extras:
        lines.append("Options: " + " ".join(f"{k}={v}" for k, v in table.extras.items()))

    return "\n".join(lines)


def format_schema(schema: Schema) -> str:
    """Describe every table"""
    return "\n\n".join(format_table(table) for table in schema.values())


def format_tokens(tokens: List[Token]) -> str:
    """One line per token: offset, type and literal"""
    return "\n".join(f"{token.position:6} {token.type.name:18} {token.value!r}" for token in tokens)
