"""
Schema model - tables, columns, keys and constraints recovered from a dump

This module provides:
- Column: one column definition
- Constraint: one foreign key constraint
- Table: columns plus primary, unique and secondary keys, constraints and options
- Schema: table name -> Table, in the order tables were found
"""

from typing import List, Dict, Optional
from dataclasses import dataclass, field, asdict


@dataclass
class Column:
    """Column definition with type and attributes"""
    name: str
    type: str  # lowercase type name, e.g. 'bigint'
    size: int = 0  # 0 when no (size) was given
    default: Optional[str] = None  # None, 'null', 'current_timestamp' or the quoted text
    comment: str = ''
    nullable: bool = True
    auto_increment: bool = False

    def __repr__(self):
        column_type = f"{self.type}({self.size})" if self.size else self.type
        attributes = []
        if not self.nullable:
            attributes.append("NOT NULL")
        if self.default is not None:
            attributes.append(f"DEFAULT {self.default}")
        if self.auto_increment:
            attributes.append("AUTO_INCREMENT")
        attribute_str = " " + " ".join(attributes) if attributes else ""
        return f"{self.name} {column_type}{attribute_str}"


@dataclass
class Constraint:
    """Foreign key constraint"""
    index: str        # constraint name
    foreign_key: str  # referencing column
    table_name: str   # referenced table
    column_name: str  # referenced column


@dataclass
class Table:
    """Table metadata - schema definition"""
    name: str
    columns: Dict[str, Column] = field(default_factory=dict)
    primary_key: str = ''  # single column, '' when none declared
    unique_keys: Dict[str, str] = field(default_factory=dict)  # index -> column
    keys: Dict[str, str] = field(default_factory=dict)  # index -> column
    constraints: Dict[str, Constraint] = field(default_factory=dict)  # referencing column -> constraint
    extras: Dict[str, str] = field(default_factory=dict)  # table options, e.g. ENGINE -> InnoDB

    def get_column(self, name: str) -> Optional[Column]:
        """Get column by name"""
        return self.columns.get(name)

    def to_dict(self) -> dict:
        return asdict(self)


class Schema(dict):
    """Table name -> Table, in discovery order"""

    def list_tables(self) -> List[str]:
        """List all table names"""
        return list(self.keys())

    def get_table(self, table_name: str) -> Table:
        """Retrieve table schema"""
        if table_name not in self:
            raise ValueError(f"Table '{table_name}' does not exist")
        return self[table_name]

    def to_dict(self) -> dict:
        return {name: table.to_dict() for name, table in self.items()}
