"""
sqlschema - table structure from CREATE TABLE dumps

Reads the CREATE TABLE statements of a schema dump (as written by tools
such as mysqldump --no-data) into Table objects with their columns, keys,
foreign key constraints and table options.
"""

__version__ = '0.1.0'

from sqlschema.lexer import Scanner, Token, TokenType, KEYWORDS, DATA_TYPES
from sqlschema.schema import Column, Constraint, Table, Schema
from sqlschema.parser import Parser, ParseError, parse_schema

__all__ = [
    'Scanner', 'Token', 'TokenType', 'KEYWORDS', 'DATA_TYPES',
    'Column', 'Constraint', 'Table', 'Schema',
    'Parser', 'ParseError', 'parse_schema'
]
