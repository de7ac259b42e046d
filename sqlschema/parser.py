"""
Schema Parser - recursive descent over the Scanner's token stream

This module provides:
- ParseError: raised on the first grammar violation, carries the partial schema
- Parser: consumes tokens through a one-token pushback buffer and builds a Schema
- parse_schema: convenience wrapper for strings and text streams

Only the shape emitted by schema dump tools is recognized:

    CREATE TABLE `name` (
      `col` type[(size)] [DEFAULT ...] [NULL | NOT NULL] [COMMENT '...'] [AUTO_INCREMENT],
      PRIMARY KEY (`col`),
      UNIQUE KEY `index` (`col`),
      KEY `index` (`col`),
      CONSTRAINT `name` FOREIGN KEY (`col`) REFERENCES `table` (`col`)
    ) key=value ...;

DROP, LOCK and UNLOCK statements are skipped. Keys and constraints cover a
single column; composite keys are rejected with a ParseError.
"""

from typing import Optional, Tuple

from .config import NULL_DEFAULT, CURRENT_TIMESTAMP_DEFAULT, SKIPPED_STATEMENTS
from .lexer import Scanner, Token, TokenType, DATA_TYPES
from .log import logger
from .schema import Column, Constraint, Table, Schema


SKIPPED_TOKENS = {TokenType[name] for name in SKIPPED_STATEMENTS}

INSIGNIFICANT_TOKENS = (TokenType.WS, TokenType.ANNOTATION)


class ParseError(SyntaxError):
    """Grammar violation; `schema` holds the tables completed before it"""

    def __init__(self, message: str, token: Optional[Token] = None, schema: Optional[Schema] = None):
        super().__init__(message)
        self.message = message
        self.token = token
        self.schema = schema if schema is not None else Schema()

    def __str__(self):
        return self.message


class Parser:
    """Syntax analyzer - converts a schema dump to a Schema"""

    def __init__(self, source):
        self.scanner = Scanner(source)
        self._last: Optional[Token] = None
        self._replay = False

    def parse(self) -> Schema:
        """Main entry point - parse every CREATE TABLE statement in the stream"""
        schema = Schema()
        while True:
            try:
                table = self._parse_statement()
            except ParseError as e:
                e.schema = schema
                logger.debug("Parse failed after %d table(s): %s", len(schema), e)
                raise

            if table is None:
                return schema

            schema[table.name] = table
            logger.debug("Parsed table %s (%d columns)", table.name, len(table.columns))

    # ========================================================================
    # Token buffer
    # ========================================================================

    def _next(self) -> Token:
        """Return the pushed back token, or scan a fresh one"""
        if self._replay:
            self._replay = False
            return self._last
        self._last = self.scanner.scan()
        return self._last

    def _pushback(self):
        """Replay the most recently returned token on the next read"""
        if self._replay:
            raise RuntimeError("pushback buffer already holds a token")
        if self._last is None:
            raise RuntimeError("no token to push back")
        self._replay = True

    def _next_significant(self) -> Token:
        """Next token, skipping whitespace and comments"""
        while True:
            token = self._next()
            if token.type not in INSIGNIFICANT_TOKENS:
                return token

    def _error(self, token: Token, expected: str) -> ParseError:
        return ParseError(f"found '{token.value}', expected {expected}", token)

    def _expect(self, token_type: TokenType, expected: str) -> Token:
        """Consume token of expected type or raise error"""
        token = self._next_significant()
        if token.type != token_type:
            raise self._error(token, expected)
        return token

    def _expect_ident(self, expected: str = "ident") -> str:
        """Consume a non-empty identifier (bare or backtick-quoted)"""
        token = self._next_significant()
        if token.type != TokenType.IDENT or not token.value:
            raise self._error(token, expected)
        return token.value

    # ========================================================================
    # Statements
    # ========================================================================

    def _parse_statement(self) -> Optional[Table]:
        """Parse the next CREATE TABLE, None at end of input"""
        while True:
            token = self._next_significant()
            if token.type in SKIPPED_TOKENS:
                if not self._skip_statement(token):
                    return None
            elif token.type == TokenType.SEMI_COLON:
                continue
            elif token.type == TokenType.CREATE:
                break
            elif token.type == TokenType.EOF:
                return None
            else:
                raise ParseError(f"unexpected {token.type.name}: '{token.value}'", token)

        token = self._next_significant()
        if token.type != TokenType.TABLE:
            raise ParseError(f"found CREATE '{token.value}', expected CREATE TABLE", token)

        token = self._next_significant()
        if token.type != TokenType.IDENT or not token.value:
            raise ParseError(f"found CREATE TABLE '{token.value}', expected CREATE TABLE `ident`", token)

        table = Table(token.value)
        self._expect(TokenType.OPEN_PAREN, "(")
        self._parse_table_items(table)
        self._parse_table_options(table)
        return table

    def _skip_statement(self, first: Token) -> bool:
        """Skip tokens through the next ';', False if input ends first"""
        logger.debug("Skipping %s statement", first.type.name)
        while True:
            token = self._next_significant()
            if token.type == TokenType.SEMI_COLON:
                return True
            if token.type == TokenType.EOF:
                return False

    def _parse_table_items(self, table: Table):
        """Parse column definitions, keys and constraints up to ')'"""
        while True:
            token = self._next_significant()

            if token.type == TokenType.IDENT:
                self._pushback()
                column = self._parse_column()
                table.columns[column.name] = column
            elif token.type == TokenType.PRIMARY:
                table.primary_key = self._parse_primary_key()
            elif token.type == TokenType.UNIQUE:
                self._expect(TokenType.KEY, "UNIQUE KEY")
                index, column_name = self._parse_key()
                table.unique_keys[index] = column_name
            elif token.type == TokenType.KEY:
                index, column_name = self._parse_key()
                table.keys[index] = column_name
            elif token.type == TokenType.CONSTRAINT:
                constraint = self._parse_constraint()
                table.constraints[constraint.foreign_key] = constraint
            elif token.type == TokenType.COMMA:
                continue
            elif token.type == TokenType.CLOSE_PAREN:
                return
            else:
                raise self._error(token, "ident or PRIMARY or UNIQUE or KEY or CONSTRAINT")

    # ========================================================================
    # Column definitions
    # ========================================================================

    def _parse_column(self) -> Column:
        """Parse `name type[(size)] [clause ...]` up to ',' or ')'"""
        name = self._expect_ident("column name")
        column_type, size = self._parse_type()
        column = Column(name, column_type, size)

        while True:
            token = self._next_significant()

            if token.type == TokenType.DEFAULT:
                column.default = self._parse_default()
                if column.default == NULL_DEFAULT:
                    column.nullable = True
            elif token.type == TokenType.NULL:
                column.nullable = True
            elif token.type == TokenType.NOT:
                self._expect(TokenType.NULL, "NULL")
                column.nullable = False
            elif token.type == TokenType.COMMENT:
                column.comment = self._expect(TokenType.STRING, "'comment'").value
            elif token.type == TokenType.AUTO_INCREMENT:
                column.auto_increment = True
            elif token.type in (TokenType.COMMA, TokenType.CLOSE_PAREN):
                self._pushback()
                return column
            elif token.type == TokenType.EOF:
                raise ParseError("unexpected EOF", token)
            else:
                raise self._error(token, "column constraint")

    def _parse_type(self) -> Tuple[str, int]:
        """Parse a data type keyword with an optional (size)"""
        token = self._next_significant()
        if token.type not in DATA_TYPES:
            raise self._error(token, "type")
        type_name = DATA_TYPES[token.type]

        open_paren = self._next_significant()
        if open_paren.type != TokenType.OPEN_PAREN:
            self._pushback()
            return type_name, 0

        size = self._next_significant()
        close_paren = self._next_significant()
        if size.type != TokenType.SIZE or close_paren.type != TokenType.CLOSE_PAREN:
            raise ParseError(
                f"found '{token.value}({size.value}{close_paren.value}', expected type(integer)",
                size
            )
        return type_name, int(size.value)

    def _parse_default(self) -> str:
        """Parse the value following DEFAULT"""
        token = self._next_significant()
        if token.type == TokenType.NULL:
            return NULL_DEFAULT
        if token.type == TokenType.CURRENT_TIMESTAMP:
            return CURRENT_TIMESTAMP_DEFAULT
        if token.type == TokenType.STRING:
            return token.value
        raise self._error(token, "NULL or value")

    # ========================================================================
    # Keys and constraints
    # ========================================================================

    def _parse_paren_ident(self, expected: str = "(`column_name`)") -> str:
        """Parse `(ident)`; a second column is rejected"""
        self._expect(TokenType.OPEN_PAREN, expected)
        name = self._expect_ident(expected)
        self._expect(TokenType.CLOSE_PAREN, ")")
        return name

    def _parse_primary_key(self) -> str:
        """Parse `PRIMARY KEY (col)` or `PRIMARY KEY col` after PRIMARY"""
        token = self._next_significant()
        if token.type != TokenType.KEY:
            raise ParseError(f"found 'PRIMARY {token.value}', expected PRIMARY KEY", token)

        token = self._next_significant()
        self._pushback()
        if token.type == TokenType.OPEN_PAREN:
            return self._parse_paren_ident()
        return self._expect_ident()

    def _parse_key(self) -> Tuple[str, str]:
        """Parse `index (col)` or `index col` after [UNIQUE] KEY"""
        index = self._expect_ident("index")

        token = self._next_significant()
        if token.type == TokenType.IDENT and token.value:
            return index, token.value
        if token.type == TokenType.OPEN_PAREN:
            self._pushback()
            return index, self._parse_paren_ident()
        raise self._error(token, "ident")

    def _parse_constraint(self) -> Constraint:
        """Parse `name FOREIGN KEY (col) REFERENCES table (col)` after CONSTRAINT"""
        index = self._expect_ident()

        first = self._next_significant()
        if first.type != TokenType.FOREIGN:
            raise ParseError(f"found '{first.value}', expected FOREIGN KEY", first)
        second = self._next_significant()
        if second.type != TokenType.KEY:
            raise ParseError(f"found '{first.value} {second.value}', expected FOREIGN KEY", second)

        foreign_key = self._parse_paren_ident()
        self._expect(TokenType.REFERENCES, "REFERENCES")
        table_name = self._expect_ident("`table_name`")
        column_name = self._parse_paren_ident()
        return Constraint(index, foreign_key, table_name, column_name)

    # ========================================================================
    # Table options
    # ========================================================================

    def _parse_table_options(self, table: Table):
        """Parse `key=value` pairs up to ';', DEFAULT is skipped as a separator"""
        while True:
            token = self._next_significant()
            if token.type == TokenType.SEMI_COLON:
                return
            if token.type != TokenType.DEFAULT:
                self._pushback()
            key, value = self._parse_option()
            table.extras[key] = value

    def _parse_option(self) -> Tuple[str, str]:
        key = self._next_significant()
        equal = self._next_significant()
        value = self._next_significant()
        if (key.type not in (TokenType.IDENT, TokenType.AUTO_INCREMENT)
                or equal.type != TokenType.EQUAL
                or value.type not in (TokenType.IDENT, TokenType.STRING, TokenType.SIZE)):
            raise ParseError(f"found '{key.value}{equal.value}{value.value}', expected key=value", key)
        return key.value, value.value


# ============================================================================
# Convenience function
# ============================================================================

def parse_schema(source) -> Schema:
    """Parse a schema dump (string or text stream) to a Schema"""
    return Parser(source).parse()
