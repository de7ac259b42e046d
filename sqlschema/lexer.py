"""
Scanner - lexical analysis of schema dump text

This module provides:
- TokenType: the closed set of lexical categories
- Token: a scanned token with its literal text
- Scanner: pulls characters from a text stream and produces one token per call
"""

from typing import List
from dataclasses import dataclass
from enum import Enum, auto
import io

from .config import WHITESPACE, IDENT_EXTRA_CHARS, EOF_LITERAL, READ_SIZE


class TokenType(Enum):
    """Token types for schema dump lexical analysis"""
    # Special
    ILLEGAL = auto()
    EOF = auto()
    ANNOTATION = auto()  # /* ... */ and -- ...
    WS = auto()          # space, tab and newline

    # Literals
    STRING = auto()
    IDENT = auto()       # table_name, index, column_name, engine_name, charset_name
    SIZE = auto()        # unsigned integer, e.g. a datatype size

    # Punctuation
    COMMA = auto()
    BACKTICK = auto()
    SEMI_COLON = auto()
    OPEN_PAREN = auto()
    CLOSE_PAREN = auto()
    EQUAL = auto()

    # Data types
    BIT = auto()
    TINYINT = auto()
    SMALLINT = auto()
    INT = auto()
    BIGINT = auto()
    FLOAT = auto()
    DOUBLE = auto()
    VARCHAR = auto()
    LONGTEXT = auto()
    MEDIUMTEXT = auto()
    DATE = auto()
    TIME = auto()
    DATETIME = auto()
    TIMESTAMP = auto()

    # Keywords
    DROP = auto()
    LOCK = auto()
    UNLOCK = auto()
    TABLES = auto()
    WRITE = auto()
    IF = auto()
    EXISTS = auto()
    CREATE = auto()
    TABLE = auto()
    DEFAULT = auto()
    NOT = auto()
    NULL = auto()
    COMMENT = auto()
    KEY = auto()
    UNIQUE = auto()
    CONSTRAINT = auto()
    PRIMARY = auto()
    FOREIGN = auto()
    REFERENCES = auto()
    AUTO_INCREMENT = auto()
    CURRENT_TIMESTAMP = auto()


# Canonical (lowercase) name of each data type keyword
DATA_TYPES = {
    TokenType.BIT: 'bit',
    TokenType.TINYINT: 'tinyint',
    TokenType.SMALLINT: 'smallint',
    TokenType.INT: 'int',
    TokenType.BIGINT: 'bigint',
    TokenType.FLOAT: 'float',
    TokenType.DOUBLE: 'double',
    TokenType.VARCHAR: 'varchar',
    TokenType.LONGTEXT: 'longtext',
    TokenType.MEDIUMTEXT: 'mediumtext',
    TokenType.DATE: 'date',
    TokenType.TIME: 'time',
    TokenType.DATETIME: 'datetime',
    TokenType.TIMESTAMP: 'timestamp',
}

# Keywords mapping (case-insensitive, looked up upper-cased)
KEYWORDS = {name.upper(): token_type for token_type, name in DATA_TYPES.items()}
KEYWORDS.update({
    'DROP': TokenType.DROP,
    'LOCK': TokenType.LOCK,
    'UNLOCK': TokenType.UNLOCK,
    'TABLES': TokenType.TABLES,
    'WRITE': TokenType.WRITE,
    'IF': TokenType.IF,
    'EXISTS': TokenType.EXISTS,
    'CREATE': TokenType.CREATE,
    'TABLE': TokenType.TABLE,
    'DEFAULT': TokenType.DEFAULT,
    'NOT': TokenType.NOT,
    'NULL': TokenType.NULL,
    'COMMENT': TokenType.COMMENT,
    'KEY': TokenType.KEY,
    'UNIQUE': TokenType.UNIQUE,
    'CONSTRAINT': TokenType.CONSTRAINT,
    'PRIMARY': TokenType.PRIMARY,
    'FOREIGN': TokenType.FOREIGN,
    'REFERENCES': TokenType.REFERENCES,
    'AUTO_INCREMENT': TokenType.AUTO_INCREMENT,
    'CURRENT_TIMESTAMP': TokenType.CURRENT_TIMESTAMP,
})

PUNCTUATION = {
    ',': TokenType.COMMA,
    '(': TokenType.OPEN_PAREN,
    ')': TokenType.CLOSE_PAREN,
    ';': TokenType.SEMI_COLON,
    '=': TokenType.EQUAL,
}

# Sentinel returned by the reader at end of input
EOF_CHAR = ''


def _is_letter(ch: str) -> bool:
    return ('a' <= ch <= 'z') or ('A' <= ch <= 'Z')


def _is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


@dataclass
class Token:
    """Represents a single token in the input stream"""
    type: TokenType
    value: str
    position: int  # Character offset where the token starts

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, pos={self.position})"


class Scanner:
    """Lexical analyzer - produces one token per scan() call"""

    def __init__(self, source):
        if isinstance(source, str):
            source = io.StringIO(source)
        self.reader = source
        self.position = 0
        self._unread_char = None

    def scan(self) -> Token:
        """Scan one token and return it with its literal text"""
        start = self.position
        ch = self._read()

        if ch == EOF_CHAR:
            return Token(TokenType.EOF, EOF_LITERAL, start)

        if ch in WHITESPACE:
            return self._scan_whitespace(ch, start)

        if _is_letter(ch):
            return self._scan_ident(ch, start)

        if _is_digit(ch):
            return self._scan_digits(ch, start)

        if ch == '`':
            return self._scan_quoted('`', TokenType.IDENT, start)

        if ch == "'":
            return self._scan_quoted("'", TokenType.STRING, start)

        if ch == '/':
            next_char = self._read()
            if next_char == '*':
                return self._scan_block_comment(start)
            self._unread(next_char)
            return Token(TokenType.ILLEGAL, ch, start)

        if ch == '-':
            next_char = self._read()
            if next_char == '-':
                return self._scan_line_comment(start)
            self._unread(next_char)
            return Token(TokenType.ILLEGAL, ch, start)

        if ch in PUNCTUATION:
            return Token(PUNCTUATION[ch], ch, start)

        return Token(TokenType.ILLEGAL, ch, start)

    def tokenize(self) -> List[Token]:
        """Scan the whole stream; the last token is always EOF"""
        tokens = []
        while True:
            token = self.scan()
            tokens.append(token)
            if token.type == TokenType.EOF:
                return tokens

    def _read(self) -> str:
        """Read next character, EOF_CHAR at end of input"""
        if self._unread_char is not None:
            ch = self._unread_char
            self._unread_char = None
        else:
            ch = self.reader.read(READ_SIZE)
        if ch != EOF_CHAR:
            self.position += 1
        return ch

    def _unread(self, ch: str):
        """Push a single character back onto the stream"""
        if ch == EOF_CHAR:
            return
        assert self._unread_char is None, "only one character can be unread"
        self._unread_char = ch
        self.position -= 1

    def _scan_whitespace(self, first: str, start: int) -> Token:
        value = first
        while True:
            ch = self._read()
            if ch == EOF_CHAR:
                break
            if ch not in WHITESPACE:
                self._unread(ch)
                break
            value += ch
        return Token(TokenType.WS, value, start)

    def _scan_ident(self, first: str, start: int) -> Token:
        """Read identifier or keyword"""
        value = first
        while True:
            ch = self._read()
            if ch == EOF_CHAR:
                break
            if not (_is_letter(ch) or _is_digit(ch) or ch in IDENT_EXTRA_CHARS):
                self._unread(ch)
                break
            value += ch

        token_type = KEYWORDS.get(value.upper(), TokenType.IDENT)
        return Token(token_type, value, start)

    def _scan_digits(self, first: str, start: int) -> Token:
        value = first
        while True:
            ch = self._read()
            if ch == EOF_CHAR:
                break
            if not _is_digit(ch):
                self._unread(ch)
                break
            value += ch
        return Token(TokenType.SIZE, value, start)

    def _scan_quoted(self, quote: str, token_type: TokenType, start: int) -> Token:
        """Read up to the closing quote; no escape sequences"""
        value = ''
        while True:
            ch = self._read()
            if ch == EOF_CHAR:
                # Unterminated literal
                return Token(TokenType.ILLEGAL, quote + value, start)
            if ch == quote:
                return Token(token_type, value, start)
            value += ch

    def _scan_block_comment(self, start: int) -> Token:
        """Skip a /* ... */ comment, the body is discarded"""
        prev = ''
        while True:
            ch = self._read()
            if ch == EOF_CHAR:
                return Token(TokenType.ILLEGAL, '/*', start)
            if prev == '*' and ch == '/':
                return Token(TokenType.ANNOTATION, '', start)
            prev = ch

    def _scan_line_comment(self, start: int) -> Token:
        """Skip a -- comment through its newline (or end of input)"""
        while True:
            ch = self._read()
            if ch == '\n' or ch == EOF_CHAR:
                return Token(TokenType.ANNOTATION, '', start)
