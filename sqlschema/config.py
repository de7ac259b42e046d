"""
Configuration file for the schema dump parser.
Contains tunable parameters for scanning, parsing, logging and the CLI.
"""

import os

# ============================================================================
# Scanner Configuration
# ============================================================================

# Characters treated as whitespace (carriage return covers CRLF dumps)
WHITESPACE = ' \t\n\r'

# Characters allowed after the first letter of a bare identifier
IDENT_EXTRA_CHARS = '_'

# Literal carried by the EOF token
EOF_LITERAL = 'EOF'

# Characters pulled from the stream per read
READ_SIZE = 1

# ============================================================================
# Parser Configuration
# ============================================================================

# Stored default for `DEFAULT NULL`
NULL_DEFAULT = 'null'

# Stored default for `DEFAULT CURRENT_TIMESTAMP`
CURRENT_TIMESTAMP_DEFAULT = 'current_timestamp'

# Statements skipped wholesale up to the next semicolon
SKIPPED_STATEMENTS = ['DROP', 'LOCK', 'UNLOCK']

# ============================================================================
# Debug and Logging
# ============================================================================

# Logger name shared by every module of the package
LOGGER_NAME = 'sqlschema'

# Log level (overridable from the environment)
LOG_LEVEL = os.getenv('SQLSCHEMA_LOG_LEVEL', 'WARNING')

# Log file location (None disables the file handler)
LOG_FILE = os.getenv('SQLSCHEMA_LOG_FILE')

# Formatters
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
LOG_FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'

# Verbose output
VERBOSE = False

# ============================================================================
# CLI Configuration
# ============================================================================

# Encoding used to read dump files
DEFAULT_ENCODING = 'utf-8'

# Supported output formats
OUTPUT_FORMATS = ['text', 'json']

# Indentation for JSON output
JSON_INDENT = 2
