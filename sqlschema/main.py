"""
Main entry point for sqlschema

Usage:
    python -m sqlschema.main [FILE] [--format text|json] [--table NAME] [--all] [--tokens]

Example:
    mysqldump --no-data geo | python -m sqlschema.main --table user
"""

import argparse
import json
import sys

from .config import DEFAULT_ENCODING, OUTPUT_FORMATS, JSON_INDENT
from .display import format_table_list, format_table, format_schema, format_tokens
from .lexer import Scanner
from .log import logger, configure_logging
from .parser import Parser, ParseError


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='sqlschema',
        description='sqlschema - read table structure from a CREATE TABLE dump',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List tables in a dump file
  sqlschema schema.sql

  # Describe one table
  sqlschema schema.sql --table user

  # Dump the parsed schema as JSON from standard input
  mysqldump --no-data geo | sqlschema --format json
        """
    )

    parser.add_argument(
        'file',
        nargs='?',
        default='-',
        help='Schema dump to read (default: standard input)'
    )

    parser.add_argument(
        '--format',
        choices=OUTPUT_FORMATS,
        default='text',
        help='Output format (default: text)'
    )

    parser.add_argument(
        '--table', '-t',
        metavar='NAME',
        help='Describe a single table'
    )

    parser.add_argument(
        '--all', '-a',
        action='store_true',
        help='Describe every table'
    )

    parser.add_argument(
        '--tokens',
        action='store_true',
        help='Print the token stream instead of parsing'
    )

    parser.add_argument(
        '--partial',
        action='store_true',
        help='On a parse error, still print the tables read before it'
    )

    parser.add_argument(
        '--encoding',
        default=DEFAULT_ENCODING,
        help=f'Input file encoding (default: {DEFAULT_ENCODING})'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Log parser progress to standard error'
    )

    parser.add_argument(
        '--log-file',
        metavar='PATH',
        help='Also write log records to PATH'
    )

    return parser


def main(argv=None) -> int:
    """Main entry point"""
    args = build_arg_parser().parse_args(argv)
    configure_logging(log_file=args.log_file, verbose=args.verbose)

    try:
        if args.file == '-':
            return run(args, sys.stdin)
        with open(args.file, 'r', encoding=args.encoding) as f:
            return run(args, f)

    except FileNotFoundError:
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        # Raised while scanning, the file is read lazily
        print(f"Error: {args.file}: {e}", file=sys.stderr)
        return 1


def run(args, stream) -> int:
    """Parse the stream and print the requested view"""
    if args.tokens:
        print(format_tokens(Scanner(stream).tokenize()))
        return 0

    try:
        schema = Parser(stream).parse()
    except ParseError as e:
        logger.debug("Parse error in %s after %d table(s): %s", args.file, len(e.schema), e)
        print(f"Error: {e}", file=sys.stderr)
        if args.partial and e.schema:
            display_schema(args, e.schema)
        return 1

    return display_schema(args, schema)


def display_schema(args, schema) -> int:
    """Print schema according to the output options"""
    if args.table:
        try:
            table = schema.get_table(args.table)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        if args.format == 'json':
            print(json.dumps(table.to_dict(), indent=JSON_INDENT))
        else:
            print(format_table(table))
        return 0

    if args.format == 'json':
        print(json.dumps(schema.to_dict(), indent=JSON_INDENT))
    elif args.all:
        print(format_schema(schema))
    else:
        print(format_table_list(schema))
    return 0


if __name__ == '__main__':
    sys.exit(main())
