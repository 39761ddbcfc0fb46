"""
Command-line driver: tokenize and parse a source file, then print the
tokens, the syntax tree and any diagnostics.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .lexer import Lexer
from .parser import Parser, format_tree, format_tokens

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DIAGNOSTICS = 1
EXIT_FAILURE = 2


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minijava",
        description="Tokenize and parse a minijava source file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    minijava Example.java                  # Print the syntax tree
    minijava --tokens Example.java         # Also print the token list
    minijava --no-tree -v Example.java     # Diagnostics only, with debug logging
        """
    )

    parser.add_argument('file', help='Source file to analyze')
    parser.add_argument('--tokens', action='store_true',
                        help='Print the token list')
    parser.add_argument('--no-tree', action='store_true',
                        help='Do not print the syntax tree')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit status."""
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        with open(args.file, 'r', encoding='utf-8') as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"error: cannot read {args.file}: {e}", file=sys.stderr)
        return EXIT_FAILURE

    lexer = Lexer(source, args.file)
    tokens = lexer.tokenize()

    if args.tokens:
        print("Tokens:")
        print(format_tokens(tokens))
        print()

    for warning in lexer.get_diagnostics():
        logger.info("%s", warning.diagnostic.describe().rstrip())

    result = Parser(tokens).parse()

    if result.root is not None and not args.no_tree:
        print("Syntax tree:")
        print(format_tree(result.root))

    if result.diagnostics:
        print("\nDiagnostics:", file=sys.stderr)
        for message in result.diagnostics:
            print(f"  {message}", file=sys.stderr)

    if not result.ok:
        return EXIT_FAILURE
    return EXIT_DIAGNOSTICS if result.has_errors() else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
