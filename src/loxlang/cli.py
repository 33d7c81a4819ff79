"""
loxlang Command-Line Interface.

Provides commands to scan and parse Lox expression files.

Usage:
    loxlang run input.lox           # Tokens, then the AST tree
    loxlang tokens input.lox        # Token listing
    loxlang ast input.lox --tree    # Parsed AST
    loxlang check input.lox         # Syntax check
    loxlang repl                    # Interactive mode
    loxlang                         # Same as repl
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional

from loxlang import __version__
from loxlang.compiler.lexer import Lexer
from loxlang.compiler.parser import Parser
from loxlang.compiler.printer import format_tree, print_ast, to_json
from loxlang.compiler.tokens import Token
from loxlang.utils.diagnostics import render_error
from loxlang.utils.errors import LoxError


# =============================================================================
# ANSI Color Codes for Terminal Output
# =============================================================================


class Colors:
    """ANSI escape codes for colored terminal output."""

    GREEN = "\033[92m"
    RESET = "\033[0m"

    @classmethod
    def disable(cls) -> None:
        """Disable all colors (for non-TTY output)."""
        cls.GREEN = ""
        cls.RESET = ""


def _init_colors() -> None:
    """Initialize colors based on terminal capabilities."""
    # Disable colors if not a TTY or if NO_COLOR is set
    import os

    if not sys.stdout.isatty() or os.environ.get("NO_COLOR"):
        Colors.disable()


# Initialize on module load
_init_colors()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="loxlang",
        description="loxlang - scanner and parser for Lox expressions",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Run command
    run_parser = subparsers.add_parser(
        "run",
        aliases=["r"],
        help="Scan and parse a Lox file, showing tokens and the AST",
    )
    run_parser.add_argument(
        "input",
        type=Path,
        help="Input Lox file (.lox)",
    )

    # Tokens command
    tokens_parser = subparsers.add_parser(
        "tokens",
        help="Show tokens for a Lox file",
    )
    tokens_parser.add_argument(
        "input",
        type=Path,
        help="Input Lox file (.lox)",
    )
    tokens_parser.add_argument(
        "--json",
        action="store_true",
        help="Output tokens as a JSON array",
    )

    # AST command
    ast_parser = subparsers.add_parser(
        "ast",
        help="Show the AST for a Lox file",
    )
    ast_parser.add_argument(
        "input",
        type=Path,
        help="Input Lox file (.lox)",
    )
    ast_format = ast_parser.add_mutually_exclusive_group()
    ast_format.add_argument(
        "--json",
        action="store_true",
        help="Output the AST as JSON",
    )
    ast_format.add_argument(
        "--tree",
        action="store_true",
        help="Output the AST as an indented tree",
    )

    # Check command
    check_parser = subparsers.add_parser(
        "check",
        help="Check a Lox file for syntax errors",
    )
    check_parser.add_argument(
        "input",
        type=Path,
        help="Input Lox file (.lox)",
    )

    # REPL command
    subparsers.add_parser(
        "repl",
        aliases=["i"],
        help="Start interactive REPL mode",
    )

    return parser


def _read_source(input_path: Path) -> Optional[str]:
    """Read a source file, reporting a missing one on stderr."""
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return None
    return input_path.read_text(encoding="utf-8")


def _token_to_dict(token: Token) -> dict[str, Any]:
    return {"type": token.type.name, "lexeme": token.lexeme, "line": token.line}


def cmd_run(args: argparse.Namespace) -> int:
    """Handle the run command: print the tokens, then the AST tree."""
    input_path: Path = args.input

    source = _read_source(input_path)
    if source is None:
        return 1

    try:
        tokens = Lexer(source, str(input_path)).tokenize()
        for token in tokens:
            print(token)

        ast = Parser(tokens, str(input_path)).parse()
        print(format_tree(ast))
        return 0

    except LoxError as e:
        print(e, file=sys.stderr)
        return 1


def cmd_tokens(args: argparse.Namespace) -> int:
    """Handle the tokens command."""
    input_path: Path = args.input

    source = _read_source(input_path)
    if source is None:
        return 1

    try:
        tokens = Lexer(source, str(input_path)).tokenize()

        if args.json:
            print(json.dumps([_token_to_dict(token) for token in tokens], indent=2))
        else:
            for token in tokens:
                print(token)

        return 0

    except LoxError as e:
        print(e, file=sys.stderr)
        return 1


def cmd_ast(args: argparse.Namespace) -> int:
    """Handle the ast command."""
    input_path: Path = args.input

    source = _read_source(input_path)
    if source is None:
        return 1

    try:
        tokens = Lexer(source, str(input_path)).tokenize()
        ast = Parser(tokens, str(input_path)).parse()

        if args.json:
            print(to_json(ast))
        elif args.tree:
            print(format_tree(ast))
        else:
            print(print_ast(ast))

        return 0

    except LoxError as e:
        print(e, file=sys.stderr)
        return 1


def cmd_check(args: argparse.Namespace) -> int:
    """Handle the check command."""
    input_path: Path = args.input

    source = _read_source(input_path)
    if source is None:
        return 1

    try:
        tokens = Lexer(source, str(input_path)).tokenize()
        Parser(tokens, str(input_path)).parse()

        print(f"{Colors.GREEN}OK:{Colors.RESET} {input_path} (no syntax errors)")
        return 0

    except LoxError as e:
        use_color = sys.stdout.isatty()
        print(render_error(e, source, str(input_path), use_color=use_color), file=sys.stderr)
        return 1


def cmd_repl(args: argparse.Namespace) -> int:
    """Handle the repl command - start interactive mode."""
    from loxlang.repl import REPLSession

    session = REPLSession()
    session.run()
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # No command starts the REPL
    if args.command is None:
        return cmd_repl(args)

    command_handlers = {
        "run": cmd_run,
        "r": cmd_run,
        "tokens": cmd_tokens,
        "ast": cmd_ast,
        "check": cmd_check,
        "repl": cmd_repl,
        "i": cmd_repl,
    }

    handler = command_handlers.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
