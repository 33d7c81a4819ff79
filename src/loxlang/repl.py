"""
loxlang Interactive REPL (Read-Eval-Print Loop).

Provides an interactive shell that scans and parses each input line and
prints the resulting AST, with command handling, tab completion and history.

Usage:
    loxlang repl
    loxlang

Example session:
    >> 1 + 2 * 3
    (+ 1 (* 2 3))

    >> (1 +
    .. 2)
    (+ 1 2)

    >> :tokens !=
    Token(BANG_EQUAL, '!=', line 1)

    >> 1 1
    [line 1] Error: unexpected trailing token: 1
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

try:
    import readline

    HAS_READLINE = True
except ImportError:
    # readline not available on some platforms (e.g., Windows without pyreadline)
    HAS_READLINE = False

from loxlang import __version__
from loxlang.compiler.lexer import Lexer
from loxlang.compiler.parser import Parser
from loxlang.compiler.printer import format_tree, print_ast, to_json
from loxlang.compiler.tokens import KEYWORDS, TokenType
from loxlang.utils.errors import LoxError

HISTORY_ENV_VAR = "LOXLANG_HISTORY"
HISTORY_LENGTH = 1000


# =============================================================================
# ANSI Color Codes
# =============================================================================


class Colors:
    """ANSI escape codes for colored terminal output."""

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RESET = "\033[0m"

    @classmethod
    def disable(cls) -> None:
        """Disable all colors."""
        for attr in ["RED", "GREEN", "YELLOW", "CYAN", "BOLD", "DIM", "RESET"]:
            setattr(cls, attr, "")


def _init_colors() -> None:
    """Initialize colors based on terminal capabilities."""
    if not sys.stdout.isatty() or os.environ.get("NO_COLOR"):
        Colors.disable()


_init_colors()


def history_path() -> Path:
    """Location of the persistent readline history file."""
    override = os.environ.get(HISTORY_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".loxlang_history"


# =============================================================================
# REPL Commands
# =============================================================================


@dataclass
class REPLCommand:
    """A REPL command definition."""

    name: str
    aliases: tuple[str, ...] = ()
    help_text: str = ""
    handler: Optional[Callable[["REPLSession", str], Optional[str]]] = None


# =============================================================================
# REPL Session
# =============================================================================


class REPLSession:
    """
    Interactive REPL session for Lox expressions.

    Every input is scanned and parsed on its own; nothing carries over
    between inputs except the line history. A scan or parse error is
    reported and the session keeps reading.
    """

    def __init__(self) -> None:
        """Initialize a new REPL session."""
        self.history: list[str] = []
        self.running = True

        # Commands
        self._commands = self._setup_commands()

        # Session configuration
        self.prompt = ">> "
        self.continuation_prompt = ".. "

    def _setup_commands(self) -> dict[str, REPLCommand]:
        """Setup REPL commands."""
        commands = {
            "help": REPLCommand(
                name="help",
                aliases=("h", "?"),
                help_text="Show this help message",
                handler=self._cmd_help,
            ),
            "quit": REPLCommand(
                name="quit",
                aliases=("q", "exit"),
                help_text="Exit the REPL",
                handler=self._cmd_quit,
            ),
            "tokens": REPLCommand(
                name="tokens",
                aliases=("t",),
                help_text="Show the tokens of an expression",
                handler=self._cmd_tokens,
            ),
            "ast": REPLCommand(
                name="ast",
                aliases=(),
                help_text="Show the AST of an expression as a tree",
                handler=self._cmd_ast,
            ),
            "json": REPLCommand(
                name="json",
                aliases=("j",),
                help_text="Show the AST of an expression as JSON",
                handler=self._cmd_json,
            ),
            "history": REPLCommand(
                name="history",
                aliases=("hist",),
                help_text="Show the inputs of this session",
                handler=self._cmd_history,
            ),
        }

        # Build alias lookup
        alias_map = {}
        for cmd in commands.values():
            alias_map[cmd.name] = cmd
            for alias in cmd.aliases:
                alias_map[alias] = cmd

        return alias_map

    # -------------------------------------------------------------------------
    # Command Handlers
    # -------------------------------------------------------------------------

    def _cmd_help(self, session: "REPLSession", args: str) -> str:
        """Show help message."""
        lines = [
            f"{Colors.BOLD}Commands:{Colors.RESET}",
            f"  {Colors.CYAN}:help{Colors.RESET}           Show this help",
            f"  {Colors.CYAN}:quit, :q{Colors.RESET}       Exit REPL",
            f"  {Colors.CYAN}:tokens <expr>{Colors.RESET}  Show tokens of expression",
            f"  {Colors.CYAN}:ast <expr>{Colors.RESET}     Show AST of expression as a tree",
            f"  {Colors.CYAN}:json <expr>{Colors.RESET}    Show AST of expression as JSON",
            f"  {Colors.CYAN}:history{Colors.RESET}        Show inputs of this session",
            "",
            f"{Colors.BOLD}Syntax:{Colors.RESET}",
            f"  {Colors.GREEN}1 + 2 * 3{Colors.RESET}            Arithmetic",
            f"  {Colors.GREEN}-1 < 2 == !false{Colors.RESET}     Comparison and equality",
            f'  {Colors.GREEN}"a", (nil), 3.5{Colors.RESET}      Series and grouping',
        ]
        return "\n".join(lines)

    def _cmd_quit(self, session: "REPLSession", args: str) -> str:
        """Exit the REPL."""
        self.running = False
        return f"{Colors.DIM}Goodbye!{Colors.RESET}"

    def _cmd_tokens(self, session: "REPLSession", args: str) -> str:
        """Show the tokens of an expression."""
        if not args.strip():
            return f"{Colors.RED}Error: :tokens requires an expression{Colors.RESET}"

        try:
            tokens = Lexer(args).tokenize()
        except LoxError as e:
            return f"{Colors.RED}{e}{Colors.RESET}"

        return "\n".join(repr(token) for token in tokens)

    def _cmd_ast(self, session: "REPLSession", args: str) -> str:
        """Show the AST of an expression."""
        if not args.strip():
            return f"{Colors.RED}Error: :ast requires an expression{Colors.RESET}"

        try:
            ast = Parser(Lexer(args).tokenize()).parse()
        except LoxError as e:
            return f"{Colors.RED}{e}{Colors.RESET}"

        return format_tree(ast)

    def _cmd_json(self, session: "REPLSession", args: str) -> str:
        """Show the AST of an expression as JSON."""
        if not args.strip():
            return f"{Colors.RED}Error: :json requires an expression{Colors.RESET}"

        try:
            ast = Parser(Lexer(args).tokenize()).parse()
            return to_json(ast)
        except LoxError as e:
            return f"{Colors.RED}{e}{Colors.RESET}"

    def _cmd_history(self, session: "REPLSession", args: str) -> str:
        """Show the inputs of this session."""
        if not self.history:
            return f"{Colors.DIM}(no history){Colors.RESET}"
        width = len(str(len(self.history)))
        return "\n".join(
            f"{index:>{width}}  {entry}" for index, entry in enumerate(self.history, 1)
        )

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def eval_line(self, line: str) -> Optional[str]:
        """
        Evaluate a single line of input.

        Returns the result string or None if no output.
        """
        line = line.strip()
        if not line:
            return None

        # Handle commands
        if line.startswith(":"):
            return self._handle_command(line)

        try:
            ast = Parser(Lexer(line).tokenize()).parse()
        except LoxError as e:
            return f"{Colors.RED}{e}{Colors.RESET}"

        return print_ast(ast)

    def _handle_command(self, cmd: str) -> str:
        """Handle a REPL command."""
        parts = cmd[1:].split(maxsplit=1)
        command_name = parts[0].lower() if parts else ""
        args = parts[1] if len(parts) > 1 else ""

        if command_name in self._commands:
            cmd_obj = self._commands[command_name]
            if cmd_obj.handler:
                return cmd_obj.handler(self, args) or ""
            return f"{Colors.YELLOW}Command not implemented: {command_name}{Colors.RESET}"

        return f"{Colors.RED}Unknown command: :{command_name}{Colors.RESET}\nType :help for available commands"

    def _is_incomplete(self, line: str) -> bool:
        """Check if a line is incomplete (needs continuation)."""
        if line.lstrip().startswith(":"):
            return False
        try:
            tokens = Lexer(line).tokenize()
        except LoxError:
            # Let eval_line report it
            return False
        depth = 0
        for token in tokens:
            if token.type == TokenType.LEFT_PAREN:
                depth += 1
            elif token.type == TokenType.RIGHT_PAREN:
                depth -= 1
        return depth > 0

    # -------------------------------------------------------------------------
    # Main Loop
    # -------------------------------------------------------------------------

    def _load_history(self) -> None:
        history_file = history_path()
        try:
            if history_file.exists():
                readline.read_history_file(str(history_file))
        except OSError:
            pass

    def _save_history(self) -> None:
        history_file = history_path()
        try:
            readline.set_history_length(HISTORY_LENGTH)
            readline.write_history_file(str(history_file))
        except OSError:
            pass

    def run(self) -> None:
        """Main REPL loop."""
        print(f"{Colors.BOLD}loxlang {__version__}{Colors.RESET} - Interactive Mode")
        print(
            f"Type {Colors.CYAN}:help{Colors.RESET} for help, {Colors.CYAN}:quit{Colors.RESET} to exit"
        )
        print()

        # Setup readline if available
        if HAS_READLINE:
            completer = REPLCompleter(self)
            readline.set_completer(completer.complete)
            readline.parse_and_bind("tab: complete")
            self._load_history()

        self.running = True
        try:
            while self.running:
                try:
                    line = input(self.prompt)

                    # Handle multi-line input
                    while self._is_incomplete(line):
                        continuation = input(self.continuation_prompt)
                        line += "\n" + continuation

                    # Store in history
                    if line.strip():
                        self.history.append(line)

                    # Evaluate and print result
                    result = self.eval_line(line)
                    if result:
                        print(result)

                except KeyboardInterrupt:
                    print(f"\n{Colors.DIM}Use :quit to exit{Colors.RESET}")
                except EOFError:
                    print(f"\n{Colors.DIM}Goodbye!{Colors.RESET}")
                    break

        finally:
            if HAS_READLINE:
                self._save_history()


# =============================================================================
# Tab Completion
# =============================================================================


class REPLCompleter:
    """Tab completion for the REPL."""

    def __init__(self, session: REPLSession) -> None:
        self.session = session

        # Reserved words
        self.keywords = sorted(KEYWORDS)

        # REPL commands
        self.commands = sorted(f":{name}" for name in session._commands)

        self._completions: list[str] = []

    def complete(self, text: str, state: int) -> Optional[str]:
        """Get completions for the given text."""
        if state == 0:
            # Build completions on first call
            self._completions = self._get_completions(text)
        try:
            return self._completions[state]
        except IndexError:
            return None

    def _get_completions(self, text: str) -> list[str]:
        """Get all completions for the given text prefix."""
        if text.startswith(":"):
            return [c for c in self.commands if c.startswith(text)]

        return [kw for kw in self.keywords if kw.startswith(text)]
