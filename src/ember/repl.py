"""Interactive REPL for Ember, powered by prompt_toolkit."""

from __future__ import annotations

import os
import sys
import traceback
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.shortcuts import clear

from .environment import Environment
from .evaluator import evaluate
from .lexer_rd import LexError
from .parser_rd import ParseError, parse_source
from .repl_highlight import EmberLexer
from .runtime import EmberRuntimeError, make_global_env
from .tree import dump
from .utils import DEBUG_PY_TRACE_ENV, debug_py_trace_enabled

# A line holding only this word ends the session.
EXIT_SENTINEL = "exit"

# Slash commands: name => (description, argument_hint).
_SLASH_CMDS = {
    "/ast": ("Toggle printing the parsed AST", "[on|off]"),
    "/clear": ("Clear the terminal screen", ""),
    "/py-traceback": ("Toggle Python traceback on errors", "[on|off]"),
    "/reset": ("Reset the REPL environment", ""),
}


class ReplState:
    """Mutable session state so slash commands can swap the environment."""

    def __init__(self) -> None:
        self.env: Environment = make_global_env()
        self.show_ast = False


class _SlashCompleter(Completer):
    """Autocomplete slash commands on the prompt."""

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.startswith("/"):
            return

        for cmd, (desc, hint) in _SLASH_CMDS.items():
            if cmd.startswith(text):
                yield Completion(
                    cmd,
                    start_position=-len(text),
                    display_meta=desc,
                )


def _parse_toggle(arg: str, current: bool) -> bool | None:
    if arg.lower() in ("on", "1", "true", "yes"):
        return True
    if arg.lower() in ("off", "0", "false", "no"):
        return False
    if arg == "":
        return not current
    return None


def handle_slash(line: str, state: ReplState) -> bool:
    """Handle slash commands. Returns True if the line was a command."""
    stripped = line.strip()
    if not stripped.startswith("/"):
        return False

    parts = stripped.split(None, 1)
    cmd = parts[0]
    arg = parts[1] if len(parts) > 1 else ""

    if cmd == "/clear":
        clear()
        return True

    if cmd == "/ast":
        flag = _parse_toggle(arg, state.show_ast)
        if flag is None:
            print("Usage: /ast [on|off]", file=sys.stderr)
            return True

        state.show_ast = flag
        print(f"AST output: {'on' if flag else 'off'}")
        return True

    if cmd == "/py-traceback":
        flag = _parse_toggle(arg, debug_py_trace_enabled())
        if flag is None:
            print("Usage: /py-traceback [on|off]", file=sys.stderr)
            return True

        if flag:
            os.environ[DEBUG_PY_TRACE_ENV] = "1"
        else:
            os.environ.pop(DEBUG_PY_TRACE_ENV, None)

        print(f"Python traceback: {'on' if flag else 'off'}")
        return True

    if cmd == "/reset":
        state.env = make_global_env()
        print("Environment reset.")
        return True

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return True


def is_exit(text: str) -> bool:
    return text.strip() == EXIT_SENTINEL


def eval_line(text: str, state: ReplState) -> str:
    """Parse and evaluate one input line in the session environment; return what to print."""
    program = parse_source(text)
    result = evaluate(program, state.env)

    if state.show_ast:
        return dump(program) + repr(result)
    return repr(result)


def repl() -> None:
    """Interactive read-eval-print loop with prompt_toolkit."""
    state = ReplState()

    session: PromptSession[str] = PromptSession(
        history=InMemoryHistory(),
        lexer=EmberLexer(),
        completer=_SlashCompleter(),
        complete_while_typing=True,
    )

    print(f"ember repl: type '{EXIT_SENTINEL}' or Ctrl-D to quit, / for commands")

    while True:
        try:
            text = session.prompt("> ")
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print("KeyboardInterrupt")
            continue

        if is_exit(text):
            break

        if not text.strip():
            continue

        if handle_slash(text, state):
            continue

        try:
            output = eval_line(text, state)
        except (ParseError, LexError, EmberRuntimeError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            if debug_py_trace_enabled():
                print("\nPython traceback:", file=sys.stderr)
                print("".join(traceback.format_tb(exc.__traceback__)), file=sys.stderr, end="")
            continue

        print(output)


def main() -> None:
    repl()


if __name__ == "__main__":
    main()
