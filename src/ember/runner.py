from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from .environment import Environment
from .evaluator import evaluate
from .lexer_rd import LexError
from .parser_rd import ParseError, parse_source
from .runtime import EmbValue, EmberRuntimeError, make_global_env
from .tree import dump

def run(src: str, env: Optional[Environment] = None) -> EmbValue:
    """Parse then evaluate src; each call without env gets its own global scope."""
    program = parse_source(src)

    if env is None:
        env = make_global_env()

    return evaluate(program, env)

def _load_source(arg: Optional[str]) -> str:
    """An Ember script path, inline Ember source, or stdin when arg is absent or '-'."""
    if arg not in (None, "-"):
        try:
            is_script = Path(arg).is_file()
        except OSError:
            # Inline source longer than a path component
            is_script = False
        return Path(arg).read_text(encoding="utf-8") if is_script else arg

    piped = sys.stdin.read()
    if not piped:
        raise SystemExit("No Ember source on stdin")

    return piped

def main() -> None:
    show_ast = False
    arg = None

    for token in sys.argv[1:]:
        if token == "--ast":
            show_ast = True
            continue

        if arg is None:
            arg = token
        else:
            raise SystemExit(f"Unexpected argument: {token}")

    source = _load_source(arg)

    try:
        if show_ast:
            print(dump(parse_source(source)), end="")
            return
        print(repr(run(source)))
    except (LexError, ParseError, EmberRuntimeError) as exc:
        raise SystemExit(f"Error: {exc}") from None

if __name__ == "__main__":
    main()
