from __future__ import annotations

from typing import Dict, Optional, Set

from .types import EmbValue, EmberConstError, EmberNameError, EmberRedeclareError


class Environment:
    """A lexical scope: name -> value bindings plus a parent for resolution.

    The parent is only read while resolving names; a child never changes the
    parent's set of declared names. Each evaluation run needs its own chain.
    """

    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.vars: Dict[str, EmbValue] = {}
        self.constants: Set[str] = set()

    def has_own(self, name: str) -> bool:
        return name in self.vars

    def declare(self, name: str, val: EmbValue, constant: bool = False) -> EmbValue:
        if name in self.vars:
            raise EmberRedeclareError(name)

        self.vars[name] = val
        if constant:
            self.constants.add(name)

        return val

    def resolve(self, name: str) -> 'Environment':
        env: Optional[Environment] = self

        while env is not None:
            if name in env.vars:
                return env
            env = env.parent

        raise EmberNameError(name)

    def assign(self, name: str, val: EmbValue) -> EmbValue:
        env = self.resolve(name)

        if name in env.constants:
            raise EmberConstError(name)

        env.vars[name] = val
        return val

    def lookup(self, name: str) -> EmbValue:
        return self.resolve(name).vars[name]
