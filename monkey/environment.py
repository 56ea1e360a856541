from __future__ import annotations

from typing import Dict, Optional, Tuple

from .objects import Object


class Environment:
    """A scope mapping identifiers to values, linked to its enclosing scope.

    Links only point outward, so a closure keeping its defining scope
    alive never creates a cycle.
    """
    def __init__(self, outer: Optional['Environment'] = None):
        self.outer = outer
        self.store: Dict[str, Object] = {}

    @classmethod
    def enclosed(cls, outer: 'Environment') -> 'Environment':
        return cls(outer)

    def get(self, name: str) -> Tuple[Optional[Object], bool]:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.store:
                return env.store[name], True
            env = env.outer
        return None, False

    def set(self, name: str, value: Object) -> Object:
        # always binds in this scope; outer bindings are shadowed, never changed
        self.store[name] = value
        return value

    def __contains__(self, name: str) -> bool:
        return self.get(name)[1]

    def __repr__(self) -> str:
        names = ', '.join(sorted(self.store))
        return f"<Environment [{names}]{' +outer' if self.outer else ''}>"
