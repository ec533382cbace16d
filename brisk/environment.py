from __future__ import annotations

from typing import Dict, Optional

from brisk.errors import TriedToStoreVoid
from brisk.std import register_builtins
from brisk.types import Value, VoidVal


class Environment:
    """A single scope frame mapping names to values.

    Frames only point at their parent, never at their children, so a chain
    of scopes forms a tree. Closures keep a reference to the frame they
    were created in, which keeps that frame (and its ancestors) alive for
    as long as the closure is reachable.
    """

    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Value] = {}

    @classmethod
    def new_global(cls, output=None) -> 'Environment':
        """Create a root frame seeded with the builtin functions."""
        env = cls()
        register_builtins(env, output)
        return env

    def child(self) -> 'Environment':
        return Environment(parent=self)

    def get(self, name: str) -> Optional[Value]:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.parent
        return None

    def declare(self, name: str, value: Value) -> None:
        """Bind ``name`` in this frame, shadowing any outer binding."""
        if isinstance(value, VoidVal):
            raise TriedToStoreVoid(name)
        self.values[name] = value

    def assign(self, name: str, value: Value) -> bool:
        """Rebind ``name`` in the nearest frame that owns it.

        Returns False when no frame in the chain has the name; no new
        binding is created in that case.
        """
        if isinstance(value, VoidVal):
            raise TriedToStoreVoid(name)
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                env.values[name] = value
                return True
            env = env.parent
        return False

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __repr__(self) -> str:
        names = ', '.join(sorted(self.values))
        return f"<Environment [{names}]{' (global)' if self.parent is None else ''}>"
