# cli/session.py

"""
Holds the state of one interactive CLI session: the open `Registry` and the identity acting on it.

The CLI stands in for the authentication layer: whoever is at the keyboard declares the caller
identity, and every registry operation is invoked on that identity's behalf.
"""

from models.registry import Registry


class Session:

    def __init__(self, registry: Registry, caller: str):
        self._registry = registry
        self._caller = caller

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def caller(self) -> str:
        return self._caller

    @caller.setter
    def caller(self, caller: str) -> None:
        self._caller = caller

    @property
    def caller_label(self) -> str:
        role = self._registry.role_of(self._caller) or "unregistered"
        return f"{self._caller} ({role})"
