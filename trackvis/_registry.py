"""Name-keyed factories for sinks and bounds outlines."""

from typing import Callable


class MethodRegistry:
    """Maps names to callables; *kind* labels lookup errors (e.g. "sink")."""

    def __init__(self, kind: str):
        self.kind = kind
        self._entries: dict[str, Callable] = {}

    def register(self, key: str, fn: Callable) -> Callable:
        self._entries[key] = fn
        return fn

    def __getitem__(self, key: str) -> Callable:
        try:
            return self._entries[key]
        except KeyError:
            raise KeyError(
                f"Unknown {self.kind} method: {key!r}. Available: {self.available()}"
            ) from None

    def create(self, key: str, *args, **kwargs):
        return self[key](*args, **kwargs)

    def available(self) -> list[str]:
        return list(self._entries)
