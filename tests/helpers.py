"""Test doubles shared by the unit tests."""

import asyncio
from typing import Any


class ScriptedFetcher:
    """Fetcher returning scripted results in order (the last one repeats).

    Results that are exceptions are raised. Counts dispatches at call
    time, the way the engine invokes fetchers. When gated, every fetch
    waits for release().
    """

    def __init__(self, *results: Any, gated: bool = False) -> None:
        self.results = list(results) or [None]
        self.calls = 0
        self._gates: list[asyncio.Event] = []
        self._gated = gated

    def __call__(self) -> Any:
        self.calls += 1
        gate = asyncio.Event()
        if not self._gated:
            gate.set()
        self._gates.append(gate)
        return self._run(self.calls, gate)

    async def _run(self, n: int, gate: asyncio.Event) -> Any:
        await gate.wait()
        result = self.results[min(n, len(self.results)) - 1]
        if isinstance(result, BaseException):
            raise result
        return result

    def release(self, call_number: int | None = None) -> None:
        """Let the given fetch (1-based), or every pending fetch, complete."""
        if call_number is None:
            for gate in self._gates:
                gate.set()
        else:
            self._gates[call_number - 1].set()


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
