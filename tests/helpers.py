"""
Callback handlers shared by the tests.
"""

from jcr import CallbackHandler


class ParityCallback(CallbackHandler):
    """Accepts even integers only, counting every invocation."""

    def __init__(self):
        self.calls = 0
        self.seen = []

    def _check(self, data):
        self.calls += 1
        self.seen.append(data)
        return isinstance(data, int) and data % 2 == 0

    def on_success(self, rule, data):
        return self._check(data)

    def on_failure(self, rule, data, evaluation):
        return self._check(data)


class CountingCallback(CallbackHandler):
    """Records invocations and keeps the engine's verdict."""

    def __init__(self):
        self.successes = []
        self.failures = []

    @property
    def calls(self) -> int:
        return len(self.successes) + len(self.failures)

    def on_success(self, rule, data):
        self.successes.append(data)

    def on_failure(self, rule, data, evaluation):
        self.failures.append((data, evaluation))
