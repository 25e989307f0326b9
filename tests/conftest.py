# Area: Test Fixtures
"""Shared fixtures: in-memory channels and ready-made rule graphs."""

import json

import pytest

from rps_lobby.rules import RuleGraph


class FakeChannel:
    """Channel that records frames instead of sending them."""

    def __init__(self, name="channel", fail_send=False, fail_close=False):
        self.name = name
        self.sent = []
        self.closed = False
        self.close_calls = 0
        self.fail_send = fail_send
        self.fail_close = fail_close

    def send(self, text):
        if self.fail_send:
            raise ConnectionError(f"{self.name} is gone")
        self.sent.append(text)

    def close(self):
        self.close_calls += 1
        if self.fail_close:
            raise ConnectionError(f"{self.name} already closed")
        self.closed = True

    @property
    def messages(self):
        return [json.loads(text) for text in self.sent]

    def of_type(self, message_type):
        return [m for m in self.messages if m["type"] == message_type]

    @property
    def last(self):
        return self.messages[-1] if self.sent else None

    def clear(self):
        self.sent.clear()


@pytest.fixture
def make_channel():
    return FakeChannel


@pytest.fixture
def classic_rules():
    return RuleGraph.classic()


@pytest.fixture
def fire_rules():
    rules = RuleGraph.classic()
    for beaten in ("Rock", "Paper", "Scissors"):
        rules.add_rule("Fire", beaten)
    return rules
