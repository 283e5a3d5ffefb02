import pytest


class ConstantRandom:
    """Random source that always returns the same draw."""

    def __init__(self, value):
        self.value = value

    def uniform(self):
        return self.value


class ScriptedRandom:
    """Returns the scripted draws in order, then ``default`` forever."""

    def __init__(self, values, default=0.5):
        self.values = list(values)
        self.default = default

    def uniform(self):
        if self.values:
            return self.values.pop(0)
        return self.default


@pytest.fixture
def always_pass():
    # every gate and chance succeeds; directions point straight down the middle of the scatter cone
    return ConstantRandom(0.0)


@pytest.fixture
def never_branch():
    # rate gate always fails
    return ConstantRandom(0.999)


@pytest.fixture
def centred():
    return ConstantRandom(0.5)
