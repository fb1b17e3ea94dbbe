import pytest

from tests.fakes import (
    FakeRiotGateway,
    FixedClock,
    InMemoryHistoryRepository,
    InMemoryLPEventRepository,
    InMemoryPlayerRepository,
    RecordingSleep,
)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def player_repository():
    return InMemoryPlayerRepository()


@pytest.fixture
def history_repository():
    return InMemoryHistoryRepository()


@pytest.fixture
def lp_event_repository():
    return InMemoryLPEventRepository()


@pytest.fixture
def gateway():
    return FakeRiotGateway()
