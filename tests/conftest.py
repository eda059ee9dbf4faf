import pytest

from fakes import FIXED_NOW, ROSTER, FakeCamera, FakeGeolocation, FakeRegistration, FakeRoster


@pytest.fixture
def camera():
    return FakeCamera()


@pytest.fixture
def geolocation():
    return FakeGeolocation()


@pytest.fixture
def registration():
    return FakeRegistration()


@pytest.fixture
def roster():
    return FakeRoster(ROSTER)


@pytest.fixture
def fixed_now():
    return FIXED_NOW
