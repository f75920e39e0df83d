import pytest

from libvirt_exporter.virt.errors import SessionError

from .fakes import FakeSession


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def failing_connect():
    return FakeSession(fail={'connect': SessionError("handshake failed")})
