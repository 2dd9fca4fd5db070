"""Pytest fixtures for server module testing."""

import queue
from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest

from gpsmqtt.config import AppConfig


class ControlledGNSSReader:
    """Stands in for ``GNSSReader``; yields the byte chunks put on its queue."""

    def __init__(self) -> None:
        self.message_queue: queue.Queue[bytes | None] = queue.Queue()
        self.written: list[bytes] = []
        self.cancelled = False
        self.write_error: EOFError | None = None

    def __enter__(self) -> "ControlledGNSSReader":
        return self

    def __exit__(self, *_: object) -> None:
        pass

    def __iter__(self) -> Iterator[bytes]:
        while True:
            item = self.message_queue.get()
            if item is None:
                raise EOFError("Serial read stopped.")
            yield item

    def cancel(self) -> None:
        self.cancelled = True
        self.message_queue.put(None)

    def write(self, data: bytes) -> None:
        if self.write_error is not None:
            raise self.write_error
        self.written.append(data)


@pytest.fixture(autouse=True)
def mock_bridge() -> Iterator[tuple[ControlledGNSSReader, MagicMock]]:
    gnss_controller = ControlledGNSSReader()
    publisher = MagicMock()
    with (
        patch("server.main.GNSSReader", return_value=gnss_controller),
        patch("server.main.load_configuration", return_value=AppConfig()),
        patch("server.main._connect_publisher", return_value=publisher),
    ):
        yield gnss_controller, publisher
    gnss_controller.cancel()


@pytest.fixture
def gnss_controller(
    mock_bridge: tuple[ControlledGNSSReader, MagicMock],
) -> ControlledGNSSReader:
    return mock_bridge[0]


@pytest.fixture
def publisher(mock_bridge: tuple[ControlledGNSSReader, MagicMock]) -> MagicMock:
    return mock_bridge[1]
