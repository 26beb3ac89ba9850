"""Pytest configuration and shared fixtures."""

import pytest

from phonebook.data.models import PhoneBookEntry
from phonebook.persistence.memory_store import InMemoryStore
from phonebook.state.machine import PhoneBookController


@pytest.fixture
def memory_store() -> InMemoryStore:
    """Empty in-memory store."""
    return InMemoryStore()


@pytest.fixture
def controller(memory_store: InMemoryStore) -> PhoneBookController:
    """Controller in the idle state over an empty in-memory store."""
    return PhoneBookController(memory_store)


@pytest.fixture
def ready_controller(controller: PhoneBookController) -> PhoneBookController:
    """Controller that has already loaded the seed entries."""
    controller.read()
    return controller


@pytest.fixture
def lovelace() -> PhoneBookEntry:
    """Entry that sorts between Jobs and Wozniak."""
    return PhoneBookEntry(id=6, first_name="Ada", last_name="Lovelace", phone_number="111-111-1111")
