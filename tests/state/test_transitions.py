"""Tests for the transition table and action handlers."""

import json

import pytest

from phonebook.data.models import SEED_ENTRIES, PhoneBookEntry
from phonebook.errors import IllegalTransitionError
from phonebook.persistence.memory_store import InMemoryStore
from phonebook.state.models import (
    EventType,
    PhoneBookContext,
    PhoneBookEvent,
    PhoneBookState,
    StoreBinding,
)
from phonebook.state.transitions import (
    ACTIONS,
    TRANSITIONS,
    allowed_events,
    create_entry,
    delete_entry,
    load_entries,
    persist_entries,
    reset_entries,
    resolve_transition,
    update_entry,
)

KEY = "phonebook-context-key"


class TestTransitionTable:
    """Test the state × event table."""

    def test_table_rows(self):
        expected = {
            ("idle", "READ"): ("load_entries", "ready"),
            ("ready", "CREATE"): ("create_entry", "running"),
            ("ready", "UPDATE"): ("update_entry", "running"),
            ("ready", "DELETE"): ("delete_entry", "running"),
            ("ready", "RESET"): ("reset_entries", "running"),
            ("running", "FINISH"): ("persist_entries", "idle"),
        }
        actual = {
            (state.value, event.value): (t.action, t.target.value)
            for (state, event), t in TRANSITIONS.items()
        }
        assert actual == expected

    def test_every_action_is_registered(self):
        assert {t.action for t in TRANSITIONS.values()} == set(ACTIONS)

    def test_resolve_legal(self):
        transition = resolve_transition(PhoneBookState.RUNNING, EventType.FINISH)
        assert transition.action == "persist_entries"
        assert transition.target == PhoneBookState.IDLE

    @pytest.mark.parametrize("state,event_type", [
        (PhoneBookState.IDLE, EventType.CREATE),
        (PhoneBookState.IDLE, EventType.FINISH),
        (PhoneBookState.READY, EventType.READ),
        (PhoneBookState.READY, EventType.FINISH),
        (PhoneBookState.RUNNING, EventType.CREATE),
        (PhoneBookState.RUNNING, EventType.READ),
    ])
    def test_resolve_illegal(self, state, event_type):
        with pytest.raises(IllegalTransitionError) as exc_info:
            resolve_transition(state, event_type)
        assert exc_info.value.current_state == state.value
        assert exc_info.value.attempted_transition == event_type.value

    def test_allowed_events(self):
        assert allowed_events(PhoneBookState.IDLE) == [EventType.READ]
        assert allowed_events(PhoneBookState.READY) == [
            EventType.CREATE, EventType.UPDATE, EventType.DELETE, EventType.RESET
        ]
        assert allowed_events(PhoneBookState.RUNNING) == [EventType.FINISH]


class TestMutationActions:
    """Test create/update/delete/reset handlers."""

    def setup_method(self):
        self.binding = StoreBinding(store=InMemoryStore())
        self.context = PhoneBookContext()

    def test_create_appends_without_sorting(self):
        entry = PhoneBookEntry(6, "Ada", "Lovelace", "111-111-1111")
        result = create_entry(self.context, PhoneBookEvent.create(entry), self.binding)

        assert len(result.phone_book_entries) == 6
        assert result.phone_book_entries[-1] == entry
        assert result.phone_book_entries[:5] == SEED_ENTRIES

    def test_create_does_not_check_ids(self):
        duplicate = PhoneBookEntry(1, "Other", "Person", "000")
        result = create_entry(self.context, PhoneBookEvent.create(duplicate), self.binding)
        assert sum(1 for e in result.phone_book_entries if e.id == 1) == 2

    def test_update_existing_moves_to_tail(self):
        updated = PhoneBookEntry(3, "Frederick", "Allen", "999-999-9999")
        result = update_entry(self.context, PhoneBookEvent.update(updated), self.binding)

        assert len(result.phone_book_entries) == 5
        assert result.phone_book_entries[-1] == updated
        assert [e.id for e in result.phone_book_entries] == [1, 5, 2, 4, 3]

    def test_update_missing_id_inserts(self):
        new = PhoneBookEntry(42, "New", "Person", "1")
        result = update_entry(self.context, PhoneBookEvent.update(new), self.binding)

        assert len(result.phone_book_entries) == 6
        assert result.phone_book_entries[-1] == new

    def test_delete_existing(self):
        result = delete_entry(
            self.context, PhoneBookEvent.delete(PhoneBookEntry(id=2)), self.binding
        )
        assert [e.id for e in result.phone_book_entries] == [3, 1, 5, 4]

    def test_delete_matches_on_id_only(self):
        """Test other fields of the event entry are irrelevant."""
        result = delete_entry(
            self.context,
            PhoneBookEvent.delete(PhoneBookEntry(2, "Wrong", "Name", "x")),
            self.binding,
        )
        assert len(result.phone_book_entries) == 4

    def test_delete_all_duplicates(self):
        context = self.context.with_entries(
            SEED_ENTRIES + (PhoneBookEntry(2, "Dup", "Jobs", "1"),)
        )
        result = delete_entry(context, PhoneBookEvent.delete(PhoneBookEntry(id=2)), self.binding)
        assert all(e.id != 2 for e in result.phone_book_entries)
        assert len(result.phone_book_entries) == 4

    def test_delete_missing_is_noop(self):
        result = delete_entry(
            self.context, PhoneBookEvent.delete(PhoneBookEntry(id=99)), self.binding
        )
        assert result.phone_book_entries == SEED_ENTRIES

    def test_reset_uses_seed_reference(self):
        context = self.context.with_entries([PhoneBookEntry(9, "X", "Y", "Z")])
        result = reset_entries(context, PhoneBookEvent.reset(), self.binding)
        assert result.phone_book_entries is SEED_ENTRIES

    def test_actions_do_not_mutate_input(self):
        entry = PhoneBookEntry(6, "Ada", "Lovelace", "1")
        create_entry(self.context, PhoneBookEvent.create(entry), self.binding)
        assert self.context.phone_book_entries == SEED_ENTRIES


class TestPersistenceActions:
    """Test load and persist handlers."""

    def setup_method(self):
        self.store = InMemoryStore()
        self.binding = StoreBinding(store=self.store)
        self.context = PhoneBookContext()

    def test_load_from_empty_store(self):
        result = load_entries(self.context, PhoneBookEvent.read(), self.binding)
        assert result.phone_book_entries == SEED_ENTRIES

    def test_load_from_empty_string(self):
        self.store.set(KEY, "")
        result = load_entries(self.context, PhoneBookEvent.read(), self.binding)
        assert result.phone_book_entries == SEED_ENTRIES

    def test_load_sorts_stored_entries(self):
        self.store.set(KEY, json.dumps([
            {"id": 2, "firstName": "Steve", "lastName": "Jobs", "phoneNumber": "1"},
            {"id": 9, "firstName": "Linus", "lastName": "Torvalds", "phoneNumber": "2"},
            {"id": 3, "firstName": "Fred", "lastName": "Allen", "phoneNumber": "3"},
        ]))
        result = load_entries(self.context, PhoneBookEvent.read(), self.binding)
        assert [e.id for e in result.phone_book_entries] == [3, 2, 9]

    def test_load_empty_array(self):
        self.store.set(KEY, "[]")
        result = load_entries(self.context, PhoneBookEvent.read(), self.binding)
        assert result.phone_book_entries == ()

    def test_load_uses_binding_key(self):
        self.store.set("other-key", '[{"id": 1, "lastName": "Solo"}]')
        binding = StoreBinding(store=self.store, key="other-key")
        result = load_entries(self.context, PhoneBookEvent.read(), binding)
        assert [e.last_name for e in result.phone_book_entries] == ["Solo"]

    def test_load_custom_seed(self):
        seed = (PhoneBookEntry(1, "Only", "Entry", "0"),)
        binding = StoreBinding(store=self.store, seed=seed)
        result = load_entries(self.context, PhoneBookEvent.read(), binding)
        assert result.phone_book_entries is seed

    def test_persist_writes_json_array(self):
        result = persist_entries(self.context, PhoneBookEvent.finish(), self.binding)

        assert result is self.context
        stored = json.loads(self.store.get(KEY))
        assert [record["lastName"] for record in stored] == [
            "Allen", "Elliot", "Gates", "Jobs", "Wozniak"
        ]
        assert set(stored[0]) == {"id", "firstName", "lastName", "phoneNumber"}

    def test_persist_then_load_round_trip(self):
        unsorted = self.context.with_entries([
            PhoneBookEntry(4, "Steve", "Wozniak", "343-675-8786"),
            PhoneBookEntry(6, "Ada", "Lovelace", "111-111-1111"),
            PhoneBookEntry(3, "Fred", "Allen", "210-657-9886"),
        ])
        persist_entries(unsorted, PhoneBookEvent.finish(), self.binding)
        result = load_entries(PhoneBookContext(), PhoneBookEvent.read(), self.binding)

        assert set(result.phone_book_entries) == set(unsorted.phone_book_entries)
        assert [e.id for e in result.phone_book_entries] == [3, 6, 4]
