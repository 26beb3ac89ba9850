#!/usr/bin/env python3
"""
Phone Book Demo

Walks the controller through a few READ → mutation → FINISH cycles against
a JSON file store, showing:
- The seed entries loaded from an empty store
- An unsorted append and the re-sort on the next READ
- Events ignored outside their state
- Recovery from a corrupted stored value

Run: python examples/phone_book_demo.py
"""

import tempfile
from pathlib import Path

from phonebook import PhoneBookController, PhoneBookEntry
from phonebook.logging import configure_logging
from phonebook.persistence import JsonFileStore


def print_entries(controller: PhoneBookController, title: str) -> None:
    print(f"{title} [{controller.state.value}]")
    for entry in controller.entries:
        print(f"   {entry.id:>3}  {entry.last_name or '?':<10} {entry.first_name or '?':<8} {entry.phone_number or ''}")
    print()


def main():
    configure_logging(level="WARNING")

    with tempfile.TemporaryDirectory() as tmp_dir:
        store = JsonFileStore(str(Path(tmp_dir) / "phonebook.json"))
        controller = PhoneBookController(store)

        print("1. Reading from an empty store")
        controller.read()
        print_entries(controller, "   Seed entries")

        print("2. Creating Ada Lovelace")
        controller.create(PhoneBookEntry(6, "Ada", "Lovelace", "111-111-1111"))
        print_entries(controller, "   Appended, not yet sorted")

        print("3. A second CREATE before FINISH is ignored")
        controller.create(PhoneBookEntry(7, "Grace", "Hopper", "555-0100"))
        print(f"   Still {len(controller.entries)} entries\n")

        controller.finish()
        controller.read()
        print_entries(controller, "4. After FINISH and READ")

        print("5. Corrupting the stored value")
        store.set(controller.binding.key, "{not json")
        controller.finish()  # ignored: already ready
        fresh = PhoneBookController(store)
        fresh.read()
        print_entries(fresh, "   Fresh controller falls back to")

    print("✅ Demo completed successfully!")


if __name__ == "__main__":
    main()
