"""Interactive console menu.

    1  Create File          6  Move File
    2  List All Files       7  Change Category
    3  View File            8  Delete File
    4  Edit File Content    9  List by Category
    5  Rename File          0  Exit
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from filekeeper.errors import FileKeeperError
from filekeeper.ui.console import ConsoleView

if TYPE_CHECKING:
    from filekeeper.registry.record import Record
    from filekeeper.service import FileService

logger = logging.getLogger(__name__)

END_MARKER = "END"
_LOOKUP_PROMPT = "Enter file ID (first 8 chars) or file name: "


class MainMenu:
    """Reads choices line by line and dispatches to FileService."""

    def __init__(
        self,
        service: FileService,
        view: ConsoleView | None = None,
        read_line: Callable[[], str] = input,
    ) -> None:
        self.service = service
        self.view = view or ConsoleView()
        self._read_line = read_line
        self._handlers: dict[str, tuple[str, Callable[[], None]]] = {
            "1": ("Create File", self.handle_create),
            "2": ("List All Files", self.handle_list_all),
            "3": ("View File", self.handle_view),
            "4": ("Edit File Content", self.handle_edit_content),
            "5": ("Rename File", self.handle_rename),
            "6": ("Move File", self.handle_move),
            "7": ("Change Category", self.handle_change_category),
            "8": ("Delete File", self.handle_delete),
            "9": ("List by Category", self.handle_list_by_category),
        }

    # ── Main loop ────────────────────────────────────────────

    def run(self) -> None:
        self.view.banner("FILE MANAGEMENT SYSTEM")
        self.view.info(f"Registry lives in: {self.service.registry.root}")
        self.view.info("Type a menu number and press Enter.")

        while True:
            self.print_menu()
            try:
                choice = self.ask("Your choice: ")
            except (EOFError, KeyboardInterrupt):
                self.view.console.print()
                break

            if choice == "0":
                break
            entry = self._handlers.get(choice)
            if entry is None:
                self.view.warning("Invalid choice. Please enter 0-9.")
                continue
            try:
                entry[1]()
            except (EOFError, KeyboardInterrupt):
                self.view.console.print()
                break

        self.view.banner("GOODBYE!")

    def print_menu(self) -> None:
        self.view.console.print()
        self.view.separator()
        self.view.console.print("  [*] MAIN MENU", style="bold cyan", markup=False)
        self.view.separator()
        for number, (label, _) in self._handlers.items():
            self.view.menu_item(number, label)
        self.view.separator()
        self.view.menu_item("0", "Exit")
        self.view.separator()

    # ── Input helpers ────────────────────────────────────────

    def ask(self, label: str) -> str:
        self.view.prompt(label)
        return self._read_line().strip()

    def read_multiline(self) -> str:
        """Collect lines until one reading END on its own (or end of input)."""
        lines: list[str] = []
        while True:
            try:
                line = self._read_line()
            except EOFError:
                break
            if line.strip().upper() == END_MARKER:
                break
            lines.append(line)
        return "\n".join(lines)

    def _lookup(self) -> Record:
        return self.service.resolve(self.ask(_LOOKUP_PROMPT))

    def _report(self, e: FileKeeperError) -> None:
        logger.debug("Action failed: %r", e)
        self.view.error(e.message)
        if e.partial:
            self.view.warning("The file on disk was changed but the registry was not updated.")

    # ── Handlers ─────────────────────────────────────────────

    def handle_create(self) -> None:
        self.view.sub_header("Create New File")
        name = self.ask("File name (e.g. notes.txt)              : ")
        path = self.ask("Storage path (directory)                : ")
        category = self.ask("Category (or press Enter for 'General') : ")
        self.view.info("Enter file content  (type END on a new line to finish):")
        content = self.read_multiline()

        try:
            record = self.service.create_file(name, content, path, category)
        except FileKeeperError as e:
            self._report(e)
            return
        self.view.success("File created successfully!")
        self.view.record_detail(record)

    def handle_list_all(self) -> None:
        self.view.sub_header("All Files")
        records = self.service.read_all()
        self.view.record_table(records)
        self.view.info(f"Total files: {len(records)}")

    def handle_view(self) -> None:
        self.view.sub_header("View File")
        try:
            record = self._lookup()
            live = self.service.read_content_from_disk(record)
        except FileKeeperError as e:
            self._report(e)
            return
        self.view.record_detail(record, content=live)

    def handle_edit_content(self) -> None:
        self.view.sub_header("Edit File Content")
        try:
            record = self._lookup()
            self.view.info("Current content:")
            self.view.separator()
            self.view.console.print(
                "    " + record.content.replace("\n", "\n    "), markup=False, highlight=False
            )
            self.view.separator()
            self.view.info("Enter NEW content (type END on a new line to finish):")
            content = self.read_multiline()
            self.service.update_content(record.id, content)
        except FileKeeperError as e:
            self._report(e)
            return
        self.view.success("Content updated successfully!")

    def handle_rename(self) -> None:
        self.view.sub_header("Rename File")
        try:
            record = self._lookup()
            self.view.info(f"Current name: {record.file_name}")
            new_name = self.ask("New file name: ")
            self.service.rename_file(record.id, new_name)
        except FileKeeperError as e:
            self._report(e)
            return
        self.view.success(f"File renamed to: {new_name}")

    def handle_move(self) -> None:
        self.view.sub_header("Move File")
        try:
            record = self._lookup()
            self.view.info(f"Current path: {record.storage_path}")
            new_path = self.ask("New storage path (directory): ")
            self.service.move_file(record.id, new_path)
        except FileKeeperError as e:
            self._report(e)
            return
        self.view.success(f"File moved to: {new_path}")

    def handle_change_category(self) -> None:
        self.view.sub_header("Change Category")
        try:
            record = self._lookup()
            self.view.info(f"Current category: {record.category}")
            new_category = self.ask("New category: ")
            record = self.service.update_category(record.id, new_category)
        except FileKeeperError as e:
            self._report(e)
            return
        self.view.success(f"Category updated to: {record.category}")

    def handle_delete(self) -> None:
        self.view.sub_header("Delete File")
        try:
            record = self._lookup()
            self.view.warning(
                f"You are about to DELETE: {record.file_name}  at  {record.storage_path}"
            )
            confirm = self.ask("Confirm? (yes / no): ").lower()
            if confirm not in ("yes", "y"):
                self.view.info("Deletion cancelled.")
                return
            self.service.delete_file(record.id)
        except FileKeeperError as e:
            self._report(e)
            return
        self.view.success("File deleted successfully.")

    def handle_list_by_category(self) -> None:
        self.view.sub_header("List by Category")
        categories = self.service.categories()
        if not categories:
            self.view.warning("No categories exist yet.")
            return

        self.view.info("Available categories:")
        for category in categories:
            self.view.console.print(f"      * {category}", markup=False)
        category = self.ask("Enter category name: ")
        self.view.record_table(self.service.read_by_category(category))
