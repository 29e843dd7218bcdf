"""TodoMVC page object: the user-level actions scenarios are written in.

Actions only interact; they never assert outcomes. Expectations live in
pages/expectations.py so they can be checked softly. A control that never
becomes interactable raises ControlNotInteractableError and ends the scenario.
"""

from __future__ import annotations

from dataclasses import dataclass

from playwright.sync_api import Page, expect

from pages.base_page import BasePage, ControlNotInteractableError, user_action
from pages.locators import FilterMode, TodoLocators


@dataclass(frozen=True)
class TodoItem:
    """Snapshot of one rendered row."""

    text: str
    completed: bool


class TodoPage(BasePage):
    """Page object for adding, removing, completing, filtering and clearing items."""

    def __init__(self, page: Page, base_url: str, timeout_ms: int = 10_000) -> None:
        super().__init__(page=page, base_url=base_url, timeout_ms=timeout_ms)
        self.locators = TodoLocators(page)

    @user_action
    def open(self) -> None:
        """Open the app root and wait for the new-todo input."""
        self.goto()
        self.wait_visible(self.locators.new_todo_input)

    @user_action
    def reload(self) -> None:
        super().reload()
        self.wait_visible(self.locators.new_todo_input)

    @user_action
    def add_item(self, text: str) -> str | None:
        """Submit `text`; return the trimmed text, or None when the app will ignore it."""
        field = self.locators.new_todo_input
        field.fill(text)
        field.press("Enter")
        created = text.strip()
        return created or None

    def add_items(self, *texts: str) -> list[str]:
        created = (self.add_item(text) for text in texts)
        return [text for text in created if text is not None]

    @user_action
    def remove_item(self, index: int) -> None:
        """Delete the row at `index` of the current (filtered) view."""
        # The delete button only renders while its row is hovered.
        self.locators.item(index).hover()
        self.locators.item_delete(index).click()

    @user_action
    def toggle_all_completed(self, on: bool) -> None:
        if on:
            self.locators.toggle_all.check()
        else:
            self.locators.toggle_all.uncheck()

    @user_action
    def toggle_item_completed(self, index: int, on: bool) -> None:
        toggle = self.locators.item_toggle(index)
        if on:
            toggle.check()
        else:
            toggle.uncheck()

    @user_action
    def set_filter(self, mode: FilterMode) -> None:
        self.locators.filter_link(mode).click()

    @user_action
    def clear_completed(self) -> None:
        self.locators.clear_completed.click()

    @user_action
    def edit_item(self, index: int, text: str) -> str:
        """Edit a row through the double-click inline editor; return the trimmed text."""
        self.locators.item_label(index).dblclick()
        editor = self.locators.item_editor(index)
        editor.fill(text)
        editor.press("Enter")
        return text.strip()

    def count(self) -> int:
        return self.locators.todo_items.count()

    def snapshot(self) -> list[TodoItem]:
        """Return the rendered rows as TodoItem values, in display order."""
        return [
            TodoItem(
                text=self.locators.item_label(index).inner_text(),
                completed=self.locators.item_toggle(index).is_checked(),
            )
            for index in range(self.count())
        ]

    def wait_for_count(self, expected: int) -> None:
        """Block until `expected` rows render; a list that never settles is fatal."""
        try:
            expect(self.locators.todo_items).to_have_count(expected, timeout=self.timeout_ms)
        except AssertionError as exc:
            raise ControlNotInteractableError(
                "wait_for_count", f"expected {expected} rows, saw {self.count()}"
            ) from exc
