# Semantic locators for the TodoMVC page; resolution is lazy, so zero matches is valid.
from __future__ import annotations

from enum import Enum

from playwright.sync_api import Locator, Page


class FilterMode(Enum):
    """Footer filters: link label plus the URL hash the app routes to."""

    ALL = ("All", "#/")
    ACTIVE = ("Active", "#/active")
    COMPLETED = ("Completed", "#/completed")

    def __init__(self, label: str, url_hash: str) -> None:
        self.label = label
        self.url_hash = url_hash


class TodoLocators:
    """Maps element names to Playwright locators using test ids, labels and roles."""

    NEW_TODO = "input.new-todo"
    TODO_ITEM_TEST_ID = "todo-item"
    TODO_TITLE_TEST_ID = "todo-title"
    TOGGLE_LABEL = "Toggle Todo"
    DELETE_NAME = "Delete"
    EDITOR = "input.edit"
    TOGGLE_ALL = "#toggle-all"
    TODO_COUNT = "span.todo-count"
    CLEAR_COMPLETED = "button.clear-completed"

    def __init__(self, page: Page) -> None:
        self.page = page
        self.new_todo_input = page.locator(self.NEW_TODO)
        self.todo_items = page.get_by_test_id(self.TODO_ITEM_TEST_ID)
        self.toggle_all = page.locator(self.TOGGLE_ALL)
        self.todo_count = page.locator(self.TODO_COUNT)
        self.clear_completed = page.locator(self.CLEAR_COMPLETED)

    def item(self, index: int) -> Locator:
        return self.todo_items.nth(index)

    def item_label(self, index: int) -> Locator:
        return self.item(index).get_by_test_id(self.TODO_TITLE_TEST_ID)

    def item_toggle(self, index: int) -> Locator:
        return self.item(index).get_by_label(self.TOGGLE_LABEL)

    def item_delete(self, index: int) -> Locator:
        return self.item(index).get_by_role("button", name=self.DELETE_NAME)

    def item_editor(self, index: int) -> Locator:
        return self.item(index).locator(self.EDITOR)

    def item_with_text(self, text: str) -> Locator:
        return self.todo_items.filter(has=self.page.get_by_text(text, exact=True))

    def filter_link(self, mode: FilterMode) -> Locator:
        return self.page.get_by_role("link", name=mode.label, exact=True)
