"""Expected-state checks for the TodoMVC page, recorded as soft assertions."""

from __future__ import annotations

import re

from playwright.sync_api import expect

from pages.locators import FilterMode, TodoLocators
from soft_assert import SoftAssertions

LINE_THROUGH = re.compile(r"line-through")
SELECTED = re.compile(r"(^|\s)selected(\s|$)")


def count_message_pattern(count: int) -> re.Pattern[str]:
    """Counter text for `count` remaining items: "1 item left", otherwise "N items left"."""
    noun = "item" if count == 1 else "items"
    return re.compile(rf"^{count} {noun} left$")


class TodoExpectations:
    """One method per observable expectation; failures are collected, not raised."""

    def __init__(
        self, locators: TodoLocators, soft: SoftAssertions, timeout_ms: int = 10_000
    ) -> None:
        self.locators = locators
        self.soft = soft
        self.timeout_ms = timeout_ms

    def item_created(self, text: str) -> None:
        first = self.locators.item_label(0)
        with self.soft.check(f"first item is visible as {text!r}"):
            expect(first).to_be_visible(timeout=self.timeout_ms)
            expect(first).to_have_text(text, timeout=self.timeout_ms)

    def item_listed(self, text: str) -> None:
        with self.soft.check(f"item {text!r} is listed"):
            expect(self.locators.item_with_text(text).first).to_be_visible(timeout=self.timeout_ms)

    def item_count_matches(self, count: int) -> None:
        counter = self.locators.todo_count
        with self.soft.check(f"counter reads {count} left"):
            expect(counter).to_be_visible(timeout=self.timeout_ms)
            expect(counter).to_have_text(count_message_pattern(count), timeout=self.timeout_ms)

    def counter_absent(self) -> None:
        with self.soft.check("counter is not rendered"):
            expect(self.locators.todo_count).to_have_count(0, timeout=self.timeout_ms)

    def item_marked_completed(self, index: int) -> None:
        with self.soft.check(f"item {index} is struck through"):
            expect(self.locators.item_label(index)).to_have_css(
                "text-decoration", LINE_THROUGH, timeout=self.timeout_ms
            )

    def item_marked_active(self, index: int) -> None:
        with self.soft.check(f"item {index} has default styling"):
            expect(self.locators.item_label(index)).not_to_have_css(
                "text-decoration", LINE_THROUGH, timeout=self.timeout_ms
            )

    def rendered_count(self, count: int) -> None:
        with self.soft.check(f"{count} row(s) rendered"):
            expect(self.locators.todo_items).to_have_count(count, timeout=self.timeout_ms)

    def item_text(self, index: int, text: str) -> None:
        with self.soft.check(f"item {index} reads {text!r}"):
            expect(self.locators.item_label(index)).to_have_text(text, timeout=self.timeout_ms)

    def filter_selected(self, mode: FilterMode) -> None:
        with self.soft.check(f"{mode.label} filter is selected"):
            expect(self.locators.page).to_have_url(
                re.compile(re.escape(mode.url_hash) + "$"), timeout=self.timeout_ms
            )
            expect(self.locators.filter_link(mode)).to_have_class(SELECTED, timeout=self.timeout_ms)
