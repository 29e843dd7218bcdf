"""Randomized data for scenarios: product-like item names and coin-flip completion.

All randomness flows through one injected, seeded Faker instance per scenario,
so a run can be replayed exactly with `--seed`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from faker import Faker
from faker.providers import BaseProvider

if TYPE_CHECKING:
    from pages.todo_page import TodoPage


class CommerceProvider(BaseProvider):
    """Faker provider for product names such as "Rustic Wooden Lamp"."""

    adjectives = (
        "Awesome", "Elegant", "Ergonomic", "Fantastic", "Generic", "Gorgeous",
        "Handcrafted", "Handmade", "Incredible", "Intelligent", "Licensed", "Modern",
        "Practical", "Recycled", "Refined", "Rustic", "Sleek", "Small", "Tasty", "Unbranded",
    )
    materials = (
        "Bamboo", "Bronze", "Ceramic", "Concrete", "Cotton", "Fresh", "Frozen", "Granite",
        "Marble", "Metal", "Plastic", "Rubber", "Soft", "Steel", "Wooden",
    )
    products = (
        "Bacon", "Ball", "Bike", "Car", "Chair", "Cheese", "Chicken", "Chips", "Computer",
        "Fish", "Gloves", "Hat", "Keyboard", "Lamp", "Mouse", "Pants", "Pizza", "Salad",
        "Sausages", "Shirt", "Shoes", "Soap", "Table", "Towels",
    )

    def product_adjective(self) -> str:
        return self.random_element(self.adjectives)

    def product_material(self) -> str:
        return self.random_element(self.materials)

    def product(self) -> str:
        return self.random_element(self.products)

    def product_name(self) -> str:
        return f"{self.product_adjective()} {self.product_material()} {self.product()}"


def scenario_seed(run_seed: int, nodeid: str) -> str:
    """Per-scenario seed: stable for a given run seed whatever the execution order."""
    return f"{run_seed}:{nodeid}"


def make_faker(seed: object, locale: str = "en_US") -> Faker:
    fake = Faker(locale)
    fake.add_provider(CommerceProvider)
    fake.seed_instance(seed)
    return fake


class TodoDataFactory:
    """Injectable random source for item names, indices and coin flips."""

    def __init__(self, faker: Faker) -> None:
        self.faker = faker

    def item_name(self) -> str:
        """A product-like name, unique within this factory's lifetime."""
        return self.faker.unique.product_name()

    def random_index(self, count: int) -> int:
        if count < 1:
            raise ValueError(f"count must be >= 1, got {count}")
        return self.faker.random_int(min=0, max=count - 1)

    def coin_flip(self) -> bool:
        return self.faker.pybool()


def populate(todo_page: TodoPage, count: int, data: TodoDataFactory) -> list[str]:
    """Add `count` generated items one after another and return their names.

    Not transactional: a failure midway leaves the items added so far.
    """
    before = todo_page.count()
    names = []
    for _ in range(count):
        name = data.item_name()
        todo_page.add_item(name)
        names.append(name)
    todo_page.wait_for_count(before + len(names))
    return names


def mark_random_subset_completed(todo_page: TodoPage, count: int, data: TodoDataFactory) -> int:
    """Flip a fair coin for each of the first `count` rows, completing the heads.

    Returns how many rows were marked completed.
    """
    marked = 0
    for index in range(count):
        if data.coin_flip():
            todo_page.toggle_item_completed(index, True)
            marked += 1
    return marked
