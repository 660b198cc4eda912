"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import date
from uuid import uuid4

from savr.adapters.documents import daily_log_to_document, profile_to_document
from savr.adapters.supabase_daily_log_repository import SupabaseDailyLogRepository
from savr.adapters.supabase_pantry_repository import SupabasePantryRepository
from savr.adapters.supabase_profile_repository import SupabaseProfileRepository
from savr.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from savr.domain import daily_log
from savr.domain.daily_log import MealEntry
from savr.domain.nutrition import Macros
from savr.domain.pantry import Ingredient
from savr.domain.recipes import Recipe
from tests.conftest import example_profile, recipe_payload


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "upsert": [],
            "update": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_options: dict[str, object] = field(default_factory=dict)
    last_filters: list[tuple[str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def upsert(self, payload, **options) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        self.last_options = options
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((f"{column}>=", value))
        return self

    def lt(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((f"{column}<", value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_profile_repository_reads_versioned_document() -> None:
    client = FakeSupabaseClient()
    user_id = uuid4()
    document = profile_to_document(example_profile())
    client.table("profiles").queue("select", [{"document": document, "version": 4}])

    stored = SupabaseProfileRepository(client).get_profile(user_id)

    assert stored is not None
    assert stored.version == 4
    assert stored.value == example_profile()
    assert ("user_id", str(user_id)) in client.table("profiles").last_filters


def test_profile_repository_missing_row() -> None:
    assert SupabaseProfileRepository(FakeSupabaseClient()).get_profile(uuid4()) is None


def test_profile_repository_create_ignores_duplicates() -> None:
    client = FakeSupabaseClient()
    table = client.table("profiles")
    repository = SupabaseProfileRepository(client)
    user_id = uuid4()

    created = repository.save_profile(user_id, example_profile(), None)

    assert created is False
    assert table.last_payload["version"] == 1
    assert table.last_options == {"on_conflict": "user_id", "ignore_duplicates": True}

    table.queue("upsert", [{"user_id": str(user_id)}])
    assert repository.save_profile(user_id, example_profile(), None) is True


def test_profile_repository_update_checks_version() -> None:
    client = FakeSupabaseClient()
    table = client.table("profiles")
    table.queue("update", [{"user_id": "x"}])
    repository = SupabaseProfileRepository(client)
    user_id = uuid4()

    assert repository.save_profile(user_id, example_profile(), 3) is True
    assert table.last_payload["version"] == 4
    assert ("version", 3) in table.last_filters
    assert repository.save_profile(user_id, example_profile(), 3) is False


def test_daily_log_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("daily_logs")
    day = date(2024, 5, 14)
    log = daily_log.add_meal(
        daily_log.empty_log(day),
        MealEntry(
            id="m1",
            type="breakfast",
            name="Oats",
            calories=350,
            macros=Macros(protein=12, carbs=60, fats=6),
        ),
    )
    table.queue(
        "select",
        [{"day": "2024-05-14", "document": daily_log_to_document(log), "version": 2}],
    )
    table.queue("update", [{"day": "2024-05-14"}])
    repository = SupabaseDailyLogRepository(client)
    user_id = uuid4()

    stored = repository.get_log(user_id, day)

    assert stored is not None
    assert stored.value == log
    assert repository.save_log(user_id, log, stored.version) is True
    assert table.last_payload["version"] == 3
    assert ("day", "2024-05-14") in table.last_filters


def test_daily_log_repository_lists_month() -> None:
    client = FakeSupabaseClient()
    table = client.table("daily_logs")
    table.queue(
        "select",
        [
            {"day": "2024-05-01", "document": {"water": 500}},
            {"day": "2024-05-02", "document": {}},
        ],
    )

    logs = SupabaseDailyLogRepository(client).list_logs(
        uuid4(), date(2024, 5, 1), date(2024, 6, 1)
    )

    assert [log.date for log in logs] == [date(2024, 5, 1), date(2024, 5, 2)]
    assert logs[0].water == 500
    assert ("day>=", "2024-05-01") in table.last_filters
    assert ("day<", "2024-06-01") in table.last_filters


def test_pantry_repository_create_and_update() -> None:
    client = FakeSupabaseClient()
    table = client.table("pantry_items")
    row = {
        "id": "item-1",
        "user_id": "u",
        "name": "Eggs",
        "quantity": "6",
        "is_selected": True,
        "is_scanned": False,
        "nutrition": {"calories": 155},
    }
    table.queue("insert", [row])
    table.queue("update", [{**row, "is_selected": False}])
    repository = SupabasePantryRepository(client)
    user_id = uuid4()

    created = repository.create_item(
        user_id, Ingredient(id="item-1", name="Eggs", quantity="6")
    )
    updated = repository.update_item(
        user_id, Ingredient(id="item-1", name="Eggs", is_selected=False)
    )

    assert created.nutrition.calories == 155
    assert created.nutrition.protein is None
    assert updated.is_selected is False
    assert "id" not in table.last_payload


def test_recipe_repository_stores_document_without_derived_fields() -> None:
    client = FakeSupabaseClient()
    table = client.table("recipes")
    recipe = Recipe.model_validate(recipe_payload(id="r1", match_percentage=50))
    document = recipe.model_dump(
        mode="json", exclude={"id", "missing_ingredients", "match_percentage"}
    )
    table.queue("insert", [{"id": "r1", "document": document}])
    table.queue("select", [{"id": "r1", "document": document}])
    repository = SupabaseRecipeRepository(client)
    user_id = uuid4()

    saved = repository.create_recipe(user_id, recipe)
    listed = repository.list_recipes(user_id)

    assert "match_percentage" not in table.last_payload["document"]
    assert saved.id == "r1"
    assert saved.match_percentage == 0
    assert listed[0].title == "Chicken rice bowl"
