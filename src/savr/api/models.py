"""Pydantic request and response models for the HTTP API."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

from savr.domain.daily_log import DailyLog, MealEntry, MealType
from savr.domain.foods import FoodProduct
from savr.domain.nutrition import Macros, NutritionFacts
from savr.domain.pantry import Ingredient, Unit
from savr.domain.profile import (
    ActivityLevel,
    DietPreset,
    Gender,
    Goal,
    MealDistribution,
    UserProfile,
)
from savr.domain.targets import DailyTargets


class MacrosModel(BaseModel):
    """Macronutrient grams."""

    protein: float = Field(default=0.0, ge=0)
    carbs: float = Field(default=0.0, ge=0)
    fats: float = Field(default=0.0, ge=0)

    def to_domain(self) -> Macros:
        return Macros(protein=self.protein, carbs=self.carbs, fats=self.fats)

    @classmethod
    def from_domain(cls, macros: Macros) -> "MacrosModel":
        return cls(protein=macros.protein, carbs=macros.carbs, fats=macros.fats)


class NutritionFactsModel(BaseModel):
    """Nutrition facts where any value may be unknown."""

    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fats: float | None = None

    def to_domain(self) -> NutritionFacts:
        return NutritionFacts(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fats=self.fats,
        )

    @classmethod
    def from_domain(cls, facts: NutritionFacts) -> "NutritionFactsModel":
        return cls(
            calories=facts.calories,
            protein=facts.protein,
            carbs=facts.carbs,
            fats=facts.fats,
        )


class MealDistributionModel(BaseModel):
    """Percent of daily calories per meal."""

    breakfast: float = 25.0
    lunch: float = 35.0
    dinner: float = 30.0
    snack: float = 10.0


class ProfilePayload(BaseModel):
    """Editable profile fields sent on onboarding or profile edits."""

    name: str = ""
    height: float | None = Field(default=None, gt=0)
    weight: float | None = Field(default=None, gt=0)
    age: int | None = Field(default=None, gt=0)
    gender: Gender = "other"
    goal: Goal = "maintain"
    activity_level: ActivityLevel | None = None
    weekly_goal: float | None = None
    target_weight: float | None = Field(default=None, gt=0)
    allergies: list[str] = Field(default_factory=list)
    dislikes: list[str] = Field(default_factory=list)
    custom_macros: MacrosModel | None = None
    diet_preset: DietPreset | None = None
    meal_distribution: MealDistributionModel | None = None
    timezone: str = "UTC"

    def to_domain(self) -> UserProfile:
        return UserProfile(
            name=self.name.strip(),
            height=self.height,
            weight=self.weight,
            age=self.age,
            gender=self.gender,
            goal=self.goal,
            activity_level=self.activity_level,
            weekly_goal=self.weekly_goal,
            target_weight=self.target_weight,
            allergies=tuple(self.allergies),
            dislikes=tuple(self.dislikes),
            custom_macros=self.custom_macros.to_domain()
            if self.custom_macros
            else None,
            diet_preset=self.diet_preset,
            meal_distribution=MealDistribution(**self.meal_distribution.model_dump())
            if self.meal_distribution
            else None,
            timezone=self.timezone,
        )


class WeightEntryModel(BaseModel):
    """Weight sample."""

    date: date
    weight: float


class StreakModel(BaseModel):
    """Logging streak."""

    current: int
    last_log_date: date | None
    longest: int


class ProfileResponse(ProfilePayload):
    """Stored profile including server-maintained fields."""

    weight_history: list[WeightEntryModel] = Field(default_factory=list)
    streak: StreakModel

    @classmethod
    def from_domain(cls, profile: UserProfile) -> "ProfileResponse":
        distribution = profile.meal_distribution
        return cls(
            name=profile.name,
            height=profile.height,
            weight=profile.weight,
            age=profile.age,
            gender=profile.gender,
            goal=profile.goal,
            activity_level=profile.activity_level,
            weekly_goal=profile.weekly_goal,
            target_weight=profile.target_weight,
            allergies=list(profile.allergies),
            dislikes=list(profile.dislikes),
            custom_macros=MacrosModel.from_domain(profile.custom_macros)
            if profile.custom_macros
            else None,
            diet_preset=profile.diet_preset,
            meal_distribution=MealDistributionModel(
                breakfast=distribution.breakfast,
                lunch=distribution.lunch,
                dinner=distribution.dinner,
                snack=distribution.snack,
            )
            if distribution
            else None,
            timezone=profile.timezone,
            weight_history=[
                WeightEntryModel(date=entry.day, weight=entry.weight)
                for entry in profile.weight_history
            ],
            streak=StreakModel(
                current=profile.streak.current,
                last_log_date=profile.streak.last_log_date,
                longest=profile.streak.longest,
            ),
        )


class FieldUpdate(BaseModel):
    """A single-field profile change."""

    field: str
    value: str | float | list[str] | None = None
    action: Literal["set", "add", "remove"] = "set"


class TargetsResponse(BaseModel):
    """Daily targets."""

    calories: int
    protein: int
    carbs: int
    fats: int
    water: int

    @classmethod
    def from_domain(cls, targets: DailyTargets) -> "TargetsResponse":
        return cls(
            calories=targets.calories,
            protein=targets.protein,
            carbs=targets.carbs,
            fats=targets.fats,
            water=targets.water,
        )


class MealPayload(BaseModel):
    """A meal entry sent by the client."""

    id: str | None = None
    type: MealType
    name: str
    calories: float
    macros: MacrosModel = Field(default_factory=MacrosModel)
    quantity: str | None = None
    product_details: dict[str, object] | None = None
    recipe_id: str | None = None

    def to_domain(self, entry_id: str) -> MealEntry:
        return MealEntry(
            id=entry_id,
            type=self.type,
            name=self.name,
            calories=self.calories,
            macros=self.macros.to_domain(),
            quantity=self.quantity,
            product_details=self.product_details,
            recipe_id=self.recipe_id,
        )


class MealResponse(MealPayload):
    """A logged meal."""

    id: str

    @classmethod
    def from_domain(cls, meal: MealEntry) -> "MealResponse":
        return cls(
            id=meal.id,
            type=meal.type,
            name=meal.name,
            calories=meal.calories,
            macros=MacrosModel.from_domain(meal.macros),
            quantity=meal.quantity,
            product_details=meal.product_details,
            recipe_id=meal.recipe_id,
        )


class MacroProgressModel(BaseModel):
    """Consumed grams against the target."""

    current: float
    target: float


class DailyLogResponse(BaseModel):
    """One day of the journal."""

    date: date
    meals: list[MealResponse]
    consumed: float
    burned: float
    water: float
    macros: dict[str, MacroProgressModel]

    @classmethod
    def from_domain(cls, log: DailyLog) -> "DailyLogResponse":
        return cls(
            date=log.date,
            meals=[MealResponse.from_domain(meal) for meal in log.meals],
            consumed=log.consumed,
            burned=log.burned,
            water=log.water,
            macros={
                name: MacroProgressModel(
                    current=progress.current, target=progress.target
                )
                for name, progress in (
                    ("carbs", log.macros.carbs),
                    ("protein", log.macros.protein),
                    ("fats", log.macros.fats),
                )
            },
        )


class WaterPayload(BaseModel):
    """Water amount or delta in ml."""

    amount_ml: float


class ProductPortionPayload(BaseModel):
    """Portion of a looked-up product to log."""

    type: MealType
    grams: float | None = Field(default=None, gt=0)


class CalendarResponse(BaseModel):
    """Days of a month with logged activity."""

    year: int
    month: int
    active_days: list[date]


class PantryItemPayload(BaseModel):
    """A pantry item sent by the client."""

    name: str = Field(min_length=1)
    quantity: str | None = None
    is_selected: bool = True
    brand: str | None = None
    image: str | None = None
    nutrition: NutritionFactsModel | None = None
    serving_size: float | None = None
    unit: Unit | None = None

    def to_domain(self, item_id: str, is_scanned: bool = False) -> Ingredient:
        return Ingredient(
            id=item_id,
            name=self.name.strip(),
            quantity=self.quantity,
            is_selected=self.is_selected,
            is_scanned=is_scanned,
            brand=self.brand,
            image=self.image,
            nutrition=self.nutrition.to_domain() if self.nutrition else None,
            serving_size=self.serving_size,
            unit=self.unit,
        )


class PantryItemResponse(PantryItemPayload):
    """A stored pantry item."""

    id: str
    is_scanned: bool = False

    @classmethod
    def from_domain(cls, item: Ingredient) -> "PantryItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            quantity=item.quantity,
            is_selected=item.is_selected,
            is_scanned=item.is_scanned,
            brand=item.brand,
            image=item.image,
            nutrition=NutritionFactsModel.from_domain(item.nutrition)
            if item.nutrition
            else None,
            serving_size=item.serving_size,
            unit=item.unit,
        )


class SelectAllPayload(BaseModel):
    """Select or deselect every pantry item."""

    selected: bool = True


class GenerateRecipesPayload(BaseModel):
    """Recipe generation request."""

    strict_mode: bool = False
    meal_type: str | None = None
    time_limit: str | None = None
    skill_level: str | None = None
    equipment: str | None = None


class LogRecipePayload(BaseModel):
    """Log servings of a saved recipe."""

    type: MealType
    day: date | None = None
    servings: float = Field(default=1.0, gt=0)


class FoodProductResponse(BaseModel):
    """A product from the local catalog or Open Food Facts."""

    id: str
    name: str
    per_100g: NutritionFactsModel
    brand: str | None = None
    image: str | None = None
    serving_size: str | None = None
    quantity: str | None = None
    source: str

    @classmethod
    def from_domain(cls, product: FoodProduct) -> "FoodProductResponse":
        return cls(
            id=product.id,
            name=product.name,
            per_100g=NutritionFactsModel.from_domain(product.per_100g),
            brand=product.brand,
            image=product.image,
            serving_size=product.serving_size,
            quantity=product.quantity,
            source=product.source,
        )
