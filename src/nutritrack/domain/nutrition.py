"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutrientRange:
    """Inclusive target band for a nutrient."""

    min: float
    max: float

    @property
    def midpoint(self) -> float:
        """Return the centre of the band."""
        return (self.min + self.max) / 2

    def to_dict(self) -> dict[str, float]:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class DailyTargets:
    """Personalised daily nutrient targets."""

    calories: NutrientRange
    protein: NutrientRange
    carbs: NutrientRange
    fat: NutrientRange
    fiber: NutrientRange
    sodium: NutrientRange
    water: float
    iron: NutrientRange | None = None
    calcium: NutrientRange | None = None

    def ranges(self) -> dict[str, NutrientRange]:
        """Return every range target keyed by nutrient name."""
        values = {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "fiber": self.fiber,
            "sodium": self.sodium,
        }
        if self.iron is not None:
            values["iron"] = self.iron
        if self.calcium is not None:
            values["calcium"] = self.calcium
        return values

    def to_dict(self) -> dict[str, object]:
        """Serialise targets into the stored JSON layout."""
        payload: dict[str, object] = {
            name: target.to_dict() for name, target in self.ranges().items()
        }
        payload["water"] = self.water
        return payload

    @classmethod
    def from_dict(cls, payload: dict[str, object]) -> "DailyTargets":
        """Build targets from the stored JSON layout."""

        def _range(key: str) -> NutrientRange | None:
            raw = payload.get(key)
            if not isinstance(raw, dict):
                return None
            return NutrientRange(
                min=float(raw.get("min", 0.0)), max=float(raw.get("max", 0.0))
            )

        required = {}
        for key in ("calories", "protein", "carbs", "fat", "fiber", "sodium"):
            value = _range(key)
            if value is None:
                raise ValueError(f"Missing target range: {key}")
            required[key] = value
        return cls(
            **required,
            water=float(payload.get("water", 0.0)),
            iron=_range("iron"),
            calcium=_range("calcium"),
        )


@dataclass(frozen=True)
class NutritionData:
    """Nutrients for a single food item or a day's total."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sodium: float = 0.0

    def __add__(self, other: "NutritionData") -> "NutritionData":
        return NutritionData(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
            fiber=self.fiber + other.fiber,
            sodium=self.sodium + other.sodium,
        )


@dataclass(frozen=True)
class MacroSplit:
    """Share of macro calories, in whole percent."""

    protein: int
    carbs: int
    fat: int
