"""
Equipment value objects.

Canonical equipment ids form a closed enumeration. Unknown ids coming from
older clients are still carried verbatim inside an EquipmentSet; they simply
never satisfy any exercise's requirements.

Examples:
    >>> equipment = EquipmentSet(items=frozenset({"bodyweight", "barbell"}))
    >>> equipment.contains_all(["barbell"])
    True
"""

from enum import Enum
from typing import Dict, FrozenSet, Iterable, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EquipmentId(str, Enum):
    """Canonical equipment identifiers."""

    BODYWEIGHT = "bodyweight"
    DUMBBELLS = "dumbbells"
    KETTLEBELL = "kettlebell"
    BARBELL = "barbell"
    RESISTANCE_BANDS_LOOP = "resistance_bands_loop"
    RESISTANCE_BAND_LONG = "resistance_band_long"
    PULL_UP_BAR = "pull_up_bar"
    DIP_BARS = "dip_bars"
    BENCH = "bench"
    STEP_BOX = "step_box"
    MEDICINE_BALL = "medicine_ball"
    SLAM_BALL = "slam_ball"
    TRX = "trx"
    JUMP_ROPE = "jump_rope"
    SLIDERS = "sliders"
    EXERCISE_BALL = "exercise_ball"
    ROWER = "rower"
    BIKE = "bike"
    TREADMILL = "treadmill"
    ELLIPTICAL = "elliptical"


class EquipmentRichness(str, Enum):
    """How much equipment a user has access to."""

    MINIMAL = "minimal"  # Bodyweight only
    MODERATE = "moderate"  # Some equipment, no heavy strength/cardio tools
    FULL = "full"  # Barbell and/or cardio machines


# Items whose presence makes a set "full"
HEAVY_EQUIPMENT: FrozenSet[str] = frozenset({
    EquipmentId.BARBELL.value,
    EquipmentId.ROWER.value,
    EquipmentId.BIKE.value,
    EquipmentId.TREADMILL.value,
})

EQUIPMENT_LABELS: Dict[str, str] = {
    EquipmentId.BODYWEIGHT.value: "Bodyweight Only",
    EquipmentId.DUMBBELLS.value: "Dumbbells",
    EquipmentId.KETTLEBELL.value: "Kettlebell",
    EquipmentId.BARBELL.value: "Barbell",
    EquipmentId.RESISTANCE_BANDS_LOOP.value: "Loop Bands",
    EquipmentId.RESISTANCE_BAND_LONG.value: "Long Bands",
    EquipmentId.PULL_UP_BAR.value: "Pull-Up Bar",
    EquipmentId.DIP_BARS.value: "Dip Bars",
    EquipmentId.BENCH.value: "Bench",
    EquipmentId.STEP_BOX.value: "Step / Box",
    EquipmentId.MEDICINE_BALL.value: "Medicine Ball",
    EquipmentId.SLAM_BALL.value: "Slam Ball",
    EquipmentId.TRX.value: "TRX / Suspension",
    EquipmentId.JUMP_ROPE.value: "Jump Rope",
    EquipmentId.SLIDERS.value: "Sliders / Gliders",
    EquipmentId.EXERCISE_BALL.value: "Exercise Ball",
    EquipmentId.ROWER.value: "Rowing Machine",
    EquipmentId.BIKE.value: "Bike / Air Bike",
    EquipmentId.TREADMILL.value: "Treadmill",
    EquipmentId.ELLIPTICAL.value: "Elliptical",
}


def equipment_label(equipment_id: str) -> str:
    """Get the user-facing label for an equipment id (falls back to the id)."""
    return EQUIPMENT_LABELS.get(str(equipment_id), str(equipment_id))


class EquipmentSet(BaseModel):
    """
    Non-empty, immutable set of equipment identifiers.

    Bodyweight is substituted when an empty selection is supplied, so an
    EquipmentSet can never be empty.
    """

    model_config = ConfigDict(frozen=True)

    items: FrozenSet[str] = Field(
        default_factory=lambda: frozenset({EquipmentId.BODYWEIGHT.value}),
        description="Canonical (or pass-through unknown) equipment ids",
    )

    @field_validator("items", mode="before")
    @classmethod
    def ensure_non_empty(cls, v: Iterable[str]) -> FrozenSet[str]:
        """Coerce enum members to plain strings and substitute bodyweight for empty input."""
        items = frozenset(
            item.value if isinstance(item, Enum) else str(item)
            for item in (v or [])
        )
        if not items:
            return frozenset({EquipmentId.BODYWEIGHT.value})
        return items

    def contains_all(self, required: Iterable[str]) -> bool:
        """Check whether every required item is available."""
        return all(
            (item.value if isinstance(item, Enum) else item) in self.items
            for item in required
        )

    def sorted_items(self) -> List[str]:
        return sorted(self.items)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Enum):
            item = item.value
        return item in self.items

    def __len__(self) -> int:
        return len(self.items)
