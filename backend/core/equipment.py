"""
Equipment resolver.

Normalizes a user's raw equipment selection (which may contain legacy
free-text labels from older clients) into a canonical, non-empty
EquipmentSet, and classifies how rich that set is.

Resolution never fails: unknown strings pass through verbatim and simply
never satisfy an exercise's equipment requirement.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Union

from domain.models import (
    HEAVY_EQUIPMENT,
    EquipmentId,
    EquipmentRichness,
    EquipmentSet,
)

# Legacy labels/keys -> canonical equipment ids
LEGACY_EQUIPMENT_MAP: Dict[str, str] = {
    "None (Bodyweight)": EquipmentId.BODYWEIGHT.value,
    "Dumbbells": EquipmentId.DUMBBELLS.value,
    "Kettlebell": EquipmentId.KETTLEBELL.value,
    "Pull-up Bar": EquipmentId.PULL_UP_BAR.value,
    "Jump Rope": EquipmentId.JUMP_ROPE.value,
    "Box": EquipmentId.STEP_BOX.value,
    "kettlebells": EquipmentId.KETTLEBELL.value,
    "resistance_bands": EquipmentId.RESISTANCE_BANDS_LOOP.value,
    "stationary_bike": EquipmentId.BIKE.value,
    "step_or_box": EquipmentId.STEP_BOX.value,
    # Weight machines map to the closest equivalent
    "weight_machines": EquipmentId.BENCH.value,
}


@dataclass(frozen=True)
class ResolvedEquipment:
    """Result of resolving a raw equipment selection."""

    equipment: EquipmentSet
    richness: EquipmentRichness


def migrate_equipment_id(raw: Union[str, EquipmentId]) -> str:
    """
    Map a single raw equipment value to its canonical id.

    Args:
        raw: Canonical id, legacy label, or unknown string

    Returns:
        Canonical id, or the input unchanged when it is not recognised
    """
    if isinstance(raw, EquipmentId):
        return raw.value
    return LEGACY_EQUIPMENT_MAP.get(raw, raw)


def classify_richness(equipment: Union[EquipmentSet, Iterable[str]]) -> EquipmentRichness:
    """
    Determine equipment richness.

    - minimal: bodyweight only
    - full: any heavy item (barbell, rower, bike, treadmill)
    - moderate: everything else
    """
    items = equipment.items if isinstance(equipment, EquipmentSet) else frozenset(equipment)
    if items == {EquipmentId.BODYWEIGHT.value}:
        return EquipmentRichness.MINIMAL
    if items & HEAVY_EQUIPMENT:
        return EquipmentRichness.FULL
    return EquipmentRichness.MODERATE


def resolve_equipment(
    raw_selection: Optional[Iterable[Union[str, EquipmentId]]],
) -> ResolvedEquipment:
    """
    Resolve a raw selection into a canonical equipment set and its richness.

    Legacy labels are migrated, duplicates removed, and bodyweight is
    substituted for an empty selection. Re-resolving the resulting set yields
    the same result.

    Args:
        raw_selection: Raw equipment strings, an EquipmentSet, or None

    Returns:
        ResolvedEquipment
    """
    if isinstance(raw_selection, EquipmentSet):
        raw_selection = raw_selection.items
    migrated = {migrate_equipment_id(item) for item in (raw_selection or [])}
    equipment = EquipmentSet(items=frozenset(migrated))
    return ResolvedEquipment(equipment=equipment, richness=classify_richness(equipment))
