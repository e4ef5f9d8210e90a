"""
Drink catalog: Finnish reference servings with ABV and volume.
Also the one place where user-entered drinks are validated.
"""

import math
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from drink_tracker.drinks import Drink, standard_units


@dataclass(frozen=True)
class Preset:
    id: str
    name: str
    volume_ml: float
    abv_percent: float

    @property
    def units(self) -> float:
        return round(standard_units(self.volume_ml, self.abv_percent), 1)


def _p(bid: str, name: str, ml: float, abv: float) -> Preset:
    return Preset(id=bid, name=name, volume_ml=ml, abv_percent=abv)


PRESETS: List[Preset] = [
    _p("beer-regular", "Beer (4.7%, 0.33L)", 330, 4.7),
    _p("beer-strong", "Strong Beer (5.5%, 0.5L)", 500, 5.5),
    _p("wine", "Wine (12%, 12cl)", 120, 12.0),
    _p("spirit", "Spirit (40%, 4cl)", 40, 40.0),
    _p("lonkero", "Lonkero (5.5%, 0.33L)", 330, 5.5),
    _p("cider", "Cider (4.7%, 0.33L)", 330, 4.7),
    _p("cocktail", "Cocktail (15%, 16cl)", 160, 15.0),
]

_BY_ID: Dict[str, Preset] = {p.id: p for p in PRESETS}


def get_preset(preset_id: str) -> Preset:
    """Raises KeyError for unknown ids."""
    return _BY_ID[preset_id]


def list_presets() -> List[dict]:
    """Return presets as dicts for UI dropdowns."""
    return [
        {"id": p.id, "name": p.name, "volume_ml": p.volume_ml, "abv_percent": p.abv_percent, "units": p.units}
        for p in PRESETS
    ]


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def make_drink(
    name: str,
    volume_ml: float,
    abv_percent: float,
    consumed_at: datetime,
    drink_id: Optional[str] = None,
) -> Drink:
    """Build a Drink from user input, rejecting values the calculator cannot use."""
    volume_ml = float(volume_ml)
    abv_percent = float(abv_percent)
    if math.isnan(volume_ml) or volume_ml <= 0 or math.isinf(volume_ml):
        raise ValueError("volume_ml must be a positive number")
    if math.isnan(abv_percent) or abv_percent <= 0 or abv_percent > 100:
        raise ValueError("abv_percent must be in (0, 100]")
    name = (name or "").strip() or "Custom Drink"
    return Drink(
        id=drink_id or _new_id("custom"),
        name=name,
        volume_ml=volume_ml,
        abv_percent=abv_percent,
        consumed_at=consumed_at,
    )


def drink_from_preset(preset_id: str, consumed_at: datetime) -> Drink:
    preset = get_preset(preset_id)
    return make_drink(
        preset.name,
        preset.volume_ml,
        preset.abv_percent,
        consumed_at,
        drink_id=_new_id(preset.id),
    )
