# api/brewplan/planner.py
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, List, Tuple, Dict

from .methods import CamelModel, BrewMethod, ABSORPTION, TEMP_C, GRIND, FILTER

logger = logging.getLogger(__name__)

BLOOM_MIN_ML = 30
BLOOM_MAX_ML = 60

# (offset seconds, percent of the water left after bloom, label)
_SCHEDULES: Dict[str, List[Tuple[int, int, str]]] = {
    "v60": [(45, 55, "First pour"), (105, 45, "Second pour")],
    "chemex": [(45, 40, "First pour"), (105, 30, "Second pour"), (165, 30, "Third pour")],
    "aeropress": [(45, 100, "Fill & steep")],
    "french_press": [(0, 100, "Fill")],
    "moka": [(0, 100, "Assemble & heat")],
}


# ------- Models -------
class InvalidBrewRequest(ValueError):
    """Input the brew formula is undefined for (zero ratio, negative volume...)."""


class PourStep(CamelModel):
    at_sec: int
    volume_ml: int
    label: str


class BrewPlan(CamelModel):
    coffee_grams: float
    water_total_ml: int
    yield_target_ml: int
    bloom_ml: Optional[int] = None
    pours: List[PourStep]
    temp_c: int
    grind: str
    filter: str


# ------- Rule helpers -------
def _round(x: float, n: int = 0) -> float:
    # half-up, not Python's half-to-even
    q = Decimal(1).scaleb(-n)
    return float(Decimal(repr(x)).quantize(q, rounding=ROUND_HALF_UP))


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def _apportion(total: int, weights: List[int]) -> List[int]:
    """
    Split an integer total by weights using largest remainders, so the parts
    always add back up to the total. Ties go to the earlier part.
    """
    denom = sum(weights)
    shares = [total * w for w in weights]
    parts = [s // denom for s in shares]
    left = total - sum(parts)
    order = sorted(range(len(weights)), key=lambda i: (-(shares[i] % denom), i))
    for i in order[:left]:
        parts[i] += 1
    return parts


def _check(method: BrewMethod, cups: float, cup_size_ml: float,
           ratio: Optional[float], target_yield_ml: Optional[float]) -> None:
    if ratio is not None and ratio <= 0:
        raise InvalidBrewRequest(f"ratio must be > 0 (got {ratio})")
    if method.default_ratio <= 0:
        raise InvalidBrewRequest(f"{method.key} has no usable default ratio")
    if target_yield_ml is not None:
        if target_yield_ml <= 0:
            raise InvalidBrewRequest(f"target yield must be > 0 ml (got {target_yield_ml})")
        return
    if cups <= 0:
        raise InvalidBrewRequest(f"cups must be > 0 (got {cups})")
    if cup_size_ml <= 0:
        raise InvalidBrewRequest(f"cup size must be > 0 ml (got {cup_size_ml})")


# ------- Planner -------
def plan_brew(
    method: BrewMethod,
    cups: float,
    cup_size_ml: float,
    ratio: Optional[float] = None,
    target_yield_ml: Optional[float] = None,
) -> BrewPlan:
    """
    Compute coffee dose, total water and the timed pour schedule for one brew.

    target_yield_ml wins over cups * cup_size_ml when given; ratio overrides
    the method's default. Water total is the yield plus what the grounds
    absorb. Pour volumes are whole millilitres and sum to the water total.
    """
    _check(method, cups, cup_size_ml, ratio, target_yield_ml)

    yield_source = target_yield_ml if target_yield_ml is not None else cups * cup_size_ml
    yield_target_ml = int(_round(yield_source))
    if yield_target_ml <= 0:
        raise InvalidBrewRequest(f"target yield rounds to {yield_target_ml} ml")

    r = ratio if ratio is not None else method.default_ratio
    coffee_grams = _round(yield_target_ml / r, 1)
    absorption_ml = int(_round(coffee_grams * ABSORPTION[method.key]))
    water_total_ml = yield_target_ml + absorption_ml

    pours: List[PourStep] = []
    bloom_ml: Optional[int] = None
    if method.bloom:
        bloom_ml = int(_round(_clamp(2 * coffee_grams, BLOOM_MIN_ML, BLOOM_MAX_ML)))
        pours.append(PourStep(at_sec=0, volume_ml=bloom_ml, label="Bloom"))

    remaining = water_total_ml - (bloom_ml or 0)
    if remaining < 0:
        raise InvalidBrewRequest(
            f"{water_total_ml} ml of water cannot cover a {bloom_ml} ml bloom"
        )

    template = _SCHEDULES[method.key]
    volumes = _apportion(remaining, [pct for _, pct, _ in template])
    for (at_sec, _, label), volume in zip(template, volumes):
        pours.append(PourStep(at_sec=at_sec, volume_ml=volume, label=label))

    plan = BrewPlan(
        coffee_grams=coffee_grams,
        water_total_ml=water_total_ml,
        yield_target_ml=yield_target_ml,
        bloom_ml=bloom_ml,
        pours=pours,
        temp_c=TEMP_C[method.key],
        grind=GRIND[method.key],
        filter=FILTER[method.key],
    )
    logger.debug(
        "planned %s: %sg coffee, %sml water, %d pours",
        method.key, coffee_grams, water_total_ml, len(pours),
    )
    return plan
