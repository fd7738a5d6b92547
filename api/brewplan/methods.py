# api/brewplan/methods.py
from typing import Literal, Optional, List, Dict
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# ------- Models -------
MethodKey = Literal["v60", "chemex", "aeropress", "french_press", "moka"]

METHOD_KEYS: List[str] = ["v60", "chemex", "aeropress", "french_press", "moka"]


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BrewMethod(CamelModel):
    key: MethodKey
    default_ratio: float      # water per unit coffee, 15 -> 1:15
    bloom: bool
    pours: int                # descriptive only


class MethodPresets(CamelModel):
    grind: str
    temp_c: int
    filter: str
    tips: List[str]


class MethodInfo(BrewMethod):
    name: str
    notes: str
    presets: Optional[MethodPresets] = None


# ------- Lookup tables -------
# grams of water retained per gram of coffee (1 g water ~ 1 ml)
ABSORPTION: Dict[str, float] = {
    "v60": 2.0,
    "chemex": 2.0,
    "aeropress": 1.5,
    "french_press": 2.2,
    "moka": 0.8,
}

TEMP_C: Dict[str, int] = {
    "v60": 94,
    "chemex": 94,
    "aeropress": 85,
    "french_press": 95,
    "moka": 98,
}

GRIND: Dict[str, str] = {
    "v60": "Medium-fine",
    "chemex": "Medium-coarse",
    "aeropress": "Medium",
    "french_press": "Coarse",
    "moka": "Fine-medium",
}

FILTER: Dict[str, str] = {
    "v60": "V60 paper",
    "chemex": "Chemex paper",
    "aeropress": "Paper or metal",
    "french_press": "Metal mesh",
    "moka": "Basket",
}

METHODS: Dict[str, BrewMethod] = {
    "v60":          BrewMethod(key="v60", default_ratio=15, bloom=True, pours=2),
    "chemex":       BrewMethod(key="chemex", default_ratio=16, bloom=True, pours=3),
    "aeropress":    BrewMethod(key="aeropress", default_ratio=14, bloom=True, pours=0),
    "french_press": BrewMethod(key="french_press", default_ratio=15, bloom=False, pours=0),
    "moka":         BrewMethod(key="moka", default_ratio=10, bloom=False, pours=0),
}

_NAMES = {
    "v60": "Hario V60",
    "chemex": "Chemex",
    "aeropress": "AeroPress",
    "french_press": "French Press",
    "moka": "Moka Pot",
}

_NOTES = {
    "v60": "Pour-over method with paper filter, medium-fine grind",
    "chemex": "Clean, bright extraction with thick paper filter",
    "aeropress": "Immersion brewing with pressure extraction",
    "french_press": "Full immersion brewing with metal mesh filter",
    "moka": "Stovetop espresso-style brewing",
}

_TIPS = {
    "v60": [
        "Rinse filter to preheat and remove paper taste.",
        "Swirl after each pour to level the bed.",
        "Pour in slow, controlled spirals from center outward.",
    ],
    "chemex": [
        "Use Chemex-specific filters for best results.",
        "Pour slowly to maintain proper extraction time.",
        "The thick filter removes oils for a clean cup.",
    ],
    "aeropress": [
        "Lower temperature for paper filter, higher for metal.",
        "Steep for 1-2 minutes before pressing.",
        "Press slowly and steadily for best extraction.",
    ],
    "french_press": [
        "Use coarse grind to avoid over-extraction.",
        "Steep for 4 minutes for optimal extraction.",
        "Break the crust at 4 minutes, then press gently.",
    ],
    "moka": [
        "Fill water chamber to just below safety valve.",
        "Use medium heat to avoid burning.",
        "Remove from heat when gurgling starts.",
    ],
}


# ------- Helpers -------
def get_method(key: str) -> Optional[BrewMethod]:
    return METHODS.get(key)


def method_info(key: str, recommend: bool = True) -> Optional[MethodInfo]:
    """Catalog entry for one method; presets are left out when the caller
    has recommendations switched off."""
    method = METHODS.get(key)
    if method is None:
        return None
    presets = None
    if recommend:
        presets = MethodPresets(
            grind=GRIND[key], temp_c=TEMP_C[key], filter=FILTER[key], tips=list(_TIPS[key])
        )
    return MethodInfo(
        **method.model_dump(), name=_NAMES[key], notes=_NOTES[key], presets=presets
    )


def list_methods(recommend: bool = True) -> List[MethodInfo]:
    infos = [method_info(k, recommend) for k in METHOD_KEYS]
    return sorted(infos, key=lambda m: m.name)
