# api/brewplan/brew.py
import os, logging
from typing import Optional, List
from fastapi import APIRouter, Depends, Header, HTTPException
from pydantic import Field

from .methods import CamelModel, MethodKey, MethodInfo, get_method, method_info, list_methods
from .planner import PourStep, InvalidBrewRequest, plan_brew

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/brew", tags=["brew"])

DEFAULT_CUP_SIZE_ML = float(os.getenv("DEFAULT_CUP_SIZE_ML", "240"))
SHOW_RECOMMENDATIONS = os.getenv("SHOW_RECOMMENDATIONS", "true").lower() in ("1", "true", "yes")

# ------- Models -------
class BrewPreferences(CamelModel):
    cup_size_ml: float = Field(DEFAULT_CUP_SIZE_ML, ge=100, le=1000)
    recommend: bool = SHOW_RECOMMENDATIONS

class BrewRequest(CamelModel):
    method_key: MethodKey
    cups: float = Field(1, ge=0.5, le=12, multiple_of=0.5)
    ratio: Optional[float] = Field(None, ge=8, le=20)                 # 1:8 .. 1:20
    target_yield_ml: Optional[float] = Field(None, ge=50, le=3000)    # wins over cups

class Recipe(CamelModel):
    coffee_grams: float
    water_total_ml: int
    yield_target_ml: int
    bloom_ml: Optional[int] = None
    pours: List[PourStep]
    # only filled when the caller wants recommendations
    temp_c: Optional[int] = None
    grind: Optional[str] = None
    filter: Optional[str] = None

class BrewPlanResponse(CamelModel):
    recipe: Recipe
    show_recommendations: bool

class MethodListResponse(CamelModel):
    methods: List[MethodInfo]
    show_recommendations: bool

class MethodResponse(CamelModel):
    method: MethodInfo
    show_recommendations: bool

# ------- Preferences -------
def get_preferences(
    x_cup_size_ml: Optional[float] = Header(None, ge=100, le=1000),
    x_show_recommendations: Optional[bool] = Header(None),
) -> BrewPreferences:
    """
    Per-caller brew preferences. Headers win over the env defaults; swap this
    dependency out to read them from a settings store instead.
    """
    prefs = BrewPreferences()
    if x_cup_size_ml is not None:
        prefs.cup_size_ml = x_cup_size_ml
    if x_show_recommendations is not None:
        prefs.recommend = x_show_recommendations
    return prefs

# ------- Router -------
@router.post("/plan", response_model=BrewPlanResponse, response_model_exclude_none=True)
def brew_plan(req: BrewRequest, prefs: BrewPreferences = Depends(get_preferences)):
    method = get_method(req.method_key)
    if method is None:
        raise HTTPException(404, "Brew method not found")
    try:
        plan = plan_brew(
            method,
            cups=req.cups,
            cup_size_ml=prefs.cup_size_ml,
            ratio=req.ratio,
            target_yield_ml=req.target_yield_ml,
        )
    except InvalidBrewRequest as e:
        logger.info("rejected %s brew: %s", req.method_key, e)
        raise HTTPException(400, str(e))

    recipe = Recipe(
        coffee_grams=plan.coffee_grams,
        water_total_ml=plan.water_total_ml,
        yield_target_ml=plan.yield_target_ml,
        bloom_ml=plan.bloom_ml,
        pours=plan.pours,
    )
    if prefs.recommend:
        recipe.temp_c = plan.temp_c
        recipe.grind = plan.grind
        recipe.filter = plan.filter
    return BrewPlanResponse(recipe=recipe, show_recommendations=prefs.recommend)

@router.get("/methods", response_model=MethodListResponse)
def methods(prefs: BrewPreferences = Depends(get_preferences)):
    return MethodListResponse(
        methods=list_methods(prefs.recommend), show_recommendations=prefs.recommend
    )

@router.get("/methods/{key}", response_model=MethodResponse)
def method_by_key(key: str, prefs: BrewPreferences = Depends(get_preferences)):
    info = method_info(key, prefs.recommend)
    if info is None:
        raise HTTPException(404, "Brew method not found")
    return MethodResponse(method=info, show_recommendations=prefs.recommend)
