from brewplan.methods import (
    ABSORPTION, FILTER, GRIND, METHOD_KEYS, METHODS, TEMP_C,
    get_method, list_methods, method_info,
)


def test_every_method_has_lookup_entries():
    for table in (METHODS, ABSORPTION, TEMP_C, GRIND, FILTER):
        assert set(table) == set(METHOD_KEYS)


def test_bloom_flags():
    blooming = {k for k, m in METHODS.items() if m.bloom}
    assert blooming == {"v60", "chemex", "aeropress"}


def test_get_method_unknown_key():
    assert get_method("espresso") is None
    assert get_method("v60").default_ratio == 15


def test_method_info_with_presets():
    info = method_info("french_press")

    assert info.name == "French Press"
    assert info.default_ratio == 15
    assert info.presets.grind == "Coarse"
    assert info.presets.temp_c == 95
    assert info.presets.filter == "Metal mesh"
    assert len(info.presets.tips) == 3


def test_method_info_without_recommendations():
    info = method_info("chemex", recommend=False)

    assert info.name == "Chemex"
    assert info.presets is None


def test_method_info_unknown_key():
    assert method_info("nonexistent") is None


def test_list_methods_sorted_by_name():
    names = [m.name for m in list_methods()]
    assert names == ["AeroPress", "Chemex", "French Press", "Hario V60", "Moka Pot"]


def test_list_methods_camel_case_dump():
    dumped = list_methods()[0].model_dump(by_alias=True)
    assert dumped["defaultRatio"] == 14
    assert dumped["presets"]["tempC"] == 85
