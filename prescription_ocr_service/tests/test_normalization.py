import pytest

from app.services.normalization import NORMALIZATION_MAP, normalize_text

def test_expands_in_token_order():
    out = normalize_text("Take 1 tab qhs po")
    assert out == "Take 1 tablet at bedtime by mouth"
    assert out.index("tablet") < out.index("at bedtime") < out.index("by mouth")

def test_case_insensitive_whole_word():
    assert normalize_text("Metformin 500 MG Tab BID") == "Metformin 500 milligrams tablet twice daily"
    # not inside longer words
    assert normalize_text("tablet capable podium") == "tablet capable podium"
    assert normalize_text("tabs") == "tablets"

def test_attached_units_are_left_alone():
    assert normalize_text("500mg") == "500mg"

def test_punctuation_is_a_boundary():
    assert normalize_text("1 tab, po.") == "1 tablet, by mouth."
    assert normalize_text("(prn)") == "(as needed)"

def test_collapses_whitespace():
    assert normalize_text("  Take\n\n1   cap\t od  ") == "Take 1 capsule once daily"

def test_empty():
    assert normalize_text("") == ""
    assert normalize_text("   ") == ""

@pytest.mark.parametrize("text", [
    "Take 1 tab qhs po",
    "Amoxicillin 500 mg cap tid pc x 7 days",
    "Insulin 10 ml ac qam and qpm, hs prn",
])
def test_idempotent(text):
    once = normalize_text(text)
    assert normalize_text(once) == once

def test_no_expansion_is_itself_a_key():
    keys = set(NORMALIZATION_MAP)
    for full in NORMALIZATION_MAP.values():
        assert not (set(full.lower().split()) & keys)

def test_map_is_read_only():
    with pytest.raises(TypeError):
        NORMALIZATION_MAP["x"] = "y"
