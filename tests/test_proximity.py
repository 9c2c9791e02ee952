import copy
import math

import pytest

from DOGMARKET.core.errors import InvalidInput
from DOGMARKET.Vets.proximity import rank_vets

LAGOS = {"lat": 6.5244, "lng": 3.3792}

VETS = [
    {"id": "vet-abuja", "name": "Dr. Musa", "lat": 9.0765, "lng": 7.3986},
    {"id": "vet-nowhere", "name": "Dr. Null", "lat": None, "lng": None},
    {"id": "vet-lagos", "name": "Dr. Amina", "lat": 6.5244, "lng": 3.3792},
    {"id": "vet-ikeja", "name": "Dr. Ade", "lat": 6.6018, "lng": 3.3515},
    {"id": "vet-ibadan", "name": "Dr. Bisi", "lat": 7.3775, "lng": 3.9470},
]


def ids(vets):
    return [v["id"] for v in vets]


def test_no_query_point_returns_input_unchanged():
    result = rank_vets(VETS)
    assert result == VETS
    assert all(a is b for a, b in zip(result, VETS))
    assert all("dist" not in v for v in result)


def test_radius_without_query_point_is_ignored():
    assert ids(rank_vets(VETS, None, 1.0)) == ids(VETS)


def test_sorted_nearest_first():
    result = rank_vets(VETS, LAGOS)
    assert ids(result) == ["vet-lagos", "vet-ikeja", "vet-ibadan", "vet-abuja", "vet-nowhere"]
    finite = [v["dist"] for v in result if math.isfinite(v["dist"])]
    assert finite == sorted(finite)


def test_original_fields_preserved_and_input_not_mutated():
    before = copy.deepcopy(VETS)
    result = rank_vets(VETS, LAGOS)
    assert VETS == before
    lagos = result[0]
    assert lagos["name"] == "Dr. Amina"
    assert lagos["dist"] == pytest.approx(0.0, abs=1e-9)


def test_zero_radius_matches_only_the_vet_at_the_query_point():
    result = rank_vets(VETS, LAGOS, 0)
    assert ids(result) == ["vet-lagos"]
    assert result[0]["dist"] == 0


def test_radius_is_inclusive():
    ikeja_dist = rank_vets(VETS, LAGOS)[1]["dist"]
    assert ids(rank_vets(VETS, LAGOS, ikeja_dist)) == ["vet-lagos", "vet-ikeja"]


def test_missing_coordinates_sort_last_as_infinity():
    result = rank_vets(VETS, LAGOS)
    assert result[-1]["id"] == "vet-nowhere"
    assert result[-1]["dist"] == math.inf


def test_missing_coordinates_never_fall_inside_a_radius():
    assert "vet-nowhere" not in ids(rank_vets(VETS, LAGOS, 100000))


def test_non_numeric_coordinates_treated_as_missing():
    vets = [{"id": "bad", "lat": "6.5", "lng": 3.3}, {"id": "nan", "lat": float("nan"), "lng": 3.3}]
    assert all(v["dist"] == math.inf for v in rank_vets(vets, LAGOS))


def test_ties_keep_collection_order():
    vets = [
        {"id": "first", "lat": 7.0, "lng": 3.0},
        {"id": "second", "lat": 7.0, "lng": 3.0},
        {"id": "third", "lat": 7.0, "lng": 3.0},
    ]
    assert ids(rank_vets(vets, LAGOS)) == ["first", "second", "third"]


@pytest.mark.parametrize(
    "query_point",
    [{"lat": 6.5}, {"lng": 3.3}, {"lat": None, "lng": 3.3}, {"lat": "6.5", "lng": "3.3"}, (6.5, 3.3)],
)
def test_partial_or_malformed_query_point_is_invalid(query_point):
    with pytest.raises(InvalidInput):
        rank_vets(VETS, query_point)


def test_non_numeric_radius_is_invalid():
    with pytest.raises(InvalidInput):
        rank_vets(VETS, LAGOS, "5")


def test_empty_collection():
    assert rank_vets([], LAGOS, 10) == []
