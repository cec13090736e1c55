# tests/test_precedence.py

from datetime import date

import pytest

from litvn.core.enums import Category, Color, Grade, Precedence, RankCode
from litvn.core.types import FixedSaint
from litvn.engines import precedence as pr
from litvn.engines.feasts import compute_year
from litvn.lunar import LunarConverter

F2026 = compute_year(2026, LunarConverter())


def saint(name, rank, category=Category.SAINT, color=Color.WHITE):
    return pr.sanctoral_celebration(FixedSaint(name, rank, color, category))


def test_resolve_requires_a_candidate():
    with pytest.raises(ValueError):
        pr.resolve(None, [])


def test_memorial_beats_ordinary_weekday():
    base = pr.base_celebration(date(2026, 1, 28), F2026)
    assert base.key == "BASE_WEEKDAY"
    res = pr.resolve(base, saint("Thánh Tôma Aquinô", RankCode.NHO))
    assert res.winner.key == "SANCTORAL"
    assert res.commemorations == ()
    assert "SANCTORAL" in res.reason


def test_sunday_beats_memorial_without_commemoration():
    base = pr.base_celebration(date(2026, 6, 21), F2026)
    assert base.key == "BASE_SUN_OT"
    res = pr.resolve(base, saint("Thánh Luy Gônzaga", RankCode.NHO))
    assert res.winner is base
    assert res.commemorations == ()


def test_feast_of_the_lord_beats_ordinary_sunday():
    base = pr.base_celebration(date(2025, 9, 14), compute_year(2025))
    lord = saint("Suy Tôn Thánh Giá", RankCode.KINH, Category.LORD, Color.RED)
    assert lord.rank is Precedence.FEAST_LORD
    res = pr.resolve(base, lord)
    assert res.winner is lord


def test_solemnity_commemorated_under_a_higher_day():
    base = pr.base_celebration(date(2026, 3, 29), F2026)  # Palm Sunday
    assert base.key == "BASE_SUN_PALM"
    assert base.color is Color.RED
    res = pr.resolve(base, saint("THÁNH THỬ", RankCode.TRONG))
    assert res.winner is base
    assert [c.grade for c in res.commemorations] == [Grade.SOLEMNITY]


def test_memorial_commemorated_under_a_weekday_feast():
    a = saint("Thánh Stêphanô", RankCode.KINH, color=Color.RED)
    b = saint("Thánh Thử", RankCode.NHO)
    res = pr.resolve(pr.base_celebration(date(2026, 12, 26), F2026), [b, a])
    assert res.winner is a
    assert [c.name for c in res.commemorations] == ["Thánh Thử"]


def test_tie_breaks_are_order_independent():
    mary = saint("Đức Mẹ Thử", RankCode.NHO, Category.MARY)
    other = saint("Thánh Thử", RankCode.NHO)
    assert pr.resolve(None, [mary, other]).winner is mary
    assert pr.resolve(None, [other, mary]).winner is mary

    x = saint("Thánh Ân", RankCode.NHO)
    y = saint("Thánh Bá", RankCode.NHO)
    assert pr.resolve(None, [y, x]).winner is x


def test_collation_key_ignores_diacritics_first():
    assert pr.collation_key("Đaminh")[0] == "daminh"
    assert sorted(["Bá", "Ân", "Anh"], key=pr.collation_key) == ["Ân", "Anh", "Bá"]


@pytest.mark.parametrize(
    "d, key, rank",
    [
        (date(2026, 1, 1), "MARY_MOTHER_OF_GOD", Precedence.SOLEMNITY),
        (date(2026, 1, 4), "BASE_SUN_EPIPHANY", Precedence.HIGH_LORD_SUNDAY_SEASON),
        (date(2026, 1, 7), "BASE_WEEKDAY_AFTER_EPIPHANY", Precedence.CHRISTMAS_WEEKDAY),
        (date(2026, 2, 18), "LENT_BEGINS", Precedence.LENT_WEEKDAY),
        (date(2026, 2, 20), "ASH_WEDNESDAY", Precedence.HIGH_LORD_SUNDAY_SEASON),
        (date(2026, 2, 22), "BASE_SUN_LENT", Precedence.HIGH_LORD_SUNDAY_SEASON),
        (date(2026, 3, 31), "BASE_WEEKDAY", Precedence.HIGH_LORD_SUNDAY_SEASON),
        (date(2026, 4, 3), "BASE_TRIDUUM", Precedence.TRIDUUM),
        (date(2026, 4, 5), "BASE_TRIDUUM", Precedence.TRIDUUM),
        (date(2026, 4, 8), "BASE_WEEKDAY", Precedence.HIGH_LORD_SUNDAY_SEASON),
        (date(2026, 5, 24), "PENTECOST", Precedence.HIGH_LORD_SUNDAY_SEASON),
        (date(2026, 6, 14), "BASE_SUN_OT", Precedence.SUNDAY_ORD_OR_CHRISTMAS),
        (date(2026, 10, 18), "MISSION", Precedence.SUNDAY_ORD_OR_CHRISTMAS),
        (date(2026, 11, 15), "VN_MARTYRS", Precedence.SOLEMNITY),
        (date(2026, 12, 18), "BASE_WEEKDAY", Precedence.ADVENT_17_24_WEEKDAY),
        (date(2026, 12, 25), "CHRISTMAS", Precedence.HIGH_LORD_SUNDAY_SEASON),
    ],
)
def test_base_celebration(d, key, rank):
    c = pr.base_celebration(d, F2026)
    assert c.key == key
    assert c.rank is rank


def test_easter_and_good_friday_names():
    assert pr.base_celebration(date(2026, 4, 5), F2026).name == "Đại Lễ Phục Sinh"
    gf = pr.base_celebration(date(2026, 4, 3), F2026)
    assert gf.color is Color.RED


def test_sunday_names():
    assert pr.base_celebration(date(2026, 11, 29), F2026).name == "Chúa Nhật I Mùa Vọng"
    assert pr.base_celebration(date(2026, 3, 22), F2026).name == "Chúa Nhật V Mùa Chay"
    assert pr.base_celebration(date(2026, 4, 12), F2026).name == "Chúa Nhật II Mùa Phục Sinh"
    ot = pr.base_celebration(date(2026, 6, 14), F2026)
    assert ot.special == "Tuần XI Thường Niên"


def test_baptism_named_on_a_weekday():
    f = compute_year(2024)
    assert f.baptism_lord == date(2024, 1, 8)
    c = pr.base_celebration(f.baptism_lord, f)
    assert c.key == "BAPTISM"
    assert c.rank is Precedence.FEAST_LORD
    assert c.rank_code is RankCode.KINH
    assert c.special == "CHÚA GIÊSU CHỊU PHÉP RỬA"
    assert pr.resolve(c, saint("Thánh Thử", RankCode.NHO)).winner.key == "BAPTISM"
