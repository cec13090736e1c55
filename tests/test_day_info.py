# tests/test_day_info.py

from datetime import date

import pytest

import litvn
from litvn.core.enums import Color, RankCode, Season
from litvn.core.errors import CalendarNotFoundError
from litvn.engines import tet


def test_calendars_registered():
    assert litvn.list_calendars() == ["roman", "vietnam", "vietnam-utc8"]
    assert litvn.calendar_info("vietnam")["tz_offset"] == 7
    assert litvn.calendar_info("roman")["tet_rules"] is False


def test_unknown_calendar():
    with pytest.raises(CalendarNotFoundError):
        litvn.get_day_info(date(2026, 1, 1), calendar="nope")
    with pytest.raises(KeyError):
        litvn.get_calendar("nope")


def test_tet_mung_mot_2026():
    info = litvn.get_day_info(date(2026, 2, 17))
    assert info.is_tet
    assert info.winner_key == "TET"
    assert info.special == tet.TET_CELEBRATIONS[1].name
    assert info.color is Color.RED
    assert info.day_code == "70001"
    assert (info.lunar.day, info.lunar.month, info.lunar.year) == (1, 1, 2026)
    assert info.tet_lunar == info.lunar


def test_tet_over_displaced_ash_wednesday():
    info = litvn.get_day_info(date(2026, 2, 18))
    assert info.is_tet
    assert info.season is Season.LENT
    assert info.rank == 6
    assert info.tet_note == tet.NOTE_LENT
    assert info.ash_wednesday_note is not None
    assert "Bắt Đầu Mùa Chay (Lễ Tro dời)" in [c.name for c in info.commemorations]


def test_celebrated_ash_wednesday():
    info = litvn.get_day_info(date(2026, 2, 20))
    assert not info.is_tet
    assert info.special == "LỄ TRO (Cử hành)"
    assert info.is_transferred_ash_wednesday
    assert info.color is Color.PURPLE
    assert info.day_code == "3004"


def test_roman_calendar_keeps_ash_wednesday():
    info = litvn.get_day_info(date(2026, 2, 18), calendar="roman")
    assert not info.is_tet
    assert info.special == "Lễ Tro"
    assert info.day_code == "3004"
    assert info.tet_note is None


def test_transferred_solemnity_wins():
    info = litvn.get_day_info(date(2026, 11, 2))
    assert info.transferred
    assert info.original_date == date(2026, 11, 1)
    assert info.special == "CÁC THÁNH NAM NỮ"
    assert info.rank_code is RankCode.TRONG
    assert "TRANSFERRED" in info.precedence_reason
    names = [s.name for s in info.saints]
    assert "CÁC THÁNH NAM NỮ" in names
    assert "Cầu Cho Các Tín Hữu Đã Qua Đời" in names


def test_sunday_left_by_a_solemnity():
    info = litvn.get_day_info(date(2026, 11, 1))
    assert info.winner_key == "BASE_SUN_OT"
    assert info.rank_code is RankCode.CHUA_NHAT
    assert info.saints == ()
    assert not info.transferred


def test_memorial_day():
    info = litvn.get_day_info(date(2026, 1, 28))
    assert info.winner_key == "SANCTORAL"
    assert info.rank_code is RankCode.NHO
    assert info.special.startswith("Thánh Tôma Aquinô")


def test_memorial_suppressed_in_lent():
    info = litvn.get_day_info(date(2026, 3, 7))
    assert info.winner_key == "BASE_WEEKDAY"
    assert info.saints == ()
    assert info.color is Color.PURPLE
    assert info.precedence_reason is None


def test_triduum_season_name():
    info = litvn.get_day_info(date(2026, 4, 3))
    assert info.season_name == "Tam Nhật Vượt Qua"
    assert info.color is Color.RED
    assert info.rank == 1


def test_immaculate_heart_beats_same_rank_saint():
    info = litvn.get_day_info(date(2026, 6, 13))
    assert info.winner_key == "IMMACULATE_HEART"
    assert any(c.name.startswith("Thánh Antôn Pađôva") for c in info.commemorations)


def test_optional_memorial_after_epiphany_is_listed_only():
    info = litvn.get_day_info(date(2026, 1, 7))
    assert info.winner_key == "BASE_WEEKDAY_AFTER_EPIPHANY"
    assert info.day_code == "6003"
    assert [s.name for s in info.saints] == ["Thánh Raymunđô Pênafort, Linh mục"]


def test_china_meridian_moves_ash_wednesday_1985():
    assert litvn.get_liturgical_data(1985, calendar="vietnam-utc8").ash_wednesday_transferred
    assert litvn.get_liturgical_data(1985, calendar="vietnam-utc8").ash_wednesday_celebration == date(1985, 2, 23)
    assert not litvn.get_liturgical_data(1985).ash_wednesday_transferred


def test_day_info_is_cached():
    a = litvn.get_day_info(date(2026, 8, 15))
    b = litvn.get_day_info(date(2026, 8, 15))
    assert a is b


def test_explicit_feasts_bypass_the_cache():
    f = litvn.get_liturgical_data(2026)
    a = litvn.get_day_info(date(2026, 8, 16), f)
    b = litvn.get_day_info(date(2026, 8, 16), f)
    assert a == b
    assert a is not b


def test_attributes_are_attached():
    info = litvn.get_day_info(date(2026, 2, 17), attributes=("weekday", "lunar"))
    assert info.attributes["weekday"] == 2
    assert info.attributes["lunar_label"] == "1/1"
    assert info.attributes["lunar_first_day"] is True


def test_month_days():
    days = litvn.month_days(2026, 2)
    assert len(days) == 28
    assert days[16].is_tet
    assert days[0].date == date(2026, 2, 1)


def test_codes_and_vigils_through_the_api():
    assert litvn.get_liturgical_day_code(date(2026, 5, 23)) == "4089"
    assert litvn.get_sanctoral_day_code(date(2026, 1, 28)) == "72801"
    assert litvn.get_special_feast_code(date(2026, 1, 28)) == "82801"
    assert litvn.get_vigil_info(date(2026, 11, 1)).vigil_code == "73110"


def test_explain():
    out = litvn.explain(date(2026, 11, 2))
    assert out["winner"] == "TRANSFERRED"
    assert out["transferred_from"] == "2026-11-01"
    assert out["day_code_rule"] == "ordinary"
    assert "BASE_WEEKDAY" in out["candidates"]


@pytest.mark.parametrize("d", [date(2023, 1, 9), date(2024, 1, 8), date(2029, 1, 8)])
def test_baptism_of_the_lord_on_a_monday(d):
    info = litvn.get_day_info(d)
    assert d.weekday() == 0
    assert info.special == "CHÚA GIÊSU CHỊU PHÉP RỬA"
    assert info.rank_code is RankCode.KINH
    assert info.rank == 4
    assert info.color is Color.WHITE
    assert info.day_code == "5010"


def test_tet_on_an_ordinary_sunday_keeps_the_sunday_as_commemoration():
    info = litvn.get_day_info(date(2024, 2, 11))  # Mùng 2, Sunday VI
    assert info.is_tet
    assert info.special == tet.TET_CELEBRATIONS[2].name
    assert info.rank == 3
    assert info.tet_note == tet.NOTE_ORDINARY_SUNDAY
    assert "Tuần VI Thường Niên" in [c.name for c in info.commemorations]


def test_tet_on_a_lent_sunday_is_celebrated():
    info = litvn.get_day_info(date(2018, 2, 18))  # Mùng 3, Lent I
    assert info.is_tet
    assert info.season is Season.LENT
    assert info.special == tet.TET_CELEBRATIONS[3].name
    assert info.rank == 6
    assert info.tet_note == tet.NOTE_LENT
    assert "Chúa Nhật I Mùa Chay" in [c.name for c in info.commemorations]
