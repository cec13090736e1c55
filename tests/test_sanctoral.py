# tests/test_sanctoral.py

import json
from datetime import date

import pytest

from litvn import CalendarSpec
from litvn.core.enums import Category, Color, RankCode
from litvn.core.errors import SaintsTableError
from litvn.engines import sanctoral as sc
from litvn.engines.factory import build_calendar
from litvn.engines.feasts import compute_year


@pytest.fixture
def table():
    return sc.SanctoralTable.default()


def feasts_for(year):
    return compute_year(year)


def test_packaged_table_loads(table):
    assert len(table) > 100
    aquinas = table.lookup_fixed(1, 28)
    assert aquinas.rank is RankCode.NHO
    assert aquinas.category is Category.SAINT
    stephen = table.lookup_fixed(12, 26)
    assert stephen.rank is RankCode.KINH
    assert stephen.color is Color.RED


def test_temporal_owned_days_are_absent(table):
    for month, day in ((12, 25), (1, 1), (3, 19), (3, 25), (12, 8)):
        assert table.lookup_fixed(month, day) is None


@pytest.mark.parametrize(
    "record, rank, color",
    [
        ({"date": "15/08", "feast": "ĐỨC MẸ LÊN TRỜI", "type": "S", "chasuble": "Tr"}, RankCode.TRONG, Color.WHITE),
        ({"date": "10-08", "feast": "Thánh Laurensô", "type": "F", "chasuble": "Đ"}, RankCode.KINH, Color.RED),
        ({"date": "03/02", "feast": "Thánh Blasiô", "type": "O"}, RankCode.NHOKB, Color.WHITE),
    ],
)
def test_parse_record(record, rank, color):
    key, saint = sc.parse_record(record)
    day, month = record["date"].replace("-", "/").split("/")
    assert key == f"{int(month)}-{int(day)}"
    assert saint.rank is rank
    assert saint.color is color


@pytest.mark.parametrize(
    "record",
    [
        {"feast": "no date"},
        {"date": "32/01", "feast": "bad day"},
        {"date": "xx/yy", "feast": "bad"},
        {"date": "01/01", "feast": "bad category", "category": "ANGEL"},
    ],
)
def test_parse_record_rejects_bad_input(record):
    with pytest.raises(SaintsTableError):
        sc.parse_record(record)


@pytest.mark.parametrize(
    "name, category",
    [
        ("Đức Mẹ Sầu Bi", Category.MARY),
        ("Chúa Hiển Dung", Category.LORD),
        ("Thánh Mônica", Category.SAINT),
        ("Cầu Cho Các Tín Hữu Đã Qua Đời", Category.OTHER),
    ],
)
def test_infer_category(name, category):
    assert sc.infer_category(name) is category


def test_env_override(tmp_path, monkeypatch):
    p = tmp_path / "saints.json"
    p.write_text(json.dumps([{"date": "02/01", "feast": "Thánh Thử", "type": "M"}]), encoding="utf-8")
    monkeypatch.setenv(sc.SAINTS_ENV, str(p))
    sc.load_default_records.cache_clear()
    try:
        table = sc.SanctoralTable.default()
        assert len(table) == 1
        assert table.lookup_fixed(1, 2).name == "Thánh Thử"
    finally:
        monkeypatch.delenv(sc.SAINTS_ENV)
        sc.load_default_records.cache_clear()


def test_env_override_must_be_a_list(tmp_path, monkeypatch):
    p = tmp_path / "saints.json"
    p.write_text("{}", encoding="utf-8")
    monkeypatch.setenv(sc.SAINTS_ENV, str(p))
    sc.load_default_records.cache_clear()
    try:
        with pytest.raises(SaintsTableError):
            sc.load_default_records()
    finally:
        monkeypatch.delenv(sc.SAINTS_ENV)
        sc.load_default_records.cache_clear()


def test_solemnity_on_sunday_moves_to_monday(table):
    f = compute_year(2026)
    all_saints = table.lookup_fixed(11, 1)
    assert table.should_transfer(all_saints, date(2026, 11, 1), f) == date(2026, 11, 2)
    moved = table.transferred_feast_landing_on(date(2026, 11, 2), feasts_for)
    assert moved.saint is all_saints
    assert moved.original_date == date(2026, 11, 1)


def test_solemnity_in_easter_octave_moves_after_octave():
    saint_table = sc.SanctoralTable.from_records(
        [{"date": "08/04", "feast": "THÁNH THỬ", "type": "S"}]
    )
    f = compute_year(2026)
    saint = saint_table.lookup_fixed(4, 8)
    assert saint_table.should_transfer(saint, date(2026, 4, 8), f) == date(2026, 4, 13)
    moved = saint_table.transferred_feast_landing_on(date(2026, 4, 13), feasts_for)
    assert moved.original_date == date(2026, 4, 8)


def test_memorials_never_transfer(table):
    f = compute_year(2026)
    aloysius = table.lookup_fixed(6, 21)  # a Sunday in 2026
    assert table.should_transfer(aloysius, date(2026, 6, 21), f) is None


def test_weekday_solemnity_stays(table):
    f = compute_year(2026)
    assumption = table.lookup_fixed(8, 15)  # Saturday
    assert table.should_transfer(assumption, date(2026, 8, 15), f) is None
    assert table.transferred_feast_landing_on(date(2026, 8, 17), feasts_for) is None


def test_suppression(table):
    f = compute_year(2026)
    perpetua = table.lookup_fixed(3, 7)
    assert table.is_suppressed(perpetua, date(2026, 3, 7), f)  # Lent weekday
    canisius = table.lookup_fixed(12, 21)
    assert table.is_suppressed(canisius, date(2026, 12, 21), f)  # Dec 17-24
    aquinas = table.lookup_fixed(1, 28)
    assert not table.is_suppressed(aquinas, date(2026, 1, 28), f)
    # feasts survive Lent but not Holy Week
    stephen = table.lookup_fixed(12, 26)
    assert not table.is_suppressed(stephen, date(2026, 12, 26), f)
    assert table.is_suppressed(stephen, date(2026, 3, 31), f)


@pytest.mark.parametrize("day", [date(2026, 3, 30), date(2026, 3, 31), date(2026, 4, 2), date(2026, 4, 4)])
def test_solemnity_in_holy_week_moves_to_monday_after_octave(day):
    saint_table = sc.SanctoralTable.from_records(
        [{"date": f"{day.day:02d}/{day.month:02d}", "feast": "THÁNH THỬ", "type": "S"}]
    )
    f = compute_year(2026)
    saint = saint_table.lookup_fixed(day.month, day.day)
    assert saint_table.should_transfer(saint, day, f) == date(2026, 4, 13)
    moved = saint_table.transferred_feast_landing_on(date(2026, 4, 13), feasts_for)
    assert moved.original_date == day


def test_holy_week_solemnity_through_the_calendar():
    saint_table = sc.SanctoralTable.from_records(
        [{"date": "31/03", "feast": "THÁNH THỬ", "type": "S"}]
    )
    cal = build_calendar(CalendarSpec("holy-week"), sanctoral=saint_table)
    impeded = cal.day_info(date(2026, 3, 31))
    assert impeded.special != "THÁNH THỬ"
    assert impeded.saints == ()
    landed = cal.day_info(date(2026, 4, 13))
    assert landed.special == "THÁNH THỬ"
    assert landed.transferred
    assert landed.original_date == date(2026, 3, 31)


def test_env_override_with_broken_json(tmp_path, monkeypatch):
    p = tmp_path / "saints.json"
    p.write_text("[{\"date\": ", encoding="utf-8")
    monkeypatch.setenv(sc.SAINTS_ENV, str(p))
    sc.load_default_records.cache_clear()
    try:
        with pytest.raises(SaintsTableError):
            sc.load_default_records()
    finally:
        monkeypatch.delenv(sc.SAINTS_ENV)
        sc.load_default_records.cache_clear()
