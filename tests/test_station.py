import pytest

from railflow.station import (
    HEADER,
    Station,
    add_station,
    delete_station,
    direction,
    filter_stations,
    find_station,
    load_stations,
    next_station_id,
    save_stations,
    update_station,
)


@pytest.fixture
def stations():
    return [
        Station(1001, "Chengdu East", "CDE", "ICW", "cdd"),
        Station(6001, "Chongqing North", "CQN", "CUW", "cqb"),
        Station(2002, "Suining", "SN", "NIW", "sn"),
    ]


def test_round_trip(tmp_path, stations):
    path = tmp_path / "stations.csv"
    save_stations(stations, path)
    assert load_stations(path) == stations


def test_saved_file_starts_with_header(tmp_path, stations):
    path = tmp_path / "stations.csv"
    save_stations(stations, path)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "zdid,zdmc,station_code,station_telecode,station_shortname"
    assert lines[0] == HEADER
    assert len(lines) == len(stations) + 1


def test_load_skips_bad_lines(tmp_path):
    path = tmp_path / "stations.csv"
    path.write_text(
        HEADER + "\n"
        "1001, Chengdu , CD , ICW , cd \n"
        "\n"
        "abc,Bad,B,B,B\n"
        "1002,Short,S\n"
        "1003,Neijiang,NJ,NJW,nj\n",
        encoding="utf-8",
    )
    loaded = load_stations(path)
    assert loaded == [
        Station(1001, "Chengdu", "CD", "ICW", "cd"),
        Station(1003, "Neijiang", "NJ", "NJW", "nj"),
    ]


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_stations(tmp_path / "missing.csv")


def test_add_station_persists(tmp_path, stations):
    path = tmp_path / "stations.csv"
    new = Station(3003, "Dazu", "DZ", "DZW", "dz")
    add_station(stations, new, path)
    assert stations[-1] == new
    assert load_stations(path) == stations


def test_add_duplicate_raises(tmp_path, stations):
    path = tmp_path / "stations.csv"
    before = list(stations)
    with pytest.raises(ValueError):
        add_station(stations, Station(1001, "Other", "", "", ""), path)
    assert stations == before
    assert not path.exists()


def test_delete_station(tmp_path, stations):
    path = tmp_path / "stations.csv"
    delete_station(stations, 6001, path)
    assert all(s.station_id != 6001 for s in stations)
    assert load_stations(path) == stations


def test_delete_missing_raises(tmp_path, stations):
    before = list(stations)
    with pytest.raises(LookupError):
        delete_station(stations, 9999, tmp_path / "stations.csv")
    assert stations == before


def test_update_station(tmp_path, stations):
    path = tmp_path / "stations.csv"
    changed = Station(2002, "Suining West", "SNW", "NIW", "snx")
    update_station(stations, changed, path)
    assert find_station(stations, 2002) == changed
    assert load_stations(path) == stations


def test_update_missing_raises(tmp_path, stations):
    with pytest.raises(LookupError):
        update_station(stations, Station(4242, "X", "", "", ""), tmp_path / "s.csv")


def test_filter_case_insensitive(stations):
    result = filter_stations(stations, "chongqing")
    assert [s.station_id for s in result] == [6001]


def test_filter_by_id_substring(stations):
    result = filter_stations(stations, "00")
    assert result == stations


def test_filter_no_match(stations):
    assert filter_stations(stations, "zzz") == []


def test_next_station_id():
    assert next_station_id([]) == 1
    assert next_station_id([Station(3), Station(7)]) == 8


def test_find_station(stations):
    assert find_station(stations, 2002) is stations[2]
    assert find_station(stations, 5) is None


@pytest.mark.parametrize(
    "start, end, expected",
    [
        (1001, 6001, "成都→重庆"),
        (6001, 1001, "重庆→成都"),
        (1001, 5999, "成都内部"),
        (6000, 9999, "重庆内部"),
        (5999, 6000, "成都→重庆"),
    ],
)
def test_direction(start, end, expected):
    assert direction(start, end) == expected