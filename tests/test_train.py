from datetime import time

import pytest

from railflow.train import (
    HEADER,
    HEADER_LOCAL,
    ScheduleBook,
    Train,
    TrainSchedule,
    add_train,
    delete_train,
    filter_trains,
    find_train,
    load_trains,
    next_train_id,
    save_trains,
    update_train,
)


@pytest.fixture
def trains():
    return [
        Train(11, "G8501", 600),
        Train(12, "D6202", 0),
        Train(13, "C6001", 1200),
    ]


def _schedule(station_id):
    return [TrainSchedule(station_id, "Stop", time(8, 0), time(8, 2))]


def test_round_trip(tmp_path, trains):
    path = tmp_path / "trains.csv"
    save_trains(trains, path)
    assert load_trains(path) == trains


def test_saved_headers_and_missing_capacity(tmp_path, trains):
    path = tmp_path / "trains.csv"
    save_trains(trains, path)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "lcbm,lcdm,lcyn" == HEADER
    assert lines[1] == "列车编码,列车代码,列车运量" == HEADER_LOCAL
    assert lines[3] == "12,D6202,#N/A"


def test_load_skips_bad_lines(tmp_path):
    path = tmp_path / "trains.csv"
    path.write_text(
        HEADER + "\n" + HEADER_LOCAL + "\n"
        "x,Bad,10\n"
        "20,Short\n"
        "\n"
        "21,G1,#N/A\n"
        "22,G2,abc\n"
        "23,G3,300\n",
        encoding="utf-8",
    )
    assert load_trains(path) == [
        Train(21, "G1", 0),
        Train(22, "G2", 0),
        Train(23, "G3", 300),
    ]


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_trains(tmp_path / "none.csv")


def test_add_train(tmp_path, trains):
    path = tmp_path / "trains.csv"
    add_train(trains, Train(14, "G8603", 800), path)
    assert find_train(trains, 14) == Train(14, "G8603", 800)
    assert load_trains(path) == trains


def test_add_duplicate_raises(tmp_path, trains):
    before = list(trains)
    with pytest.raises(ValueError):
        add_train(trains, Train(11, "Dup", 1), tmp_path / "trains.csv")
    assert trains == before


def test_delete_train_clears_schedules(tmp_path, trains):
    path = tmp_path / "trains.csv"
    book = ScheduleBook()
    book.update(11, 1, _schedule(1001))
    book.update(11, 2, _schedule(1002))
    book.update(12, 1, _schedule(1003))
    delete_train(trains, 11, path, book)
    assert find_train(trains, 11) is None
    assert book.get(11, 1) == []
    assert book.get(11, 2) == []
    assert book.get(12, 1) == _schedule(1003)
    assert load_trains(path) == trains


def test_delete_missing_raises(tmp_path, trains):
    before = list(trains)
    with pytest.raises(LookupError):
        delete_train(trains, 999, tmp_path / "trains.csv")
    assert trains == before


def test_update_train(tmp_path, trains):
    path = tmp_path / "trains.csv"
    update_train(trains, Train(13, "C6001X", 900), path)
    assert find_train(trains, 13) == Train(13, "C6001X", 900)
    assert load_trains(path) == trains


def test_update_missing_raises(tmp_path, trains):
    with pytest.raises(LookupError):
        update_train(trains, Train(77, "X", 1), tmp_path / "trains.csv")


def test_filter_by_name_any_case(trains):
    assert [t.code for t in filter_trains(trains, "g85")] == [11]


def test_filter_by_code_and_capacity(trains):
    assert [t.code for t in filter_trains(trains, "1200")] == [13]
    assert filter_trains(trains, "1") == trains


def test_next_train_id():
    assert next_train_id([]) == 1
    assert next_train_id([Train(5), Train(40), Train(2)]) == 41


def test_find_train(trains):
    assert find_train(trains, 12) is trains[1]
    assert find_train(trains, 0) is None


def test_schedule_book_get_and_update():
    book = ScheduleBook()
    assert book.get(1, 1) == []
    schedule = _schedule(1001)
    book.update(1, 1, schedule)
    assert book.get(1, 1) == schedule
    assert book.get(1, 2) == []
    replacement = _schedule(2002)
    book.update(1, 1, replacement)
    assert book.get(1, 1) == replacement
    assert len(book) == 1


def test_schedule_book_returns_copies():
    book = ScheduleBook()
    book.update(3, 4, _schedule(1001))
    got = book.get(3, 4)
    got.clear()
    assert book.get(3, 4) == _schedule(1001)


def test_schedule_default_stop_duration():
    stop = TrainSchedule(1001, "Stop", time(9, 0), time(9, 2))
    assert stop.stop_duration == 2