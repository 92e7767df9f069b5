import pytest

from cybertower.waves import Wave, WaveSpawner, load_waves, parse_waves


def test_parse_repeats_triples():
    assert parse_waves("1 2 3") == [Wave(1, 2.0)] * 3


def test_parse_multiple_lines():
    waves = parse_waves("1 1 1\n4 0.5 2\n")
    assert waves == [Wave(1, 1.0), Wave(4, 0.5), Wave(4, 0.5)]


def test_parse_truncates_type():
    assert parse_waves("2.7 1 1")[0].enemy_type == 2


def test_parse_fractional_repeat_rounds_up():
    assert len(parse_waves("1 1 1.5")) == 2


def test_parse_zero_repeat_gives_nothing():
    assert parse_waves("1 1 0") == []


def test_parse_ignores_partial_triple():
    assert parse_waves("1 1 1 3 2") == [Wave(1, 1.0)]


def test_parse_stops_at_garbage():
    assert parse_waves("1 1 1 x 2 2 3 3 3") == [Wave(1, 1.0)]


def test_load_missing_file_is_empty(tmp_path):
    assert load_waves(tmp_path / "absent.txt") == []


def test_load_file(tmp_path):
    path = tmp_path / "enemy1.txt"
    path.write_text("3 2 2\n")
    assert load_waves(path) == [Wave(3, 2.0), Wave(3, 2.0)]


def test_spawner_waits_then_spawns_with_leftover():
    spawner = WaveSpawner([Wave(1, 1.0), Wave(3, 0.5)])
    assert spawner.advance(0.5) is None
    kind, elapsed = spawner.advance(0.6)
    assert kind == 1
    assert elapsed == pytest.approx(0.1)
    assert spawner.advance(0.3) is None
    kind, elapsed = spawner.advance(0.2)
    assert kind == 3
    assert elapsed == pytest.approx(0.1)
    assert spawner.exhausted()


def test_spawner_releases_one_per_step():
    spawner = WaveSpawner([Wave(1, 1.0), Wave(2, 1.0)])
    first = spawner.advance(10.0)
    assert first[0] == 1
    assert len(spawner) == 1
    second = spawner.advance(0.0)
    assert second[0] == 2
    assert second[1] == pytest.approx(first[1] - 1.0)


def test_empty_spawner_keeps_counting():
    spawner = WaveSpawner([])
    assert spawner.exhausted()
    assert spawner.advance(1.0) is None
    assert spawner.ticks == pytest.approx(1.0)