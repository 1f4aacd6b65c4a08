# tiny_runner/tests/test_score_store.py
import json

from tiny_runner.game.config import BEST_KEY
from tiny_runner.game.score_store import MemoryScoreStore, ScoreStore
from tiny_runner.game.session import GameSession


def test_missing_file_reads_zero(tmp_path):
    assert ScoreStore(tmp_path / "nope" / "scores.json").load_best() == 0


def test_save_then_load(tmp_path):
    path = tmp_path / "sub" / "scores.json"
    store = ScoreStore(path)
    store.save_best(7)
    assert store.load_best() == 7
    assert json.loads(path.read_text(encoding="utf-8")) == {BEST_KEY: 7}
    assert not path.with_name("scores.json.tmp").exists()


def test_other_keys_survive_a_save(tmp_path):
    path = tmp_path / "scores.json"
    path.write_text(json.dumps({"volume": 3, BEST_KEY: 1}), encoding="utf-8")
    ScoreStore(path).save_best(4)
    assert json.loads(path.read_text(encoding="utf-8")) == {"volume": 3, BEST_KEY: 4}


def test_corrupt_or_negative_reads_zero(tmp_path):
    path = tmp_path / "scores.json"
    path.write_text("{not json", encoding="utf-8")
    assert ScoreStore(path).load_best() == 0
    path.write_text(json.dumps({BEST_KEY: "many"}), encoding="utf-8")
    assert ScoreStore(path).load_best() == 0
    path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    assert ScoreStore(path).load_best() == 0
    path.write_text(json.dumps({BEST_KEY: -5}), encoding="utf-8")
    assert ScoreStore(path).load_best() == 0
    path.write_text('{"tinyRunnerBest": 1e400}', encoding="utf-8")  # parses as inf
    assert ScoreStore(path).load_best() == 0
    path.write_text('{"tinyRunnerBest": Infinity}', encoding="utf-8")
    assert ScoreStore(path).load_best() == 0


def test_write_failure_is_skipped(tmp_path):
    blocker = tmp_path / "afile"
    blocker.write_text("x", encoding="utf-8")
    store = ScoreStore(blocker / "scores.json")  # parent is a file: mkdir fails
    store.save_best(9)
    assert store.load_best() == 0


def test_session_reads_best_from_file(tmp_path):
    path = tmp_path / "scores.json"
    ScoreStore(path).save_best(12)
    s = GameSession(seed=1, store=ScoreStore(path))
    assert s.best == 12


def test_memory_store_counts_writes():
    store = MemoryScoreStore()
    assert store.load_best() == 0
    store.save_best(3)
    assert store.load_best() == 3 and store.writes == 1


def test_session_starts_with_an_overflowing_best(tmp_path):
    path = tmp_path / "scores.json"
    path.write_text('{"tinyRunnerBest": 1e400}', encoding="utf-8")
    s = GameSession(seed=1, store=ScoreStore(path))
    assert s.best == 0
