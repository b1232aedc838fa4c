import sqlite3
import pytest
from conftest import FakeResponse, add_catalog_problem, cf_submission
import solves.importer as importer
from solves.importer import import_solves

@pytest.fixture
def catalog(db):
    return {
        "4A": add_catalog_problem(db, "Watermelon", "https://codeforces.com/contest/4/problem/A", "codeforces"),
        "71A": add_catalog_problem(db, "Way Too Long Words", "https://codeforces.com/contest/71/problem/A", "codeforces"),
        "gym": add_catalog_problem(db, "Gym A", "https://codeforces.com/gym/100001/problem/A", "codeforces"),
        "hello": add_catalog_problem(db, "Hello World!", "https://open.kattis.com/problems/hello", "kattis"),
    }

@pytest.fixture
def cf_history(fake_get):
    fake_get.response = FakeResponse(payload={"status": "OK", "result": [
        cf_submission(4, "A", 100),
        cf_submission(4, "A", 50),
        cf_submission(71, "A", 200),
        cf_submission(1000, "B", 300),
        cf_submission(231, "A", 400, verdict="WRONG_ANSWER"),
    ]})
    return fake_get

def test_import_counts(db, user_id, catalog, cf_history):
    result = import_solves(db, user_id, "codeforces", "tourist")
    assert result["success"] is True
    assert (result["totalSolved"], result["matchedCount"], result["importedCount"]) == (3, 2, 2)

    rows = db.execute(
        "SELECT problem_id, solved_at FROM user_solved_problems WHERE user_id = ?", (user_id,)
    ).fetchall()
    solved_at = {row["problem_id"]: row["solved_at"] for row in rows}
    assert solved_at == {
        catalog["4A"]: "1970-01-01T00:00:50Z",
        catalog["71A"]: "1970-01-01T00:03:20Z",
    }

def test_second_import_is_a_no_op(db, user_id, catalog, cf_history):
    import_solves(db, user_id, "codeforces", "tourist")
    result = import_solves(db, user_id, "codeforces", "tourist")
    assert result["success"] is True
    assert result["importedCount"] == 0
    assert result["matchedCount"] == 2
    count = db.execute("SELECT COUNT(*) AS n FROM user_solved_problems").fetchone()["n"]
    assert count == 2

def test_existing_manual_solve_is_kept(db, user_id, catalog, cf_history):
    db.execute(
        "INSERT INTO user_solved_problems (user_id, problem_id, solved_at) VALUES (?, ?, ?)",
        (user_id, catalog["71A"], "2024-01-01T00:00:00Z")
    )
    db.commit()
    result = import_solves(db, user_id, "codeforces", "tourist")
    assert result["importedCount"] == 1
    row = db.execute(
        "SELECT solved_at FROM user_solved_problems WHERE problem_id = ?", (catalog["71A"],)
    ).fetchone()
    assert row["solved_at"] == "2024-01-01T00:00:00Z"

def test_counts_never_exceed_each_other(db, user_id, catalog, fake_get):
    fake_get.response = FakeResponse(payload={"status": "OK", "result": [
        cf_submission(cid, "A", ts) for ts, cid in enumerate([4, 71, 100001, 5, 6, 100002, 4])
    ]})
    for _ in range(2):
        result = import_solves(db, user_id, "codeforces", "tourist")
        assert result["importedCount"] <= result["matchedCount"] <= result["totalSolved"]

def test_blank_username_makes_no_request(db, user_id, fake_get):
    result = import_solves(db, user_id, "codeforces", "   ")
    assert result == {"success": False, "message": "Codeforces username is required"}
    assert fake_get.calls == []

def test_unknown_platform(db, user_id):
    result = import_solves(db, user_id, "leetcode", "someone")
    assert result["success"] is False
    assert "leetcode" in result["message"]

def test_user_not_found_has_profile_link(db, user_id, fake_get):
    fake_get.response = FakeResponse(400, payload={
        "status": "FAILED", "comment": "handle: User with handle ghost not found"
    })
    result = import_solves(db, user_id, "codeforces", "ghost")
    assert result["success"] is False
    assert "https://codeforces.com/profile/ghost" in result["message"]

def test_kattis_user_not_found_links_normalized_profile(db, user_id, fake_get):
    fake_get.response = FakeResponse(404, reason="Not Found")
    result = import_solves(db, user_id, "kattis", "John Doe")
    assert result["success"] is False
    assert "https://open.kattis.com/users/john-doe" in result["message"]

def test_upstream_failure_message(db, user_id, fake_get):
    fake_get.response = FakeResponse(400, payload={"status": "FAILED", "comment": "Internal error"})
    result = import_solves(db, user_id, "codeforces", "tourist")
    assert result == {"success": False, "message": "Internal error"}

def test_kattis_import(db, user_id, catalog, fake_get):
    fake_get.response = FakeResponse(text="""
        <a href="/users/jane">jane</a>
        <a href="/problems/hello">Hello World!</a>
        <a href="/problems/notincatalog">Something else</a>
    """)
    result = import_solves(db, user_id, "kattis", "jane")
    assert (result["totalSolved"], result["matchedCount"], result["importedCount"]) == (2, 1, 1)
    assert import_solves(db, user_id, "kattis", "jane")["importedCount"] == 0

def test_kattis_empty_profile(db, user_id, catalog, fake_get):
    fake_get.response = FakeResponse(text='<a href="/users/jane">jane</a> No solved problems')
    result = import_solves(db, user_id, "kattis", "jane")
    assert result["success"] is True
    assert (result["totalSolved"], result["matchedCount"], result["importedCount"]) == (0, 0, 0)

def test_database_error_is_reported(db, user_id, catalog, cf_history, monkeypatch):
    def broken_insert(db, user_id, pairs):
        raise sqlite3.OperationalError("database is locked")
    monkeypatch.setattr(importer, "insert_solves", broken_insert)
    result = import_solves(db, user_id, "codeforces", "tourist")
    assert result["success"] is False
    assert "database is locked" in result["message"]

def test_unexpected_error_never_raises(db, user_id, catalog, cf_history, monkeypatch):
    def explode(records, catalog):
        raise KeyError("url")
    monkeypatch.setattr(importer, "match_to_catalog", explode)
    result = import_solves(db, user_id, "codeforces", "tourist")
    assert result == {"success": False, "message": "Unknown error importing Codeforces solves"}
