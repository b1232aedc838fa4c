import sqlite3
import pytest
import requests
from init_db import init_db

class FakeResponse:
    def __init__(self, status_code=200, payload=None, text="", reason="OK"):
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self.reason = reason

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload

@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = str(tmp_path / "test.db")
    init_db(path)
    monkeypatch.setenv("DATABASE_PATH", path)
    return path

@pytest.fixture
def db(db_path):
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    yield conn
    conn.close()

@pytest.fixture
def user_id(db):
    cur = db.execute("INSERT INTO users (username) VALUES ('alice')")
    db.execute("INSERT INTO sessions (session_id, user_id) VALUES ('token-alice', ?)", (cur.lastrowid,))
    db.commit()
    return cur.lastrowid

@pytest.fixture
def auth_headers(user_id):
    return {"Authorization": "Bearer token-alice"}

@pytest.fixture
def client(db_path):
    from app import app
    app.config["TESTING"] = True
    return app.test_client()

@pytest.fixture
def fake_get(monkeypatch):
    """
    Replace requests.get. Set `fake_get.response` (or a callable in
    `fake_get.handler`) and inspect `fake_get.calls` afterwards.
    """
    class FakeGet:
        def __init__(self):
            self.calls = []
            self.response = FakeResponse()
            self.handler = None

        def __call__(self, url, params=None, headers=None, timeout=None):
            self.calls.append({"url": url, "params": params, "timeout": timeout})
            if self.handler is not None:
                return self.handler(url, params)
            return self.response

    fake = FakeGet()
    monkeypatch.setattr(requests, "get", fake)
    return fake

def add_catalog_problem(db, name, url, source):
    cur = db.execute(
        "INSERT INTO problems (name, url, source) VALUES (?, ?, ?)",
        (name, url, source)
    )
    db.commit()
    return cur.lastrowid

def cf_submission(contest_id, index, ts, verdict="OK", name="Problem"):
    return {
        "id": ts,
        "creationTimeSeconds": ts,
        "verdict": verdict,
        "problem": {"contestId": contest_id, "index": index, "name": name},
    }
