import sqlite3
import os
import sys
from dotenv import load_dotenv

SCHEMA = [
    '''
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        username TEXT UNIQUE NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )''',
    # tokens are issued by the auth provider; we only look them up
    '''
    CREATE TABLE IF NOT EXISTS sessions (
        session_id TEXT PRIMARY KEY,
        user_id INTEGER NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
    )''',
    '''
    CREATE TABLE IF NOT EXISTS problems (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        url TEXT NOT NULL UNIQUE,
        source TEXT NOT NULL,
        difficulty INTEGER,
        tags TEXT,
        date_added TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now')),
        added_by TEXT
    )''',
    '''
    CREATE TABLE IF NOT EXISTS user_solved_problems (
        user_id INTEGER NOT NULL,
        problem_id INTEGER NOT NULL,
        solved_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now')),
        UNIQUE(user_id, problem_id),
        FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE,
        FOREIGN KEY(problem_id) REFERENCES problems(id) ON DELETE CASCADE
    )''',
    '''
    CREATE TABLE IF NOT EXISTS user_platform_usernames (
        user_id INTEGER PRIMARY KEY,
        codeforces_username TEXT,
        kattis_username TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
    )''',
]

def init_db(db_path):
    conn = sqlite3.connect(db_path)
    c = conn.cursor()
    for statement in SCHEMA:
        c.execute(statement)
    conn.commit()
    conn.close()

if __name__ == "__main__":
    load_dotenv()
    db_path = sys.argv[1] if len(sys.argv) > 1 else os.getenv("DATABASE_PATH", "database.db")
    init_db(db_path)
    print(f"Initialized database at {db_path}")
