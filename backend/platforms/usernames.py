from flask import request, jsonify
from database.db import get_db

COLUMNS = ('codeforces_username', 'kattis_username')

def get_platform_username(db, user_id, column):
    if column not in COLUMNS:
        raise ValueError(f"Unknown platform column: {column}")
    row = db.execute(
        f"SELECT {column} FROM user_platform_usernames WHERE user_id = ?",
        (user_id,)
    ).fetchone()
    return row[column] if row else None

def get_platform_usernames():
    with get_db() as db:
        row = db.execute(
            '''
            SELECT codeforces_username, kattis_username, updated_at
            FROM user_platform_usernames WHERE user_id = ?
            ''',
            (request.user_id,)
        ).fetchone()

    # no row yet is normal for new users
    if not row:
        return jsonify({"codeforces_username": None, "kattis_username": None})
    return jsonify(dict(row))

def save_platform_usernames():
    data = request.get_json(silent=True) or {}

    values = {}
    for column in COLUMNS:
        value = data.get(column)
        if value is not None and not isinstance(value, str):
            return jsonify({"error": f"Invalid '{column}' (must be string)"}), 400
        # blank clears the stored username
        values[column] = (value or '').strip() or None

    with get_db() as db:
        db.execute(
            '''
            INSERT INTO user_platform_usernames (user_id, codeforces_username, kattis_username)
            VALUES (?, ?, ?)
            ON CONFLICT(user_id) DO UPDATE SET
                codeforces_username = excluded.codeforces_username,
                kattis_username = excluded.kattis_username,
                updated_at = CURRENT_TIMESTAMP
            ''',
            (request.user_id, values['codeforces_username'], values['kattis_username'])
        )
        db.commit()

    return jsonify({"success": True})
