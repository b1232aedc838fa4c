import json
import sqlite3
from flask import request, jsonify
from database.db import get_db
from scrape.urls import canonical_url, platform_for_url

def _problem_to_dict(row, solved_ids):
    problem = dict(row)
    try:
        problem['tags'] = json.loads(row['tags']) if row['tags'] else []
    except ValueError:
        problem['tags'] = []
    problem['solved'] = row['id'] in solved_ids
    return problem

def get_problems():
    db = get_db()
    rows = db.execute(
        '''
        SELECT p.id, p.name, p.url, p.source, p.difficulty, p.tags, p.date_added, p.added_by,
               COUNT(s.user_id) AS solve_count
        FROM problems p
        LEFT JOIN user_solved_problems s ON s.problem_id = p.id
        GROUP BY p.id
        ORDER BY p.date_added DESC, p.id DESC
        '''
    ).fetchall()
    solved_rows = db.execute(
        "SELECT problem_id FROM user_solved_problems WHERE user_id = ?",
        (request.user_id,)
    ).fetchall()
    db.close()

    solved_ids = {row['problem_id'] for row in solved_rows}
    return jsonify([_problem_to_dict(row, solved_ids) for row in rows])

def problem_exists():
    url = canonical_url(request.args.get('url'))
    if not url:
        return jsonify({"error": "Missing 'url' query parameter"}), 400
    with get_db() as db:
        row = db.execute("SELECT id FROM problems WHERE url = ?", (url,)).fetchone()
    return jsonify({"exists": row is not None, "url": url})

def add_problem():
    data = request.get_json(silent=True) or {}
    name = (data.get('name') or '').strip()
    url = canonical_url(data.get('url'))
    difficulty = data.get('difficulty')
    tags = data.get('tags', [])

    if not name or not url:
        return jsonify({"error": "Missing required fields"}), 400

    source = platform_for_url(url)
    if source is None:
        return jsonify({"error": "Only Codeforces and Kattis problems are supported"}), 400

    if difficulty is not None:
        try:
            difficulty = int(difficulty)
        except (TypeError, ValueError):
            return jsonify({"error": "Invalid 'difficulty' (must be integer)"}), 400

    if not (isinstance(tags, list) and all(isinstance(t, str) for t in tags)):
        return jsonify({"error": "Invalid 'tags' (must be list of strings)"}), 400

    db = get_db()
    added_by = db.execute("SELECT username FROM users WHERE id = ?", (request.user_id,)).fetchone()
    try:
        cur = db.execute(
            '''
            INSERT INTO problems (name, url, source, difficulty, tags, added_by)
            VALUES (?, ?, ?, ?, ?, ?)
            ''',
            (name, url, source, difficulty, json.dumps(tags), added_by['username'] if added_by else None)
        )
        db.commit()
    except sqlite3.IntegrityError:
        db.close()
        return jsonify({"error": "Problem already exists", "url": url}), 409

    problem_id = cur.lastrowid
    db.close()
    return jsonify({"success": True, "id": problem_id, "url": url}), 201

def get_solved_problems():
    with get_db() as db:
        rows = db.execute(
            '''
            SELECT problem_id, solved_at FROM user_solved_problems
            WHERE user_id = ? ORDER BY solved_at
            ''',
            (request.user_id,)
        ).fetchall()
    return jsonify({"solved": [dict(row) for row in rows]})

def set_problem_solved(problem_id):
    data = request.get_json(silent=True) or {}
    solved = data.get('solved')
    if not isinstance(solved, bool):
        return jsonify({"error": "Missing 'solved' (must be bool)"}), 400

    db = get_db()
    exists = db.execute("SELECT 1 FROM problems WHERE id = ?", (problem_id,)).fetchone()
    if not exists:
        db.close()
        return jsonify({"error": "Problem not found"}), 404

    if solved:
        # a manual mark never moves an earlier solve time
        db.execute(
            '''
            INSERT INTO user_solved_problems (user_id, problem_id)
            VALUES (?, ?)
            ON CONFLICT(user_id, problem_id) DO NOTHING
            ''',
            (request.user_id, problem_id)
        )
    else:
        db.execute(
            "DELETE FROM user_solved_problems WHERE user_id = ? AND problem_id = ?",
            (request.user_id, problem_id)
        )
    db.commit()
    db.close()
    return jsonify(success=True, solved=solved)
