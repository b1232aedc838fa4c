def fetch_catalog(db, url_prefix=None):
    if url_prefix:
        # escape LIKE wildcards so the prefix is matched literally
        pattern = url_prefix.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_') + '%'
        return db.execute(
            "SELECT id, url FROM problems WHERE url LIKE ? ESCAPE '\\'",
            (pattern,)
        ).fetchall()
    return db.execute("SELECT id, url FROM problems").fetchall()

def fetch_solved_problem_ids(db, user_id) -> set:
    rows = db.execute(
        "SELECT problem_id FROM user_solved_problems WHERE user_id = ?",
        (user_id,)
    ).fetchall()
    return {row['problem_id'] for row in rows}

def insert_solves(db, user_id, pairs) -> int:
    """
    Insert (problem_id, solved_at) pairs for a user and return how many rows
    were actually written. A pair that is already present (another import
    got there first) is skipped by the unique index instead of failing.
    """
    if not pairs:
        return 0
    cur = db.executemany(
        '''
        INSERT INTO user_solved_problems (user_id, problem_id, solved_at)
        VALUES (?, ?, ?)
        ON CONFLICT(user_id, problem_id) DO NOTHING
        ''',
        [(user_id, problem_id, solved_at) for problem_id, solved_at in pairs]
    )
    db.commit()
    return cur.rowcount
