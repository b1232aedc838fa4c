from functools import wraps
from flask import request, jsonify
from database.db import get_db

def _bearer_token():
    auth = request.headers.get("Authorization", "")
    scheme, _, token = auth.partition(" ")
    if scheme != "Bearer" or not token.strip():
        return None
    return token.strip()

def session_required(f):
    """
    Resolve the bearer token issued by the auth provider to a user id and
    expose it as request.user_id. Sessions are only looked up here.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = _bearer_token()
        if token is None:
            return jsonify({"error": "Token is missing"}), 403
        with get_db() as db:
            row = db.execute(
                "SELECT user_id FROM sessions WHERE session_id = ?",
                (token,)
            ).fetchone()
        if not row:
            return jsonify({"error": "Invalid or expired session"}), 401
        request.user_id = row["user_id"]
        return f(*args, **kwargs)
    return decorated_function
