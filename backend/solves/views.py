from flask import request, jsonify
from database.db import get_db
from platforms.usernames import get_platform_username
from solves.importer import PLATFORMS, import_solves

def import_platform_solves(platform):
    if platform not in PLATFORMS:
        return jsonify({"error": f"Unknown platform '{platform}'"}), 404

    data = request.get_json(silent=True) or {}
    username = data.get('username')
    if username is not None and not isinstance(username, str):
        return jsonify({"error": "Invalid 'username' (must be string)"}), 400

    db = get_db()
    try:
        # fall back to the username saved in settings
        if not (username or '').strip():
            username = get_platform_username(db, request.user_id, PLATFORMS[platform]['username_column'])
        result = import_solves(db, request.user_id, platform, username)
    finally:
        db.close()

    return jsonify(result), (200 if result['success'] else 400)
