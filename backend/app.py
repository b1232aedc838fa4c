import os
from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

# our functions
from auth.session import session_required
from scrape.codeforces import codeforces_user_solves
from scrape.kattis import kattis_user_solves
from solves.views import import_platform_solves
from platforms.usernames import get_platform_usernames, save_platform_usernames
from problems.problems import (
    get_problems, add_problem, problem_exists, get_solved_problems, set_problem_solved
)

load_dotenv()

def create_app():
    app = Flask(__name__)
    app.config['SESSION_COOKIE_SAMESITE'] = 'None' if os.getenv("FLASK_ENV") == "production" else 'Lax'
    app.config['SESSION_COOKIE_SECURE'] = os.getenv("FLASK_ENV") == "production"
    CORS(app, supports_credentials=True, origins=[os.getenv("FRONTEND_URL", "http://localhost:5173")])

    # External judge lookups (public)
    app.add_url_rule("/api/codeforces/user-solves", view_func=codeforces_user_solves, methods=["GET"])
    app.add_url_rule("/api/kattis/user-solves", view_func=kattis_user_solves, methods=["GET"])

    # Solve import
    app.add_url_rule("/api/import/<platform>", view_func=session_required(import_platform_solves), methods=["POST"])

    # Platform usernames
    app.add_url_rule("/api/platform-usernames", view_func=session_required(get_platform_usernames), methods=["GET"])
    app.add_url_rule("/api/platform-usernames", view_func=session_required(save_platform_usernames), methods=["POST"])

    # Problem catalog + solved problems
    app.add_url_rule("/api/problems", view_func=session_required(get_problems), methods=["GET"])
    app.add_url_rule("/api/problems", view_func=session_required(add_problem), methods=["POST"])
    app.add_url_rule("/api/problems/exists", view_func=problem_exists, methods=["GET"])
    app.add_url_rule("/api/problems/<int:problem_id>/solved", view_func=session_required(set_problem_solved), methods=["POST"])
    app.add_url_rule("/api/solved", view_func=session_required(get_solved_problems), methods=["GET"])

    return app

app = create_app()

if __name__ == "__main__":
    app.run(debug=False, host='0.0.0.0', port=os.getenv("PORT", 5000))
