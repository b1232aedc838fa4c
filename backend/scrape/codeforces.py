from flask import request, jsonify
from datetime import datetime, timezone
import requests
import os
from scrape.urls import codeforces_problem_url
from scrape.errors import PlatformError, classify_platform_error

API_URL = "https://codeforces.com/api/user.status"

HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
}

def _ts_to_iso_utc(ts: int) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat().replace('+00:00', 'Z')

def parse_codeforces_submissions(submissions) -> list[dict]:
    """
    Turn a user.status `result` list into solve records, one per problem URL.

    Only accepted submissions count. When a problem was accepted more than
    once, the earliest creationTimeSeconds is kept.
    """
    earliest = {}  # url -> (timestamp, name)

    for submission in submissions:
        if submission.get('verdict') != 'OK':
            continue
        problem = submission.get('problem') or {}
        contest_id = problem.get('contestId')
        index = problem.get('index')
        ts = submission.get('creationTimeSeconds')
        # problemset-only (acmsguru) problems have no contest to link to
        if contest_id is None or not index or ts is None:
            continue

        url = codeforces_problem_url(contest_id, index)
        if url not in earliest or ts < earliest[url][0]:
            earliest[url] = (ts, problem.get('name'))

    return [
        {'url': url, 'name': name, 'solved_at': _ts_to_iso_utc(ts)}
        for url, (ts, name) in earliest.items()
    ]

def fetch_codeforces_solves(username: str) -> list[dict]:
    """
    Fetch every accepted problem for a Codeforces handle.

    Raises UserNotFoundError, RateLimitedError or PlatformError.
    """
    timeout = float(os.getenv("HTTP_TIMEOUT", "20"))
    print(f"[codeforces] Fetching submissions for {username}")
    try:
        response = requests.get(API_URL, params={'handle': username}, headers=HEADERS, timeout=timeout)
    except requests.RequestException as e:
        print(f"[codeforces] Request failed for {username}: {e}")
        raise PlatformError("Failed to fetch submissions from Codeforces") from e

    # failures come back as HTTP 400 with a JSON body, so read the body first
    try:
        data = response.json()
    except ValueError:
        print(f"[codeforces] Non-JSON response ({response.status_code}) for {username}")
        raise classify_platform_error(
            "Codeforces", "Failed to fetch submissions from Codeforces",
            response.status_code if response.status_code in (404, 429) else None
        )

    if not isinstance(data, dict) or data.get('status') != 'OK':
        comment = data.get('comment') if isinstance(data, dict) else None
        print(f"[codeforces] API error for {username}: {comment}")
        raise classify_platform_error("Codeforces", comment or "Failed to fetch submissions from Codeforces")

    submissions = data.get('result')
    if not isinstance(submissions, list):
        raise PlatformError("Unexpected response from Codeforces (missing result)")

    solved = parse_codeforces_submissions(submissions)
    print(f"[codeforces] {username}: {len(submissions)} submissions, {len(solved)} solved problems")
    return solved

def to_response_record(record: dict) -> dict:
    out = {'url': record['url'], 'solvedAt': record['solved_at']}
    if record.get('name'):
        out['name'] = record['name']
    return out

def codeforces_user_solves():
    username = request.args.get('username', '').strip()
    if not username:
        return jsonify({"error": "No username provided"}), 400
    try:
        solved = fetch_codeforces_solves(username)
    except PlatformError as e:
        return jsonify({"error": e.message}), e.status
    return jsonify({
        "success": True,
        "solvedProblems": [to_response_record(r) for r in solved]
    })
