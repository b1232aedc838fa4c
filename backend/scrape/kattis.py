from flask import request, jsonify
from datetime import datetime, timezone
from bs4 import BeautifulSoup
import requests
import re
import os
from scrape.urls import KATTIS_BASE, kattis_problem_url
from scrape.errors import PlatformError, UserNotFoundError, classify_platform_error
from scrape.codeforces import to_response_record

HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
}

NO_SOLVES_PHRASES = (
    "no solved problems",
    "has not solved any problems",
    "hasn't solved any problems",
)

_PROBLEM_HREF_RE = re.compile(r'^(?:https?://[^/]*kattis\.com)?/problems/([a-z0-9]+)/?$', re.I)
_HREF_ATTR_RE = re.compile(r'(?<![\w-])href\s*=\s*["\'](?:https?://[^"\'/]*kattis\.com)?/problems/([a-z0-9]+)/?["\']', re.I)
_PATH_RE = re.compile(r'/problems/([a-z0-9]+)', re.I)
# paths inside embedded JSON come out as \/problems\/<id>
_ESCAPED_PATH_RE = re.compile(r'\\/problems\\/([a-z0-9]+)', re.I)

def normalize_kattis_username(username: str) -> str:
    # Kattis profile slugs are lowercase with hyphens for spaces
    return re.sub(r'\s+', '-', (username or '').strip().lower())

def _dt_to_iso_utc(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat().replace('+00:00', 'Z')

def user_found(html: str, username: str, normalized: str) -> bool:
    """
    Kattis answers unknown users with a normal-looking page, so look for the
    username itself in the markup: tag text, quoted attribute values or the
    profile link. Falls back to the profile path appearing anywhere.
    """
    raw = (username or '').strip()
    spellings = {raw, normalized, raw.lower(), raw.upper()}
    spellings.discard('')
    for name in spellings:
        for marker in (f">{name}<", f'"{name}"', f"'{name}'", f"/users/{name}"):
            if marker in html:
                return True
    return f"/users/{normalized}" in html.lower()

def has_no_solves(html: str) -> bool:
    text = html.lower()
    return any(phrase in text for phrase in NO_SOLVES_PHRASES)

def extract_anchors(html: str) -> list[tuple[str, str | None]]:
    """<a href="/problems/<id>">Display name</a>"""
    soup = BeautifulSoup(html, 'html.parser')
    found = []
    for a in soup.find_all('a', href=True):
        m = _PROBLEM_HREF_RE.match(a['href'].strip())
        if not m:
            continue
        name = a.get_text(" ", strip=True)
        if name:
            found.append((m.group(1).lower(), name))
    return found

def extract_hrefs(html: str) -> list[tuple[str, str | None]]:
    return [(pid.lower(), None) for pid in _HREF_ATTR_RE.findall(html)]

def extract_paths(html: str) -> list[tuple[str, str | None]]:
    return [(pid.lower(), None) for pid in _PATH_RE.findall(html)]

def extract_escaped_paths(html: str) -> list[tuple[str, str | None]]:
    return [(pid.lower(), None) for pid in _ESCAPED_PATH_RE.findall(html)]

# strongest first; the first one that finds anything wins
EXTRACTORS = [
    extract_anchors,
    extract_hrefs,
    extract_paths,
    extract_escaped_paths,
]

def extract_problem_ids(html: str) -> list[tuple[str, str | None]]:
    for extractor in EXTRACTORS:
        found = extractor(html)
        if found:
            print(f"[kattis] {extractor.__name__} matched {len(found)} links")
            return found
    return []

def parse_kattis_profile(html: str, username: str, now: datetime | None = None) -> list[dict]:
    """
    Pull solved problems out of a Kattis profile page.

    Kattis has no per-solve timestamps, so every record gets `now` as its
    solved_at. Those times say nothing about solve order.
    Raises UserNotFoundError when the page does not belong to `username`.
    """
    normalized = normalize_kattis_username(username)
    if not user_found(html, username, normalized):
        raise UserNotFoundError(f"Kattis user '{normalized}' not found")

    if has_no_solves(html):
        return []

    solved_at = _dt_to_iso_utc(now or datetime.now(timezone.utc))
    solved = {}
    for problem_id, name in extract_problem_ids(html):
        url = kattis_problem_url(problem_id)
        if url not in solved:
            solved[url] = {'url': url, 'name': name, 'solved_at': solved_at}
    return list(solved.values())

def fetch_kattis_solves(username: str, now: datetime | None = None) -> list[dict]:
    """
    Scrape the public profile of a Kattis user.

    Raises UserNotFoundError, RateLimitedError or PlatformError.
    """
    normalized = normalize_kattis_username(username)
    if not normalized:
        raise PlatformError("No username provided", 400)

    timeout = float(os.getenv("HTTP_TIMEOUT", "20"))
    profile = f"{KATTIS_BASE}/users/{normalized}"
    print(f"[kattis] Fetching profile: {profile}")
    try:
        response = requests.get(profile, headers=HEADERS, timeout=timeout)
    except requests.RequestException as e:
        print(f"[kattis] Request failed for {normalized}: {e}")
        raise PlatformError("Failed to fetch submissions from Kattis") from e

    if response.status_code != 200:
        print(f"[kattis] Profile fetch failed: {response.status_code}")
        raise classify_platform_error(
            "Kattis",
            f"Failed to fetch user profile from Kattis: {response.reason}",
            response.status_code,
        )

    solved = parse_kattis_profile(response.text, username, now)
    print(f"[kattis] {normalized}: {len(solved)} solved problems")
    return solved

def kattis_user_solves():
    username = request.args.get('username', '').strip()
    if not username:
        return jsonify({"error": "No username provided"}), 400
    try:
        solved = fetch_kattis_solves(username)
    except PlatformError as e:
        return jsonify({"error": e.message}), e.status
    return jsonify({
        "success": True,
        "solvedProblems": [to_response_record(r) for r in solved]
    })
