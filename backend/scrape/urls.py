import re
from urllib.parse import urlsplit, urlunsplit

CODEFORCES_BASE = "https://codeforces.com"
KATTIS_BASE = "https://open.kattis.com"
KATTIS_PROBLEM_PREFIX = f"{KATTIS_BASE}/problems/"

# contest ids at or above this are gym contests
GYM_CONTEST_MIN_ID = 100000

_CF_PATH_RE = re.compile(
    r"^/(?:contest/(\d+)/problem|gym/(\d+)/problem|problemset/problem/(\d+))/([A-Za-z0-9]+)$"
)
_KATTIS_PATH_RE = re.compile(r"^/problems/([A-Za-z0-9_.\-]+)$")

def codeforces_problem_url(contest_id, index) -> str:
    if int(contest_id) >= GYM_CONTEST_MIN_ID:
        return f"{CODEFORCES_BASE}/gym/{contest_id}/problem/{index}"
    return f"{CODEFORCES_BASE}/contest/{contest_id}/problem/{index}"

def kattis_problem_url(problem_id: str) -> str:
    return f"{KATTIS_PROBLEM_PREFIX}{problem_id}"

def _hostname(netloc: str) -> str:
    h = netloc.lower().split(":", 1)[0]
    return h[4:] if h.startswith("www.") else h

def canonical_url(url: str | None) -> str | None:
    """
    Normalize a problem URL into the form used as the catalog join key.
    - protocol-relative or scheme-less URLs get https://
    - http is upgraded to https, "www." is dropped
    - query, fragment and trailing slashes are removed
    - Codeforces problemset links become contest/gym links
    - any *.kattis.com problem link moves to open.kattis.com
    Applying it twice gives the same result.
    """
    if not url:
        return None
    s = url.strip()
    if not s:
        return None

    if s.startswith("//"):
        s = "https:" + s
    if not re.match(r"^[a-zA-Z][a-zA-Z0-9+.\-]*://", s):
        s = "https://" + s

    parts = urlsplit(s)
    host = _hostname(parts.netloc)
    path = parts.path.rstrip("/")

    if host == "codeforces.com":
        m = _CF_PATH_RE.match(path)
        if m:
            contest_id = m.group(1) or m.group(2) or m.group(3)
            return codeforces_problem_url(int(contest_id), m.group(4).upper())
    elif host == "kattis.com" or host.endswith(".kattis.com"):
        m = _KATTIS_PATH_RE.match(path)
        if m:
            return kattis_problem_url(m.group(1).lower())

    return urlunsplit(("https", host, path, "", ""))

def platform_for_url(url: str | None) -> str | None:
    if not url:
        return None
    host = _hostname(urlsplit(url if "://" in url else "https://" + url).netloc)
    if host == "codeforces.com":
        return "codeforces"
    if host == "kattis.com" or host.endswith(".kattis.com"):
        return "kattis"
    return None
