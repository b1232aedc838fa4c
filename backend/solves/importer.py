import sqlite3
from scrape.codeforces import fetch_codeforces_solves
from scrape.kattis import fetch_kattis_solves, normalize_kattis_username
from scrape.errors import PlatformError, UserNotFoundError, profile_url
from scrape.urls import KATTIS_PROBLEM_PREFIX
from solves.matcher import match_to_catalog
from solves.reconcile import reconcile
from solves.store import fetch_catalog, fetch_solved_problem_ids, insert_solves

PLATFORMS = {
    'codeforces': {
        'label': 'Codeforces',
        'fetch': fetch_codeforces_solves,
        'catalog_prefix': None,
        'profile_name': str.strip,
        'username_column': 'codeforces_username',
    },
    'kattis': {
        'label': 'Kattis',
        'fetch': fetch_kattis_solves,
        'catalog_prefix': KATTIS_PROBLEM_PREFIX,
        'profile_name': normalize_kattis_username,
        'username_column': 'kattis_username',
    },
}

def _failure(message):
    return {'success': False, 'message': message}

def import_solves(db, user_id, platform, username):
    """
    Import a user's solves from an external judge into user_solved_problems.

    Runs fetch -> catalog match -> reconcile -> insert and always returns a
    result dict instead of raising:
      {success, message, totalSolved, matchedCount, importedCount}
    totalSolved counts what the judge reported, matchedCount what exists in
    our catalog, importedCount what was new for this user, so
    importedCount <= matchedCount <= totalSolved.
    """
    config = PLATFORMS.get(platform)
    if config is None:
        return _failure(f"Unknown platform '{platform}'")
    label = config['label']

    username = (username or '').strip()
    if not username:
        return _failure(f"{label} username is required")

    try:
        solved = config['fetch'](username)

        catalog = fetch_catalog(db, config['catalog_prefix'])
        matched = match_to_catalog(solved, catalog)

        imported = 0
        if matched:
            existing = fetch_solved_problem_ids(db, user_id)
            new_solves = reconcile(matched, existing)
            imported = insert_solves(db, user_id, new_solves)
    except UserNotFoundError:
        link = profile_url(platform, config['profile_name'](username))
        print(f"[import] {label} user {username} not found")
        return _failure(
            f"{label} user '{username}' was not found. "
            f"Check that your username is correct by opening {link}"
        )
    except PlatformError as e:
        print(f"[import] {label} fetch failed for {username}: {e.message}")
        return _failure(e.message)
    except sqlite3.Error as e:
        print(f"[import] Database error importing {label} solves for user {user_id}: {e}")
        return _failure(f"Error saving solved problems: {e}")
    except Exception as e:
        print(f"[import] Unexpected error importing {label} solves for user {user_id}: {e!r}")
        return _failure(f"Unknown error importing {label} solves")

    print(
        f"[import] user {user_id} {label} {username}: "
        f"{len(solved)} solved, {len(matched)} matched, {imported} imported"
    )
    return {
        'success': True,
        'message': f"Imported {imported} new solved problems from {label}",
        'totalSolved': len(solved),
        'matchedCount': len(matched),
        'importedCount': imported,
    }
