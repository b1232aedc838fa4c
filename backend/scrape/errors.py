PROFILE_URLS = {
    "codeforces": "https://codeforces.com/profile/{username}",
    "kattis": "https://open.kattis.com/users/{username}",
}

class PlatformError(Exception):
    """Failure talking to (or making sense of) an external judge."""
    status = 500

    def __init__(self, message, status=None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status

class UserNotFoundError(PlatformError):
    status = 404

class RateLimitedError(PlatformError):
    status = 429

def classify_platform_error(platform: str, message: str, status: int | None = None) -> PlatformError:
    """
    Map an upstream failure onto one of the error classes.

    Both judges only tell us what went wrong through free text (Codeforces'
    `comment` field) or the HTTP status of the profile page, so every
    substring heuristic lives here.
    """
    text = (message or "").lower()
    if status == 404 or "not found" in text:
        return UserNotFoundError(message or f"User not found on {platform}")
    if status == 429 or "limit exceeded" in text or "too many requests" in text:
        return RateLimitedError(message or f"Rate limited by {platform}")
    return PlatformError(message or f"Failed to fetch submissions from {platform}", status)

def profile_url(platform: str, username: str) -> str:
    template = PROFILE_URLS.get(platform)
    return template.format(username=username) if template else ""
