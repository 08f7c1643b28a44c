class TokenError(Exception):
    """Base class for token lifecycle failures."""


class Conflict(TokenError):
    """A generated secret collided with a stored one."""


class NotFound(TokenError):
    """No stored token matches the presented secret."""


class Expired(TokenError):
    """The token exists but its expiry time has passed."""

    def __init__(self, token_id: int, expires_at):
        self.token_id = token_id
        self.expires_at = expires_at
        super().__init__(f"Token {token_id} expired at {expires_at.isoformat()}")


class IssuanceFailed(TokenError):
    """Could not persist a unique token within the retry budget."""
