"""Per-client rate limits for the endpoints that call the Riot API."""

from slowapi import Limiter
from slowapi.util import get_remote_address

# Both endpoints spend the Riot API budget shared with the update service
REGISTER_PLAYER_LIMIT = "10/minute"
UPDATE_ALL_LIMIT = "2/minute"

limiter = Limiter(key_func=get_remote_address)
