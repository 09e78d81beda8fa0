from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Limits come from RATELIMIT_* keys in the app config
limiter = Limiter(key_func=get_remote_address)
