from slowapi import Limiter
from slowapi.util import get_remote_address

# Shared so endpoint modules can decorate routes without importing app.main
limiter = Limiter(key_func=get_remote_address)
