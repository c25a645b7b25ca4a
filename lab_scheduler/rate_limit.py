"""Rate limiting global / Global rate limiter.

Utiliza slowapi para limitar as requisições por IP.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)
