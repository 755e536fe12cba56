"""
FastAPI routers grouped by resource (users, coins, comments, session).

Each module exposes an APIRouter included by ``coinboard.app``. Endpoints stay
thin: parse the body, resolve the identity, call a service.
"""
