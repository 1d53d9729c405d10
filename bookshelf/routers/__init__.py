"""
FastAPI routers grouped by domain (books, auth).

Each module exposes an APIRouter included by the application factory in
app.py. Routers fetch their repositories/services from app.state.
"""
