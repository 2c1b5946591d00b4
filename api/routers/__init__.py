"""
FastAPI routers grouped by resource.

Each file inside this package exposes an APIRouter that is included in the
main application (app.py). Routers validate payloads and call the services
stored on ``app.state``; they never touch the data file.
"""
