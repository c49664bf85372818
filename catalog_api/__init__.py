"""Product catalog API.

CRUD service over products and their images, backed by async SQLAlchemy
and exposed through FastAPI.
"""
