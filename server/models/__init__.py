# server/models/__init__.py
