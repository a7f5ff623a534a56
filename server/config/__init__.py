# server/config/__init__.py
