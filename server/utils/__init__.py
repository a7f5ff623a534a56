# server/utils/__init__.py
