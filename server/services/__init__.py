# server/services/__init__.py
