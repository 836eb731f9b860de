# plugins/__init__.py
"""Example commands loaded by `python -m patternshell`."""
