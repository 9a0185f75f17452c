"""Domain models and enums.

Pure data structures (Pydantic v2): no Dagger, HTTP or CLI concerns live here.
"""
