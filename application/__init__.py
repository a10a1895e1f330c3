"""
Application Layer for the workout engine.

This package contains:
- ports/: Abstract repository interfaces (what the engine needs)
- exceptions.py: Errors raised by engine services
"""
