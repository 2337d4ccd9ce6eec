"""Git menu command orchestration: terminals, init and clone workflows."""

__version__ = "0.1.0"
