"""Client for managing Rollbar teams, their users and project assignments."""

__version__ = "0.1.0"
__all__ = ["team"]