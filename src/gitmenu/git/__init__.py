"""Git service implementations."""

from .service import SubprocessGitService

__all__ = ["SubprocessGitService"]
