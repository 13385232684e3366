"""Abstract base for comment adapters."""

from abc import ABC, abstractmethod

from autocomment.models import Comment


class RemoteCallError(Exception):
    """Raised when the comment-creation API call fails."""

    pass


class CommentAdapter(ABC):
    """Interface for posting comments on a Git hosting platform."""

    @abstractmethod
    def create_comment(self, repo: str, issue_number: int, body: str) -> Comment:
        """Post a comment on an issue or pull request.

        Pull requests share the issue number space, so both are
        addressed by ``issue_number``.
        """
        ...
