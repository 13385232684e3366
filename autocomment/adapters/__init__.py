"""Comment adapters."""

from autocomment.adapters.base import CommentAdapter, RemoteCallError
from autocomment.adapters.github import GitHubAdapter

__all__ = ["CommentAdapter", "RemoteCallError", "GitHubAdapter"]
