from .github import GitHubCli, GitHubError
from .repo import GitError, create_tag, head_commit, last_tag_for, log_messages, push_tag, tag_exists

__all__ = [
    "GitError",
    "GitHubCli",
    "GitHubError",
    "create_tag",
    "head_commit",
    "last_tag_for",
    "log_messages",
    "push_tag",
    "tag_exists",
]
