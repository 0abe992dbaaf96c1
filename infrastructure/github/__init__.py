from infrastructure.github.github_client import GitHubClient

__all__ = ["GitHubClient"]
