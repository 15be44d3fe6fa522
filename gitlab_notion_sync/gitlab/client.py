"""Sets up the authenticated python-gitlab client."""

import gitlab

from gitlab_notion_sync.utils.constants import DEFAULT_REQUEST_TIMEOUT


def build_gitlab_url(gitlab_domain: str) -> str:
    """Return the base URL of a GitLab instance.

    Accepts a bare host (``gitlab.com``) or a full origin (``https://gitlab.example.org``).
    """
    domain = gitlab_domain.strip().rstrip("/")
    if not domain:
        raise ValueError("GitLab domain must not be empty.")
    if not domain.startswith(("http://", "https://")):
        domain = f"https://{domain}"
    return domain


def get_gitlab_client(gitlab_domain: str, gitlab_token: str, timeout: float = DEFAULT_REQUEST_TIMEOUT) -> gitlab.Gitlab:
    """Returns a python-gitlab client authenticated with a GitLab private token."""
    if not gitlab_token:
        raise RuntimeError("GitLab authentication requires a GitLab token in config.")
    return gitlab.Gitlab(build_gitlab_url(gitlab_domain), private_token=gitlab_token, timeout=timeout)
