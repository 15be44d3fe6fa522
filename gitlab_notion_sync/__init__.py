"""GitLab to Notion issue sync.

Mirrors the issues of a GitLab project into a Notion database, one page per issue.
"""

__version__ = "0.1.0"
