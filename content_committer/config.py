import os
from dataclasses import dataclass

GITHUB_API = "https://api.github.com"
GITHUB_REPO = "Ldpelfrey/GRLSCRY_Website"
GITHUB_BRANCH = "main"
CONTENT_PATH = "content.json"


@dataclass(frozen=True)
class Settings:
    token: str | None
    repo: str = GITHUB_REPO
    branch: str = GITHUB_BRANCH
    path: str = CONTENT_PATH
    api_url: str = GITHUB_API

    @classmethod
    def from_env(cls) -> "Settings":
        # GITHUB_TOKEN comes from the Function App settings, never from the repo
        return cls(token=os.getenv("GITHUB_TOKEN") or None)
