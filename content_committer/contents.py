import logging
from dataclasses import dataclass
from typing import Protocol, Union

import requests

from .config import GITHUB_API
from .errors import UpstreamError

logger = logging.getLogger(__name__)

USER_AGENT = "save-content-function"
DEFAULT_TIMEOUT = 30


@dataclass(frozen=True)
class Found:
    """The file exists; ``sha`` must accompany the next write."""

    sha: str


@dataclass(frozen=True)
class Absent:
    """The file does not exist yet; the next write creates it."""


Lookup = Union[Found, Absent]


@dataclass(frozen=True)
class CommitResult:
    commit_sha: str
    content_sha: str

    @property
    def short_commit(self) -> str:
        return self.commit_sha[:7]


class ContentsClient(Protocol):
    def get_file(self, path: str, ref: str) -> Lookup: ...

    def put_file(
        self, path: str, content: str, message: str, branch: str, sha: str | None = None
    ) -> CommitResult: ...


def _error_message(resp: requests.Response, verb: str) -> str:
    try:
        data = resp.json()
    except ValueError:
        data = {}
    message = data.get("message") if isinstance(data, dict) else None
    return message or f"GitHub {verb} error: {resp.status_code}"


def _json_body(resp: requests.Response, verb: str) -> dict:
    try:
        data = resp.json()
    except ValueError as e:
        raise UpstreamError(f"GitHub {verb} returned invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise UpstreamError(f"GitHub {verb} returned an unexpected body")
    return data


class GitHubContentsClient:
    """Thin wrapper over the GitHub contents API for a single repository."""

    def __init__(
        self,
        token: str,
        repo: str,
        api_url: str = GITHUB_API,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.repo = repo
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {
            "Authorization": f"token {token}",
            "Accept": "application/vnd.github.v3+json",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }

    def _url(self, path: str) -> str:
        return f"{self.api_url}/repos/{self.repo}/contents/{path}"

    def get_file(self, path: str, ref: str) -> Lookup:
        try:
            resp = self.session.get(
                self._url(path), headers=self.headers, params={"ref": ref}, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise UpstreamError(str(e)) from e

        if resp.status_code == 404:
            return Absent()
        if not resp.ok:
            raise UpstreamError(_error_message(resp, "GET"))

        data = _json_body(resp, "GET")
        sha = data.get("sha")
        if not isinstance(sha, str) or not sha:
            raise UpstreamError(f"GitHub GET response for {path} has no sha")
        return Found(sha=sha)

    def put_file(
        self,
        path: str,
        content: str,
        message: str,
        branch: str,
        sha: str | None = None,
    ) -> CommitResult:
        payload = {"message": message, "content": content, "branch": branch}
        if sha:
            payload["sha"] = sha

        try:
            resp = self.session.put(
                self._url(path), headers=self.headers, json=payload, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise UpstreamError(str(e)) from e

        if not resp.ok:
            raise UpstreamError(_error_message(resp, "PUT"))

        data = _json_body(resp, "PUT")
        try:
            commit_sha = data["commit"]["sha"]
            content_sha = data["content"]["sha"]
        except (KeyError, TypeError) as e:
            raise UpstreamError("GitHub PUT response is missing commit details") from e
        logger.info("Committed %s to %s@%s (%s)", path, self.repo, branch, commit_sha[:7])
        return CommitResult(commit_sha=commit_sha, content_sha=content_sha)
