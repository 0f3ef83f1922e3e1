import json
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Callable

from .codec import encode_content, loads
from .config import Settings
from .contents import Absent, ContentsClient, Found, GitHubContentsClient
from .errors import (
    CommitError,
    InvalidRequest,
    MethodNotAllowed,
    ServerMisconfigured,
    UpstreamError,
)

logger = logging.getLogger(__name__)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def commit_message(day: date) -> str:
    return f"content: update via admin panel [{day.isoformat()}]"


def parse_update_request(body: bytes | str | None) -> dict:
    """Return the ``content`` object from a request body or raise InvalidRequest."""
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidRequest(f"Invalid request body: {e}") from e
    try:
        data = loads(body or "{}")
    except (ValueError, RecursionError) as e:
        raise InvalidRequest(f"Invalid request body: {e}") from e

    content = data.get("content") if isinstance(data, dict) else None
    if not isinstance(content, dict):
        raise InvalidRequest("Invalid request body: Missing content object")
    return content


@dataclass
class Response:
    status_code: int
    body: dict = field(default_factory=dict)

    def to_json(self) -> str:
        return json.dumps(self.body)


class ContentCommitter:
    """Commit a JSON document to the configured file, creating or updating it.

    One GET for the current sha, then one PUT. The sha is sent only when the
    file exists. GitHub rejects a stale sha, surfaced as UpstreamError.
    """

    def __init__(
        self,
        settings: Settings,
        client: ContentsClient | None = None,
        today: Callable[[], date] = utc_today,
    ):
        self.settings = settings
        self._client = client
        self.today = today

    @property
    def client(self) -> ContentsClient:
        if self._client is None:
            self._client = GitHubContentsClient(
                self.settings.token, self.settings.repo, api_url=self.settings.api_url
            )
        return self._client

    def handle(self, method: str, body: bytes | str | None) -> Response:
        try:
            result = self._commit(method, body)
        except (ServerMisconfigured, UpstreamError) as e:
            logger.error("save-content function error: %s", e.message)
            return Response(e.status_code, {"error": e.message})
        except CommitError as e:
            logger.warning("save-content rejected request: %s", e.message)
            return Response(e.status_code, {"error": e.message})

        return Response(200, {"success": True, "commit": result.short_commit, "sha": result.content_sha})

    def _commit(self, method: str, body: bytes | str | None):
        if (method or "").upper() != "POST":
            raise MethodNotAllowed("Method not allowed")

        if not self.settings.token:
            raise ServerMisconfigured("Server misconfiguration: GITHUB_TOKEN not set")

        content = parse_update_request(body)

        path, branch = self.settings.path, self.settings.branch
        lookup = self.client.get_file(path, branch)
        if isinstance(lookup, Found):
            sha = lookup.sha
        elif isinstance(lookup, Absent):
            # first-time create
            sha = None
        else:
            raise UpstreamError(f"Unexpected lookup result: {lookup!r}")

        return self.client.put_file(
            path,
            encode_content(content),
            commit_message(self.today()),
            branch,
            sha=sha,
        )
