from .codec import decode_content, encode_content
from .committer import ContentCommitter, Response, commit_message, parse_update_request
from .config import Settings
from .contents import Absent, CommitResult, ContentsClient, Found, GitHubContentsClient
from .errors import CommitError, InvalidRequest, MethodNotAllowed, ServerMisconfigured, UpstreamError

__all__ = [
    "Absent",
    "CommitError",
    "CommitResult",
    "ContentCommitter",
    "ContentsClient",
    "Found",
    "GitHubContentsClient",
    "InvalidRequest",
    "MethodNotAllowed",
    "Response",
    "ServerMisconfigured",
    "Settings",
    "UpstreamError",
    "commit_message",
    "decode_content",
    "encode_content",
    "parse_update_request",
]
