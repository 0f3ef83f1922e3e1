import base64
import json
from datetime import date

import pytest

from content_committer import (
    CommitResult,
    ContentCommitter,
    Found,
    InvalidRequest,
    Settings,
    UpstreamError,
    commit_message,
    decode_content,
    parse_update_request,
)
from tests.fakes import FakeContentsClient


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH", "OPTIONS", ""])
def test_non_post_is_405_without_network(committer, fake_client, method):
    resp = committer.handle(method, json.dumps({"content": {"a": 1}}))
    assert resp.status_code == 405
    assert resp.body == {"error": "Method not allowed"}
    assert fake_client.gets == [] and fake_client.puts == []


def test_method_is_case_insensitive(committer):
    assert committer.handle("post", '{"content": {"a": 1}}').status_code == 200


@pytest.mark.parametrize("body", ['{"content": {"a": 1}}', "not json", "", None])
@pytest.mark.parametrize("token", [None, ""])
def test_missing_token_is_500_without_network(fake_client, body, token):
    committer = ContentCommitter(Settings(token=token), client=fake_client)
    resp = committer.handle("POST", body)
    assert resp.status_code == 500
    assert "GITHUB_TOKEN" in resp.body["error"]
    assert fake_client.gets == [] and fake_client.puts == []


@pytest.mark.parametrize(
    "body",
    [
        "{}",
        '{"content": null}',
        '{"content": [1, 2]}',
        '{"content": "text"}',
        '{"content": 42}',
        '{"content": true}',
        "[]",
        '"content"',
        "",
        None,
    ],
)
def test_missing_or_non_object_content_is_400(committer, fake_client, body):
    resp = committer.handle("POST", body)
    assert resp.status_code == 400
    assert resp.body["error"] == "Invalid request body: Missing content object"
    assert fake_client.gets == []


def test_unparseable_body_reports_parse_error(committer):
    resp = committer.handle("POST", b"{not json")
    assert resp.status_code == 400
    assert resp.body["error"].startswith("Invalid request body: ")
    assert resp.body["error"] != "Invalid request body: Missing content object"


def test_parse_update_request_accepts_bytes():
    assert parse_update_request('{"content": {"ü": 1}}'.encode("utf-8")) == {"ü": 1}


def test_parse_update_request_rejects_bad_utf8():
    with pytest.raises(InvalidRequest):
        parse_update_request(b"\xff\xfe")


def test_absent_file_is_created_without_sha(committer, fake_client):
    resp = committer.handle("POST", '{"content": {"a": 1}}')

    assert resp.status_code == 200
    assert fake_client.gets == [("content.json", "main")]
    (put,) = fake_client.puts
    assert put["sha"] is None
    assert put["branch"] == "main"
    assert put["path"] == "content.json"
    assert "2024-05-17" in put["message"]
    assert decode_content(put["content"]) == {"a": 1}


def test_existing_file_is_updated_with_its_sha(settings):
    client = FakeContentsClient(lookup=Found(sha="abc123def456"))
    committer = ContentCommitter(settings, client=client)

    committer.handle("POST", '{"content": {"a": 1}}')

    assert client.puts[0]["sha"] == "abc123def456"


def test_success_returns_short_commit_and_new_sha(settings):
    result = CommitResult(commit_sha="0123456789abcdef", content_sha="c0ffee")
    committer = ContentCommitter(settings, client=FakeContentsClient(result=result))

    resp = committer.handle("POST", '{"content": {"a": 1}}')

    assert resp.status_code == 200
    assert resp.body == {"success": True, "commit": "0123456", "sha": "c0ffee"}
    assert json.loads(resp.to_json()) == resp.body


def test_written_bytes_are_pretty_json(committer, fake_client):
    committer.handle("POST", '{"content": {"a": {"b": 2}}}')
    text = base64.b64decode(fake_client.puts[0]["content"]).decode("utf-8")
    assert text == '{\n  "a": {\n    "b": 2\n  }\n}'


def test_read_failure_is_500_and_skips_write(settings):
    client = FakeContentsClient(get_error=UpstreamError("Bad credentials"))
    resp = ContentCommitter(settings, client=client).handle("POST", '{"content": {}}')

    assert resp.status_code == 500
    assert resp.body == {"error": "Bad credentials"}
    assert client.puts == []


def test_write_conflict_is_500_with_upstream_message(settings):
    client = FakeContentsClient(
        lookup=Found(sha="stale"),
        put_error=UpstreamError("content.json does not match stale"),
    )
    resp = ContentCommitter(settings, client=client).handle("POST", '{"content": {"a": 1}}')

    assert resp.status_code == 500
    assert resp.body == {"error": "content.json does not match stale"}
    assert len(client.gets) == 1 and len(client.puts) == 1


def test_default_clock_uses_utc_today(settings, fake_client):
    ContentCommitter(settings, client=fake_client).handle("POST", '{"content": {}}')
    assert fake_client.puts[0]["message"].startswith("content: update via admin panel [")


def test_commit_message_format():
    assert commit_message(date(2025, 1, 2)) == "content: update via admin panel [2025-01-02]"


def test_client_built_from_settings_after_token_gate():
    committer = ContentCommitter(Settings(token="ghp_x", repo="o/r"))
    client = committer.client
    assert client.repo == "o/r"
    assert client.headers["Authorization"] == "token ghp_x"
    assert committer.client is client


@pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
def test_non_json_number_literals_are_400(committer, fake_client, literal):
    resp = committer.handle("POST", '{"content": {"a": %s}}' % literal)
    assert resp.status_code == 400
    assert literal in resp.body["error"]
    assert fake_client.gets == [] and fake_client.puts == []


def test_deeply_nested_body_is_400(committer, fake_client):
    body = '{"content": ' + "[" * 100000 + "]" * 100000 + "}"
    resp = committer.handle("POST", body)
    assert resp.status_code == 400
    assert resp.body["error"].startswith("Invalid request body: ")
    assert fake_client.gets == []
