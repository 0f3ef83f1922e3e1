from datetime import date

import pytest

from content_committer import ContentCommitter, Settings
from tests.fakes import FakeContentsClient


@pytest.fixture
def settings():
    return Settings(token="ghp_test")


@pytest.fixture
def fake_client():
    return FakeContentsClient()


@pytest.fixture
def committer(settings, fake_client):
    return ContentCommitter(settings, client=fake_client, today=lambda: date(2024, 5, 17))
