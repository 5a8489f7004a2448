"""
Shared fixtures: an in-memory SQLite app, a scripted AI collaborator and
a recording S3 uploader.
"""

import os

# Must be set before snochat.base.constants is imported
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["APP_ENV"] = "test"
os.environ["AI_PROVIDER"] = "anthropic"
os.environ["ANTHROPIC_API_KEY"] = ""
os.environ["OPENAI_API_KEY"] = ""

import pytest

from snochat.app import app as flask_app
from snochat.config.database import db
from snochat.models import UserCredit
from snochat.chat.services import (
    AttachmentService,
    ConversationService,
    CreditService,
    MessageService,
    SessionService,
)


class FakeChatService:
    """ Scripted AI collaborator: raises queued errors first, then replies. """

    def __init__(self, replies=None, errors=None, description="$x^2 + y^2 = r^2$"):
        self.replies = list(replies or ["Hello from the assistant."])
        self.errors = list(errors or [])
        self.description = description
        self.calls = []
        self.described = []

    def converse(self, history, system_prompt=None):
        self.calls.append([dict(turn) for turn in history])
        if self.errors:
            raise self.errors.pop(0)
        if len(self.replies) > 1:
            return self.replies.pop(0)
        return self.replies[0]

    def describe_attachment(self, data, mime_type):
        self.described.append((data, mime_type))
        if self.errors:
            raise self.errors.pop(0)
        return self.description


class FakeUploader:

    def __init__(self, error=None):
        self.error = error
        self.uploads = []

    def upload_bytes(self, data, s3_key, content_type=None):
        if self.error:
            raise self.error
        self.uploads.append((s3_key, data, content_type))
        return s3_key


@pytest.fixture
def app():
    flask_app.config.update(TESTING=True)

    with flask_app.app_context():
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def fake_ai():
    return FakeChatService()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def credits(app):
    return CreditService()


@pytest.fixture
def sessions(app):
    return SessionService()


@pytest.fixture
def message_log(app):
    return MessageService()


@pytest.fixture
def conversation(app, fake_ai, sleeps):
    return ConversationService(chat_service=fake_ai, sleep=sleeps.append)


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def attachments(app, fake_ai, uploader):
    return AttachmentService(chat_service=fake_ai, uploader=uploader)


@pytest.fixture
def give_credit(app):
    """ Create (or overwrite) a balance row with an exact amount. """

    def _give(user_id, amount, service_name="sno"):
        row = UserCredit.query.filter_by(user_id=user_id, service_name=service_name).first()
        if row is None:
            db.session.add(UserCredit(user_id=user_id, service_name=service_name, amount=amount))
        else:
            row.amount = amount
        db.session.commit()

    return _give
