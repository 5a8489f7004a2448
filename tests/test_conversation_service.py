import pytest

from snochat.chat.config import chat_config
from snochat.chat.services import ConversationService, CreditService, SessionService
from snochat.chat.session_target import AutoCreateSession, ExistingSession
from snochat.config.database import db
from snochat.models import ChatMessage, ChatSession
from snochat.util.exceptions import (
    AiConfigException,
    AiOverloadedException,
    AiQuotaException,
    AiRateLimitException,
    AiServiceException,
    AuthorizationException,
    InsufficientCreditException,
    MessageLimitException,
    NotFoundException,
    StorageException,
    ValidationException,
)
from snochat.vendors import errors as ai_errors


def message_count(session_id):
    return ChatMessage.query.filter_by(session_id=session_id).count()


def fill_session(message_log, session_id, count):
    for i in range(count):
        message_log.append(session_id, "user" if i % 2 == 0 else "assistant", f"m{i}")


# ── Scenarios ──────────────────────────────────────────────────────────────────

def test_last_credit_buys_one_exchange_on_auto_session(conversation, credits, give_credit, fake_ai):
    give_credit("user-1", 1)

    result = conversation.send_message("user-1", AutoCreateSession(), text="Hello there")

    assert result["reply"] == "Hello from the assistant."
    assert result["remaining_credits"] == 0
    assert result["session_title"] == "Hello there"
    assert ChatSession.query.filter_by(user_id="user-1").count() == 1

    stored = ChatMessage.query.filter_by(session_id=result["session_id"]).order_by(ChatMessage.message_id).all()
    assert [(m.sender_type, m.content) for m in stored] == [
        ("user", "Hello there"),
        ("assistant", "Hello from the assistant."),
    ]
    assert credits.get_balance("user-1", "sno") == 0

    with pytest.raises(InsufficientCreditException) as excinfo:
        conversation.send_message("user-1", ExistingSession(result["session_id"]), text="Again")

    assert excinfo.value.remaining_credits == 0
    assert message_count(result["session_id"]) == 2
    assert len(fake_ai.calls) == 1


def test_insufficient_credit_creates_no_session(conversation, give_credit):
    give_credit("user-1", 0)

    with pytest.raises(InsufficientCreditException):
        conversation.send_message("user-1", AutoCreateSession(), text="hi")

    assert ChatSession.query.count() == 0


def test_first_exchange_initializes_free_plan(conversation):
    result = conversation.send_message("newcomer", AutoCreateSession(), text="hi")

    assert result["remaining_credits"] == 39


def test_other_users_session_is_rejected(conversation, sessions, credits, give_credit, fake_ai):
    give_credit("user-a", 5)
    session_id = sessions.create("user-b", "b's chat")

    with pytest.raises(AuthorizationException):
        conversation.send_message("user-a", ExistingSession(session_id), text="let me in")

    assert message_count(session_id) == 0
    assert fake_ai.calls == []
    assert credits.get_balance("user-a", "sno") == 5


def test_deleted_session_is_write_inert(conversation, sessions, give_credit, fake_ai):
    give_credit("user-1", 5)
    session_id = sessions.create("user-1", "old")
    sessions.soft_delete(session_id, "user-1")

    with pytest.raises(NotFoundException):
        conversation.send_message("user-1", ExistingSession(session_id), text="hello?")

    assert message_count(session_id) == 0
    assert fake_ai.calls == []


# ── Message limit ──────────────────────────────────────────────────────────────

def test_twelve_stored_messages_still_allow_a_message(conversation, sessions, message_log, give_credit):
    give_credit("user-1", 5)
    session_id = sessions.create("user-1", "long chat")
    fill_session(message_log, session_id, 12)

    conversation.send_message("user-1", ExistingSession(session_id), text="one more")

    assert message_count(session_id) == 14


def test_thirteen_stored_messages_block_the_session(conversation, sessions, message_log, credits, give_credit, fake_ai):
    give_credit("user-1", 5)
    session_id = sessions.create("user-1", "full chat")
    fill_session(message_log, session_id, chat_config.MAX_MESSAGES_PER_SESSION)

    with pytest.raises(MessageLimitException) as excinfo:
        conversation.send_message("user-1", ExistingSession(session_id), text="one more")

    assert excinfo.value.limit == 13
    assert message_count(session_id) == 13
    assert fake_ai.calls == []
    assert credits.get_balance("user-1", "sno") == 5


# ── Validation ─────────────────────────────────────────────────────────────────

def test_empty_message_is_rejected(conversation, give_credit):
    give_credit("user-1", 5)

    with pytest.raises(ValidationException):
        conversation.send_message("user-1", AutoCreateSession(), text="   ", attachment_summary="")

    assert ChatSession.query.count() == 0


def test_text_length_limit(conversation, give_credit):
    give_credit("user-1", 5)

    conversation.send_message("user-1", AutoCreateSession(), text="a" * chat_config.MAX_MESSAGE_LENGTH)

    with pytest.raises(ValidationException):
        conversation.send_message("user-1", AutoCreateSession(), text="a" * (chat_config.MAX_MESSAGE_LENGTH + 1))

    assert ChatSession.query.count() == 1


# ── AI failures ────────────────────────────────────────────────────────────────

def test_overloaded_three_times_surfaces_after_backoff(conversation, credits, give_credit, fake_ai, sleeps):
    give_credit("user-1", 5)
    fake_ai.errors = [ai_errors.OverloadedError("overloaded") for _ in range(3)]

    with pytest.raises(AiOverloadedException) as excinfo:
        conversation.send_message("user-1", AutoCreateSession(), text="busy?")

    assert excinfo.value.attempts == 3
    assert len(fake_ai.calls) == 3
    assert sleeps == [2, 4]
    assert credits.get_balance("user-1", "sno") == 5

    # The user message stays behind without a reply
    stored = ChatMessage.query.all()
    assert [m.sender_type for m in stored] == ["user"]


def test_overload_recovers_within_retry_budget(conversation, credits, give_credit, fake_ai, sleeps):
    give_credit("user-1", 5)
    fake_ai.errors = [ai_errors.OverloadedError("overloaded"), ai_errors.OverloadedError("overloaded")]

    result = conversation.send_message("user-1", AutoCreateSession(), text="busy?")

    assert result["reply"] == "Hello from the assistant."
    assert sleeps == [2, 4]
    assert credits.get_balance("user-1", "sno") == 4



def test_four_attempts_back_off_two_four_six(app, give_credit, fake_ai, sleeps):
    give_credit("user-1", 5)
    fake_ai.errors = [ai_errors.OverloadedError("overloaded") for _ in range(4)]
    service = ConversationService(chat_service=fake_ai, sleep=sleeps.append, max_attempts=4)

    with pytest.raises(AiOverloadedException) as excinfo:
        service.send_message("user-1", AutoCreateSession(), text="busy?")

    assert excinfo.value.attempts == 4
    assert sleeps == [2, 4, 6]

@pytest.mark.parametrize("error, expected", [
    (ai_errors.AuthError("bad key"), AiConfigException),
    (ai_errors.RateLimitError("slow down"), AiRateLimitException),
    (ai_errors.QuotaError("no quota"), AiQuotaException),
    (ai_errors.GenericError("boom"), AiServiceException),
])
def test_non_transient_ai_errors_are_not_retried(conversation, credits, give_credit, fake_ai, sleeps, error, expected):
    give_credit("user-1", 5)
    fake_ai.errors = [error]

    with pytest.raises(expected):
        conversation.send_message("user-1", AutoCreateSession(), text="hi")

    assert len(fake_ai.calls) == 1
    assert sleeps == []
    assert credits.get_balance("user-1", "sno") == 5


def test_blank_reply_is_a_failure(conversation, credits, give_credit, fake_ai):
    give_credit("user-1", 5)
    fake_ai.replies = ["   "]

    with pytest.raises(AiServiceException):
        conversation.send_message("user-1", AutoCreateSession(), text="hi")

    assert credits.get_balance("user-1", "sno") == 5
    assert [m.sender_type for m in ChatMessage.query.all()] == ["user"]


# ── History & attachments ──────────────────────────────────────────────────────

def test_history_is_sent_in_order_with_images_folded(conversation, give_credit, fake_ai):
    give_credit("user-1", 5)
    fake_ai.replies = ["It is a circle.", "r is the radius."]

    first = conversation.send_message(
        "user-1", AutoCreateSession(),
        text="", attachment_summary="$x^2 + y^2 = r^2$", attachment_ref="snochat/uploads/user-1/1.png"
    )
    conversation.send_message("user-1", ExistingSession(first["session_id"]), text="What is r?")

    assert first["session_title"] == "Image conversation"
    assert fake_ai.calls[-1] == [
        {"role": "user", "content": "[Attached image - extracted text: $x^2 + y^2 = r^2$]"},
        {"role": "assistant", "content": "It is a circle."},
        {"role": "user", "content": "What is r?"},
    ]

    image_turn = ChatMessage.query.order_by(ChatMessage.message_id).first()
    assert image_turn.content == "[Image sent]"
    assert image_turn.attachment_ref == "snochat/uploads/user-1/1.png"
    assert image_turn.attachment_summary == "$x^2 + y^2 = r^2$"


def test_new_turn_combines_summary_and_text(conversation, give_credit, fake_ai):
    give_credit("user-1", 5)

    conversation.send_message("user-1", AutoCreateSession(), text="solve", attachment_summary="2x = 4")

    assert fake_ai.calls[0][-1] == {
        "role": "user",
        "content": "[Attached image - extracted text: 2x = 4]\n\nUser message: solve",
    }


def test_auto_title_is_truncated(conversation, give_credit):
    give_credit("user-1", 5)

    result = conversation.send_message("user-1", AutoCreateSession(), text="q" * 80)

    assert result["session_title"] == "q" * 50 + "..."


def test_exchange_touches_session(conversation, sessions, give_credit):
    give_credit("user-1", 5)
    session_id = sessions.create("user-1", "t")
    db.session.get(ChatSession, session_id).updated_at = 1
    db.session.commit()

    conversation.send_message("user-1", ExistingSession(session_id), text="hi")

    assert sessions.resolve(session_id, "user-1").updated_at > 1


# ── Best-effort and accepted-risk paths ────────────────────────────────────────

class FailingTouchSessions(SessionService):

    def touch(self, session_id):
        raise StorageException(details="disk full")


class RaceLosingCredits(CreditService):

    def try_deduct(self, user_id, service_name, amount):
        return False


def test_touch_failure_does_not_fail_exchange(app, give_credit, fake_ai, sleeps):
    give_credit("user-1", 5)
    service = ConversationService(chat_service=fake_ai, session_service=FailingTouchSessions(), sleep=sleeps.append)

    result = service.send_message("user-1", AutoCreateSession(), text="hi")

    assert result["remaining_credits"] == 4


def test_lost_deduction_race_still_returns_reply(app, give_credit, fake_ai, sleeps):
    give_credit("user-1", 5)
    service = ConversationService(chat_service=fake_ai, credit_service=RaceLosingCredits(), sleep=sleeps.append)

    result = service.send_message("user-1", AutoCreateSession(), text="hi")

    assert result["reply"] == "Hello from the assistant."
    assert result["remaining_credits"] == 5


# ── Session operations ─────────────────────────────────────────────────────────

def test_session_operations(conversation, give_credit):
    created = conversation.create_session("user-1", "Algebra")
    assert created["title"] == "Algebra"
    assert created["status"] == "active"

    renamed = conversation.rename_session("user-1", created["session_id"], "Geometry")
    assert renamed["title"] == "Geometry"

    assert [s["session_id"] for s in conversation.list_sessions("user-1")] == [created["session_id"]]
    assert conversation.get_session_messages("user-1", created["session_id"]) == []

    assert conversation.delete_session("user-1", created["session_id"]) is True
    assert conversation.list_sessions("user-1") == []

    with pytest.raises(NotFoundException):
        conversation.get_session_messages("user-1", created["session_id"])


def test_get_credits_initializes_lazily(conversation):
    assert conversation.get_credits("user-1") == {"sno": 40, "total": 40}
