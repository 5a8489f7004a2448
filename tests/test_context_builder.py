from types import SimpleNamespace

from snochat.chat.services import ContextBuilder


def message(sender_type, content, summary=None):
    return SimpleNamespace(sender_type=sender_type, content=content, attachment_summary=summary)


def test_compose_user_turn_variants():
    builder = ContextBuilder()

    assert builder.compose_user_turn("hi", None) == "hi"
    assert builder.compose_user_turn("", "x = 2") == "[Attached image - extracted text: x = 2]"
    assert builder.compose_user_turn("solve it", "x = 2") == (
        "[Attached image - extracted text: x = 2]\n\nUser message: solve it"
    )


def test_image_placeholder_counts_as_no_text():
    builder = ContextBuilder()

    assert builder.compose_user_turn("[Image sent]", "a cat") == "[Attached image - extracted text: a cat]"


def test_build_history_folds_summaries_into_user_turns_only():
    history = ContextBuilder().build_history([
        message("user", "what is this?", "a red bicycle"),
        message("assistant", "It is a bicycle."),
        message("user", "thanks"),
    ])

    assert history == [
        {"role": "user", "content": "[Attached image - extracted text: a red bicycle]\n\nUser message: what is this?"},
        {"role": "assistant", "content": "It is a bicycle."},
        {"role": "user", "content": "thanks"},
    ]
