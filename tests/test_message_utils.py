import itertools

from conciencia.utils.message_utils import build_chat_messages, normalize_alternation, strip_control_chars


def _assert_alternates(messages):
    for previous, current in zip(messages, messages[1:]):
        assert previous["role"] != current["role"]
    if messages:
        assert messages[0]["role"] == "user"


def test_strip_control_chars_keeps_newlines_and_tabs():
    assert strip_control_chars("ho\x00la\x07\n\tche\x7f") == "hola\n\tche"
    assert strip_control_chars(None) == ""


def test_build_chat_messages_maps_unknown_roles_to_assistant():
    messages = build_chat_messages(
        [{"role": "user", "content": "hola"}, {"role": "ai", "content": "buenas"}],
        "todo bien?",
    )
    assert [m["role"] for m in messages] == ["user", "assistant", "user"]
    assert messages[-1]["content"] == "todo bien?"


def test_merges_consecutive_same_role_turns():
    normalized = normalize_alternation([
        {"role": "user", "content": "uno"},
        {"role": "user", "content": "dos"},
        {"role": "assistant", "content": "ok"},
        {"role": "user", "content": "tres"},
    ])
    assert normalized == [
        {"role": "user", "content": "uno\ndos"},
        {"role": "assistant", "content": "ok"},
        {"role": "user", "content": "tres"},
    ]


def test_drops_leading_assistant_turn():
    normalized = normalize_alternation([
        {"role": "assistant", "content": "hola, soy Conciencia"},
        {"role": "user", "content": "hola"},
    ])
    assert normalized == [{"role": "user", "content": "hola"}]


def test_does_not_mutate_input():
    original = [{"role": "user", "content": "a"}, {"role": "user", "content": "b"}]
    normalize_alternation(original)
    assert original[0]["content"] == "a"


def test_every_role_sequence_alternates_and_starts_with_user():
    for length in range(0, 7):
        for roles in itertools.product(["user", "assistant"], repeat=length):
            history = [{"role": r, "content": str(i)} for i, r in enumerate(roles)]
            normalized = normalize_alternation(build_chat_messages(history, "nuevo"))
            _assert_alternates(normalized)
            assert normalized[-1]["role"] == "user"
            assert normalized[-1]["content"].endswith("nuevo")
