import itertools

import pytest

from gaja_overlay.state import (
    DisplayMode,
    StatusSnapshot,
    TextSizeTier,
    derive_display_state,
    text_size_tier,
)

FLAG_COMBOS = list(itertools.product([False, True], repeat=3))


def _snapshot(listening=False, speaking=False, wake=False, text=""):
    return StatusSnapshot(
        text=text,
        is_listening=listening,
        is_speaking=speaking,
        wake_word_detected=wake,
    )


@pytest.mark.parametrize("listening,speaking,wake", FLAG_COMBOS)
def test_mode_follows_priority(listening, speaking, wake):
    display = derive_display_state(_snapshot(listening, speaking, wake))

    if speaking:
        expected = DisplayMode.SPEAKING
    elif listening:
        expected = DisplayMode.LISTENING
    elif wake:
        expected = DisplayMode.WAKE_WORD
    else:
        expected = DisplayMode.IDLE
    assert display.mode is expected


@pytest.mark.parametrize("listening,speaking,wake", FLAG_COMBOS)
@pytest.mark.parametrize("text", ["", "Hi"])
def test_active_ball_and_visible_flags(listening, speaking, wake, text):
    display = derive_display_state(_snapshot(listening, speaking, wake, text))
    active = listening or speaking or wake

    assert display.is_active is active
    assert display.show_ball is active
    assert display.is_visible is (active or text != "")


def test_text_alone_makes_content_visible():
    quiet = derive_display_state(_snapshot())
    with_text = derive_display_state(_snapshot(text="Hi"))

    assert quiet.is_visible is False
    assert with_text.is_visible is True
    assert with_text.is_active is False
    assert with_text.mode is DisplayMode.IDLE
    assert with_text.show_status_text is False


@pytest.mark.parametrize(
    "length,tier",
    [
        (0, TextSizeTier.NONE),
        (1, TextSizeTier.SHORT),
        (50, TextSizeTier.SHORT),
        (51, TextSizeTier.MEDIUM),
        (150, TextSizeTier.MEDIUM),
        (151, TextSizeTier.LONG),
        (300, TextSizeTier.LONG),
        (301, TextSizeTier.VERY_LONG),
    ],
)
def test_text_size_tier_boundaries(length, tier):
    assert text_size_tier("x" * length) is tier


def test_text_size_counts_characters_not_bytes():
    # 50 characters, 100 bytes in UTF-8
    assert text_size_tier("ż" * 50) is TextSizeTier.SHORT


def test_size_class_names():
    display = derive_display_state(_snapshot(text="y" * 400))
    assert display.text_size_class == "very-long-text"
    assert derive_display_state(_snapshot()).text_size_class == ""


def test_listening_lookup():
    display = derive_display_state(_snapshot(listening=True))

    assert display.status_text == "Słucham..."
    assert display.icon == "🎤"
    assert display.animation_class == "listening-animation"
    assert display.show_status_text is True


def test_speaking_and_wake_word_lookups():
    speaking = derive_display_state(_snapshot(speaking=True, wake=True))
    wake = derive_display_state(_snapshot(wake=True))

    assert (speaking.status_text, speaking.icon, speaking.animation_class) == (
        "Mówię...",
        "🔊",
        "speaking-animation",
    )
    assert (wake.status_text, wake.icon, wake.animation_class) == (
        "Słucham po wake word...",
        "👂",
        "wakeword-animation",
    )


def test_idle_has_no_decorations():
    display = derive_display_state(StatusSnapshot.empty())

    assert display.status_text == ""
    assert display.icon == ""
    assert display.animation_class == ""
    assert display.text_size_tier is TextSizeTier.NONE
