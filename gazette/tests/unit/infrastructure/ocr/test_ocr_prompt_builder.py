from gazette.domain.value_objects.language import LanguageHint
from gazette.infrastructure.ocr.ocr_prompt_builder import DEFAULT_PROMPT_TEMPLATE, build_prompt_attempts


def test_build_prompt_attempts_creates_three_attempts():
    attempts = build_prompt_attempts("data:image/png;base64,abc")

    assert [attempt.force_json for attempt in attempts] == [True, False, False]
    for attempt in attempts:
        assert attempt.messages[0] == {"role": "system", "content": DEFAULT_PROMPT_TEMPLATE}
        assert attempt.messages[1]["role"] == "user"
        image_part = attempt.messages[1]["content"][1]
        assert image_part == {"type": "image_url", "image_url": {"url": "data:image/png;base64,abc"}}


def test_last_attempt_restates_the_reply_shape():
    attempts = build_prompt_attempts("data:image/png;base64,abc")

    assert "single JSON object" in attempts[2].messages[1]["content"][0]["text"]
    assert "single JSON object" not in attempts[0].messages[1]["content"][0]["text"]


def test_language_hint_is_included():
    arabic = build_prompt_attempts("data:image/png;base64,abc", LanguageHint.ARABIC)
    french = build_prompt_attempts("data:image/png;base64,abc", "fr")

    assert "right to left" in arabic[0].messages[1]["content"][0]["text"]
    assert "printed in French" in french[0].messages[1]["content"][0]["text"]
