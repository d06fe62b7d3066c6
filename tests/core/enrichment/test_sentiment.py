from __future__ import annotations

import pytest

from core.enrichment import sentiment as sentiment_module
from core.enrichment.sentiment import SentimentAnalyzer
from models.translation_models import SentimentAnalysis


@pytest.fixture
def analyzer() -> SentimentAnalyzer:
    return SentimentAnalyzer()


def test_positive_emoji_and_keyword(analyzer: SentimentAnalyzer) -> None:
    result: SentimentAnalysis = analyzer.analyze("This is great 😂")

    # 0.9 from the emoji, +0.3 from the keyword, clamped
    assert result.sentiment == "positive"
    assert result.score == 1.0
    assert result.confidence == 100.0


def test_emoji_weights_are_averaged(analyzer: SentimentAnalyzer) -> None:
    result: SentimentAnalysis = analyzer.analyze("😀 😢")

    assert result.score == pytest.approx(0.1)
    assert result.sentiment == "neutral"
    assert result.confidence == pytest.approx(10.0)


def test_negative_keywords(analyzer: SentimentAnalyzer) -> None:
    result: SentimentAnalysis = analyzer.analyze("What a terrible, awful day")

    assert result.sentiment == "negative"
    assert result.score == pytest.approx(-0.3)


def test_variation_selector_is_ignored(analyzer: SentimentAnalyzer) -> None:
    result: SentimentAnalysis = analyzer.analyze("\u2639\ufe0f")

    assert result.score == pytest.approx(-0.5)
    assert result.sentiment == "negative"


def test_balanced_keywords_are_neutral(analyzer: SentimentAnalyzer) -> None:
    result: SentimentAnalysis = analyzer.analyze("good and bad")

    assert result == SentimentAnalysis.neutral()


def test_internal_failure_returns_neutral(analyzer: SentimentAnalyzer, monkeypatch: pytest.MonkeyPatch) -> None:
    def _boom(text: str) -> list[dict[str, str]]:
        _ = text
        msg = "broken"
        raise ValueError(msg)

    monkeypatch.setattr(sentiment_module.emoji, "emoji_list", _boom)

    assert analyzer.analyze("great 😀") == SentimentAnalysis.neutral()
