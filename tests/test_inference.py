import pytest

from granitedb.inference import (
    Classification,
    EntityExtraction,
    InferenceConfig,
    InferenceEngine,
    QuestionAnswering,
    Summarization,
    TextGeneration,
    ZeroShot,
)


@pytest.fixture
def engine():
    return InferenceEngine(InferenceConfig())


def test_classify_keeps_matching_labels(engine):
    results = engine.classify("This is SPAM mail", ["spam", "ham"])
    assert [(p.label, p.score) for p in results] == [("spam", 0.85)]


def test_classification_low_threshold_keeps_all(engine):
    result = engine.infer(Classification(["spam", "ham"], 0.1), "spam here")
    assert [(p.label, p.score) for p in result.results] == [("spam", 0.85), ("ham", 0.15)]


def test_extract_emails(engine):
    results = engine.extract_entities("contact alice@example.com now", ["EMAIL"])
    assert [(p.label, p.text, p.score) for p in results] == [
        ("EMAIL", "alice@example.com", 0.95)
    ]


def test_extract_numbers(engine):
    results = engine.extract_entities("buy 3 apples for 2.5 or 1_000 or 1e3 x.", ["NUMBER"])
    assert [p.text for p in results] == ["3", "2.5", "1e3"]
    assert all(p.score == 0.99 for p in results)


def test_unknown_entity_type_gives_nothing(engine):
    assert engine.extract_entities("alice@example.com 42", ["PERSON"]) == []


def test_summarization_truncates(engine):
    result = engine.infer(Summarization(5), "hello world")
    assert result.results[0].text == "hello..."
    assert result.results[0].label == "summary"


def test_summarization_keeps_short_text(engine):
    assert engine.infer(Summarization(50), "short").results[0].text == "short"


def test_summarization_rejects_split_character(engine):
    with pytest.raises(ValueError):
        engine.infer(Summarization(1), "éé")


def test_text_generation_uses_first_fifty_bytes(engine):
    text = "x" * 60
    result = engine.infer(TextGeneration(10, 0.7), text)
    assert result.results[0].text == (
        f"[Generated text based on: '{'x' * 50}' (max 10 tokens)]"
    )


def test_unsupported_tasks_give_no_results(engine):
    assert engine.infer(QuestionAnswering(), "text").results == []
    assert engine.infer(ZeroShot(["a"]), "text").results == []


def test_result_metadata(engine):
    result = engine.infer(Classification(["spam"], 0.5), "spam")
    assert result.model == "granite-mini"
    assert result.task == 'Classification { labels: ["spam"], threshold: 0.5 }'
    assert result.latency_ms >= 0
    assert engine.infer(QuestionAnswering(), "q").task == "QuestionAnswering"


def test_default_config_values():
    config = InferenceConfig()
    assert config.provider == "local"
    assert config.timeout_ms == 5000
    assert InferenceEngine().config.model == "granite-mini"