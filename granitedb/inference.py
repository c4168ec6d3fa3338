"""Lightweight inference tasks run over text."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field, fields
from typing import Any, Iterable, Optional, Union

_NUMBER = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE | re.ASCII,
)


@dataclass(frozen=True)
class Classification:
    """Text classification against a set of labels."""

    labels: list[str]
    threshold: float


@dataclass(frozen=True)
class EntityExtraction:
    """Named entity extraction."""

    entity_types: list[str]


@dataclass(frozen=True)
class Summarization:
    """Shorten text to a byte length."""

    max_length: int


@dataclass(frozen=True)
class QuestionAnswering:
    """Question answering against a document."""


@dataclass(frozen=True)
class ZeroShot:
    """Zero-shot classification."""

    candidate_labels: list[str]


@dataclass(frozen=True)
class TextGeneration:
    """Text generation."""

    max_tokens: int
    temperature: float


InferenceTask = Union[
    Classification, EntityExtraction, Summarization, QuestionAnswering, ZeroShot, TextGeneration
]


@dataclass
class InferencePrediction:
    """One prediction produced by a task."""

    label: str
    score: float
    text: Optional[str] = None
    metadata: Optional[Any] = None


@dataclass
class InferenceResult:
    """Outcome of running a task."""

    task: str
    results: list[InferencePrediction] = field(default_factory=list)
    model: str = ""
    latency_ms: int = 0


@dataclass
class InferenceConfig:
    """Settings of the inference model."""

    provider: str = "local"
    model: str = "granite-mini"
    endpoint: Optional[str] = None
    api_key: Optional[str] = None
    timeout_ms: int = 5000


def _debug_str(text: str) -> str:
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def _debug_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return _debug_str(value)
    if isinstance(value, float):
        if value != value:
            return "NaN"
        return repr(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_debug_value(item) for item in value) + "]"
    return str(value)


def describe_task(task: InferenceTask) -> str:
    """Readable description of a task and its parameters."""
    name = type(task).__name__
    parts = [f"{f.name}: {_debug_value(getattr(task, f.name))}" for f in fields(task)]
    if not parts:
        return name
    return f"{name} {{ {', '.join(parts)} }}"


def _byte_prefix(text: str, length: int) -> str:
    try:
        return text.encode("utf-8")[:length].decode("utf-8")
    except UnicodeDecodeError:
        raise ValueError(f"byte index {length} is not a character boundary") from None


def _classify(labels: Iterable[str], threshold: float, text: str) -> list[InferencePrediction]:
    lowered = text.lower()
    predictions = (
        InferencePrediction(label, 0.85 if label.lower() in lowered else 0.15) for label in labels
    )
    return [p for p in predictions if p.score >= threshold]


def _extract(entity_types: Iterable[str], text: str) -> list[InferencePrediction]:
    predictions: list[InferencePrediction] = []
    words = text.split()
    for etype in entity_types:
        if etype == "EMAIL":
            predictions.extend(
                InferencePrediction("EMAIL", 0.95, word)
                for word in words
                if "@" in word and "." in word
            )
        elif etype == "NUMBER":
            predictions.extend(
                InferencePrediction("NUMBER", 0.99, word)
                for word in words
                if _NUMBER.fullmatch(word)
            )
    return predictions


class InferenceEngine:
    """Runs inference tasks over text."""

    def __init__(self, config: Optional[InferenceConfig] = None) -> None:
        self.config = config if config is not None else InferenceConfig()

    def infer(self, task: InferenceTask, text: str) -> InferenceResult:
        """Run a task over text and time it."""
        start = time.monotonic()
        match task:
            case Classification(labels=labels, threshold=threshold):
                predictions = _classify(labels, threshold, text)
            case EntityExtraction(entity_types=entity_types):
                predictions = _extract(entity_types, text)
            case Summarization(max_length=max_length):
                if len(text.encode("utf-8")) > max_length:
                    summary = _byte_prefix(text, max_length) + "..."
                else:
                    summary = text
                predictions = [InferencePrediction("summary", 1.0, summary)]
            case TextGeneration(max_tokens=max_tokens):
                prefix = _byte_prefix(text, 50)
                generated = f"[Generated text based on: '{prefix}' (max {max_tokens} tokens)]"
                predictions = [InferencePrediction("generation", 1.0, generated)]
            case _:
                predictions = []
        return InferenceResult(
            task=describe_task(task),
            results=predictions,
            model=self.config.model,
            latency_ms=int((time.monotonic() - start) * 1000),
        )

    def classify(self, text: str, labels: Iterable[str]) -> list[InferencePrediction]:
        """Labels that appear to apply to the text, with threshold 0.5."""
        return self.infer(Classification(list(labels), 0.5), text).results

    def extract_entities(self, text: str, types: Iterable[str]) -> list[InferencePrediction]:
        """Entities of the given types found in the text."""
        return self.infer(EntityExtraction(list(types)), text).results