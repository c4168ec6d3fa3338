"""Turning document text into vector embeddings."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Iterable, Optional


@dataclass
class EmbeddingModelConfig:
    """Settings of the model that produces embeddings."""

    provider: str = "local"
    model: str = "all-MiniLM-L6-v2"
    endpoint: Optional[str] = None
    api_key: Optional[str] = None
    dimensions: int = 384
    max_tokens: int = 512
    batch_size: int = 32


def _json_text(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class EmbeddingPipeline:
    """Extracts text from documents and turns it into normalised vectors."""

    def __init__(self, config: EmbeddingModelConfig, fields: Iterable[str]) -> None:
        self.config = config
        self.fields = list(fields)
        self.concatenate = True

    def extract_text(self, doc: Any) -> str:
        """Collect the text of the configured fields of a JSON document."""
        source = doc if isinstance(doc, dict) else {}
        texts: list[str] = []
        for name in self.fields:
            if name not in source:
                continue
            value = source[name]
            if isinstance(value, str):
                texts.append(value)
            elif isinstance(value, list):
                texts.extend(item for item in value if isinstance(item, str))
            else:
                texts.append(_json_text(value))
        if self.concatenate:
            return " ".join(texts)
        return texts[0] if texts else ""

    def generate_embedding(self, text: str) -> list[float]:
        """Deterministic embedding derived from the bytes of the text, unit length."""
        dims = self.config.dimensions
        raw = text.encode("utf-8")
        if raw and dims <= 0:
            raise ValueError("dimensions must be positive to embed non-empty text")
        embedding = [0.0] * max(dims, 0)
        chunks = (raw[start:start + 4] for start in range(0, len(raw), 4))
        for chunk_no, chunk in enumerate(chunks):
            embedding[chunk_no % dims] += sum((b - 128.0) / 256.0 for b in chunk)

        norm = math.sqrt(sum(x * x for x in embedding))
        if norm > 1e-6:
            embedding = [x / norm for x in embedding]
        return embedding

    def generate_batch(self, texts: Iterable[str]) -> list[list[float]]:
        """Embeddings for several texts, in order."""
        return [self.generate_embedding(text) for text in texts]

    def dimensions(self) -> int:
        """Length of the vectors produced."""
        return self.config.dimensions

    def model_info(self) -> dict[str, Any]:
        """Description of the configured model."""
        return {
            "provider": self.config.provider,
            "model": self.config.model,
            "dimensions": self.config.dimensions,
            "max_tokens": self.config.max_tokens,
        }