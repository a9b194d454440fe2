"""Sample data generator for exercising the converter.

Writes a JSON array of flat records with random, overlapping field sets,
which is the shape of input the converter exists for.
"""

from __future__ import annotations

import json
import random
import string
from typing import Any, Dict, List, Optional, TextIO

from pydantic import BaseModel, field_validator

MEGABYTE = 1024 * 1024
MAX_FIELDS = 20


class GeneratorOptions(BaseModel):
    """Generation settings; out-of-range values are clamped, not rejected."""

    size: int = 10 * MEGABYTE
    fields: int = 10
    seed: Optional[int] = None

    @field_validator("fields")
    @classmethod
    def clamp_fields(cls, v: int) -> int:
        return min(max(v, 1), MAX_FIELDS)

    @field_validator("size")
    @classmethod
    def clamp_size(cls, v: int) -> int:
        return max(v, 1)


def random_string(rng: random.Random, n: int) -> str:
    return "".join(rng.choice(string.ascii_letters) for _ in range(n))


def random_value(rng: random.Random, kind: int) -> Any:
    """Random scalar whose type depends on ``kind`` (string, int, bool)."""
    if kind == 0:
        return random_string(rng, rng.randint(5, 14))
    if kind == 1:
        return rng.randint(1, 41)
    return rng.random() < 0.5


def generate_headers(rng: random.Random, fields: int) -> List[str]:
    """Generate ``fields`` distinct random field names."""
    headers: List[str] = []
    while len(headers) < fields:
        name = random_string(rng, rng.randint(5, 14))
        if name not in headers:
            headers.append(name)
    return headers


def generate_record(rng: random.Random, headers: List[str]) -> Dict[str, Any]:
    """Build a record from a random non-empty subset of ``headers``."""
    chosen = rng.sample(range(len(headers)), rng.randint(1, len(headers)))
    return {headers[i]: random_value(rng, i % 3) for i in chosen}


def generate(
    stream: TextIO,
    size: int = 10 * MEGABYTE,
    fields: int = 10,
    seed: Optional[int] = None,
) -> int:
    """Write a JSON array of random records to ``stream``.

    Records are written until roughly ``size`` characters have been
    produced; at least one record is always written.

    Returns:
        Number of records written
    """
    opts = GeneratorOptions(size=size, fields=fields, seed=seed)
    rng = random.Random(opts.seed)
    headers = generate_headers(rng, opts.fields)

    written = stream.write("[\n")
    count = 0
    while count == 0 or written < opts.size:
        if count:
            written += stream.write(",\n")
        written += stream.write(json.dumps(generate_record(rng, headers)))
        count += 1
    stream.write("\n]\n")
    return count


__all__ = ["GeneratorOptions", "MEGABYTE", "generate"]
