from __future__ import annotations

import json
from dataclasses import asdict
from typing import Iterable, Iterator

from neuroglow_anim.models.ops import Circle, Clear, DrawOp, Present, Segment, StrokeStyle


_TYPE_MAP = {
    "Clear": Clear,
    "StrokeStyle": StrokeStyle,
    "Segment": Segment,
    "Circle": Circle,
    "Present": Present,
}


def _tuples(obj: dict) -> dict:
    # JSON turns tuples into lists; restore them so ops compare equal
    return {k: tuple(v) if isinstance(v, list) else v for k, v in obj.items()}


def dump_jsonl(ops: Iterable[DrawOp], path: str) -> int:
    count = 0
    with open(path, "w", encoding="utf-8") as f:
        for op in ops:
            obj = {"type": type(op).__name__, **asdict(op)}
            f.write(json.dumps(obj) + "\n")
            count += 1
    return count


def iter_jsonl(path: str) -> Iterator[DrawOp]:
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            obj = json.loads(line)
            typ = obj.pop("type", None)
            cls = _TYPE_MAP.get(typ)
            if cls is None:
                continue
            yield cls(**_tuples(obj))
