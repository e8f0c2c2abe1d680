"""File loading functionality"""
from __future__ import annotations

import json
from pathlib import Path

from .schemas import ParticipantRecord

SEED_FILE = Path(__file__).resolve().parents[1] / "data" / "participants.json"


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def load_participants(path: Path) -> list[ParticipantRecord]:
    """Parse a JSON array of participant objects."""
    raw = json.loads(read_text(path))
    if not isinstance(raw, list):
        raise ValueError(f"Expected a JSON array of participants in {path.name}")
    return [ParticipantRecord.model_validate(obj) for obj in raw]
