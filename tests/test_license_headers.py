from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
HEADER = "# Copyright (c) 2025 The Conciencia Authors"


def test_source_files_carry_project_header():
    sources = sorted(ROOT.joinpath("conciencia").rglob("*.py")) + [ROOT / "migrate_db.py"]
    missing = [str(p.relative_to(ROOT)) for p in sources if not p.read_text(encoding="utf-8").startswith(HEADER)]
    assert missing == []
