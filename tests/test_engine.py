import asyncio
import json
import sys

from virality_scorer import cli, engine
from virality_scorer.scoring import ScoringEngine
from virality_scorer.types import HybridOptions

POST = "Three things I wish I knew before my first job:\n\n- ask early\n- write things down\n- rest\n\nThoughts? #career"


def test_module_api_matches_engine():
    assert engine.analyze(POST) == ScoringEngine().analyze(POST)
    assert len(engine.generate_time_series(POST, hours=6)) == 6
    assert 2 <= len(engine.generate_suggestions(POST)) <= 5


def test_module_compare_ties_identical_posts():
    result = engine.compare(POST, POST.upper())
    assert result.winner == 0


def test_module_hybrid_without_ai():
    result = asyncio.run(engine.hybrid_analyze(POST, options=HybridOptions(useAI=False)))
    assert result.analysisMethod == "enhanced-only"
    assert result.legacy.engagementScore == engine.analyze(POST).engagementScore


def test_cli_analyze_prints_json(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["virality-scorer", "analyze", "--text", POST])
    cli.main()
    data = json.loads(capsys.readouterr().out)
    assert data["engagementScore"] == engine.analyze(POST).engagementScore


def test_cli_suggest_writes_file(monkeypatch, tmp_path, capsys):
    out = tmp_path / "suggestions.json"
    monkeypatch.setattr(
        sys, "argv", ["virality-scorer", "suggest", "--text", "hi", "--output", str(out)]
    )
    cli.main()
    assert "Saved output" in capsys.readouterr().out
    suggestions = json.loads(out.read_text(encoding="utf-8"))
    assert suggestions[0]["id"] == "length-short"


def test_cli_suggest_ai_falls_back_to_rules(monkeypatch, capsys):
    for key in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "GEMINI_API_KEY"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(sys, "argv", ["virality-scorer", "suggest", "--ai", "--text", "hi"])
    cli.main()
    captured = capsys.readouterr()
    assert "AI suggestions unavailable" in captured.err
    assert json.loads(captured.out)[0]["id"] == "length-short"
