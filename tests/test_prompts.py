from __future__ import annotations

from news_curator.curation.prompts import build_instructions, build_user_prompt
from news_curator.models import SourceRead


def test_build_instructions_lists_category_and_sources() -> None:
    sources = [
        SourceRead(id="1", name="ESPN FC", url="https://www.espn.com/soccer/", category_id="c"),
        SourceRead(id="2", name="Goal.com", url="https://www.goal.com/en", category_id="c"),
    ]
    text = build_instructions("Football", sources)
    assert "expert news curator for Football" in text
    assert "https://www.espn.com/soccer/, https://www.goal.com/en" in text
    assert '"headline"' in text
    assert "Respond ONLY with a valid JSON object" in text


def test_build_user_prompt_names_category() -> None:
    assert build_user_prompt("F1") == (
        "Synthesize the latest news from the provided sources for the F1 category."
    )
