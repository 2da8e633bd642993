import json

from presentai.prompts import render_slides_prompt, SLIDES_TEMPLATE


def test_render_interpolates_every_detail():
    outline = [{"title": "Intro", "content": "Hello"}, {"title": "End", "content": "Bye"}]
    compact = json.dumps(outline, separators=(",", ":"))

    prompt = render_slides_prompt("Greetings", outline, "French", "playful")

    assert "Presentation Title: Greetings" in prompt
    assert f"Slide Content (JSON): {compact}" in prompt
    assert "Language: French" in prompt
    assert "Image Query Tone: playful" in prompt
    assert "Total Slides to Generate: 2" in prompt
    assert "Generate exactly 2 slides. NOT MORE NOT LESS ! EXACTLY 2" in prompt
    assert "{" not in prompt.replace(compact, "")


def test_render_counts_object_outline_by_keys():
    outline = {
        "slide1": {"title": "One", "content": "a"},
        "slide2": {"title": "Two", "content": "b"},
        "slide3": {"title": "Three", "content": "c"},
    }

    prompt = render_slides_prompt("Counting", outline, "English")

    assert "Total Slides to Generate: 3" in prompt
    assert "Image Query Tone: professional" in prompt


def test_render_keeps_user_text_verbatim():
    outline = ["Überblick {draft}", "日本語のスライド"]

    prompt = render_slides_prompt("Mixed {braces}", outline, "German", "")

    assert "Presentation Title: Mixed {braces}" in prompt
    assert '"Überblick {draft}"' in prompt
    assert '"日本語のスライド"' in prompt
    assert "Image Query Tone: professional" in prompt


def test_template_lists_all_layout_components():
    for component in ("COLUMNS", "BULLETS", "ICONS", "CYCLE", "ARROWS", "TIMELINE",
                      "PYRAMID", "STAIRCASE", "CHART", "IMG"):
        assert f"<{component}" in SLIDES_TEMPLATE


def test_render_embeds_compact_json():
    prompt = render_slides_prompt("Compact", [{"title": "A", "content": "b"}], "English")

    assert 'Slide Content (JSON): [{"title":"A","content":"b"}]' in prompt
