"""Unit tests for resume entity extractors (bullets, experience, metrics)."""

import time

import pytest

from clerk.contexts.resume.extractors import extract_bullets, extract_experience, extract_metrics
from clerk.contexts.resume.section_patterns import HeadingSynonyms, has_metric, strip_bullet

JANE_RESUME = (
    "Jane Cruz\n"
    "Virtual Assistant\n"
    "\n"
    "Skills:\n"
    "- Email handling\n"
    "- Calendar management\n"
    "\n"
    "Experience:\n"
    "Virtual Assistant at Acme Co | 2020 - Present\n"
    "- Managed 200+ emails weekly\n"
    "- Increased response rate by 35%\n"
)


# =============================================================================
# Bullets
# =============================================================================


@pytest.mark.unit
def test_extract_bullets_strips_markers():
    assert extract_bullets(JANE_RESUME, HeadingSynonyms.SKILLS) == [
        "Email handling",
        "Calendar management",
    ]


@pytest.mark.unit
def test_extract_bullets_unicode_glyphs():
    text = "Tools:\n• Trello\n● Slack\n◦ Zoom\n▪ Asana\n· Canva\n"
    assert extract_bullets(text, HeadingSynonyms.TOOLS) == ["Trello", "Slack", "Zoom", "Asana", "Canva"]


@pytest.mark.unit
def test_extract_bullets_length_filter():
    """Single characters and 100+ character lines are dropped."""
    long_line = "x" * 100
    text = f"Skills:\n- A\n- Bookkeeping\n- {long_line}\n"
    assert extract_bullets(text, HeadingSynonyms.SKILLS) == ["Bookkeeping"]


@pytest.mark.unit
def test_extract_bullets_capped_at_15():
    items = "\n".join(f"- Skill number {i}" for i in range(20))
    text = f"Skills:\n{items}\n"

    result = extract_bullets(text, HeadingSynonyms.SKILLS)

    assert len(result) == 15
    assert result[0] == "Skill number 0"
    assert result[-1] == "Skill number 14"


@pytest.mark.unit
def test_extract_bullets_missing_section():
    assert extract_bullets("Jane Cruz\nVirtual Assistant\n", HeadingSynonyms.SKILLS) == []


@pytest.mark.unit
def test_strip_bullet():
    assert strip_bullet("  •  Data entry ") == "Data entry"
    assert strip_bullet("-- * Reporting") == "Reporting"
    assert strip_bullet("Plain line") == "Plain line"


# =============================================================================
# Experience
# =============================================================================


@pytest.mark.unit
def test_extract_experience_single_entry():
    entries = extract_experience(JANE_RESUME)

    assert len(entries) == 1
    entry = entries[0]
    assert entry.role == "Virtual Assistant"
    assert entry.company == "Acme Co"
    assert entry.period == "2020 - Present"
    assert entry.highlights == ["Managed 200+ emails weekly", "Increased response rate by 35%"]


@pytest.mark.unit
def test_extract_experience_separator_variants():
    text = (
        "Marketing Lead - Globex (2018 – 2021)\n"
        "\n"
        "Support Agent @ Initech | 2015 — current\n"
    )
    entries = extract_experience(text)

    assert [(e.role, e.company, e.period) for e in entries] == [
        ("Marketing Lead", "Globex", "2018 – 2021"),
        ("Support Agent", "Initech", "2015 — current"),
    ]


@pytest.mark.unit
def test_extract_experience_present_case_insensitive():
    entries = extract_experience("Bookkeeper at Lumen Books | 2022 - PRESENT\n")
    assert entries[0].period == "2022 - PRESENT"


@pytest.mark.unit
def test_extract_experience_capped_at_5():
    text = "\n".join(f"Assistant at Company {chr(65 + i)} | 201{i} - 201{i + 1}" for i in range(7))
    entries = extract_experience(text)

    assert len(entries) == 5
    assert entries[0].company == "Company A"
    assert entries[4].company == "Company E"


@pytest.mark.unit
def test_extract_experience_highlight_limits():
    """Only 4 highlights from the 8 lines after the header, each 11-199 chars."""
    bullets = "\n".join(f"- Handled account number {i}" for i in range(6))
    text = f"Account Manager at Vertex | 2019 - 2023\n- Short\n{bullets}\n"

    highlights = extract_experience(text)[0].highlights

    assert highlights == [
        "Handled account number 0",
        "Handled account number 1",
        "Handled account number 2",
        "Handled account number 3",
    ]


@pytest.mark.unit
def test_extract_experience_requires_year_range():
    text = "Virtual Assistant at Acme Co | since last spring\nAssistant at Acme | 2020\n"
    assert extract_experience(text) == []


@pytest.mark.unit
def test_extract_experience_month_dates_not_recognized():
    assert extract_experience("Designer at Pixel Co | Jan 2020 - Mar 2022\n") == []


@pytest.mark.unit
def test_extract_experience_bulleted_header():
    entries = extract_experience("• Virtual Assistant at Acme Co | 2020 - Present\n  - Drafted weekly reports\n")

    assert [(e.role, e.company, e.period) for e in entries] == [("Virtual Assistant", "Acme Co", "2020 - Present")]
    assert entries[0].highlights == ["Drafted weekly reports"]


@pytest.mark.unit
def test_extract_experience_header_must_open_line():
    text = "10 years as Office Manager at Acme Co | 2020 - Present\n"
    assert extract_experience(text) == []


@pytest.mark.unit
def test_extract_experience_long_single_line_is_fast():
    """Resumes pasted as one line must not stall the header search."""
    text = "Worked at Place and Managed Things for Clients " * 400

    started = time.perf_counter()
    entries = extract_experience(text)
    elapsed = time.perf_counter() - started

    assert entries == []
    assert elapsed < 2.0


# =============================================================================
# Metrics
# =============================================================================


@pytest.mark.unit
def test_extract_metrics():
    assert extract_metrics(JANE_RESUME) == ["Increased response rate by 35%"]


@pytest.mark.unit
def test_extract_metrics_currency_and_units():
    text = (
        "- Generated $12,000 in new sales\n"
        "- Grew newsletter to 1,200+ subscribers\n"
        "- Wrote 40 blog posts\n"
        "- Brought in 30 leads per month\n"
    )
    assert extract_metrics(text) == [
        "Generated $12,000 in new sales",
        "Grew newsletter to 1,200+ subscribers",
        "Brought in 30 leads per month",
    ]


@pytest.mark.unit
def test_extract_metrics_capped_at_10():
    text = "\n".join(f"- Improved KPI {i} by {i + 10}%" for i in range(12))
    assert len(extract_metrics(text)) == 10


@pytest.mark.unit
def test_extract_metrics_drops_short_lines():
    assert extract_metrics("- 35%\n") == []


@pytest.mark.unit
def test_has_metric():
    assert has_metric("Cut costs by 20%")
    assert has_metric("Managed a $5,000 budget")
    assert not has_metric("Reached 10k followers")
    assert has_metric("Reached 10000 Followers")
    assert not has_metric("Managed emails weekly")
