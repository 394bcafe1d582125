"""
Markdown parser tests for curriculumkit.

Covers line classification, the objectives/prerequisites state machine,
topic/project extraction, description precedence and every fallback.
"""

import re

import pytest

from curriculumkit.ingest import (
    GENERIC_DESCRIPTION,
    Degradation,
    LineKind,
    ModuleReadError,
    classify_line,
    determine_difficulty,
    estimate_duration,
    parse_module_file,
    parse_module_markdown,
)
from curriculumkit.schemas import Difficulty


def parse(content: str, fallback_title: str = "Module-0.1-Fallback", phase_name: str = "Phase-0-Start"):
    return parse_module_markdown(content, "module-0-1-fallback", fallback_title, phase_name)


class TestClassifyLine:
    """Each line maps to exactly one kind."""

    def test_title_heading(self):
        line = classify_line("# Intro to HTML  ")
        assert line.kind == LineKind.TITLE_HEADING
        assert line.content == "Intro to HTML"

    def test_named_level_two_headings(self):
        assert classify_line("## Learning Objectives").kind == LineKind.OBJECTIVES_HEADING
        assert classify_line("  ## Prerequisites").kind == LineKind.PREREQUISITES_HEADING

    def test_other_level_two_heading_is_section(self):
        line = classify_line("## Learning Objectives and Goals")
        assert line.kind == LineKind.SECTION_HEADING
        assert line.content == "Learning Objectives and Goals"

    def test_level_three_heading_is_text(self):
        assert classify_line("### Details").kind == LineKind.TEXT

    def test_bullets(self):
        assert classify_line("- plain item").kind == LineKind.BULLET
        labeled = classify_line("- **Flexbox**: one-dimensional layout")
        assert labeled.kind == LineKind.LABELED_BULLET
        assert labeled.content == "Flexbox"

    def test_bold_without_colon_is_plain_bullet(self):
        assert classify_line("- **Flexbox** layout").kind == LineKind.BULLET

    def test_text(self):
        assert classify_line("Just a sentence.").kind == LineKind.TEXT
        assert classify_line("").kind == LineKind.TEXT


class TestFallbackCompleteness:
    """A document with only a level-1 heading uses every fallback."""

    def test_minimal_document(self):
        result = parse("# Minimal Module\n")
        module = result.module

        assert module.title == "Minimal Module"
        assert module.sections == ()
        assert module.topics == ()
        assert module.learning_objectives == ()
        assert module.prerequisites == ()
        assert module.projects == ("Complete hands-on exercises for Minimal Module",)
        assert module.description == GENERIC_DESCRIPTION

        match = re.fullmatch(r"(\d+)-(\d+) hours", module.duration)
        assert match
        low, high = int(match.group(1)), int(match.group(2))
        assert low >= 1
        assert high == low + 1

    def test_minimal_document_degradations(self):
        result = parse("# Minimal Module\n")
        assert result.degraded
        assert Degradation.MISSING_DESCRIPTION in result.degradations
        assert Degradation.PLACEHOLDER_PROJECT in result.degradations
        # no sections to fall back to, so topics are simply empty
        assert Degradation.TOPICS_FROM_SECTIONS not in result.degradations

    def test_missing_title_uses_fallback(self):
        result = parse("Some text without a heading.\n", fallback_title="Module-2.1-Hooks")
        assert result.module.title == "Module-2.1-Hooks"
        assert result.module.projects == ("Complete hands-on exercises for Module-2.1-Hooks",)
        assert Degradation.MISSING_TITLE in result.degradations

    def test_empty_document(self):
        module = parse("").module
        assert module.title == "Module-0.1-Fallback"
        assert module.duration == "1-2 hours"


class TestCollectionState:
    """Objectives and prerequisites collection."""

    def test_objectives_then_prerequisites_are_exclusive(self):
        content = "\n".join([
            "# Intro",
            "## Learning Objectives",
            "- Understand X",
            "- Explain Y",
            "## Prerequisites",
            "- Basic math",
        ])
        module = parse(content).module
        assert module.learning_objectives == ("Understand X", "Explain Y")
        assert module.prerequisites == ("Basic math",)

    def test_prerequisites_then_objectives_are_exclusive(self):
        content = "\n".join([
            "# Intro",
            "## Prerequisites",
            "- Basic math",
            "## Learning Objectives",
            "- Understand X",
        ])
        module = parse(content).module
        assert module.prerequisites == ("Basic math",)
        assert module.learning_objectives == ("Understand X",)

    def test_section_heading_stops_collection(self):
        content = "\n".join([
            "# Intro",
            "## Learning Objectives",
            "- Understand X",
            "## Getting Started",
            "- Install the editor",
        ])
        module = parse(content).module
        assert module.learning_objectives == ("Understand X",)
        assert module.sections == ("Getting Started",)

    def test_named_headings_are_not_sections(self):
        content = "# Intro\n## Learning Objectives\n## Prerequisites\n## Setup\n"
        assert parse(content).module.sections == ("Setup",)

    def test_level_three_heading_keeps_collecting(self):
        content = "# Intro\n## Learning Objectives\n### Core\n- Understand X\n"
        assert parse(content).module.learning_objectives == ("Understand X",)

    def test_bullets_outside_collection_are_ignored(self):
        content = "# Intro\n- stray item\n## Setup\n- install\n"
        module = parse(content).module
        assert module.learning_objectives == ()
        assert module.prerequisites == ()

    def test_indented_bullets_are_trimmed(self):
        content = "# Intro\n## Learning Objectives\n   -   Understand X  \n"
        assert parse(content).module.learning_objectives == ("Understand X",)


class TestTopics:

    def test_labeled_bullets_become_topics(self):
        content = "\n".join([
            "# CSS",
            "## Layout",
            "- **Flexbox**: one-dimensional layout",
            "- **Grid**: two-dimensional layout",
            "- plain bullet",
        ])
        module = parse(content).module
        assert module.topics == ("Flexbox", "Grid")

    def test_labeled_bullet_in_objectives_is_both(self):
        content = "# CSS\n## Learning Objectives\n- **Selectors**: target elements\n"
        module = parse(content).module
        assert module.learning_objectives == ("**Selectors**: target elements",)
        assert module.topics == ("Selectors",)

    def test_topics_fall_back_to_sections(self):
        content = "# CSS\n\nIntro.\n\n## Selectors\n## Layout\n"
        result = parse(content)
        assert result.module.topics == ("Selectors", "Layout")
        assert Degradation.TOPICS_FROM_SECTIONS in result.degradations


class TestProjects:

    def test_bold_project_bullet_prefix_is_stripped(self):
        content = "# Git\n## Practice\n- **Project 1**: Publish a portfolio site\n"
        assert parse(content).module.projects == ("Publish a portfolio site",)

    def test_bold_project_line_prefix_is_stripped(self):
        content = "# Git\n## Practice\n**Project Brief:** Build a landing page\n"
        assert parse(content).module.projects == ("Build a landing page",)

    def test_plain_bullet_mentioning_project_is_kept(self):
        content = "# Git\n## Practice\n- Create your first development project\n"
        assert parse(content).module.projects == ("- Create your first development project",)

    def test_case_insensitive_match(self):
        content = "# Git\n## Practice\n- PROJECT: ship it\n"
        assert parse(content).module.projects == ("- PROJECT: ship it",)

    def test_plain_text_mentioning_project_is_ignored(self):
        content = "# Git\n\nThis project teaches Git.\n\n## Practice\n"
        result = parse(content)
        assert result.module.projects == ("Complete hands-on exercises for Git",)
        assert Degradation.PLACEHOLDER_PROJECT in result.degradations

    def test_prefix_only_line_is_skipped(self):
        content = "# Git\n## Practice\n**Project**:\n- **Project 2**: Deploy\n"
        assert parse(content).module.projects == ("Deploy",)


class TestDescription:

    def test_first_line_of_block(self):
        content = "# HTML\n\nLearn the structure of web pages.\nA second line.\n\nAnother paragraph.\n\n## Tags\n"
        result = parse(content)
        assert result.module.description == "Learn the structure of web pages."
        assert Degradation.MISSING_DESCRIPTION not in result.degradations

    def test_text_directly_under_title(self):
        content = "# HTML\nLearn the structure of web pages.\n## Tags\n"
        assert parse(content).module.description == "Learn the structure of web pages."

    def test_blank_block_uses_generic_sentence(self):
        content = "# HTML\n\n   \n\n## Tags\n"
        assert parse(content).module.description == GENERIC_DESCRIPTION

    def test_no_level_two_heading_uses_generic_sentence(self):
        content = "# HTML\n\nLearn the structure of web pages.\n"
        assert parse(content).module.description == GENERIC_DESCRIPTION

    def test_frontmatter_is_skipped(self):
        content = "---\ntitle: ignored\n---\n# HTML\n\nLearn tags.\n\n## Tags\n"
        module = parse(content).module
        assert module.title == "HTML"
        assert module.description == "Learn tags."

    def test_leading_rule_around_title_is_kept(self):
        content = "---\n# HTML\n\nLearn tags.\n---\n\n## Tags\n"
        result = parse(content)
        assert result.module.title == "HTML"
        assert result.module.sections == ("Tags",)
        assert Degradation.MISSING_TITLE not in result.degradations


class TestFirstTitleWins:

    def test_second_level_one_heading_is_ignored(self):
        content = "# First\n\nDesc.\n\n## Part\n# Second\n"
        module = parse(content).module
        assert module.title == "First"
        assert module.sections == ("Part",)


class TestDuration:

    def test_short_document(self):
        assert estimate_duration("one two three") == "2-3 hours"

    def test_exactly_two_hundred_words(self):
        assert estimate_duration(" ".join(["word"] * 200)) == "2-3 hours"

    def test_reading_time_rounds_up(self):
        # 401 words -> R = 3, P = ceil(4.5) = 5
        assert estimate_duration(" ".join(["word"] * 401)) == "5-6 hours"

    def test_empty_content_is_at_least_one_hour(self):
        assert estimate_duration("") == "1-2 hours"

    def test_frontmatter_counts_toward_duration(self):
        body = " ".join(["word"] * 200)
        with_frontmatter = "---\n" + " ".join(["meta"] * 200) + "\n---\n# T\n" + body
        assert parse(with_frontmatter).module.duration == "5-6 hours"


class TestDifficulty:

    @pytest.mark.parametrize("phase_name, expected", [
        ("Phase-0-Absolute-Beginnings", Difficulty.BEGINNER),
        ("Phase-1-Foundation-Technologies", Difficulty.BEGINNER),
        ("Phase-2-React-Development-Mastery", Difficulty.INTERMEDIATE),
        ("Phase-3-Geographic-Information-Systems", Difficulty.INTERMEDIATE),
        ("Phase-4-3D-Visualisation-and-Graphics", Difficulty.INTERMEDIATE),
        ("Phase-5-Database-Systems-and-Backend", Difficulty.ADVANCED),
        ("Phase-8-Advanced-Integration-Patterns", Difficulty.ADVANCED),
        ("Phase-12-Capstone", Difficulty.ADVANCED),
        ("Appendix", Difficulty.ADVANCED),
    ])
    def test_lookup_by_phase_number(self, phase_name, expected):
        assert determine_difficulty(phase_name) == expected

    def test_content_does_not_affect_difficulty(self):
        module = parse("# Advanced Topics\n", phase_name="Phase-0-Start").module
        assert module.difficulty == Difficulty.BEGINNER


class TestParseModuleFile:

    def test_reads_file_and_uses_stem_as_fallback(self, tmp_path):
        path = tmp_path / "Module-1.1-Untitled.md"
        path.write_text("No heading here.\n", encoding="utf-8")
        result = parse_module_file(path, "module-1-1-untitled", "Phase-1-Foundations")
        assert result.module.id == "module-1-1-untitled"
        assert result.module.title == "Module-1.1-Untitled"
        assert result.module.difficulty == Difficulty.BEGINNER

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ModuleReadError):
            parse_module_file(tmp_path / "Module-9.9-Gone.md", "module-9-9-gone")

    def test_directory_raises(self, tmp_path):
        path = tmp_path / "Module-1.2-Dir.md"
        path.mkdir()
        with pytest.raises(ModuleReadError) as exc_info:
            parse_module_file(path, "module-1-2-dir")
        assert exc_info.value.path == path

    def test_invalid_utf8_raises(self, tmp_path):
        path = tmp_path / "Module-1.3-Binary.md"
        path.write_bytes(b"# Title\n\xff\xfe\xfa")
        with pytest.raises(ModuleReadError):
            parse_module_file(path, "module-1-3-binary")
