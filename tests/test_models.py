"""
Test Data Models
Tests the Skeleton: Pydantic validation, legacy upgrades and matching keys.
"""
import pytest
from pydantic import ValidationError

from examsheet.config import DEFAULT_SECTION_INSTRUCTION
from examsheet.schemas import (
    Direction,
    Exam,
    MatchingQuestion,
    MultipleChoiceQuestion,
    PaperSize,
    RenderConfig,
    Section,
    TableGrid,
    TableQuestion,
)


def test_question_union_dispatches_on_type(sample_exam):
    """Each payload is parsed into the variant named by its type tag."""
    types = [q.type for q in sample_exam.iter_questions()]
    assert types == [
        "multiple_choice", "complex_multiple_choice", "true_false", "stimulus",
        "short_answer", "essay", "matching", "table", "table_multiple_choice",
    ]
    first = sample_exam.sections[0].questions[0]
    assert isinstance(first, MultipleChoiceQuestion)
    assert first.choice_index("c3") == 2
    assert first.choice_index("missing") is None


def test_unknown_question_type_rejected():
    """Test unknown question types are rejected."""
    with pytest.raises(ValidationError):
        Section.model_validate({"questions": [{"type": "drawing", "text": "?"}]})


def test_exam_defaults_and_class_alias():
    """Test exam defaults and the class alias."""
    exam = Exam.model_validate({"title": "Ujian", "class": "VII"})
    assert exam.class_label == "VII"
    assert exam.direction == Direction.LTR
    assert exam.layout_columns == 1
    assert exam.status == "draft"
    assert exam.model_dump(by_alias=True)["class"] == "VII"


def test_null_direction_and_layout_fall_back_to_defaults():
    """Null direction and layout use the defaults."""
    exam = Exam.model_validate({"title": "Ujian", "direction": None, "layout_columns": None})
    assert exam.direction == Direction.LTR
    assert exam.layout_columns == 1


def test_invalid_layout_columns_rejected():
    """Test layout columns must be 1 or 2."""
    with pytest.raises(ValidationError):
        Exam.model_validate({"layout_columns": 3})


def test_legacy_flat_questions_upgraded_to_one_section():
    """Older payloads stored questions directly on the exam."""
    exam = Exam.model_validate({
        "title": "Lama",
        "questions": [
            {"type": "essay", "text": "Satu"},
            {"type": "true_false", "text": "Dua"},
        ],
    })
    assert len(exam.sections) == 1
    section = exam.sections[0]
    assert section.instructions == DEFAULT_SECTION_INSTRUCTION
    assert [q.number for q in section.questions] == ["1", "2"]


def test_sections_win_over_legacy_questions():
    """Sections take precedence over legacy questions."""
    exam = Exam.model_validate({
        "sections": [{"instructions": "I. Baru", "questions": []}],
        "questions": [{"type": "essay", "text": "Lama"}],
    })
    assert len(exam.sections) == 1
    assert exam.sections[0].instructions == "I. Baru"


def test_table_grid_must_be_rectangular():
    """Test ragged grids are rejected."""
    with pytest.raises(ValidationError):
        TableGrid.model_validate({"rows": [{"cells": [{}, {}]}, {"cells": [{}]}]})


def test_table_grid_sizes_follow_dimensions():
    """Size lists follow the grid dimensions."""
    grid = TableGrid.model_validate({
        "rows": [{"cells": [{}, {}, {}]}],
        "row_heights": [40, 10, 10],
        "column_widths": [0, 120],
    })
    assert grid.row_heights == [40]
    assert grid.column_widths == [None, 120, None]


def test_table_cell_span_must_be_positive():
    """Test spans must be positive."""
    with pytest.raises(ValidationError):
        TableQuestion.model_validate({"table": {"rows": [{"cells": [{"rowspan": 0}]}]}})


def test_matching_key_rejects_dangling_pairs():
    """Test pairs must point at existing items."""
    with pytest.raises(ValidationError):
        MatchingQuestion.model_validate({
            "prompts": [{"id": "p1", "text": "A"}],
            "answers": [{"id": "a1", "text": "B"}],
            "matching_key": [{"prompt_id": "p1", "answer_id": "gone"}],
        })


def test_matching_removal_cascades_to_key(sample_exam):
    """Removing an item drops its pairs."""
    question = sample_exam.sections[1].questions[2]

    without_prompt = question.remove_prompt("p1")
    assert [p.id for p in without_prompt.prompts] == ["p2"]
    assert [k.prompt_id for k in without_prompt.matching_key] == ["p2"]

    without_answer = question.remove_answer("a1")
    assert [k.answer_id for k in without_answer.matching_key] == ["a2"]

    # Original untouched
    assert len(question.matching_key) == 2


def test_matching_set_match_replaces_and_clears(sample_exam):
    """Setting a match replaces or clears the pair."""
    question = sample_exam.sections[1].questions[2]

    relinked = question.set_match("p1", "a1")
    assert {(k.prompt_id, k.answer_id) for k in relinked.matching_key} == {("p1", "a1"), ("p2", "a1")}

    cleared = question.set_match("p1", None)
    assert [k.prompt_id for k in cleared.matching_key] == ["p2"]

    with pytest.raises(ValueError):
        question.set_match("p1", "nope")


def test_render_config_defaults():
    """Test render config defaults."""
    config = RenderConfig()
    assert config.paper_size == PaperSize.A4
    assert config.logos == (None, None)
    assert config.margins.top == 20
    assert len(config.header_lines) == 3


def test_render_config_upgrades_legacy_fields(png_data_uri):
    """Single 'logo' and editor header-line objects are still accepted."""
    config = RenderConfig.model_validate({
        "logo": png_data_uri,
        "header_lines": [{"id": "1", "text": "DINAS"}, "SEKOLAH"],
        "paper_size": "F4",
    })
    assert config.logos == (png_data_uri, None)
    assert config.header_lines == ["DINAS", "SEKOLAH"]
    assert config.paper_size == PaperSize.F4


def test_render_config_rejects_invalid_values():
    """Test invalid render settings are rejected."""
    with pytest.raises(ValidationError):
        RenderConfig.model_validate({"font_size": 0})
    with pytest.raises(ValidationError):
        RenderConfig.model_validate({"margins": {"top": -1}})
    with pytest.raises(ValidationError):
        RenderConfig.model_validate({"paper_size": "A3"})
