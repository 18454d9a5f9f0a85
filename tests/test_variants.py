"""
Test Variant Generator
"""
import pytest

from examsheet.schemas import ExamStatus
from examsheet.services.answer_key import resolve_answer
from examsheet.services.html_renderer import render_html
from examsheet.services.variants import base_title, make_variant, renumber_questions


def _numbers(exam):
    return [q.number for q in exam.iter_questions()]


def test_renumber_skips_stimulus(sample_exam):
    """Stimulus blocks are not numbered."""
    assert _numbers(sample_exam) == ["1", "2", "3", "", "4", "5", "6", "7", "8"]


def test_renumber_does_not_mutate_input(sample_exam):
    """Renumbering returns a new exam."""
    scrambled = sample_exam.model_copy(deep=True)
    for question in scrambled.iter_questions():
        question.number = "99"
    renumbered = renumber_questions(scrambled)
    assert set(_numbers(scrambled)) == {"99"}
    assert _numbers(renumbered) == _numbers(sample_exam)


def test_variant_title_status_and_id(sample_exam):
    """Variants get a title suffix, draft status and new id."""
    published = sample_exam.model_copy(update={"status": ExamStatus.PUBLISHED})
    variant = make_variant(published, 2)
    assert variant.title == "Penilaian Akhir Semester - Varian 2"
    assert variant.status == ExamStatus.DRAFT
    assert variant.id != sample_exam.id

    again = make_variant(variant, 3)
    assert again.title == "Penilaian Akhir Semester - Varian 3"


def test_variant_is_reproducible_per_seed(sample_exam):
    """The same seed gives the same order."""
    first = make_variant(sample_exam, 1, seed=42)
    second = make_variant(sample_exam, 1, seed=42)
    order = [[q.id for q in s.questions] for s in first.sections]
    assert order == [[q.id for q in s.questions] for s in second.sections]


def test_variant_keeps_questions_and_keys(sample_exam):
    """Variants keep every question and answer key."""
    variant = make_variant(sample_exam, 5, seed=7)
    for original, shuffled in zip(sample_exam.sections, variant.sections):
        assert sorted(q.id for q in original.questions) == sorted(q.id for q in shuffled.questions)

    numbers = [n for n in _numbers(variant) if n]
    assert numbers == [str(i) for i in range(1, 9)]

    mc = next(q for q in variant.iter_questions() if q.id == "q-mc")
    assert resolve_answer(mc).entries[0].content == "Paris"


def test_variant_number_must_be_positive(sample_exam):
    """Test variant numbers must be positive."""
    with pytest.raises(ValueError):
        make_variant(sample_exam, 0)


def test_base_title():
    """Test variant suffix stripping."""
    assert base_title("UTS - Varian 12") == "UTS"
    assert base_title("UTS") == "UTS"


def test_notes_travel_with_variant_but_are_not_rendered(sample_exam):
    """Author notes are kept on the exam and left out of the printed sheet."""
    exam = sample_exam.model_copy(update={"notes": "Catatan internal guru"})
    assert make_variant(exam, 2, seed=3).notes == "Catatan internal guru"
    assert "Catatan internal guru" not in render_html(exam)
