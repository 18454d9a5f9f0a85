"""
Test Core Configuration & Labels
Tests the Brain: config loading and localized label templating.
"""
import pytest

from examsheet import config
from examsheet.config import (
    DEFAULT_HEADER_LINES,
    get_label,
    get_output_dir,
    default_header_lines,
    translate_instruction,
)
from examsheet.errors import ExamSheetError, InvalidSelection, StructuralConflict
from examsheet.schemas import Direction


def test_labels_for_both_directions():
    """Test label lookup for both directions."""
    assert get_label("ltr", "answer_key_title") == "Kunci Jawaban"
    assert get_label("rtl", "answer_key_title") == "مفتاح الإجابة"
    assert get_label(Direction.RTL, "no_answer") == "لا توجد إجابة"


def test_label_templating():
    """Test label placeholders are filled."""
    assert get_label("ltr", "row", number="3") == "Baris 3"
    assert get_label("ltr", "unsupported", type="drawing") == "[Jenis soal tidak didukung: drawing]"


def test_label_directions_share_keys():
    """Both locales define the same labels."""
    assert config.LABELS["ltr"].keys() == config.LABELS["rtl"].keys()


def test_invalid_label_raises_key_error():
    """Test unknown labels raise KeyError."""
    with pytest.raises(KeyError):
        get_label("ltr", "invalid_label")
    with pytest.raises(KeyError):
        get_label("ttb", "name")


def test_instruction_translation():
    """Test known instructions are translated."""
    source = "Jodohkan pernyataan di kolom A dengan jawaban yang sesuai di kolom B!"
    assert translate_instruction(source) == "طابق بين العبارات في العمود أ والإجابات المناسبة في العمود ب!"
    assert translate_instruction("Teks lain") == "Teks lain"


def test_default_header_lines_are_copies():
    """Default header lines are returned as copies."""
    lines = default_header_lines()
    lines.append("extra")
    assert default_header_lines() == DEFAULT_HEADER_LINES


def test_output_dir_is_created(tmp_path, monkeypatch):
    """Test output directory is created on demand."""
    target = tmp_path / "nested" / "output"
    monkeypatch.setattr(config, "OUTPUT_DIR", target)
    assert get_output_dir() == target
    assert target.is_dir()


def test_error_taxonomy():
    """Test error class hierarchy."""
    assert issubclass(StructuralConflict, ExamSheetError)
    assert issubclass(InvalidSelection, ExamSheetError)
    assert issubclass(ExamSheetError, ValueError)
