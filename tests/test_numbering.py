"""
Test Numbering & Locale Service
"""
import pytest

from examsheet.schemas import Direction
from examsheet.services.numbering import (
    ARABIC_LETTERS,
    format_exam_date,
    split_instruction,
    to_choice_letter,
    to_ordinal_numeral,
    to_roman,
)


def test_numerals_are_total_and_direction_specific():
    """Numerals exist for every index in both directions."""
    for n in range(1000):
        latin = to_ordinal_numeral(n, "ltr")
        arabic = to_ordinal_numeral(n, "rtl")
        assert latin == str(n)
        assert arabic and arabic != latin


def test_arabic_indic_digits():
    """Test Arabic-Indic digits."""
    assert to_ordinal_numeral(12, "rtl") == "١٢"
    assert to_ordinal_numeral("3a", Direction.RTL) == "٣a"
    assert to_ordinal_numeral(305, Direction.LTR) == "305"


def test_choice_letters_are_total():
    """Letters exist for every index."""
    for index in range(1000):
        assert to_choice_letter(index, "ltr")
        assert to_choice_letter(index, "rtl")


def test_latin_letters_continue_past_z():
    """Latin letters continue after z."""
    assert [to_choice_letter(i) for i in range(4)] == ["a", "b", "c", "d"]
    assert to_choice_letter(25) == "z"
    assert to_choice_letter(26) == "aa"
    assert to_choice_letter(27) == "ab"
    assert to_choice_letter(2, upper=True) == "C"
    letters = {to_choice_letter(i) for i in range(1000)}
    assert len(letters) == 1000


def test_arabic_letters_with_latin_fallback():
    """Arabic letters fall back to Latin past the alphabet."""
    assert to_choice_letter(0, "rtl") == "أ"
    assert to_choice_letter(3, "rtl") == "د"
    for index in range(len(ARABIC_LETTERS)):
        assert to_choice_letter(index, "rtl") != to_choice_letter(index, "ltr")
    assert to_choice_letter(28, "rtl") == to_choice_letter(28, "ltr")


def test_negative_choice_index_rejected():
    """Test negative indexes are rejected."""
    with pytest.raises(ValueError):
        to_choice_letter(-1)


@pytest.mark.parametrize("n, expected", [
    (1, "I"), (2, "II"), (4, "IV"), (9, "IX"), (14, "XIV"),
    (19, "XIX"), (40, "XL"), (44, "XLIV"), (49, "XLIX"), (50, "L"), (1994, "MCMXCIV"),
])
def test_roman_numerals(n, expected):
    """Test Roman numerals."""
    assert to_roman(n) == expected


def test_roman_rejects_non_positive():
    """Test Roman numerals need a positive number."""
    with pytest.raises(ValueError):
        to_roman(0)


def test_split_instruction():
    """Test enumerator splitting of instructions."""
    assert split_instruction("II. Jawablah soal berikut!") == ("II", "Jawablah soal berikut!")
    assert split_instruction("Tanpa nomor") == (None, "Tanpa nomor")
    assert split_instruction("") == (None, "")


def test_format_exam_date():
    """Test localized exam dates."""
    assert format_exam_date("2026-08-17") == "Senin, 17 Agustus 2026"
    assert format_exam_date("2026-08-17", "rtl") == "الاثنين، ١٧ أغسطس ٢٠٢٦"
    assert format_exam_date("2026-08-17T08:00:00") == "Senin, 17 Agustus 2026"


def test_format_exam_date_passthrough():
    """Unparseable dates are returned unchanged."""
    assert format_exam_date("") == ""
    assert format_exam_date("besok pagi") == "besok pagi"
