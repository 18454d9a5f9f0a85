"""
Numbering & Locale Service
Pure helpers shared by every renderer: numerals, choice letters, Roman
section enumerators, instruction splitting and localized dates.
"""
import re
from datetime import date
from typing import Optional, Tuple, Union

ARABIC_INDIC_DIGITS = "٠١٢٣٤٥٦٧٨٩"
_TO_ARABIC_INDIC = str.maketrans("0123456789", ARABIC_INDIC_DIGITS)

ARABIC_LETTERS = (
    "أ", "ب", "ج", "د", "هـ", "و", "ز", "ح", "ط", "ي", "ك", "ل", "م", "ن",
    "س", "ع", "ف", "ص", "ق", "ر", "ش", "ت", "ث", "خ", "ذ", "ض", "ظ", "غ",
)

ROMAN_NUMERALS = (
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"),
    (100, "C"), (90, "XC"), (50, "L"), (40, "XL"),
    (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
)

_INSTRUCTION_PATTERN = re.compile(r"^([^.]+)\.(.*)", re.DOTALL)

ID_WEEKDAYS = ("Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu")
ID_MONTHS = (
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
)
AR_WEEKDAYS = ("الاثنين", "الثلاثاء", "الأربعاء", "الخميس", "الجمعة", "السبت", "الأحد")
AR_MONTHS = (
    "يناير", "فبراير", "مارس", "أبريل", "مايو", "يونيو",
    "يوليو", "أغسطس", "سبتمبر", "أكتوبر", "نوفمبر", "ديسمبر",
)


def _is_rtl(direction) -> bool:
    return str(getattr(direction, "value", direction)) == "rtl"


def to_ordinal_numeral(n: Union[int, str], direction="ltr") -> str:
    """
    Renders a number in the numeral system of a text direction.

    Args:
        n: Integer or display-number string (e.g. "12" or "3a").
        direction: "ltr" keeps Latin digits, "rtl" substitutes Arabic-Indic digits.

    Returns:
        Localized numeral string.
    """
    text = str(n)
    return text.translate(_TO_ARABIC_INDIC) if _is_rtl(direction) else text


def _latin_letters(index: int) -> str:
    # Bijective base-26: 0 -> a, 25 -> z, 26 -> aa, 27 -> ab
    letters = ""
    value = index + 1
    while value > 0:
        value, remainder = divmod(value - 1, 26)
        letters = chr(97 + remainder) + letters
    return letters


def to_choice_letter(index: int, direction="ltr", upper: bool = False) -> str:
    """
    Maps a zero-based choice position to its display letter.

    Args:
        index: Zero-based position in display order.
        direction: "ltr" for Latin letters, "rtl" for the Arabic alphabet.
        upper: Use upper-case Latin letters (matching answers column).

    Returns:
        Letter label without punctuation.

    Raises:
        ValueError: If index is negative.
    """
    if index < 0:
        raise ValueError("index must be non-negative")

    if _is_rtl(direction) and index < len(ARABIC_LETTERS):
        return ARABIC_LETTERS[index]

    letters = _latin_letters(index)
    return letters.upper() if upper else letters


def to_roman(n: int) -> str:
    """
    Encodes a positive integer as a subtractive Roman numeral.

    Raises:
        ValueError: If n is not positive.
    """
    if n <= 0:
        raise ValueError("Roman numerals are defined for positive integers only")

    result = []
    for value, symbol in ROMAN_NUMERALS:
        count, n = divmod(n, value)
        result.append(symbol * count)
    return "".join(result)


def split_instruction(instructions: str) -> Tuple[Optional[str], str]:
    """
    Splits a section instruction into its enumerator token and body.

    "II. Jawablah ..." -> ("II", "Jawablah ..."); text without a leading
    "token." prefix yields (None, original text).
    """
    match = _INSTRUCTION_PATTERN.match(instructions or "")
    if not match:
        return None, instructions or ""
    return match.group(1).strip(), match.group(2).strip()


def format_exam_date(value: str, direction="ltr") -> str:
    """
    Formats an ISO date as a long weekday/day/month/year string.

    Args:
        value: Date as "YYYY-MM-DD" (a trailing time part is ignored).
        direction: "ltr" for Indonesian names, "rtl" for Arabic names and digits.

    Returns:
        Localized date, or the input unchanged when it cannot be parsed.
    """
    if not value:
        return ""
    try:
        parsed = date.fromisoformat(value[:10])
    except ValueError:
        return value

    if _is_rtl(direction):
        text = f"{AR_WEEKDAYS[parsed.weekday()]}، {parsed.day} {AR_MONTHS[parsed.month - 1]} {parsed.year}"
        return to_ordinal_numeral(text, "rtl")
    return f"{ID_WEEKDAYS[parsed.weekday()]}, {parsed.day} {ID_MONTHS[parsed.month - 1]} {parsed.year}"
