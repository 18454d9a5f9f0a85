"""
Configuration Module for Exam Sheet
Centralizes environment variables, rendering defaults, and localized label templates.
"""
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv()

# --- Runtime Configuration ---
LOG_LEVEL = os.getenv("EXAMSHEET_LOG_LEVEL", "INFO")
OUTPUT_DIR = Path(os.getenv("EXAMSHEET_OUTPUT_DIR", str(Path(__file__).resolve().parents[2] / "output")))

# --- Rendering Defaults ---
DEFAULT_FONT_FAMILY = os.getenv("EXAMSHEET_FONT_FAMILY", "Liberation Serif")
DEFAULT_FONT_SIZE = float(os.getenv("EXAMSHEET_FONT_SIZE", "12"))
DEFAULT_LINE_SPACING = 1.1
DEFAULT_MARGIN_MM = 20

# Inline images in .docx output are scaled to fit this box (millimeters)
MAX_IMAGE_MM = float(os.getenv("EXAMSHEET_MAX_IMAGE_MM", "26.5"))
LOGO_MM = float(os.getenv("EXAMSHEET_LOGO_MM", "17"))

DEFAULT_HEADER_LINES = [
    "PEMERINTAH KOTA CONTOH",
    "DINAS PENDIDIKAN DAN KEBUDAYAAN",
    "SEKOLAH MENENGAH PERTAMA HARAPAN BANGSA",
]

DEFAULT_SECTION_INSTRUCTION = "I. Jawablah pertanyaan-pertanyaan berikut dengan benar!"


def default_header_lines() -> List[str]:
    """Returns a fresh copy of the default institution header lines."""
    return list(DEFAULT_HEADER_LINES)


def get_output_dir() -> Path:
    """
    Resolves the directory where rendered files are written by the API.

    Returns:
        Existing output directory path.
    """
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    return OUTPUT_DIR


# --- Label Templates ---
LABELS = {
    "ltr": {
        "name": "Nama",
        "class": "Kelas / Jenjang",
        "subject": "Mata Pelajaran",
        "date": "Hari/Tanggal",
        "exam_time": "Waktu Ujian",
        "score": "Nilai",
        "instructions": "Petunjuk Pengerjaan:",
        "true_false_prompt": "Lingkari salah satu:",
        "true_text": "BENAR",
        "false_text": "SALAH",
        "col_a": "Kolom A",
        "col_b": "Kolom B",
        "answer_key_title": "Kunci Jawaban",
        "no_answer": "Tidak ada jawaban",
        "true_answer": "Benar",
        "false_answer": "Salah",
        "row": "Baris {number}",
        "question_no": "No.",
        "answer": "Jawaban",
        "print_button": "Cetak / Simpan ke PDF",
        "unsupported": "[Jenis soal tidak didukung: {type}]",
        "default_title": "Ujian",
    },
    "rtl": {
        "name": "الاسم",
        "class": "الصف / المستوى",
        "subject": "المادة الدراسية",
        "date": "اليوم / التاريخ",
        "exam_time": "وقت الاختبار",
        "score": "الدرجة",
        "instructions": "تعليمات الإجابة:",
        "true_false_prompt": "ضع دائرة حول إحدى الإجابتين:",
        "true_text": "صح",
        "false_text": "خطأ",
        "col_a": "العمود أ",
        "col_b": "العمود ب",
        "answer_key_title": "مفتاح الإجابة",
        "no_answer": "لا توجد إجابة",
        "true_answer": "صح",
        "false_answer": "خطأ",
        "row": "الصف {number}",
        "question_no": "رقم",
        "answer": "الإجابة",
        "print_button": "طباعة / حفظ بصيغة PDF",
        "unsupported": "[نوع سؤال غير مدعوم: {type}]",
        "default_title": "اختبار",
    },
}

INSTRUCTION_TRANSLATIONS = {
    "Berilah tanda silang (X) pada pilihan jawaban yang benar!": "اختر الإجابة الصحيحة بوضع علامة (X)!",
    "Pilihlah jawaban yang benar dengan memberi tanda centang (✓). Jawaban benar bisa lebih dari satu.": "اختر الإجابات الصحيحة بوضع علامة (✓). يمكن أن تكون هناك أكثر من إجابة صحيحة.",
    "Isilah titik-titik di bawah ini dengan jawaban yang benar dan tepat!": "املأ الفراغات التالية بالإجابات الصحيحة!",
    "Jawablah pertanyaan di bawah ini dengan benar!": "أجب عن الأسئلة التالية بشكل صحيح!",
    "Jodohkan pernyataan di kolom A dengan jawaban yang sesuai di kolom B!": "طابق بين العبارات في العمود أ والإجابات المناسبة في العمود ب!",
    "Tentukan apakah pernyataan berikut Benar atau Salah!": "حدد ما إذا كانت العبارات التالية صحيحة أم خاطئة!",
    "Pilihlah salah satu jawaban yang paling tepat!": "اختر الإجابة الصحيحة بوضع علامة (X)!",
    "Jawablah pertanyaan berikut dengan singkat dan jelas!": "أجب عن الأسئلة التالية بشكل صحيح!",
}


def get_label(direction: str, key: str, **kwargs) -> str:
    """
    Retrieves a localized label for a text direction.

    Args:
        direction: Text direction ("ltr" or "rtl").
        key: Label identifier.
        **kwargs: Variables to format into the label.

    Returns:
        Formatted label string.

    Raises:
        KeyError: If the direction or label is not found.
    """
    labels = LABELS.get(str(getattr(direction, "value", direction)))
    if labels is None:
        raise KeyError(f"Label direction '{direction}' not found.")
    if key not in labels:
        raise KeyError(f"Label '{key}' not found.")

    return labels[key].format(**kwargs) if kwargs else labels[key]


def translate_instruction(text: str) -> str:
    """Maps a known Indonesian section instruction to its Arabic counterpart."""
    return INSTRUCTION_TRANSLATIONS.get(text, text)
