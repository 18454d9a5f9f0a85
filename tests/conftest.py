"""
Pytest Configuration & Shared Fixtures
"""
import base64
from io import BytesIO

import pytest
from PIL import Image

from examsheet.schemas import Direction, Exam, RenderConfig
from examsheet.services.table_grid import merge, new_grid, update_cell
from examsheet.services.variants import renumber_questions


def make_png_uri(width: int = 40, height: int = 20, color: str = "red") -> str:
    buffer = BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


@pytest.fixture
def png_data_uri():
    """A small, real PNG encoded as a data URI."""
    return make_png_uri()


@pytest.fixture
def png_factory():
    """Builds PNG data URIs of arbitrary size."""
    return make_png_uri


@pytest.fixture
def mc_question():
    """Multiple choice question whose correct answer is the third choice."""
    return {
        "type": "multiple_choice",
        "id": "q-mc",
        "number": "1",
        "text": "Ibu kota Prancis adalah ...",
        "choices": [
            {"id": "c1", "text": "Jakarta"},
            {"id": "c2", "text": "Bandung"},
            {"id": "c3", "text": "Paris"},
            {"id": "c4", "text": "Madrid"},
        ],
        "answer_key": "c3",
    }


@pytest.fixture
def merged_table():
    """2x2 grid with a merged header row and one answer cell."""
    grid = new_grid(2, 2)
    ids = [[cell.id for cell in row.cells] for row in grid.rows]
    grid = update_cell(grid, ids[0][0], "Hasil")
    grid = update_cell(grid, ids[0][1], "Pengamatan")
    grid = update_cell(grid, ids[1][0], "<b>Suhu</b>")
    grid = merge(grid, [ids[0][0], ids[0][1]])
    return grid


@pytest.fixture
def sample_exam(mc_question, merged_table):
    """Exam covering every question variant across two sections."""
    answer_cell = merged_table.rows[1].cells[1].id
    table_mc_rows = [row.id for row in merged_table.rows]
    exam = Exam.model_validate({
        "id": "exam-1",
        "title": "Penilaian Akhir Semester",
        "subject": "Geografi",
        "class": "IX A",
        "date": "2026-08-17",
        "duration": "90 menit",
        "instructions": "Berdoalah sebelum mengerjakan.\nTulis nama dengan jelas.",
        "sections": [
            {
                "id": "s1",
                "instructions": "I. Pilihlah salah satu jawaban yang paling tepat!",
                "questions": [
                    mc_question,
                    {
                        "type": "complex_multiple_choice",
                        "id": "q-cmc",
                        "text": "Pilih kota di Indonesia.",
                        "choices": [
                            {"id": "k1", "text": "Surabaya"},
                            {"id": "k2", "text": "Tokyo"},
                            {"id": "k3", "text": "Medan"},
                        ],
                        "answer_key": ["k1", "k3"],
                    },
                    {"type": "true_false", "id": "q-tf", "text": "Bumi itu bulat.", "answer_key": "true"},
                    {"type": "stimulus", "id": "q-stim", "text": "<p>Bacalah teks berikut.</p>"},
                ],
            },
            {
                "id": "s2",
                "instructions": "II. Jawablah pertanyaan berikut dengan singkat dan jelas!",
                "stimulus": "<p class=\"ql-align-justify\">Teks bacaan bagian dua.</p>",
                "questions": [
                    {"type": "short_answer", "id": "q-sa", "text": "Sebutkan satu benua.", "answer_key": "Asia"},
                    {"type": "essay", "id": "q-essay", "text": "Jelaskan siklus air.", "has_answer_space": True},
                    {
                        "type": "matching",
                        "id": "q-match",
                        "text": "Jodohkan.",
                        "prompts": [{"id": "p1", "text": "Gunung"}, {"id": "p2", "text": "Sungai"}],
                        "answers": [{"id": "a1", "text": "Air mengalir"}, {"id": "a2", "text": "Tinggi"}],
                        "matching_key": [
                            {"prompt_id": "p1", "answer_id": "a2"},
                            {"prompt_id": "p2", "answer_id": "a1"},
                        ],
                    },
                    {
                        "type": "table",
                        "id": "q-table",
                        "text": "Lengkapi tabel.",
                        "table": merged_table.model_dump(),
                        "table_answer_key": {answer_cell: "30 derajat"},
                    },
                    {
                        "type": "table_multiple_choice",
                        "id": "q-table-mc",
                        "text": "Pilih jawaban tiap baris.",
                        "table": merged_table.model_dump(),
                        "choices": [{"id": "t1", "text": "Ya"}, {"id": "t2", "text": "Tidak"}],
                        "table_answer_key": {table_mc_rows[1]: "t2"},
                    },
                ],
            },
        ],
    })
    return renumber_questions(exam)


@pytest.fixture
def rtl_exam(sample_exam):
    return sample_exam.model_copy(update={"direction": Direction.RTL})


@pytest.fixture
def render_config():
    return RenderConfig(header_lines=["Sekolah Contoh"], paper_size="A4")
