"""
Test LMS Export
Tests the Moodle XML mapping of every question variant.
"""
from lxml import etree

from examsheet.services.lms_export import render_moodle_xml


def _parse(exam):
    xml = render_moodle_xml(exam)
    return xml, etree.fromstring(xml.encode("utf-8"))


def _questions(root, kind):
    return root.findall(f"question[@type='{kind}']")


def test_document_structure(sample_exam):
    """Test quiz root and category structure."""
    xml, root = _parse(sample_exam)
    assert xml.startswith("<?xml version='1.0' encoding='UTF-8'?>")
    assert root.tag == "quiz"
    assert "<![CDATA[" in xml

    categories = [q.findtext("category/text") for q in _questions(root, "category")]
    assert categories == [
        "$course$/top/Penilaian Akhir Semester",
        "$course$/top/Penilaian Akhir Semester/I",
        "$course$/top/Penilaian Akhir Semester/II",
    ]


def test_choice_questions(sample_exam):
    """Test choice questions and fractions."""
    _, root = _parse(sample_exam)
    single, multi = _questions(root, "multichoice")

    assert single.findtext("single") == "true"
    fractions = {a.findtext("text"): a.get("fraction") for a in single.findall("answer")}
    assert fractions == {"Jakarta": "0", "Bandung": "0", "Paris": "100", "Madrid": "0"}
    assert single.findtext("name/text").startswith("1. Ibu kota Prancis")

    assert multi.findtext("single") == "false"
    fractions = {a.findtext("text"): a.get("fraction") for a in multi.findall("answer")}
    assert fractions == {"Surabaya": "50.00000", "Tokyo": "0", "Medan": "50.00000"}


def test_true_false_and_short_answer(sample_exam):
    """Test true/false and short answer mapping."""
    _, root = _parse(sample_exam)
    (true_false,) = _questions(root, "truefalse")
    answers = {a.findtext("text"): a.get("fraction") for a in true_false.findall("answer")}
    assert answers == {"true": "100", "false": "0"}

    (short,) = _questions(root, "shortanswer")
    assert short.find("answer").get("fraction") == "100"
    assert short.findtext("answer/text") == "Asia"


def test_matching_subquestions(sample_exam):
    """Test matching subquestions."""
    _, root = _parse(sample_exam)
    (matching,) = _questions(root, "matching")
    pairs = [(s.findtext("text"), s.findtext("answer/text")) for s in matching.findall("subquestion")]
    assert pairs == [("Gunung", "Tinggi"), ("Sungai", "Air mengalir")]


def test_essay_and_descriptions(sample_exam):
    """Test essay and description mapping."""
    _, root = _parse(sample_exam)
    (essay,) = _questions(root, "essay")
    assert essay.findtext("responseformat") == "editor"
    assert essay.find("graderinfo") is not None

    # Section stimulus, stimulus block and both table questions
    names = [q.findtext("name/text") for q in _questions(root, "description")]
    assert len(names) == 4
    assert names[0].startswith("Stimulus ")
    assert names[1] == "Stimulus II"
    assert names[2].startswith("7. Lengkapi tabel.")


def test_cdata_terminator_falls_back_to_escaped_text(mc_question):
    """Text containing a CDATA terminator is escaped instead."""
    from examsheet.schemas import Exam

    question = {**mc_question, "text": "a ]]> b"}
    exam = Exam.model_validate({"title": "X", "sections": [{"questions": [question]}]})
    xml, root = _parse(exam)
    assert "]]&gt;" in xml
    assert root.find("question[@type='multichoice']").findtext("questiontext/text") == "a ]]> b"
    # Section without an enumerator falls back to a Roman numeral
    assert root.findall("question[@type='category']")[1].findtext("category/text") == "$course$/top/X/I"
