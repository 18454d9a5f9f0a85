"""
LMS Export Service
Builds a Moodle XML question bank from an Exam.
"""
import logging
from typing import Optional

from lxml import etree

from examsheet.schemas import Exam, QuestionType
from examsheet.services.numbering import split_instruction, to_roman
from examsheet.services.rich_text import plain_text

logger = logging.getLogger(__name__)

MOODLE_TYPES = {
    QuestionType.MULTIPLE_CHOICE: "multichoice",
    QuestionType.COMPLEX_MULTIPLE_CHOICE: "multichoice",
    QuestionType.TRUE_FALSE: "truefalse",
    QuestionType.SHORT_ANSWER: "shortanswer",
    QuestionType.MATCHING: "matching",
    QuestionType.ESSAY: "essay",
}


def _cdata(value: str):
    # CDATA cannot carry its own terminator; fall back to escaped text
    if value and "]]>" not in value:
        return etree.CDATA(value)
    return value or ""


def _text_element(parent, tag: str, value: str, fmt: Optional[str] = None, cdata: bool = True):
    element = etree.SubElement(parent, tag)
    if fmt:
        element.set("format", fmt)
    text = etree.SubElement(element, "text")
    text.text = _cdata(value) if cdata else value
    return element


def _category(root, path: str) -> None:
    question = etree.SubElement(root, "question", type="category")
    _text_element(question, "category", path)


def _description(root, name: str, text: str) -> None:
    question = etree.SubElement(root, "question", type="description")
    _text_element(question, "name", name)
    _text_element(question, "questiontext", text, fmt="html")


def _answer(parent, fraction: str, text: str, fmt: Optional[str] = "html", cdata: bool = True) -> None:
    answer = etree.SubElement(parent, "answer", fraction=fraction)
    if fmt:
        answer.set("format", fmt)
    node = etree.SubElement(answer, "text")
    node.text = _cdata(text) if cdata else text


def _choices(element, question, correct_ids, single: bool) -> None:
    etree.SubElement(element, "single").text = "true" if single else "false"
    etree.SubElement(element, "shuffleanswers").text = "true"
    etree.SubElement(element, "answernumbering").text = "abc"

    fraction = 100 / (len(correct_ids) or 1)
    for choice in question.choices:
        if choice.id not in correct_ids:
            _answer(element, "0", choice.text)
        elif single:
            _answer(element, "100", choice.text)
        else:
            _answer(element, f"{fraction:.5f}", choice.text)


def _question(root, question) -> None:
    moodle_type = MOODLE_TYPES.get(question.type)
    if moodle_type is None:
        # Tables and stimulus blocks have no native Moodle counterpart
        label = "Stimulus" if question.type == QuestionType.STIMULUS else f"{question.number}."
        _description(root, f"{label} {plain_text(question.text)[:50]}...", question.text)
        return

    element = etree.SubElement(root, "question", type=moodle_type)
    _text_element(element, "name", f"{question.number}. {plain_text(question.text)[:50]}...")
    _text_element(element, "questiontext", question.text, fmt="html")
    etree.SubElement(element, "defaultgrade").text = "1"

    if question.type == QuestionType.MULTIPLE_CHOICE:
        _choices(element, question, {question.answer_key} - {None}, single=True)
    elif question.type == QuestionType.COMPLEX_MULTIPLE_CHOICE:
        _choices(element, question, set(question.answer_key), single=False)
    elif question.type == QuestionType.TRUE_FALSE:
        _answer(element, "100" if question.answer_key == "true" else "0", "true", fmt=None, cdata=False)
        _answer(element, "100" if question.answer_key == "false" else "0", "false", fmt=None, cdata=False)
    elif question.type == QuestionType.SHORT_ANSWER:
        _answer(element, "100", question.answer_key)
    elif question.type == QuestionType.MATCHING:
        etree.SubElement(element, "shuffleanswers").text = "true"
        prompts = {item.id: item.text for item in question.prompts}
        answers = {item.id: item.text for item in question.answers}
        for pair in question.matching_key:
            sub = _text_element(element, "subquestion", prompts[pair.prompt_id], fmt="html")
            answer = etree.SubElement(sub, "answer")
            etree.SubElement(answer, "text").text = plain_text(answers[pair.answer_id])
    elif question.type == QuestionType.ESSAY:
        etree.SubElement(element, "responseformat").text = "editor"
        _text_element(element, "graderinfo", question.answer_key, fmt="html")


def render_moodle_xml(exam: Exam) -> str:
    """
    Exports an exam as a Moodle XML quiz.

    Args:
        exam: Exam to export.

    Returns:
        UTF-8 XML document as a string.
    """
    logger.info("Exporting '%s' to Moodle XML", exam.title)
    root = etree.Element("quiz")
    base = f"$course$/top/{exam.title or 'Exam'}"
    _category(root, base)

    for index, section in enumerate(exam.sections, start=1):
        enumerator, _ = split_instruction(section.instructions)
        section_title = enumerator or to_roman(index)
        _category(root, f"{base}/{section_title}")

        if section.stimulus and section.stimulus.strip():
            _description(root, f"Stimulus {section_title}", section.stimulus)

        for question in section.questions:
            _question(root, question)

    return etree.tostring(root, xml_declaration=True, encoding="UTF-8", pretty_print=True).decode("utf-8")
