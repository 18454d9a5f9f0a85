"""
Exam Variant Service
Question renumbering and shuffled exam variants ("Varian N").
"""
import random
import re
import uuid
from typing import List, Optional

from examsheet.schemas import Exam, ExamStatus, QuestionType, Section

_VARIANT_SUFFIX = re.compile(r" - Varian \d+$")


def renumber_questions(exam: Exam) -> Exam:
    """
    Renumber questions sequentially from 1..N across all sections.

    Stimulus blocks are not counted and get an empty number.

    Args:
        exam: Exam to renumber.

    Returns:
        Exam copy with sequential question numbers.
    """
    counter = 0
    sections: List[Section] = []
    for section in exam.sections:
        questions = []
        for question in section.questions:
            if question.type == QuestionType.STIMULUS:
                questions.append(question.model_copy(update={"number": ""}))
                continue
            counter += 1
            questions.append(question.model_copy(update={"number": str(counter)}))
        sections.append(section.model_copy(update={"questions": questions}))

    return exam.model_copy(update={"sections": sections})


def base_title(title: str) -> str:
    """Strips a trailing " - Varian N" suffix."""
    return _VARIANT_SUFFIX.sub("", title).strip()


def make_variant(exam: Exam, variant_number: int, seed: Optional[int] = None) -> Exam:
    """
    Builds a shuffled variant of an exam.

    Questions are shuffled within each section; choices keep their ids, so
    every stored answer key stays valid for the variant.

    Args:
        exam: Source exam.
        variant_number: Number appended as " - Varian <n>".
        seed: Seed for a reproducible order (defaults to variant_number).

    Returns:
        New draft Exam with a fresh id, shuffled and renumbered questions.

    Raises:
        ValueError: If variant_number is not positive.
    """
    if variant_number < 1:
        raise ValueError("variant_number must be positive")

    rng = random.Random(variant_number if seed is None else seed)
    sections = []
    for section in exam.model_copy(deep=True).sections:
        questions = list(section.questions)
        rng.shuffle(questions)
        sections.append(section.model_copy(update={"questions": questions}))

    variant = exam.model_copy(update={
        "id": str(uuid.uuid4()),
        "title": f"{base_title(exam.title)} - Varian {variant_number}",
        "sections": sections,
        "status": ExamStatus.DRAFT,
    })
    return renumber_questions(variant)
