"""
Answer Key Resolver
Resolves a question's stored key into display entries once, so the HTML and
DOCX answer keys always cite the same letters and texts as the question body.
"""
import html
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Tuple

from examsheet.config import get_label
from examsheet.schemas import QuestionType
from examsheet.services.numbering import to_choice_letter, to_ordinal_numeral


@dataclass(frozen=True)
class AnswerEntry:
    """One line of a resolved answer: a label plus an optional rich-text fragment."""
    label: str = ""
    content: str = ""
    missing: bool = False


@dataclass(frozen=True)
class ResolvedAnswer:
    """
    Display form of a stored key.

    missing is True when the key is empty or every reference in it dangles;
    renderers then show the explicit "no answer" marker instead of a blank.
    cell_answers carries the per-cell answers of plain table questions.
    """
    entries: Tuple[AnswerEntry, ...] = ()
    cell_answers: Dict[str, str] = field(default_factory=dict)
    missing: bool = False


MISSING = ResolvedAnswer(missing=True)


def text_fragment(text: str) -> str:
    """Escapes free text so it can travel as a rich-text fragment."""
    return html.escape(text.strip(), quote=False).replace("\n", "<br/>")


def _multiple_choice(question, direction) -> ResolvedAnswer:
    index = question.choice_index(question.answer_key)
    if index is None:
        return MISSING
    letter = to_choice_letter(index, direction)
    return ResolvedAnswer(entries=(AnswerEntry(label=f"{letter}.", content=question.choices[index].text),))


def _complex_multiple_choice(question, direction) -> ResolvedAnswer:
    selected = set(question.answer_key)
    letters = [
        to_choice_letter(index, direction)
        for index, choice in enumerate(question.choices)
        if choice.id in selected
    ]
    if not letters:
        return MISSING
    return ResolvedAnswer(entries=(AnswerEntry(label=", ".join(letters)),))


def _true_false(question, direction) -> ResolvedAnswer:
    if question.answer_key not in ("true", "false"):
        return MISSING
    key = "true_answer" if question.answer_key == "true" else "false_answer"
    return ResolvedAnswer(entries=(AnswerEntry(content=text_fragment(get_label(direction, key))),))


def _free_text(question, direction) -> ResolvedAnswer:
    if not (question.answer_key or "").strip():
        return MISSING
    return ResolvedAnswer(entries=(AnswerEntry(content=text_fragment(question.answer_key)),))


def _matching(question, direction) -> ResolvedAnswer:
    prompt_index = {item.id: index for index, item in enumerate(question.prompts)}
    answer_index = {item.id: index for index, item in enumerate(question.answers)}

    links = sorted(
        (prompt_index[pair.prompt_id], answer_index[pair.answer_id])
        for pair in question.matching_key
        if pair.prompt_id in prompt_index and pair.answer_id in answer_index
    )
    if not links:
        return MISSING

    entries = tuple(
        AnswerEntry(label=f"{to_ordinal_numeral(p + 1, direction)} → {to_choice_letter(a, direction, upper=True)}")
        for p, a in links
    )
    return ResolvedAnswer(entries=entries)


def _table(question, direction) -> ResolvedAnswer:
    answers = {
        cell.id: question.table_answer_key[cell.id]
        for row in question.table.rows
        for cell in row.cells
        if not cell.is_merged and question.table_answer_key.get(cell.id, "").strip()
    }
    if not answers:
        return MISSING
    return ResolvedAnswer(cell_answers=answers)


def _table_choice(question, direction) -> ResolvedAnswer:
    if not question.table_answer_key:
        return MISSING

    def letter_for(choice_id: str) -> str:
        index = question.choice_index(choice_id)
        return "?" if index is None else to_choice_letter(index, direction)

    entries: List[AnswerEntry] = []
    for row_index, row in enumerate(question.table.rows):
        label = get_label(direction, "row", number=to_ordinal_numeral(row_index + 1, direction)) + ":"
        row_answer = question.table_answer_key.get(row.id)
        if isinstance(row_answer, str):
            row_answer = [row_answer] if row_answer else []
        if not row_answer:
            entries.append(AnswerEntry(label=label, missing=True))
            continue
        entries.append(AnswerEntry(label=label, content=", ".join(letter_for(c) for c in row_answer)))

    if all(entry.missing for entry in entries):
        return MISSING
    return ResolvedAnswer(entries=tuple(entries))


RESOLVERS: Dict[str, Callable] = {
    QuestionType.MULTIPLE_CHOICE: _multiple_choice,
    QuestionType.COMPLEX_MULTIPLE_CHOICE: _complex_multiple_choice,
    QuestionType.TRUE_FALSE: _true_false,
    QuestionType.SHORT_ANSWER: _free_text,
    QuestionType.ESSAY: _free_text,
    QuestionType.MATCHING: _matching,
    QuestionType.TABLE: _table,
    QuestionType.TABLE_MULTIPLE_CHOICE: _table_choice,
    QuestionType.TABLE_COMPLEX_MULTIPLE_CHOICE: _table_choice,
}


def resolve_answer(question, direction="ltr") -> ResolvedAnswer:
    """
    Resolves the stored key of a question for display.

    Args:
        question: Any question variant.
        direction: Numbering/letter locale ("ltr" or "rtl").

    Returns:
        ResolvedAnswer; variants without a key (stimulus) resolve as missing.
    """
    resolver = RESOLVERS.get(question.type)
    if resolver is None:
        return MISSING
    return resolver(question, direction)
