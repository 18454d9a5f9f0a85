"""
HTML Generator Service
Renders an Exam into one self-contained, printable HTML document (question
sheet or answer key) with LTR/RTL layout rules.
"""
import html
import logging
from typing import Callable, Dict, Optional

from examsheet.config import get_label, translate_instruction
from examsheet.schemas import (
    Exam,
    PaperSize,
    QuestionType,
    RenderConfig,
    RenderMode,
    Section,
    TableGrid,
)
from examsheet.services.answer_key import ResolvedAnswer, resolve_answer
from examsheet.services.numbering import (
    format_exam_date,
    split_instruction,
    to_choice_letter,
    to_ordinal_numeral,
)
from examsheet.services.rich_text import fragment_alignment, iter_runs, runs_to_html

logger = logging.getLogger(__name__)

PAPER_WIDTHS = {
    PaperSize.A4: "210mm",
    PaperSize.F4: "215mm",
    PaperSize.LEGAL: "216mm",
    PaperSize.LETTER: "216mm",
}
SERIF_FONTS = {"Liberation Serif", "Amiri", "Areef Ruqaa"}
FONTS_URL = (
    "https://fonts.googleapis.com/css2?family=Amiri:ital,wght@0,400;0,700;1,400;1,700"
    "&family=Areef+Ruqaa:wght@400;700&family=Liberation+Sans:ital,wght@0,400;0,700;1,400;1,700"
    "&family=Liberation+Serif:ital,wght@0,400;0,700;1,400;1,700&display=swap"
)
NAME_DOTS = "." * 64
RLM = "&rlm;"

BASE_STYLES = """
        *, *::before, *::after { box-sizing: border-box; }
        html { -webkit-text-size-adjust: 100%; }
        body { margin: 0; padding: 0; background-color: #f1f5f9; color: #1e293b; }
        p, h2, h3, h4, ol, ul, li, table, section, header { margin: 0; padding: 0; font-size: 1em; font-weight: normal; }
        ol, ul { list-style-position: outside; }
        table { border-collapse: collapse; width: 100%; }
        .exam-sheet-container { display: flex; justify-content: center; padding: 2rem 0; }
        @media print {
            html, body { -webkit-print-color-adjust: exact; print-color-adjust: exact; background-color: white !important; }
            .no-print { display: none !important; }
            .exam-sheet-container { padding: 0 !important; }
            .exam-sheet { box-shadow: none !important; border: none !important; margin: 0 !important; padding: 0 !important; width: 100%; min-height: auto; }
        }
        .exam-header { display: flex; align-items: center; gap: 1rem; margin-bottom: 0.5rem; }
        .exam-header .logo-container { flex-basis: 5rem; flex-shrink: 0; text-align: center; }
        .exam-header .logo-container.is-empty { display: none; }
        .exam-header .logo-container.logo-left { text-align: left; }
        .exam-header .logo-container.logo-right { text-align: right; }
        .exam-header .logo { max-height: 5rem; width: auto; object-fit: contain; }
        .exam-header .header-text { flex-grow: 1; flex-shrink: 1; min-width: 0; text-align: center; }
        .exam-header .header-text p { font-weight: bold; font-size: 1.1em; line-height: 1.2; margin: 0; text-transform: uppercase; white-space: nowrap; }
        .header-divider { border: 0; border-top: 2px solid black; margin: 0; }
        .header-divider::after { content: ''; display: block; border-top: 1px solid black; margin-top: 1px; }
        .exam-title-container { text-align: center; margin: 1rem 0; }
        .exam-title-container h2 { font-size: 1.25em; font-weight: bold; text-transform: uppercase; }
        .meta-container { display: flex; justify-content: space-between; align-items: flex-start; margin: 1.5rem 0; }
        .student-info { width: 66%; font-size: 0.95em; }
        .student-info td { padding-block: 0.1rem; vertical-align: top; }
        .student-info td:first-child { font-weight: 600; white-space: nowrap; }
        .student-info .colon { padding-inline: 0.5rem; }
        .student-info .value { width: 100%; }
        .student-info .dots { overflow: hidden; white-space: nowrap; letter-spacing: 1.5px; }
        [dir="ltr"] .student-info td:first-child { width: 140px; }
        [dir="rtl"] .student-info { text-align: right; }
        [dir="rtl"] .student-info .colon { padding-inline: 0.2rem 0.8rem; }
        .score-box { width: 25%; border: 2px solid black; height: 6rem; position: relative; padding: 0.5rem; }
        .score-box span { position: absolute; top: 0.25rem; font-weight: bold; font-size: 0.9em; }
        [dir="ltr"] .score-box span { left: 0.5rem; }
        [dir="rtl"] .score-box span { right: 0.5rem; }
        .exam-body { margin-top: 1rem; }
        .general-instructions { margin-bottom: 1.5rem; }
        .general-instructions h4 { font-weight: bold; text-decoration: underline; margin-bottom: 0.5rem; }
        .general-instructions .instructions-text { font-size: 0.95em; }
        .exam-section { margin-top: 1.5rem; }
        .exam-section-instruction { display: flex; gap: 0.5em; font-weight: bold; margin-bottom: 1rem; }
        [dir="rtl"] .exam-section-instruction { flex-direction: row-reverse; justify-content: flex-end; }
        .instruction-number { white-space: nowrap; }
        .instruction-text { flex: 1; }
        [dir="rtl"] .instruction-text { flex: none; }
        .section-stimulus { margin-bottom: 1rem; text-align: justify; }
        .questions-list { list-style: none; padding-inline-start: 0; }
        .question-item { display: flex; align-items: flex-start; gap: 0.5em; break-inside: avoid; margin-bottom: 1rem; }
        .question-number { font-weight: bold; }
        .question-body { flex: 1; }
        .stimulus-item { margin-bottom: 1rem; }
        .stimulus { padding: 0.5rem; border-inline-start: 3px solid #94a3b8; }
        .choices-list { list-style-type: none; padding-inline-start: 0; margin-top: 0.5rem; }
        .choices-list li { display: flex; gap: 0.5em; margin-bottom: 0.25rem; break-inside: avoid; }
        .choices-grid-complex { margin-top: 0.5rem; padding-inline-start: 1.5rem; }
        .choice-item-complex { display: flex; align-items: flex-start; margin-bottom: 0.25rem; break-inside: avoid; }
        .checkbox-box { display: inline-block; width: 0.9em; height: 0.9em; border: 1px solid black; margin-inline-end: 0.5em; margin-top: 0.2em; flex-shrink: 0; }
        .choice-letter { margin-inline-end: 0.25em; }
        .choice-text { flex-grow: 1; }
        .choices-list-2-col, .choices-grid-complex-2-col { column-count: 2; column-gap: 2rem; }
        .true-false-container { display: flex; align-items: center; gap: 0.75rem; margin-top: 0.75rem; padding-inline-start: 1.5rem; font-size: 0.95em; }
        .true-false-option { display: inline-block; padding: 0.15rem 0.75rem; border: 1px solid black; border-radius: 0.25rem; font-weight: bold; }
        .essay-space { margin-top: 2rem; border-bottom: 1px solid #9ca3af; }
        .matching-table { margin-top: 1rem; text-align: start; font-size: 1em; }
        .matching-table th { font-weight: bold; text-align: center; border: 1px solid black; padding: 0.5rem; }
        .matching-table td { vertical-align: top; padding: 0.25rem 0.5rem; border: 1px solid black; }
        .matching-table .prompt-number, .matching-table .answer-letter { padding-inline-end: 0.5rem; }
        .matching-table .prompt-text, .matching-table .answer-text { width: 50%; }
        .question-fill-table { margin-top: 1rem; table-layout: fixed; width: 100%; }
        .question-fill-table td { padding: 0.5rem; border: 1px solid black; word-wrap: break-word; }
        .question-item img, .choice-text img, .answer-text img, .question-fill-table td img {
            max-width: 100%; height: auto; border-radius: 0.25rem; margin-top: 0.5rem; margin-bottom: 0.5rem; display: block;
        }
        .ql-align-center { text-align: center; }
        .ql-align-right { text-align: right; }
        .ql-align-justify { text-align: justify; }
        .answer-key-title { text-align: center; margin-bottom: 2rem; }
        .answer-key-title h2 { font-size: 1.5em; font-weight: bold; }
        .answer-key-title h3 { font-size: 1.2em; margin-top: 0.25rem; }
        .answer-key-meta { margin-top: 0.75rem; font-size: 0.9em; color: #475569; }
        .answer-key-meta .separator { margin: 0 0.5rem; }
        .answer-key-meta strong { color: #1e293b; font-weight: 600; }
        .answers-list { margin-top: 1rem; }
        .answer-item { display: flex; margin-bottom: 0.5rem; }
        .answer-number { width: 3rem; font-weight: bold; flex-shrink: 0; }
        .answer-text { flex-grow: 1; }
        .answer-text .no-answer { color: #dc2626; font-style: italic; }
        .answer-key-table .original-content { font-size: 0.8em; color: #64748b; border-bottom: 1px dashed #cbd5e1; padding-bottom: 0.25rem; margin-bottom: 0.25rem; }
        .answer-key-table .answer-value { font-weight: bold; }
"""

COLUMN_STYLES = """
        .exam-body { column-count: 2; column-gap: 12mm; }
        .exam-section { break-inside: avoid; }
"""

# Header text must fit its container; measured after fonts load in the browser
HEADER_FIT_SCRIPT = """
    <script>
      function debounce(func, wait) {
        let timeout;
        return function (...args) {
          clearTimeout(timeout);
          timeout = setTimeout(() => func(...args), wait);
        };
      }
      function adjustHeaderTextSize() {
        document.querySelectorAll('.exam-header .header-text p').forEach(p => {
          p.style.fontSize = '';
          p.style.lineHeight = '';
          const container = p.parentElement;
          if (!container) return;
          if (p.scrollWidth > container.clientWidth) {
            const current = parseFloat(window.getComputedStyle(p).fontSize);
            const size = Math.max(current * (container.clientWidth / p.scrollWidth) * 0.98, 8);
            p.style.fontSize = size + 'px';
            p.style.lineHeight = '1.2';
          }
        });
      }
      document.addEventListener('DOMContentLoaded', () => {
        if (document.fonts) {
          document.fonts.ready.then(adjustHeaderTextSize);
        } else {
          setTimeout(adjustHeaderTextSize, 200);
        }
      });
      window.addEventListener('resize', debounce(adjustHeaderTextSize, 150));
    </script>
"""


def _escape(value) -> str:
    return html.escape(str(value or ""))


def rich(fragment: Optional[str]) -> str:
    """Re-serializes a rich-text fragment through the inline parser."""
    body = runs_to_html(iter_runs(fragment))
    alignment = fragment_alignment(fragment)
    if alignment and alignment != "left":
        return f'<div class="ql-align-{alignment}">{body}</div>'
    return body


def _number(number, direction) -> str:
    if direction == "rtl":
        return f"{RLM}{to_ordinal_numeral(_escape(number), direction)}."
    return f"{_escape(number)}."


def _letter(index: int, direction, upper: bool = False) -> str:
    return f"{to_choice_letter(index, direction, upper=upper)}."


# --- Question Bodies ---

def _choice_list(question, direction, two_columns: bool) -> str:
    css = "choices-list choices-list-2-col" if two_columns else "choices-list"
    items = "".join(
        f'<li><span class="choice-marker"><bdi>{_letter(index, direction)}</bdi></span>'
        f'<div class="choice-text">{rich(choice.text)}</div></li>'
        for index, choice in enumerate(question.choices)
    )
    return f'<ol class="{css}">{items}</ol>'


def _complex_choice_grid(question, direction, two_columns: bool) -> str:
    css = "choices-grid-complex choices-grid-complex-2-col" if two_columns else "choices-grid-complex"
    items = "".join(
        f'<div class="choice-item-complex"><span class="checkbox-box"></span>'
        f'<span class="choice-letter"><bdi>{_letter(index, direction)}</bdi></span>'
        f'<div class="choice-text">{rich(choice.text)}</div></div>'
        for index, choice in enumerate(question.choices)
    )
    return f'<div class="{css}">{items}</div>'


def _true_false(question, direction) -> str:
    return (
        '<div class="true-false-container">'
        f'<span>{get_label(direction, "true_false_prompt")}</span>'
        f'<span class="true-false-option">{get_label(direction, "true_text")}</span>'
        f'<span class="true-false-option">{get_label(direction, "false_text")}</span>'
        '</div>'
    )


def _answer_space(question, direction) -> str:
    if not question.has_answer_space:
        return ""
    return '<div class="essay-space"></div>' * 3


def _matching(question, direction) -> str:
    rows = []
    for index in range(max(len(question.prompts), len(question.answers))):
        prompt = question.prompts[index] if index < len(question.prompts) else None
        answer = question.answers[index] if index < len(question.answers) else None
        prompt_number = f"<bdi>{_number(index + 1, direction)}</bdi>" if prompt else ""
        answer_letter = f"<bdi>{_letter(index, direction, upper=True)}</bdi>" if answer else ""
        rows.append(
            "<tr>"
            f'<td class="prompt-number">{prompt_number}</td>'
            f'<td class="prompt-text">{rich(prompt.text) if prompt else ""}</td>'
            f'<td class="answer-letter">{answer_letter}</td>'
            f'<td class="answer-text">{rich(answer.text) if answer else ""}</td>'
            "</tr>"
        )
    return (
        '<table class="matching-table"><thead><tr>'
        f'<th colspan="2">{get_label(direction, "col_a")}</th>'
        f'<th colspan="2">{get_label(direction, "col_b")}</th>'
        f'</tr></thead><tbody>{"".join(rows)}</tbody></table>'
    )


def table_html(grid: TableGrid, cell_answers: Optional[Dict[str, str]] = None) -> str:
    """Renders a grid honoring spans, alignment and size overrides."""
    css = "question-fill-table answer-key-table" if cell_answers is not None else "question-fill-table"
    parts = [f'<table class="{css}">']
    if any(width is not None for width in grid.column_widths):
        cols = "".join(
            f'<col style="width: {width}px;">' if width else "<col>" for width in grid.column_widths
        )
        parts.append(f"<colgroup>{cols}</colgroup>")
    parts.append("<tbody>")

    for row_index, row in enumerate(grid.rows):
        height = grid.row_heights[row_index] if row_index < len(grid.row_heights) else None
        parts.append(f'<tr style="height: {height}px;">' if height else "<tr>")
        for cell in row.cells:
            if cell.is_merged:
                continue
            attributes = ""
            if cell.colspan and cell.colspan > 1:
                attributes += f' colspan="{cell.colspan}"'
            if cell.rowspan and cell.rowspan > 1:
                attributes += f' rowspan="{cell.rowspan}"'
            if cell.vertical_align:
                attributes += f' style="vertical-align: {cell.vertical_align.value};"'

            content = rich(cell.content)
            if cell_answers is not None:
                answer = cell_answers.get(cell.id)
                answer_html = (
                    f'<span class="answer-value">{_escape(answer).replace(chr(10), "<br/>")}</span>'
                    if answer else ""
                )
                content = f'<div class="original-content">{content}</div>{answer_html}'
            parts.append(f"<td{attributes}>{content}</td>")
        parts.append("</tr>")

    parts.append("</tbody></table>")
    return "".join(parts)


def _table(question, direction) -> str:
    return table_html(question.table)


def _table_multiple_choice(question, direction) -> str:
    return table_html(question.table) + _choice_list(question, direction, two_columns=True)


def _table_complex_multiple_choice(question, direction) -> str:
    return table_html(question.table) + _complex_choice_grid(question, direction, two_columns=True)


QUESTION_BLOCKS: Dict[str, Callable] = {
    QuestionType.MULTIPLE_CHOICE: lambda q, d: _choice_list(q, d, q.two_columns),
    QuestionType.COMPLEX_MULTIPLE_CHOICE: lambda q, d: _complex_choice_grid(q, d, q.two_columns),
    QuestionType.TRUE_FALSE: _true_false,
    QuestionType.SHORT_ANSWER: _answer_space,
    QuestionType.ESSAY: _answer_space,
    QuestionType.MATCHING: _matching,
    QuestionType.TABLE: _table,
    QuestionType.TABLE_MULTIPLE_CHOICE: _table_multiple_choice,
    QuestionType.TABLE_COMPLEX_MULTIPLE_CHOICE: _table_complex_multiple_choice,
    QuestionType.STIMULUS: lambda q, d: "",
}


def _question_item(question, direction) -> str:
    if question.type == QuestionType.STIMULUS:
        return f'<li class="stimulus-item"><div class="stimulus">{rich(question.text)}</div></li>'

    block = QUESTION_BLOCKS[question.type](question, direction)
    return (
        '<li class="question-item">'
        f'<div class="question-number"><bdi>{_number(question.number, direction)}</bdi></div>'
        f'<div class="question-body">{rich(question.text)}{block}</div>'
        '</li>'
    )


def section_instruction_html(section: Section, direction) -> str:
    """Instruction line; the enumerator is dropped under RTL."""
    enumerator, text = split_instruction(section.instructions)
    if enumerator is None:
        return f"<span>{_escape(section.instructions)}</span>"
    if direction == "rtl":
        return f'<span class="instruction-text">{_escape(translate_instruction(text))}</span>'
    return (
        f'<span class="instruction-number"><bdi>{_escape(enumerator)}.</bdi></span>'
        f'<span class="instruction-text">{_escape(text)}</span>'
    )


# --- Answer Key ---

def _answer_html(question, resolved: ResolvedAnswer, direction) -> str:
    no_answer = f'<span class="no-answer">{get_label(direction, "no_answer")}</span>'
    if resolved.missing:
        return no_answer
    if resolved.cell_answers:
        return table_html(question.table, resolved.cell_answers)

    lines = []
    for entry in resolved.entries:
        label = f"<bdi>{_escape(entry.label)}</bdi>" if entry.label else ""
        body = no_answer if entry.missing else rich(entry.content)
        lines.append(f'<div class="answer-line">{label}{" " if label and body else ""}{body}</div>')
    return "".join(lines)


def _answer_key_sections(exam: Exam, direction) -> str:
    sections = []
    for section in exam.sections:
        items = []
        for question in section.questions:
            if question.type == QuestionType.STIMULUS:
                continue
            resolved = resolve_answer(question, direction)
            items.append(
                '<div class="answer-item">'
                f'<div class="answer-number"><bdi>{_number(question.number, direction)}</bdi></div>'
                f'<div class="answer-text">{_answer_html(question, resolved, direction)}</div>'
                '</div>'
            )
        sections.append(
            '<section class="exam-section">'
            f'<h3 class="exam-section-instruction">{section_instruction_html(section, direction)}</h3>'
            f'<div class="answers-list">{"".join(items)}</div>'
            '</section>'
        )
    return "".join(sections)


def _answer_key_content(exam: Exam, direction) -> str:
    return (
        '<div class="answer-key-title">'
        f'<h2>{get_label(direction, "answer_key_title")}</h2>'
        f'<h3>{_escape(exam.title)}</h3>'
        '<div class="answer-key-meta">'
        f'<span>{get_label(direction, "subject")}: <strong>{_escape(exam.subject)}</strong></span>'
        '<span class="separator">|</span>'
        f'<span>{get_label(direction, "class")}: <strong>{_escape(exam.class_label)}</strong></span>'
        '</div></div>'
        f'{_answer_key_sections(exam, direction)}'
    )


# --- Question Sheet ---

def _header(config: RenderConfig) -> str:
    logos = []
    for logo, side in zip(config.logos, ("left", "right")):
        empty = "" if logo else " is-empty"
        image = f'<img src="{_escape(logo)}" alt="Logo {side}" class="logo" />' if logo else ""
        logos.append(f'<div class="logo-container logo-{side}{empty}">{image}</div>')

    lines = "".join(f"<p>{_escape(line)}</p>" for line in config.header_lines)
    return (
        f'<header class="exam-header">{logos[0]}'
        f'<div class="header-text">{lines}</div>{logos[1]}</header>'
        '<div class="header-divider"></div>'
    )


def _meta(exam: Exam, direction) -> str:
    rows = (
        (get_label(direction, "name"), NAME_DOTS, "value dots"),
        (get_label(direction, "class"), _escape(exam.class_label), "value"),
        (get_label(direction, "subject"), _escape(exam.subject), "value"),
        (get_label(direction, "date"), _escape(format_exam_date(exam.date, direction)), "value"),
        (get_label(direction, "exam_time"), _escape(exam.duration), "value"),
    )
    body = "".join(
        f'<tr><td>{label}</td><td class="colon">:</td><td class="{css}">{value}</td></tr>'
        for label, value, css in rows
    )
    return (
        '<div class="meta-container">'
        f'<table class="student-info"><tbody>{body}</tbody></table>'
        f'<div class="score-box"><span>{get_label(direction, "score")}</span></div>'
        '</div>'
    )


def _questions_content(exam: Exam, config: RenderConfig, direction) -> str:
    general = ""
    if exam.instructions.strip():
        general = (
            '<section class="general-instructions">'
            f'<h4>{get_label(direction, "instructions")}</h4>'
            f'<div class="instructions-text">{_escape(exam.instructions).replace(chr(10), "<br/>")}</div>'
            '</section>'
        )

    sections = []
    for section in exam.sections:
        stimulus = f'<div class="section-stimulus">{rich(section.stimulus)}</div>' if section.stimulus else ""
        questions = "".join(_question_item(question, direction) for question in section.questions)
        sections.append(
            '<section class="exam-section">'
            f'<h3 class="exam-section-instruction">{section_instruction_html(section, direction)}</h3>'
            f'{stimulus}<ol class="questions-list">{questions}</ol>'
            '</section>'
        )

    return (
        f"{_header(config)}"
        f'<div class="exam-title-container"><h2>{_escape(exam.title)}</h2></div>'
        f"{_meta(exam, direction)}"
        f'<div class="exam-body">{general}{"".join(sections)}</div>'
    )


def _stylesheet(exam: Exam, config: RenderConfig, mode: RenderMode) -> str:
    margins = config.margins
    margin = f"{margins.top:g}mm {margins.right:g}mm {margins.bottom:g}mm {margins.left:g}mm"
    width = PAPER_WIDTHS[config.paper_size]
    fallback = "serif" if config.font_family in SERIF_FONTS else "sans-serif"
    page = (
        f"\n        @page {{ size: {config.paper_size.value}; margin: {margin}; }}"
        f'\n        body {{ font-family: "{_escape(config.font_family)}", {fallback}; '
        f"line-height: {config.line_spacing:g}; font-size: {config.font_size:g}pt; }}"
        f"\n        .exam-sheet {{ background-color: white; width: {width}; "
        f"min-height: calc({width} * 1.414); padding: {margin}; }}\n"
    )
    columns = COLUMN_STYLES if exam.layout_columns == 2 and mode == RenderMode.QUESTIONS else ""
    return BASE_STYLES + page + columns


def render_html(
    exam: Exam,
    config: Optional[RenderConfig] = None,
    mode: RenderMode = RenderMode.QUESTIONS,
    include_print_button: bool = True,
) -> str:
    """
    Renders an exam as a standalone HTML document.

    Args:
        exam: Exam to render.
        config: Paper/typography/branding settings (defaults when omitted).
        mode: Question sheet or answer key.
        include_print_button: Add a screen-only print button.

    Returns:
        Complete HTML document; identical inputs give identical output.
    """
    config = config or RenderConfig()
    mode = RenderMode(mode)
    direction = exam.direction.value
    logger.info("Rendering HTML (%s, %s) for '%s'", mode.value, direction, exam.title)

    if mode == RenderMode.QUESTIONS:
        content = _questions_content(exam, config, direction)
    else:
        content = _answer_key_content(exam, direction)

    print_button = ""
    if include_print_button:
        print_button = (
            '<div class="no-print" style="position: fixed; top: 1rem; left: 1rem; z-index: 10;">'
            '<button onClick="window.print()" style="background-color: #2563eb; color: white; '
            'font-weight: bold; padding: 0.5rem 1rem; border-radius: 0.5rem; border: none; cursor: pointer;">'
            f'{get_label(direction, "print_button")}</button></div>'
        )

    title = _escape(exam.title) or get_label(direction, "default_title")
    return f"""<!DOCTYPE html>
<html lang="{'ar' if direction == 'rtl' else 'id'}" dir="{direction}">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <link rel="preconnect" href="https://fonts.googleapis.com">
    <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
    <link href="{_escape(FONTS_URL)}" rel="stylesheet">
    <style>{_stylesheet(exam, config, mode)}</style>
</head>
<body>
    {print_button}
    <div class="exam-sheet-container">
        <main class="exam-sheet" style="box-shadow: 0 10px 15px -3px rgba(0,0,0,0.1);">
            {content}
        </main>
    </div>
{HEADER_FIT_SCRIPT}
</body>
</html>
"""
