"""
Document Generator Service
Handles .docx generation for question sheets and answer keys, including
merged table grids, inline images and right-to-left layout.
"""
import logging
import zipfile
from dataclasses import dataclass
from io import BytesIO
from typing import Callable, Dict, Optional

from docx import Document
from docx.enum.table import WD_ALIGN_VERTICAL, WD_TABLE_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.image.exceptions import UnrecognizedImageError
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Mm, Pt, Twips
from PIL import Image, UnidentifiedImageError

from examsheet.config import LOGO_MM, MAX_IMAGE_MM, get_label, translate_instruction
from examsheet.schemas import (
    Exam,
    PaperSize,
    QuestionType,
    RenderConfig,
    RenderMode,
    Section,
    TableGrid,
    VerticalAlign,
)
from examsheet.services.answer_key import resolve_answer
from examsheet.services.numbering import (
    format_exam_date,
    split_instruction,
    to_choice_letter,
    to_ordinal_numeral,
)
from examsheet.services.rich_text import (
    ImageRun,
    decode_data_uri,
    fragment_alignment,
    iter_runs,
    plain_text,
)

logger = logging.getLogger(__name__)

# Word measures page geometry in twentieths of a point
TWIPS_PER_MM = 56.7
PX_TO_MM = 25.4 / 96

PAPER_SIZES_MM = {
    PaperSize.A4: (210, 297),
    PaperSize.F4: (215, 330),
    PaperSize.LEGAL: (215.9, 355.6),
    PaperSize.LETTER: (215.9, 279.4),
}

ALIGNMENTS = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
    "right": WD_ALIGN_PARAGRAPH.RIGHT,
    "justify": WD_ALIGN_PARAGRAPH.JUSTIFY,
}
VERTICAL_ALIGNMENTS = {
    VerticalAlign.TOP: WD_ALIGN_VERTICAL.TOP,
    VerticalAlign.MIDDLE: WD_ALIGN_VERTICAL.CENTER,
    VerticalAlign.BOTTOM: WD_ALIGN_VERTICAL.BOTTOM,
}

NAME_DOTS = "." * 60
QUESTION_INDENT_MM = 8
CHOICE_INDENT_MM = 12
ANSWER_ROW_MM = 8


def mm_to_twips(mm: float) -> int:
    """Converts millimeters to whole twips."""
    return int(round(mm * TWIPS_PER_MM))


def twips_to_mm(twips: int) -> float:
    """Inverse of mm_to_twips, exact for whole-millimeter inputs."""
    return round(twips / TWIPS_PER_MM, 1)


@dataclass(frozen=True)
class _Context:
    """Per-render state shared by the block writers."""
    doc: Document
    config: RenderConfig
    direction: str

    @property
    def rtl(self) -> bool:
        return self.direction == "rtl"

    @property
    def content_width_mm(self) -> float:
        width, _ = PAPER_SIZES_MM[self.config.paper_size]
        return width - self.config.margins.left - self.config.margins.right


# --- Low-level XML Helpers ---

def set_paragraph_rtl(paragraph) -> None:
    """Marks a paragraph as right-to-left: <w:pPr><w:bidi w:val="1"/></w:pPr>"""
    pPr = paragraph._element.get_or_add_pPr()
    if pPr.find(qn("w:bidi")) is None:
        bidi = OxmlElement("w:bidi")
        bidi.set(qn("w:val"), "1")
        pPr.append(bidi)


def set_run_rtl(run) -> None:
    """Set run-level RTL property: <w:rPr><w:rtl w:val="1"/></w:rPr>"""
    rPr = run._r.get_or_add_rPr()
    rtl = OxmlElement("w:rtl")
    rtl.set(qn("w:val"), "1")
    rPr.append(rtl)


def set_table_rtl(table) -> None:
    bidi = OxmlElement("w:bidiVisual")
    table._tbl.tblPr.append(bidi)


def set_cell_borders(cell, **edges) -> None:
    """
    Sets borders on one table cell.

    Args:
        cell: python-docx cell.
        **edges: Edge name (top, left, bottom, right) to (style, size, color);
            size is in eighth-points.
    """
    tcPr = cell._tc.get_or_add_tcPr()
    borders = tcPr.find(qn("w:tcBorders"))
    if borders is None:
        borders = OxmlElement("w:tcBorders")
        tcPr.append(borders)

    for tag, (style, size, color) in edges.items():
        edge = borders.find(qn(f"w:{tag}"))
        if edge is None:
            edge = OxmlElement(f"w:{tag}")
            borders.append(edge)
        edge.set(qn("w:val"), style)
        edge.set(qn("w:sz"), str(size))
        edge.set(qn("w:space"), "0")
        edge.set(qn("w:color"), color)


def _no_borders(cell) -> None:
    none = ("nil", 0, "auto")
    set_cell_borders(cell, top=none, left=none, bottom=none, right=none)


# --- Paragraphs and Runs ---

def _paragraph(container, ctx: _Context, text: str = "", bold: bool = False, italic: bool = False):
    paragraph = container.add_paragraph()
    if ctx.rtl:
        set_paragraph_rtl(paragraph)
    if text:
        _text(paragraph, ctx, text, bold=bold, italic=italic)
    return paragraph


def _cell_paragraph(cell, ctx: _Context):
    # Fresh cells carry one empty paragraph that should be used first
    paragraph = cell.paragraphs[-1]
    if paragraph.runs:
        paragraph = cell.add_paragraph()
    if ctx.rtl:
        set_paragraph_rtl(paragraph)
    return paragraph


def _text(paragraph, ctx: _Context, text: str, bold: bool = False, italic: bool = False):
    run = paragraph.add_run(text)
    if bold:
        run.bold = True
    if italic:
        run.italic = True
    if ctx.rtl:
        set_run_rtl(run)
    return run


def bounded_size_mm(data: bytes, box_mm: float):
    """
    Reads image dimensions and fits them into a square box.

    Args:
        data: Encoded image bytes.
        box_mm: Side of the bounding box in millimeters.

    Returns:
        (width_mm, height_mm) preserving the aspect ratio.

    Raises:
        OSError: If Pillow cannot identify the image.
    """
    with Image.open(BytesIO(data)) as image:
        width, height = image.size
    if not width or not height:
        raise UnidentifiedImageError("Image has no dimensions")
    scale = box_mm / max(width, height)
    return width * scale, height * scale


def _add_image(paragraph, ctx: _Context, data: bytes, box_mm: float) -> None:
    try:
        width, height = bounded_size_mm(data, box_mm)
        paragraph.add_run().add_picture(BytesIO(data), width=Mm(width), height=Mm(height))
    except (OSError, UnrecognizedImageError) as e:
        logger.warning("Skipping unreadable image: %s", e)


def write_runs(paragraph, ctx: _Context, fragment: Optional[str]) -> None:
    """Maps parsed inline runs one-to-one onto python-docx runs."""
    alignment = fragment_alignment(fragment)
    if alignment:
        paragraph.alignment = ALIGNMENTS[alignment]

    for item in iter_runs(fragment):
        if isinstance(item, ImageRun):
            _add_image(paragraph, ctx, item.data, MAX_IMAGE_MM)
            continue
        if item.line_break:
            paragraph.add_run().add_break()
            continue

        run = paragraph.add_run(item.text)
        run.bold = item.bold or None
        run.italic = item.italic or None
        run.underline = item.underline or None
        run.font.subscript = item.subscript or None
        run.font.superscript = item.superscript or None
        if ctx.rtl:
            set_run_rtl(run)


def _number(value, ctx: _Context) -> str:
    return f"{to_ordinal_numeral(value, ctx.direction)}."


def _letter(index: int, ctx: _Context, upper: bool = False) -> str:
    return f"{to_choice_letter(index, ctx.direction, upper=upper)}."


def _new_table(container, ctx: _Context, rows: int, cols: int, style: Optional[str] = "Table Grid"):
    table = container.add_table(rows=rows, cols=cols)
    if style:
        table.style = style
    table.alignment = WD_TABLE_ALIGNMENT.CENTER
    if ctx.rtl:
        set_table_rtl(table)
    return table


# --- Page Setup ---

def _setup_document(ctx: _Context, exam: Exam) -> None:
    config = ctx.config
    section = ctx.doc.sections[0]
    width, height = PAPER_SIZES_MM[config.paper_size]
    section.page_width = Mm(width)
    section.page_height = Mm(height)
    section.top_margin = Twips(mm_to_twips(config.margins.top))
    section.right_margin = Twips(mm_to_twips(config.margins.right))
    section.bottom_margin = Twips(mm_to_twips(config.margins.bottom))
    section.left_margin = Twips(mm_to_twips(config.margins.left))

    core_properties = ctx.doc.core_properties
    core_properties.title = exam.title
    core_properties.subject = exam.subject

    style = ctx.doc.styles["Normal"]
    style.font.name = config.font_family
    style.font.size = Pt(config.font_size)
    # Complex-script font used for Arabic text
    style.element.get_or_add_rPr().get_or_add_rFonts().set(qn("w:cs"), config.font_family)
    style.paragraph_format.line_spacing = config.line_spacing
    style.paragraph_format.space_after = Pt(2)


def _write_header(ctx: _Context) -> None:
    """Logo / institution text / logo table with a double bottom rule."""
    left, right = ctx.config.logos
    columns = []
    if left:
        columns.append(("logo", left))
    columns.append(("text", None))
    if right:
        columns.append(("logo", right))

    text_share = {1: 1.0, 2: 0.85, 3: 0.70}[len(columns)]
    logo_share = (1.0 - text_share) / max(len(columns) - 1, 1)

    table = _new_table(ctx.doc, ctx, rows=1, cols=len(columns), style=None)
    table.autofit = False
    double = ("double", 6, "000000")
    for cell, (kind, logo) in zip(table.rows[0].cells, columns):
        share = text_share if kind == "text" else logo_share
        cell.width = Mm(ctx.content_width_mm * share)
        cell.vertical_alignment = WD_ALIGN_VERTICAL.CENTER
        set_cell_borders(cell, bottom=double)

        if kind == "logo":
            paragraph = _cell_paragraph(cell, ctx)
            paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
            decoded = decode_data_uri(logo)
            if decoded is None:
                logger.warning("Skipping logo that is not an image data URI")
                continue
            _add_image(paragraph, ctx, decoded[0], LOGO_MM)
            continue

        for line in ctx.config.header_lines:
            paragraph = _cell_paragraph(cell, ctx)
            paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
            paragraph.paragraph_format.space_after = Pt(0)
            _text(paragraph, ctx, line.upper(), bold=True)


def _write_meta(ctx: _Context, exam: Exam) -> None:
    """Student/exam details with a vertically merged score cell."""
    rows = (
        ("name", NAME_DOTS),
        ("class", exam.class_label),
        ("subject", exam.subject),
        ("date", format_exam_date(exam.date, ctx.direction)),
        ("exam_time", exam.duration),
    )
    table = _new_table(ctx.doc, ctx, rows=len(rows), cols=3, style=None)
    table.autofit = False
    widths = (0.25, 0.5, 0.25)

    for row, (key, value) in zip(table.rows, rows):
        for cell, share in zip(row.cells, widths):
            cell.width = Mm(ctx.content_width_mm * share)
        _text(_cell_paragraph(row.cells[0], ctx), ctx, get_label(ctx.direction, key), bold=True)
        _text(_cell_paragraph(row.cells[1], ctx), ctx, f": {value}")

    score = table.cell(0, 2).merge(table.cell(len(rows) - 1, 2))
    single = ("single", 12, "000000")
    set_cell_borders(score, top=single, left=single, bottom=single, right=single)
    _text(_cell_paragraph(score, ctx), ctx, get_label(ctx.direction, "score"), bold=True)


def _write_general_instructions(ctx: _Context, exam: Exam) -> None:
    lines = [line.strip() for line in exam.instructions.splitlines() if line.strip()]
    if not lines:
        return
    _paragraph(ctx.doc, ctx, get_label(ctx.direction, "instructions"), bold=True)
    for line in lines:
        _paragraph(ctx.doc, ctx, line)


def instruction_text(section: Section, direction: str) -> str:
    """Section instruction line; the enumerator is dropped under RTL."""
    enumerator, text = split_instruction(section.instructions)
    if enumerator is None:
        return section.instructions
    if direction == "rtl":
        return translate_instruction(text)
    return f"{enumerator}. {text}"


# --- Question Blocks ---

def _choice_paragraphs(ctx: _Context, question, prefix: str = "") -> None:
    if question.two_columns and len(question.choices) > 1:
        rows = (len(question.choices) + 1) // 2
        table = _new_table(ctx.doc, ctx, rows=rows, cols=2, style=None)
        for index, choice in enumerate(question.choices):
            cell = table.cell(index % rows, index // rows)
            paragraph = _cell_paragraph(cell, ctx)
            _text(paragraph, ctx, f"{prefix}{_letter(index, ctx)} ")
            write_runs(paragraph, ctx, choice.text)
        return

    for index, choice in enumerate(question.choices):
        paragraph = _paragraph(ctx.doc, ctx)
        paragraph.paragraph_format.left_indent = Mm(CHOICE_INDENT_MM)
        _text(paragraph, ctx, f"{prefix}{_letter(index, ctx)} ")
        write_runs(paragraph, ctx, choice.text)


def _multiple_choice(ctx: _Context, question) -> None:
    _choice_paragraphs(ctx, question)


def _complex_multiple_choice(ctx: _Context, question) -> None:
    _choice_paragraphs(ctx, question, prefix="☐ ")


def _true_false(ctx: _Context, question) -> None:
    true_text = get_label(ctx.direction, "true_text")
    false_text = get_label(ctx.direction, "false_text")
    paragraph = _paragraph(ctx.doc, ctx, f"      [   ] {true_text}     [   ] {false_text}")
    paragraph.paragraph_format.left_indent = Mm(QUESTION_INDENT_MM)


def _answer_space(ctx: _Context, question) -> None:
    if not question.has_answer_space:
        return
    table = _new_table(ctx.doc, ctx, rows=3, cols=1, style=None)
    rule = ("single", 4, "808080")
    for row in table.rows:
        row.height = Mm(ANSWER_ROW_MM)
        set_cell_borders(row.cells[0], bottom=rule)


def _matching(ctx: _Context, question) -> None:
    count = max(len(question.prompts), len(question.answers))
    table = _new_table(ctx.doc, ctx, rows=count + 1, cols=4)

    header = table.rows[0].cells
    col_a = header[0].merge(header[1])
    col_b = header[2].merge(header[3])
    for cell, key in ((col_a, "col_a"), (col_b, "col_b")):
        paragraph = _cell_paragraph(cell, ctx)
        paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
        _text(paragraph, ctx, get_label(ctx.direction, key), bold=True)

    for index in range(count):
        cells = table.rows[index + 1].cells
        if index < len(question.prompts):
            _text(_cell_paragraph(cells[0], ctx), ctx, _number(index + 1, ctx))
            write_runs(_cell_paragraph(cells[1], ctx), ctx, question.prompts[index].text)
        if index < len(question.answers):
            _text(_cell_paragraph(cells[2], ctx), ctx, _letter(index, ctx, upper=True))
            write_runs(_cell_paragraph(cells[3], ctx), ctx, question.answers[index].text)


def write_grid(container, ctx: _Context, grid: TableGrid):
    """
    Writes a table grid, merging master spans and applying size overrides.

    Args:
        container: Document or cell receiving the table.
        ctx: Render context.
        grid: Grid to write.

    Returns:
        The python-docx table, or None for an empty grid.
    """
    if not grid.rows or not grid.column_count:
        return None

    table = _new_table(container, ctx, rows=grid.row_count, cols=grid.column_count)
    for row_index, row in enumerate(grid.rows):
        for col_index, cell in enumerate(row.cells):
            if cell.is_master:
                end_row = row_index + (cell.rowspan or 1) - 1
                end_col = col_index + (cell.colspan or 1) - 1
                table.cell(row_index, col_index).merge(table.cell(end_row, end_col))

    for row_index, row in enumerate(grid.rows):
        height = grid.row_heights[row_index]
        if height:
            table.rows[row_index].height = Mm(height * PX_TO_MM)
        for col_index, cell in enumerate(row.cells):
            if cell.is_merged:
                continue
            target = table.cell(row_index, col_index)
            if cell.vertical_align:
                target.vertical_alignment = VERTICAL_ALIGNMENTS[cell.vertical_align]
            write_runs(_cell_paragraph(target, ctx), ctx, cell.content)

    if any(grid.column_widths):
        table.autofit = False
        for col_index, width in enumerate(grid.column_widths):
            if width:
                for cell in table.columns[col_index].cells:
                    cell.width = Mm(width * PX_TO_MM)
    return table


def _table(ctx: _Context, question) -> None:
    write_grid(ctx.doc, ctx, question.table)


def _table_multiple_choice(ctx: _Context, question) -> None:
    write_grid(ctx.doc, ctx, question.table)
    _choice_paragraphs(ctx, question)


def _table_complex_multiple_choice(ctx: _Context, question) -> None:
    write_grid(ctx.doc, ctx, question.table)
    _choice_paragraphs(ctx, question, prefix="☐ ")


BLOCK_WRITERS: Dict[str, Callable] = {
    QuestionType.MULTIPLE_CHOICE: _multiple_choice,
    QuestionType.COMPLEX_MULTIPLE_CHOICE: _complex_multiple_choice,
    QuestionType.TRUE_FALSE: _true_false,
    QuestionType.SHORT_ANSWER: _answer_space,
    QuestionType.ESSAY: _answer_space,
    QuestionType.MATCHING: _matching,
    QuestionType.TABLE: _table,
    QuestionType.TABLE_MULTIPLE_CHOICE: _table_multiple_choice,
    QuestionType.TABLE_COMPLEX_MULTIPLE_CHOICE: _table_complex_multiple_choice,
}


def _write_question(ctx: _Context, question) -> None:
    if question.type == QuestionType.STIMULUS:
        paragraph = _paragraph(ctx.doc, ctx)
        paragraph.paragraph_format.space_before = Pt(6)
        write_runs(paragraph, ctx, question.text)
        return

    paragraph = _paragraph(ctx.doc, ctx)
    paragraph.paragraph_format.space_before = Pt(6)
    paragraph.paragraph_format.left_indent = Mm(QUESTION_INDENT_MM)
    paragraph.paragraph_format.first_line_indent = Mm(-QUESTION_INDENT_MM)
    _text(paragraph, ctx, f"{_number(question.number, ctx)}\t")
    write_runs(paragraph, ctx, question.text)

    writer = BLOCK_WRITERS.get(question.type)
    if writer is None:
        logger.warning("No DOCX writer for question type '%s'; writing placeholder", question.type)
        _paragraph(ctx.doc, ctx, get_label(ctx.direction, "unsupported", type=question.type), italic=True)
        return
    writer(ctx, question)


def _write_questions(ctx: _Context, exam: Exam) -> None:
    _write_header(ctx)

    title = _paragraph(ctx.doc, ctx)
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER
    title.paragraph_format.space_before = Pt(8)
    run = _text(title, ctx, exam.title.upper(), bold=True)
    run.font.size = Pt(ctx.config.font_size + 2)

    _write_meta(ctx, exam)
    _write_general_instructions(ctx, exam)

    for section in exam.sections:
        heading = _paragraph(ctx.doc, ctx, instruction_text(section, ctx.direction), bold=True)
        heading.paragraph_format.space_before = Pt(12)
        if section.stimulus and plain_text(section.stimulus):
            stimulus = _paragraph(ctx.doc, ctx)
            write_runs(stimulus, ctx, section.stimulus)
            stimulus.alignment = WD_ALIGN_PARAGRAPH.JUSTIFY
        for question in section.questions:
            _write_question(ctx, question)


# --- Answer Key ---

def _write_answer(cell, ctx: _Context, question) -> None:
    resolved = resolve_answer(question, ctx.direction)
    no_answer = get_label(ctx.direction, "no_answer")
    if resolved.missing:
        _text(_cell_paragraph(cell, ctx), ctx, no_answer, italic=True)
        return

    if resolved.cell_answers:
        for row in question.table.rows:
            for table_cell in row.cells:
                answer = resolved.cell_answers.get(table_cell.id)
                if answer is None:
                    continue
                paragraph = _cell_paragraph(cell, ctx)
                original = plain_text(table_cell.content)
                if original:
                    _text(paragraph, ctx, f"{original}: ")
                _text(paragraph, ctx, answer.strip(), bold=True)
        return

    for entry in resolved.entries:
        paragraph = _cell_paragraph(cell, ctx)
        if entry.label:
            _text(paragraph, ctx, f"{entry.label} ", bold=True)
        if entry.missing:
            _text(paragraph, ctx, no_answer, italic=True)
        else:
            write_runs(paragraph, ctx, entry.content)


def _write_answer_key(ctx: _Context, exam: Exam) -> None:
    title = _paragraph(ctx.doc, ctx)
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER
    run = _text(title, ctx, get_label(ctx.direction, "answer_key_title"), bold=True)
    run.font.size = Pt(ctx.config.font_size + 4)

    for text in (exam.title, (
        f"{get_label(ctx.direction, 'subject')}: {exam.subject} | "
        f"{get_label(ctx.direction, 'class')}: {exam.class_label}"
    )):
        paragraph = _paragraph(ctx.doc, ctx, text)
        paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER

    for section in exam.sections:
        heading = _paragraph(ctx.doc, ctx, instruction_text(section, ctx.direction), bold=True)
        heading.paragraph_format.space_before = Pt(12)

        questions = [q for q in section.questions if q.type != QuestionType.STIMULUS]
        table = _new_table(ctx.doc, ctx, rows=len(questions) + 1, cols=2)
        table.autofit = False
        header = table.rows[0].cells
        _text(_cell_paragraph(header[0], ctx), ctx, get_label(ctx.direction, "question_no"), bold=True)
        _text(_cell_paragraph(header[1], ctx), ctx, get_label(ctx.direction, "answer"), bold=True)

        for row, question in zip(table.rows[1:], questions):
            _text(_cell_paragraph(row.cells[0], ctx), ctx, _number(question.number, ctx))
            _write_answer(row.cells[1], ctx, question)

        for row in table.rows:
            row.cells[0].width = Mm(20)
            row.cells[1].width = Mm(ctx.content_width_mm - 20)


PACKAGE_TIMESTAMP = (1980, 1, 1, 0, 0, 0)


def _normalize_package(data: bytes) -> bytes:
    """Rewrites the zip container with fixed member timestamps, keeping member order."""
    output = BytesIO()
    with zipfile.ZipFile(BytesIO(data)) as source, zipfile.ZipFile(output, "w") as target:
        for info in source.infolist():
            member = zipfile.ZipInfo(info.filename, date_time=PACKAGE_TIMESTAMP)
            member.compress_type = zipfile.ZIP_DEFLATED
            member.external_attr = info.external_attr
            target.writestr(member, source.read(info.filename))
    return output.getvalue()


def render_docx(
    exam: Exam,
    config: Optional[RenderConfig] = None,
    mode: RenderMode = RenderMode.QUESTIONS,
) -> bytes:
    """
    Renders an exam as a .docx package.

    Args:
        exam: Exam to render.
        config: Paper/typography/branding settings (defaults when omitted).
        mode: Question sheet or answer key.

    Returns:
        The serialized .docx bytes.
    """
    config = config or RenderConfig()
    mode = RenderMode(mode)
    ctx = _Context(doc=Document(), config=config, direction=exam.direction.value)
    logger.info("Generating DOCX (%s, %s) for '%s'", mode.value, ctx.direction, exam.title)

    _setup_document(ctx, exam)
    if mode == RenderMode.QUESTIONS:
        _write_questions(ctx, exam)
    else:
        _write_answer_key(ctx, exam)

    buffer = BytesIO()
    ctx.doc.save(buffer)
    return _normalize_package(buffer.getvalue())


def generate_docx(
    exam: Exam,
    config: Optional[RenderConfig],
    output_path: str,
    mode: RenderMode = RenderMode.QUESTIONS,
) -> None:
    """
    Generates a .docx file from an Exam object.

    Args:
        exam: Exam to render.
        config: Render settings.
        output_path: Absolute path where the .docx file should be saved.
        mode: Question sheet or answer key.
    """
    data = render_docx(exam, config, mode)
    with open(output_path, "wb") as handle:
        handle.write(data)
    logger.info("Saved DOCX to %s", output_path)
