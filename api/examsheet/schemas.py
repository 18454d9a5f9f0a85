"""
Data Schemas for Exam Sheet
Pydantic models for the exam document model and the per-render configuration.
"""
import uuid
from enum import Enum
from typing import Annotated, Dict, Iterator, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from examsheet.config import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_LINE_SPACING,
    DEFAULT_MARGIN_MM,
    DEFAULT_SECTION_INSTRUCTION,
    default_header_lines,
)


def _new_id() -> str:
    return str(uuid.uuid4())


class Direction(str, Enum):
    """Text direction and numbering locale."""
    LTR = "ltr"
    RTL = "rtl"


class ExamStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class RenderMode(str, Enum):
    """What a renderer projects: the question sheet or its answer key."""
    QUESTIONS = "questions"
    ANSWER_KEY = "answer_key"


class PaperSize(str, Enum):
    A4 = "A4"
    F4 = "F4"
    LEGAL = "Legal"
    LETTER = "Letter"


class QuestionType(str, Enum):
    """Supported question variants."""
    MULTIPLE_CHOICE = "multiple_choice"
    COMPLEX_MULTIPLE_CHOICE = "complex_multiple_choice"
    TRUE_FALSE = "true_false"
    SHORT_ANSWER = "short_answer"
    ESSAY = "essay"
    MATCHING = "matching"
    TABLE = "table"
    TABLE_MULTIPLE_CHOICE = "table_multiple_choice"
    TABLE_COMPLEX_MULTIPLE_CHOICE = "table_complex_multiple_choice"
    STIMULUS = "stimulus"


class VerticalAlign(str, Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


# --- Building Blocks ---

class Choice(BaseModel):
    """A single answer option of a choice-bearing question."""
    id: str = Field(..., description="Stable choice identifier")
    text: str = Field("", description="Rich-text option content")


class MatchingItem(BaseModel):
    """An entry of either matching column."""
    id: str
    text: str = ""


class MatchingPair(BaseModel):
    """One (prompt, answer) link of a matching answer key."""
    prompt_id: str
    answer_id: str


class TableCell(BaseModel):
    """A grid cell; spans live only on master cells."""
    id: str = Field(default_factory=_new_id)
    content: str = ""
    vertical_align: Optional[VerticalAlign] = None
    rowspan: Optional[int] = Field(None, ge=1)
    colspan: Optional[int] = Field(None, ge=1)
    is_merged: bool = False

    @property
    def is_master(self) -> bool:
        return (self.rowspan or 1) > 1 or (self.colspan or 1) > 1


class TableRow(BaseModel):
    id: str = Field(default_factory=_new_id)
    cells: List[TableCell] = Field(default_factory=list)


class TableGrid(BaseModel):
    """Rectangular grid of cells with optional row/column size overrides (px)."""
    rows: List[TableRow] = Field(default_factory=list)
    row_heights: List[Optional[int]] = Field(default_factory=list)
    column_widths: List[Optional[int]] = Field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.rows[0].cells) if self.rows else 0

    @model_validator(mode="after")
    def _check_rectangular(self) -> "TableGrid":
        widths = {len(row.cells) for row in self.rows}
        if len(widths) > 1:
            raise ValueError(f"Table grid is not rectangular (row lengths {sorted(widths)})")

        # Size overrides always track the grid dimensions
        self.row_heights = _fit(self.row_heights, self.row_count)
        self.column_widths = _fit(self.column_widths, self.column_count)
        return self


def _fit(values: List[Optional[int]], size: int) -> List[Optional[int]]:
    fitted = [v if v and v > 0 else None for v in values[:size]]
    return fitted + [None] * (size - len(fitted))


# --- Question Variants ---

class QuestionBase(BaseModel):
    id: str = Field(default_factory=_new_id)
    number: str = Field("", description="Display number, assigned upstream")
    text: str = Field("", description="Rich-text question body")


class ChoiceQuestionBase(QuestionBase):
    choices: List[Choice] = Field(default_factory=list)
    two_columns: bool = False

    def choice_index(self, choice_id: Optional[str]) -> Optional[int]:
        """Position of a choice id in display order, or None if dangling."""
        for index, choice in enumerate(self.choices):
            if choice.id == choice_id:
                return index
        return None


class MultipleChoiceQuestion(ChoiceQuestionBase):
    type: Literal["multiple_choice"] = "multiple_choice"
    answer_key: Optional[str] = None


class ComplexMultipleChoiceQuestion(ChoiceQuestionBase):
    type: Literal["complex_multiple_choice"] = "complex_multiple_choice"
    answer_key: List[str] = Field(default_factory=list)


class TrueFalseQuestion(QuestionBase):
    type: Literal["true_false"] = "true_false"
    answer_key: Optional[Literal["true", "false"]] = None


class ShortAnswerQuestion(QuestionBase):
    type: Literal["short_answer"] = "short_answer"
    has_answer_space: bool = False
    answer_key: str = ""


class EssayQuestion(QuestionBase):
    type: Literal["essay"] = "essay"
    has_answer_space: bool = False
    answer_key: str = ""


class MatchingQuestion(QuestionBase):
    type: Literal["matching"] = "matching"
    prompts: List[MatchingItem] = Field(default_factory=list)
    answers: List[MatchingItem] = Field(default_factory=list)
    matching_key: List[MatchingPair] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_key_references(self) -> "MatchingQuestion":
        prompt_ids = {item.id for item in self.prompts}
        answer_ids = {item.id for item in self.answers}
        for pair in self.matching_key:
            if pair.prompt_id not in prompt_ids:
                raise ValueError(f"Matching key references unknown prompt '{pair.prompt_id}'")
            if pair.answer_id not in answer_ids:
                raise ValueError(f"Matching key references unknown answer '{pair.answer_id}'")
        return self

    def remove_prompt(self, prompt_id: str) -> "MatchingQuestion":
        """Returns a copy without the prompt and without key pairs that reference it."""
        return self.model_copy(update={
            "prompts": [p for p in self.prompts if p.id != prompt_id],
            "matching_key": [k for k in self.matching_key if k.prompt_id != prompt_id],
        })

    def remove_answer(self, answer_id: str) -> "MatchingQuestion":
        """Returns a copy without the answer and without key pairs that reference it."""
        return self.model_copy(update={
            "answers": [a for a in self.answers if a.id != answer_id],
            "matching_key": [k for k in self.matching_key if k.answer_id != answer_id],
        })

    def set_match(self, prompt_id: str, answer_id: Optional[str]) -> "MatchingQuestion":
        """
        Links a prompt to an answer, replacing its previous link.

        Args:
            prompt_id: Prompt to (re)link.
            answer_id: Answer to link to, or None to clear the prompt's link.

        Returns:
            Updated copy of the question.

        Raises:
            ValueError: If either id is not present in its column.
        """
        if prompt_id not in {p.id for p in self.prompts}:
            raise ValueError(f"Unknown prompt '{prompt_id}'")
        if answer_id is not None and answer_id not in {a.id for a in self.answers}:
            raise ValueError(f"Unknown answer '{answer_id}'")

        key = [k for k in self.matching_key if k.prompt_id != prompt_id]
        if answer_id is not None:
            key.append(MatchingPair(prompt_id=prompt_id, answer_id=answer_id))
        return self.model_copy(update={"matching_key": key})


class TableQuestion(QuestionBase):
    type: Literal["table"] = "table"
    table: TableGrid = Field(default_factory=TableGrid)
    table_answer_key: Dict[str, str] = Field(
        default_factory=dict,
        description="Maps cell id to the expected answer text"
    )


class TableMultipleChoiceQuestion(ChoiceQuestionBase):
    type: Literal["table_multiple_choice"] = "table_multiple_choice"
    table: TableGrid = Field(default_factory=TableGrid)
    table_answer_key: Dict[str, str] = Field(
        default_factory=dict,
        description="Maps row id to the correct choice id"
    )


class TableComplexMultipleChoiceQuestion(ChoiceQuestionBase):
    type: Literal["table_complex_multiple_choice"] = "table_complex_multiple_choice"
    table: TableGrid = Field(default_factory=TableGrid)
    table_answer_key: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Maps row id to the set of correct choice ids"
    )


class StimulusQuestion(QuestionBase):
    """Unnumbered description block shared by the questions that follow it."""
    type: Literal["stimulus"] = "stimulus"


Question = Annotated[
    Union[
        MultipleChoiceQuestion,
        ComplexMultipleChoiceQuestion,
        TrueFalseQuestion,
        ShortAnswerQuestion,
        EssayQuestion,
        MatchingQuestion,
        TableQuestion,
        TableMultipleChoiceQuestion,
        TableComplexMultipleChoiceQuestion,
        StimulusQuestion,
    ],
    Field(discriminator="type"),
]

TABLE_TYPES = (
    QuestionType.TABLE,
    QuestionType.TABLE_MULTIPLE_CHOICE,
    QuestionType.TABLE_COMPLEX_MULTIPLE_CHOICE,
)


# --- Exam ---

class Section(BaseModel):
    """An instruction line, an optional passage, and its questions."""
    id: str = Field(default_factory=_new_id)
    instructions: str = Field("", description="Enumerator token, '.', then free text")
    stimulus: Optional[str] = Field(None, description="Optional rich-text passage")
    questions: List[Question] = Field(default_factory=list)


class Exam(BaseModel):
    """Represents a complete exam with its sections."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=_new_id)
    title: str = ""
    subject: str = ""
    class_label: str = Field("", alias="class")
    date: str = Field("", description="ISO date (YYYY-MM-DD)")
    duration: str = ""
    notes: str = Field("", description="Author notes; stored with the exam, never rendered")
    instructions: str = Field("", description="General instructions, one per line")
    sections: List[Section] = Field(default_factory=list)
    status: ExamStatus = ExamStatus.DRAFT
    direction: Direction = Direction.LTR
    layout_columns: Literal[1, 2] = 1

    @model_validator(mode="before")
    @classmethod
    def _upgrade_legacy_payload(cls, data):
        if not isinstance(data, dict):
            return data

        data = dict(data)
        legacy_questions = data.pop("questions", None)
        if legacy_questions is not None and not data.get("sections"):
            data["sections"] = [{
                "instructions": DEFAULT_SECTION_INSTRUCTION,
                "questions": [
                    {**question, "number": str(index)}
                    for index, question in enumerate(legacy_questions, start=1)
                ],
            }]
        if data.get("direction") is None:
            data.pop("direction", None)
        if data.get("layout_columns") is None:
            data.pop("layout_columns", None)
        return data

    @property
    def is_rtl(self) -> bool:
        return self.direction == Direction.RTL

    def iter_questions(self) -> Iterator[QuestionBase]:
        for section in self.sections:
            yield from section.questions


# --- Render Configuration ---

class Margins(BaseModel):
    """Page margins in millimeters."""
    top: float = Field(DEFAULT_MARGIN_MM, ge=0)
    right: float = Field(DEFAULT_MARGIN_MM, ge=0)
    bottom: float = Field(DEFAULT_MARGIN_MM, ge=0)
    left: float = Field(DEFAULT_MARGIN_MM, ge=0)


class RenderConfig(BaseModel):
    """Paper, typography and branding settings supplied per render call."""
    header_lines: List[str] = Field(default_factory=default_header_lines)
    logos: Tuple[Optional[str], Optional[str]] = Field(
        (None, None),
        description="Left and right logo as data URIs"
    )
    paper_size: PaperSize = PaperSize.A4
    margins: Margins = Field(default_factory=Margins)
    line_spacing: float = Field(DEFAULT_LINE_SPACING, gt=0)
    font_family: str = DEFAULT_FONT_FAMILY
    font_size: float = Field(DEFAULT_FONT_SIZE, gt=0)

    @model_validator(mode="before")
    @classmethod
    def _upgrade_legacy_settings(cls, data):
        if not isinstance(data, dict):
            return data

        data = dict(data)
        if "logo" in data:
            data["logos"] = [data.pop("logo"), None]
        logos = data.get("logos")
        if logos is None:
            data.pop("logos", None)
        elif len(logos) < 2:
            data["logos"] = (list(logos) + [None, None])[:2]

        lines = data.get("header_lines")
        if lines:
            # Editor payloads carry {"id": ..., "text": ...} entries
            data["header_lines"] = [
                line.get("text", "") if isinstance(line, dict) else line for line in lines
            ]
        return data
