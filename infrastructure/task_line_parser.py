import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from core import MismatchError, Priority, Task

logger = logging.getLogger("plaintasks.parser")


def collapse_whitespace(value: str) -> str:
    """Trim and collapse internal whitespace runs to single spaces."""
    return " ".join((value or "").split())


class TaskLineParser:
    """todo.txt line grammar.

    line     := ["x "] [priority " "] [date [" " date] " "] name metadata*
    metadata := "+"project / "@"context / key":"value

    A metadata token starts after whitespace (or at the start of the text);
    whatever follows the alnum run, e.g. trailing punctuation, is left behind.
    """

    PRIORITY_PATTERN = re.compile(r"^\(([A-Fa-f])\) ?")
    DATE_PATTERN = re.compile(r"^(\d{4}-\d{2}-\d{2})(?: |$)")
    PROJECT_PATTERN = re.compile(r"(?<!\S)\+([A-Za-z0-9]+)")
    CONTEXT_PATTERN = re.compile(r"(?<!\S)@([A-Za-z0-9]+)")
    TAG_PATTERN = re.compile(r"(?<!\S)([A-Za-z0-9]+):([A-Za-z0-9]+(?:-[A-Za-z0-9]+)*)")

    @classmethod
    def parse(cls, line: str, task_id: str = "", origin: str = "") -> Task:
        text = collapse_whitespace(line)

        done = False
        if text.startswith("x "):
            done = True
            text = text[2:]

        priority, text = cls._take_priority(text)
        dates, text = cls._take_dates(text, limit=2)
        if not priority:
            priority, text = cls._take_priority(text)

        created_date = ""
        completion_date = ""
        if done and len(dates) == 2:
            completion_date, created_date = dates
        elif done and dates:
            completion_date = dates[0]
        elif dates:
            # A pending task has no completion date; a second date is consumed and dropped.
            created_date = dates[0]

        name, projects, contexts, tags = cls._parse_body(text)
        return Task(
            id=task_id,
            name=name,
            projects=projects,
            contexts=contexts,
            tags=tags,
            done=done,
            priority=priority,
            created_date=created_date,
            completion_date=completion_date,
            origin=origin,
        )

    @classmethod
    def _take_priority(cls, text: str) -> Tuple[Priority, str]:
        match = cls.PRIORITY_PATTERN.match(text)
        if not match:
            return Priority.NONE, text
        return Priority.from_string(match.group(1)), text[match.end():]

    @classmethod
    def _take_dates(cls, text: str, limit: int) -> Tuple[List[str], str]:
        dates: List[str] = []
        while len(dates) < limit:
            match = cls.DATE_PATTERN.match(text)
            if not match:
                break
            dates.append(match.group(1))
            text = text[match.end():]
        return dates, text

    @classmethod
    def first_meta_index(cls, text: str) -> int:
        """Offset of the earliest metadata token, or -1."""
        starts = []
        for pattern in (cls.PROJECT_PATTERN, cls.CONTEXT_PATTERN, cls.TAG_PATTERN):
            match = pattern.search(text)
            if match:
                starts.append(match.start())
        return min(starts) if starts else -1

    @classmethod
    def _parse_body(cls, text: str) -> Tuple[str, List[str], List[str], Dict[str, str]]:
        text = text.strip()
        boundary = cls.first_meta_index(text)
        if boundary < 0:
            return text, [], [], {}
        name = text[:boundary].strip()
        # Metadata is collected from the whole body, not only after the name.
        projects = cls.PROJECT_PATTERN.findall(text)
        contexts = cls.CONTEXT_PATTERN.findall(text)
        tags: Dict[str, str] = {}
        for key, value in cls.TAG_PATTERN.findall(text):
            tags[key] = value
        return name, projects, contexts, tags


@dataclass(frozen=True)
class LineOk:
    task: Task
    ok: bool = True


@dataclass(frozen=True)
class LineMismatch:
    task: Task
    original: str
    canonical: str
    ok: bool = False

    def to_error(self, line_number: Optional[int] = None) -> MismatchError:
        return MismatchError(self.original, self.canonical, origin=self.task.origin, line_number=line_number)


LineResult = Union[LineOk, LineMismatch]


def check_line(line: str, task_id: str = "", origin: str = "") -> LineResult:
    """Parse a line and compare its canonical form with the collapsed input."""
    original = collapse_whitespace(line)
    task = TaskLineParser.parse(line, task_id, origin)
    canonical = task.to_line()
    if canonical == original:
        return LineOk(task)
    return LineMismatch(task, original, canonical)


def load_line(
    line: str,
    task_id: str = "",
    origin: str = "",
    allow_mismatch: bool = False,
    line_number: Optional[int] = None,
) -> Task:
    """Parse a line, warning on a lossy parse; raises MismatchError unless allowed."""
    result = check_line(line, task_id, origin)
    if not result.ok:
        logger.warning(
            "ParseTaskMismatch at %s:%s\n  original:  %s\n  canonical: %s",
            origin or "<input>",
            line_number if line_number is not None else "?",
            result.original,
            result.canonical,
        )
        if not allow_mismatch:
            raise result.to_error(line_number)
    return result.task


def parse_line(line: str, task_id: str = "", origin: str = "") -> Task:
    return TaskLineParser.parse(line, task_id, origin)


__all__ = [
    "TaskLineParser",
    "LineOk",
    "LineMismatch",
    "LineResult",
    "check_line",
    "load_line",
    "parse_line",
    "collapse_whitespace",
]
