"""
Voice-over narration.

``build_narration_script`` produces the text that is read aloud for a
student's (filtered) results. ``NarrationPlayer`` keeps at most one utterance
active on top of any engine that can ``speak`` and ``stop``.
"""
import logging
from typing import List, Sequence

from schemas.records import ResultRecord
from services.aggregation import result_summary
from services.filters import is_all
from services.grading import format_number

logger = logging.getLogger(__name__)

# Speech duration ka rough estimate: har character ~65ms
SECONDS_PER_CHARACTER = 0.065


def build_narration_script(
    results: Sequence[ResultRecord],
    student_name: str,
    roll_number: str,
    year=None,
    semester=None,
    subject=None,
) -> str:
    parts = [f"Results for {student_name}, Roll Number {roll_number}."]

    if not is_all(year):
        parts.append(f"Academic Year {year}.")
    if not is_all(semester):
        parts.append(f"Semester {semester}.")
    if not is_all(subject):
        parts.append(f"Subject {subject}.")

    summary = result_summary(results)
    parts.append(
        f"Total subjects: {summary.total_subjects}. "
        f"Overall percentage: {format_number(summary.overall_percentage)} percent."
    )

    for result in results:
        parts.append(
            f"Subject: {result.subject}. "
            f"Marks: {format_number(result.marks_obtained)} out of {format_number(result.total_marks)}. "
            f"Grade: {result.grade}."
        )

    return " ".join(parts)


def estimate_duration(text: str) -> float:
    """Seconds the engine is expected to need for ``text``."""
    return len(text) * SECONDS_PER_CHARACTER


class SpeechEngine:
    def speak(self, text: str, rate: float = 1.0, pitch: float = 1.0) -> None:
        raise NotImplementedError

    def stop(self) -> None:
        raise NotImplementedError


class LoggingSpeechEngine(SpeechEngine):
    """Server-side engine: the browser does the actual synthesis, we only log it."""

    def __init__(self):
        self.spoken: List[str] = []

    def speak(self, text, rate=1.0, pitch=1.0):
        self.spoken.append(text)
        logger.info("Narration queued (%d chars, rate=%s, pitch=%s)", len(text), rate, pitch)

    def stop(self):
        logger.debug("Narration stopped")


class NarrationPlayer:
    def __init__(self, engine: SpeechEngine):
        self.engine = engine
        self._speaking = False

    @property
    def is_speaking(self) -> bool:
        return self._speaking

    def play(self, text: str, rate: float = 1.0, pitch: float = 1.0) -> float:
        """Start ``text`` (stopping anything already playing); returns the estimated duration."""
        if not text:
            return 0.0
        self.stop()
        self.engine.speak(text, rate=rate, pitch=pitch)
        self._speaking = True
        return estimate_duration(text)

    def stop(self) -> None:
        if not self._speaking:
            return
        self.engine.stop()
        self._speaking = False

    def finished(self) -> None:
        """Called by whoever tracks completion (timer or engine callback)."""
        self._speaking = False
