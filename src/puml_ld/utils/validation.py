"""
Diagnostics for PlantUML extraction.

Extraction is lenient: a line that matches no rule is dropped and parsing
goes on. This module lets a caller see what was dropped. It can be used to:
- Collect skipped lines during extraction
- Generate a plain text report of them
- Log them through the standard logging machinery

Two severity levels are used:
- WARNING: a line was recognized but could not be used (e.g. a member
  line appearing before any element was declared)
- INFO: a line matched no rule of the extractor and was ignored

The collector never raises. Only the missing start directive is an error,
and that is reported by the detector as a ParseError.
"""
from enum import Enum
from typing import List, Optional
import logging
from pathlib import Path
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class ValidationSeverity(Enum):
    """Defines the severity levels for extraction diagnostics."""
    WARNING = "WARNING"  # Recognized line that could not be attached
    INFO = "INFO"        # Line matching no rule


class ValidationResult(BaseModel):
    """Represents a single diagnostic about one source line."""
    model_config = ConfigDict(frozen=True)

    severity: ValidationSeverity
    message: str
    line_number: Optional[int] = None
    line: Optional[str] = None
    diagram_type: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.now)


class ValidationCollector:
    """Collects diagnostics while a diagram is being extracted."""

    def __init__(self):
        self.results: List[ValidationResult] = []

    def add_result(self,
                   severity: ValidationSeverity,
                   message: str,
                   line_number: Optional[int] = None,
                   line: Optional[str] = None,
                   diagram_type: Optional[str] = None) -> None:
        """Record a diagnostic and log it.

        Args:
            severity: The severity level of the issue
            message: Description of the issue
            line_number: 1-based number of the offending source line
            line: The stripped text of that line
            diagram_type: Diagram type the extractor was working on
        """
        result = ValidationResult(
            severity=severity,
            message=message,
            line_number=line_number,
            line=line,
            diagram_type=diagram_type,
        )
        self.results.append(result)
        self._log_result(result)

    def _log_result(self, result: ValidationResult) -> None:
        log_message = self._format_log_message(result)
        if result.severity == ValidationSeverity.WARNING:
            logger.warning(log_message)
        else:
            logger.debug(log_message)

    def save_report(self, output_path: Path) -> None:
        """Save collected diagnostics to a file.

        Args:
            output_path: Path where to save the report
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write("PlantUML Extraction Report\n")
            f.write("=" * 50 + "\n")
            f.write(f"Total Issues: {len(self.results)}\n")
            f.write("-" * 50 + "\n")

            for severity in ValidationSeverity:
                results = self.get_results_by_severity(severity)
                if results:
                    f.write(f"\n{severity.value} Issues ({len(results)}):\n")
                    f.write("-" * 30 + "\n")
                    for result in results:
                        f.write(f"- {result.message}\n")
                        if result.line_number is not None:
                            f.write(f"  Line {result.line_number}: {result.line}\n")
                        if result.diagram_type:
                            f.write(f"  Diagram Type: {result.diagram_type}\n")
                        f.write("\n")

    @staticmethod
    def _format_log_message(result: ValidationResult) -> str:
        message = f"{result.severity.value}: {result.message}"
        if result.line_number is not None:
            message += f" (Line {result.line_number}: {result.line!r})"
        return message

    def get_results_by_severity(self, severity: ValidationSeverity) -> List[ValidationResult]:
        """Get all diagnostics of a specific severity."""
        return [r for r in self.results if r.severity == severity]

    @property
    def has_warnings(self) -> bool:
        """True if any recognized line could not be used."""
        return any(r.severity == ValidationSeverity.WARNING for r in self.results)
