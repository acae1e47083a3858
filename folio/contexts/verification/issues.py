"""Verification issue and report data structures."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

ERROR = "error"
WARNING = "warning"


@dataclass
class Issue:
    """
    One problem found in the site content.

    Attributes:
        severity: ERROR blocks a build; WARNING is reported only
        code: Stable machine-readable identifier (e.g., "link.broken")
        message: Human-readable description
        source: Content file the issue was found in
        line: 1-based line number in the source file, if known
    """

    severity: str
    code: str
    message: str
    source: Optional[Path] = None
    line: Optional[int] = None

    @property
    def location(self) -> str:
        if self.source is None:
            return "<site>"
        return f"{self.source}:{self.line}" if self.line else str(self.source)

    def __str__(self) -> str:
        return f"{self.location}: {self.severity}: [{self.code}] {self.message}"


@dataclass
class VerificationReport:
    """
    Result of checking a site.

    Attributes:
        issues: Every issue found, in discovery order
        documents_checked: Number of documents examined
        log_dir: Directory containing the verification log (orchestrated runs only)
    """

    issues: List[Issue] = field(default_factory=list)
    documents_checked: int = 0
    log_dir: Optional[Path] = None

    @property
    def errors(self) -> List[Issue]:
        return [issue for issue in self.issues if issue.severity == ERROR]

    @property
    def warnings(self) -> List[Issue]:
        return [issue for issue in self.issues if issue.severity == WARNING]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def codes(self) -> List[str]:
        return [issue.code for issue in self.issues]
