"""
Verification Context

Responsibilities:
- Reports content files that failed to load
- Checks markdown/LaTeX well-formedness (code fences, math delimiters, braces, environments)
- Checks that internal links and images resolve on the published site
- Flags duplicate URLs and posts missing metadata

Owns: Issue codes, verification reports
Never: Modifies content or writes output
"""

from folio.contexts.verification.issues import ERROR, WARNING, Issue, VerificationReport
from folio.contexts.verification.validator import check_site, verify_site

__all__ = [
    "ERROR",
    "WARNING",
    "Issue",
    "VerificationReport",
    "check_site",
    "verify_site",
]
