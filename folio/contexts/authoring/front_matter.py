"""
Front-matter splitting, parsing and coercion.

A content file starts with a YAML block between "---" lines:

    ---
    title: Least-squares sphere fitting
    date: 2019-06-02
    keywords: [least squares, geometry]
    ---
    Body in markdown...

The YAML is read with OmegaConf without resolving interpolations, so LaTeX in
titles and descriptions is kept verbatim. OmegaConf's loader keeps dates as
strings and rejects duplicate keys.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException
from yaml import YAMLError

from folio.contexts.authoring.content_patterns import (
    ContentRegex,
    DatePatterns,
    FrontMatterPatterns,
)
from folio.contexts.authoring.document import POST, FrontMatter
from folio.contexts.authoring.exceptions import FrontMatterError

KNOWN_FIELDS = ("title", "date", "description", "keywords", "permalink", "layout", "draft")


def split_front_matter(
    text: str, source_path: Optional[Path] = None
) -> Tuple[str, str, int]:
    """
    Split a content file into its front-matter YAML and markdown body.

    Args:
        text: Full file content
        source_path: Used in error messages

    Returns:
        (yaml_text, body, body_line_offset) where body_line_offset is the number
        of file lines before the first body line

    Raises:
        FrontMatterError: If the file does not open with "---" or the block is never closed
    """
    if text.startswith(FrontMatterPatterns.BOM):
        text = text[len(FrontMatterPatterns.BOM):]

    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != FrontMatterPatterns.OPEN:
        raise FrontMatterError(
            "Missing front-matter block (file must start with '---')",
            source_path=source_path,
            line=1,
        )

    for index in range(1, len(lines)):
        if lines[index].rstrip() in FrontMatterPatterns.CLOSE:
            yaml_text = "".join(lines[1:index])
            body = "".join(lines[index + 1:])
            return yaml_text, body, index + 1

    raise FrontMatterError(
        "Unclosed front-matter block (no closing '---')",
        source_path=source_path,
        line=1,
    )


def parse_front_matter(yaml_text: str, source_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Parse front-matter YAML into a plain dict.

    Args:
        yaml_text: Text between the front-matter delimiters
        source_path: Used in error messages

    Returns:
        Dict of front-matter keys (empty for an empty block)

    Raises:
        FrontMatterError: On YAML syntax errors, duplicate keys, or non-mapping content
    """
    if not yaml_text.strip():
        return {}

    try:
        conf = OmegaConf.create(yaml_text)
    except (YAMLError, OmegaConfBaseException) as e:
        mark = getattr(e, "problem_mark", None)
        # +2: one for the opening delimiter, one for 0-based marks
        line = mark.line + 2 if mark is not None else None
        raise FrontMatterError(
            "Invalid YAML in front-matter",
            source_path=source_path,
            line=line,
            original_error=e,
        ) from e

    if not isinstance(conf, DictConfig):
        raise FrontMatterError(
            "Front-matter must be a mapping of keys to values",
            source_path=source_path,
            line=2,
        )

    return OmegaConf.to_container(conf, resolve=False)


def parse_date(value: Any, source_path: Optional[Path] = None) -> date:
    """
    Parse a front-matter date.

    Accepts date/datetime objects and strings in DatePatterns.FORMATS, with an
    optional trailing timezone offset ("Z", "+01:00", "-0500") that is ignored.

    Raises:
        FrontMatterError: If the value is not a recognizable date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = ContentRegex.TIMEZONE_SUFFIX.sub("", str(value).strip())
    for fmt in DatePatterns.FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    raise FrontMatterError(
        f"Unrecognized date '{value}' (expected YYYY-MM-DD)",
        source_path=source_path,
        field="date",
    )


def _coerce_keywords(value: Any, source_path: Optional[Path]) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [kw.strip() for kw in value.split(",") if kw.strip()]
    if isinstance(value, list) and all(not isinstance(kw, (dict, list)) for kw in value):
        return [str(kw).strip() for kw in value if str(kw).strip()]
    raise FrontMatterError(
        "Keywords must be a list or a comma-separated string",
        source_path=source_path,
        field="keywords",
    )


def _coerce_text(value: Any, field_name: str, source_path: Optional[Path]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise FrontMatterError(
            f"Field '{field_name}' must be a single value",
            source_path=source_path,
            field=field_name,
        )
    return str(value)


def coerce_front_matter(
    data: Dict[str, Any],
    kind: str,
    source_path: Optional[Path] = None,
    fallback_date: Optional[date] = None,
) -> FrontMatter:
    """
    Validate front-matter values and build a FrontMatter.

    Args:
        data: Parsed front-matter dict
        kind: Document kind (PAGE or POST); posts require a date
        source_path: Used in error messages
        fallback_date: Date to use when the front-matter has none (from the file name)

    Returns:
        FrontMatter with unknown keys collected in extra

    Raises:
        FrontMatterError: If a required field is missing or a value has the wrong shape
    """
    title = _coerce_text(data.get("title"), "title", source_path)
    if not title or not title.strip():
        raise FrontMatterError("Missing required field", source_path=source_path, field="title")

    raw_date = data.get("date")
    doc_date = parse_date(raw_date, source_path) if raw_date is not None else fallback_date
    if kind == POST and doc_date is None:
        raise FrontMatterError(
            "Posts need a date (front-matter or YYYY-MM-DD- file name prefix)",
            source_path=source_path,
            field="date",
        )

    permalink = _coerce_text(data.get("permalink"), "permalink", source_path)
    if permalink is not None and not permalink.startswith("/"):
        raise FrontMatterError(
            f"Permalink '{permalink}' must start with '/'",
            source_path=source_path,
            field="permalink",
        )

    draft = data.get("draft", False)
    if not isinstance(draft, bool):
        raise FrontMatterError(
            "Field 'draft' must be true or false", source_path=source_path, field="draft"
        )

    return FrontMatter(
        title=title.strip(),
        date=doc_date,
        description=_coerce_text(data.get("description"), "description", source_path),
        keywords=_coerce_keywords(data.get("keywords"), source_path),
        permalink=permalink,
        layout=_coerce_text(data.get("layout"), "layout", source_path),
        draft=draft,
        extra={key: value for key, value in data.items() if key not in KNOWN_FIELDS},
    )
