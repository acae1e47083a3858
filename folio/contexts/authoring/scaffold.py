"""Scaffolding for new content files."""

from datetime import date
from pathlib import Path
from typing import Iterable, Optional

from omegaconf import OmegaConf

from folio.contexts.authoring.logger import log_post_created
from folio.utils.site_config import SiteConfig
from folio.utils.text_processing import slugify

POST_BODY_STUB = "Introduce the problem here.\n"


def render_post_file(
    title: str, on_date: date, description: Optional[str], keywords: Iterable[str]
) -> str:
    """Build the text of a new draft post: front-matter block plus stub body."""
    front_matter = {"title": title, "date": on_date.isoformat()}
    if description:
        front_matter["description"] = description
    front_matter["keywords"] = list(keywords)
    front_matter["draft"] = True

    yaml_text = OmegaConf.to_yaml(OmegaConf.create(front_matter))
    return f"---\n{yaml_text}---\n\n{POST_BODY_STUB}"


def new_post(
    config: SiteConfig,
    title: str,
    on_date: Optional[date] = None,
    description: Optional[str] = None,
    keywords: Iterable[str] = (),
) -> Path:
    """
    Create a draft post named YYYY-MM-DD-slug.md in the posts directory.

    Args:
        config: Site configuration
        title: Post title (slug is derived from it)
        on_date: Publication date (default: today)
        description: Optional summary
        keywords: Optional keywords

    Returns:
        Path of the created file

    Raises:
        ValueError: If the title has no characters usable in a slug
        FileExistsError: If a post with the same date and slug exists
    """
    on_date = on_date or date.today()
    slug = slugify(title)
    if not slug:
        raise ValueError(f"Cannot derive a slug from title: {title!r}")

    path = config.posts_path / f"{on_date.isoformat()}-{slug}.md"
    if path.exists():
        raise FileExistsError(f"Post already exists: {path}")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_post_file(title, on_date, description, keywords), encoding="utf-8")

    log_post_created(path)
    return path
