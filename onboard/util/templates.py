"""Jinja2 template environment shared by emails and HTML pages."""

from pathlib import Path

import jinja2

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def create_environment() -> jinja2.Environment:
    """Create the template environment.

    Autoescaping is on for .html templates and off for .txt ones.
    """
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(TEMPLATES_DIR),
        autoescape=jinja2.select_autoescape(["html"]),
        undefined=jinja2.StrictUndefined,
    )


environment = create_environment()
