"""Jinja2 template utilities for LLM components."""

from jinja2 import Environment, PackageLoader, select_autoescape


def create_jinja_env() -> Environment:
    """Create Jinja2 environment for LLM templates.

    Loads templates from the smartctx.infrastructure.llm templates package
    directory. Autoescaping is off for .j2 files since the output is plain
    prompt text.

    Returns:
        Configured Jinja2 environment.
    """
    return Environment(
        loader=PackageLoader("smartctx.infrastructure.llm", "templates"),
        autoescape=select_autoescape(enabled_extensions=("html", "xml")),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
    )
