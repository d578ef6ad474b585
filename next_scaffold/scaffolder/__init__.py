"""Template rendering for scaffolded files.

Quick usage::

    from next_scaffold.scaffolder import TemplateRenderer

    renderer = TemplateRenderer()
    content = renderer.render("project/app/loading.tsx.j2", {})
"""

from next_scaffold.scaffolder.templates import TemplateRenderer

__all__ = [
    "TemplateRenderer",
]
