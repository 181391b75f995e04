"""Jinja2 integration: include the template a higher layer hides.

With roots ``[skin, site, default]`` each supplying ``page.html``, the skin's
template can decorate the site's version (which in turn can decorate the
default one)::

    {# skin/page.html #}
    <div class="skin">{% include next_layer() %}</div>

``next_layer()`` names the template supplied by the next lower layer; Jinja2
loads, caches and renders it with the current context as for any include.

The environment's resolver is one resolution session. Build one environment
per session (``make_environment(resolver.session())``) when records must not
be shared.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

from jinja2 import BaseLoader, Environment, TemplateNotFound, pass_context
from jinja2.runtime import Context

from nextlayer.core.exceptions import InvalidRelativePathError, NoNextLayerError, UnknownResumptionError
from nextlayer.core.paths import is_absolute, normalize
from nextlayer.core.resolver import LayeredPathResolver


class LayeredLoader(BaseLoader):
    """Load templates through a :class:`LayeredPathResolver`.

    Relative names resolve to the highest-priority layer supplying them.
    Absolute names must be resumption tokens produced by the same resolver.
    """

    def __init__(self, resolver: LayeredPathResolver, encoding: str = "utf-8") -> None:
        self.resolver = resolver
        self.encoding = encoding

    def _locate(self, template: str) -> str:
        if is_absolute(template, style=self.resolver.style):
            token = normalize(template, style=self.resolver.style)
            if token not in self.resolver.record:
                raise UnknownResumptionError(
                    f"Template {token} was not reached through layered resolution",
                    context={"path": token},
                )
            return token
        try:
            hit = self.resolver.resolve_first(template)
        except InvalidRelativePathError:
            raise TemplateNotFound(template) from None
        if hit is None:
            raise TemplateNotFound(template)
        return hit.absolute_path

    def get_source(self, environment: Environment, template: str) -> Tuple[str, str, Callable[[], bool]]:
        path = self._locate(template)
        try:
            with open(path, encoding=self.encoding) as f:
                source = f.read()
            mtime = os.path.getmtime(path)
        except OSError:
            raise TemplateNotFound(template) from None

        def uptodate() -> bool:
            try:
                return os.path.getmtime(path) == mtime
            except OSError:
                return False

        return source, path, uptodate

    def list_templates(self) -> List[str]:
        found = set()
        for root in self.resolver.search_path.roots:
            base = Path(root)
            if not base.is_dir():
                continue
            for dirpath, _, filenames in os.walk(base):
                for filename in filenames:
                    rel = (Path(dirpath) / filename).relative_to(base)
                    found.add(rel.as_posix())
        return sorted(found)


def make_next_layer(resolver: LayeredPathResolver) -> Callable[..., str]:
    """Build the ``next_layer()`` template global bound to ``resolver``."""

    @pass_context
    def next_layer(context: Context, name: Optional[str] = None) -> str:
        current = name or context.name
        if not current:
            raise NoNextLayerError("next_layer() needs a template name outside named templates")
        return resolver.require(current).absolute_path

    return next_layer


def make_environment(resolver: LayeredPathResolver, **env_kwargs: Any) -> Environment:
    """Return an Environment loading through ``resolver`` with ``next_layer`` installed."""
    env = Environment(loader=LayeredLoader(resolver), **env_kwargs)
    env.globals["next_layer"] = make_next_layer(resolver)
    return env


__all__ = ["LayeredLoader", "make_environment", "make_next_layer"]
