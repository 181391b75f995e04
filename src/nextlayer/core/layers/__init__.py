"""Search path (layer stack) definitions.

A search path lists overlay roots from highest to lowest priority:

  skin (/templates/c) → site (/templates/b) → default (/templates/a)

Roots are configured via ``search_path.roots`` in YAML config, the
``NEXTLAYER_PATH`` environment variable, or passed directly.
"""

from .stack import LayerSpec, SearchPath

__all__ = ["LayerSpec", "SearchPath"]
