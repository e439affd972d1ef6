"""create-typezero scaffolder -- turns a fetched template into a project.

This package installs a template with the invoking package manager, mirrors
its files into the target root, and writes a ``package.json`` carrying the new
project's name and initial version.

Quick usage::

    from create_typezero.scaffolder import ManifestRewriter, TemplateProvider, materialize

    async with TemplateProvider(config).fetch("typezero") as bundle:
        materialize(bundle.template_root, root, excluding={"package.json"})
        ManifestRewriter().rewrite(bundle.template_root, root, "my-app")
"""

from create_typezero.scaffolder.manifest import ManifestDocument, ManifestRewriter
from create_typezero.scaffolder.materializer import (
    MaterializationError,
    materialize,
    materialize_async,
)
from create_typezero.scaffolder.template_provider import FetchError, TemplateBundle, TemplateProvider

__all__ = [
    "FetchError",
    "ManifestDocument",
    "ManifestRewriter",
    "MaterializationError",
    "TemplateBundle",
    "TemplateProvider",
    "materialize",
    "materialize_async",
]
