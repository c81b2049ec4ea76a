"""Sphinx configuration for ytupload documentation."""

import importlib.metadata

# -- Project information -----------------------------------------------------

project = "ytupload"
author = "ytupload contributors"
copyright = "2026, ytupload contributors"
release = importlib.metadata.version("ytupload")
version = ".".join(release.split(".")[:2])

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.intersphinx",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx_copybutton",
    "myst_parser",
]

root_doc = "index"
exclude_patterns = ["_build"]

# -- Options for autodoc -----------------------------------------------------

autodoc_member_order = "bysource"
autodoc_typehints = "description"
autodoc_typehints_description_target = "documented"
# Keep pydantic internals out of model pages
autodoc_class_signature = "separated"
autodoc_default_options = {"exclude-members": "model_config, model_fields, model_computed_fields"}

# -- Options for Napoleon (Google-style docstrings) --------------------------

napoleon_google_docstring = True
napoleon_numpy_docstring = False
napoleon_attr_annotations = True

# -- Options for intersphinx -------------------------------------------------

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "httpx": ("https://www.python-httpx.org/", None),
    "pydantic": ("https://docs.pydantic.dev/latest/", None),
}

# -- Options for MyST (Markdown support) -------------------------------------

source_suffix = {
    ".rst": "restructuredtext",
    ".md": "markdown",
}

myst_enable_extensions = [
    "colon_fence",
    "deflist",
]

# -- Options for HTML output -------------------------------------------------

html_theme = "furo"
html_title = f"ytupload {release}"

html_theme_options = {
    "navigation_with_keys": True,
}

# -- Options for sphinx-copybutton -------------------------------------------

copybutton_prompt_text = r"^\$ "
copybutton_prompt_is_regexp = True
