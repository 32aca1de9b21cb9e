# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Project information -----------------------------------------------------

from leapwave.version import leapwave_version

project = "leapwave"
copyright = "2026, leapwave developers"
author = "leapwave developers"

release = leapwave_version

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosectionlabel",
    "numpydoc",
]

templates_path = ["_templates"]
numpydoc_show_class_members = False

# -- Options for HTML output -------------------------------------------------

html_theme = "furo"
