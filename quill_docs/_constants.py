"""Common literal values used across quill_docs.

These constants keep version strings, style names, and placeholder tokens
centralized so generators, templates, and tests can import the same values
without drifting. Intended for internal use within the quill_docs package.

Examples
--------
>>> from quill_docs import _constants
>>> _constants.PAGE_ID_PLACEHOLDER
'{page-id}'
>>> "scenario-based" in _constants.UI_ELEMENT_STYLES
True
"""

VERSION = "1.1.0"
PRODUCT_NAME = "Quill"

UI_ELEMENT_STYLES = ("technical", "functional", "scenario-based")
ELEMENT_TYPES = ("button", "input", "form", "link", "section", "heading", "other")

PAGE_ID_PLACEHOLDER = "{page-id}"
FEATURE_ID_PLACEHOLDER = "{feature-id}"

MAX_PAGE_LEVEL = 6
