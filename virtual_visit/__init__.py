"""Decoding of virtual visit summaries.

This package turns loosely structured visit summary documents from the
virtual-care backend into immutable domain models, tolerating fields that
older or newer API versions omit.
"""
