"""Test suite for the textstub package.

This package contains unit and integration tests validating the generic
value accessors, document extraction, re-export squashing, the parse
driver and the command-line utilities.
"""
