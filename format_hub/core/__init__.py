"""Subtitle document model and text helpers.

WHY: Both subtitle formats parse into and render from the same in-memory
model. Keeping the model and its small text utilities here keeps the
format modules focused on their own wire syntax.

HOW: document.py defines the dataclasses, markup.py holds tag stripping
and XML escaping, timestamps.py converts between the two timestamp
separators, and metadata.py loads user-supplied metadata files.

RULES:
- Nothing in core knows about file formats or handlers
- All helpers are pure functions over strings
"""
