"""Format Hub — pluggable file-format conversion framework.

WHY: Every file format needs its own parsing and rendering rules, but the
host (CLI, HTTP API) should not care which module does the work. Handlers
declare the formats they read and write; the host matches a requested
pair against those declarations and hands the bytes over.

HOW: Three layers — handlers (the FormatHandler contract and its
implementations), formats (subtitle parsers and serializers), and core
(the subtitle document model plus text helpers). The registry, CLI and
API sit on top.

RULES:
- Handlers are the only unit the host talks to
- Routing uses the ``internal`` id of a FileFormat, never its label
- Adding a new format = one new handler module registered in HANDLERS
"""

__version__ = "0.1.0"
