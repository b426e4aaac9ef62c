# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codesubmit

"""Catalog of supported languages and the engine kind each one runs on."""

from enum import Enum

from pydantic import BaseModel


class AdapterKind(str, Enum):
    """The four execution strategies a language can be bound to."""

    DIRECT = "direct"
    NATIVE = "native"
    VM = "vm"
    EMBEDDED = "embedded"


class Language(BaseModel):
    """A language the submission surface accepts.

    Attributes:
        id: Stable identifier used by callers of the dispatcher.
        name: Display name.
        extensions: File extensions accepted at intake.
        mime: MIME type of the source files.
        adapter: Engine kind the language is executed with.
        is_executable: Whether files in this language can be run at all.
        description: Short human-readable note about execution support.
    """

    id: str
    name: str
    extensions: tuple[str, ...]
    mime: str
    adapter: AdapterKind
    is_executable: bool = True
    description: str = ""


LANGUAGES: tuple[Language, ...] = (
    Language(
        id="python",
        name="Python",
        extensions=(".py",),
        mime="text/x-python",
        adapter=AdapterKind.EMBEDDED,
        description="Execution supported.",
    ),
    Language(
        id="java",
        name="Java",
        extensions=(".java",),
        mime="text/x-java-source",
        adapter=AdapterKind.VM,
        description="Execution via the JVM (BeanShell).",
    ),
    Language(
        id="cpp",
        name="C++",
        extensions=(".cpp", ".h", ".hpp", ".c"),
        mime="text/x-c",
        adapter=AdapterKind.NATIVE,
        description="Execution (Beta).",
    ),
    Language(
        id="c",
        name="C",
        extensions=(".c", ".h"),
        mime="text/x-c",
        adapter=AdapterKind.NATIVE,
        description="Execution (Beta).",
    ),
    Language(
        id="python-inline",
        name="Python (in-process)",
        extensions=(".py",),
        mime="text/x-python",
        adapter=AdapterKind.DIRECT,
        description="Evaluated in the host process with a console object.",
    ),
)

_BY_ID = {lang.id: lang for lang in LANGUAGES}


def resolve_language(language_id: str) -> Language | None:
    """Look up a language by id. Returns None for unknown ids."""
    return _BY_ID.get(language_id)


def get_language(language_id: str) -> Language:
    """Look up a language by id, falling back to the first catalog entry."""
    return _BY_ID.get(language_id, LANGUAGES[0])
