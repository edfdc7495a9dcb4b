"""
C Emitter for Teeny Tiny
========================

This module accumulates the C code produced by the parser and serializes
it into one translation unit. The parser calls it as a side effect of
recognizing each grammar production; the emitter itself never validates
anything and never fails.

Output Layout
-------------
    /* banner (optional) */
    #include <stdio.h>

    float tt_x;                 <- header stream, one line per variable

    int main(void) {
        tt_x = 5.0;             <- body stream, program order
        printf("%.2f\\n", (float)(tt_x));
        return 0;
    }

Fragments vs Lines
------------------
Expressions arrive a token at a time, so ``emit()`` appends a fragment
to the line under construction and ``emit_line()`` completes it. Body
lines are indented by the current block depth.

Usage
-----
>>> emitter = Emitter()
>>> emitter.emit_header("float x;")
>>> emitter.emit("x = ")
>>> emitter.emit("5")
>>> emitter.emit_line(";")
>>> print(emitter.finalize())
"""

from contextlib import contextmanager
from typing import Iterator, Optional


PROLOGUE = ["#include <stdio.h>"]
MAIN_ENTRY = "int main(void) {"
EPILOGUE_BODY = ["return 0;"]
EPILOGUE = ["}"]

# Characters that cannot appear verbatim inside a printf format string.
# '?' is escaped so "??!" and friends are not read as trigraphs.
_FORMAT_ESCAPES = {
    "\\": "\\\\",
    "%": "%%",
    "\t": "\\t",
    "?": "\\?",
}

# Prefix for every emitted variable and label; keeps C keywords and
# <stdio.h> names out of the program's namespace
NAME_PREFIX = "tt_"


def escape_format_string(text: str) -> str:
    """Escape text so printf() prints it unchanged."""
    return "".join(_FORMAT_ESCAPES.get(char, char) for char in text)


def c_name(name: str) -> str:
    """C identifier for a Teeny Tiny variable or label."""
    return NAME_PREFIX + name


def c_number(text: str) -> str:
    """
    C floating constant for a Teeny Tiny number literal.

    Integer literals get a ".0" so C neither divides them as ints nor
    reads a leading zero as octal.
    """
    if "." in text:
        return text
    return text + ".0"


class Emitter:
    """
    Accumulates C source in a header stream and a body stream.

    Attributes:
        indent_unit: Text used for one level of body indentation
        banner: Optional comment placed before the prologue
    """

    def __init__(self, indent_unit: str = "    ", banner: Optional[str] = None):
        self.indent_unit = indent_unit
        self.banner = banner

        self._header: list[str] = []
        self._body: list[str] = []

        # Line under construction; fragments collect here until emit_line()
        self._current: list[str] = []

        # Body depth inside main(); main itself is depth 1
        self._depth = 1

        # Stack of detached buffers opened by capture()
        self._captures: list[list[str]] = []

    # =========================================================================
    # Stream Methods
    # =========================================================================

    def emit_header(self, line: str) -> None:
        """Append a complete line to the header stream."""
        self._header.append(line)

    def emit(self, fragment: str) -> None:
        """Append a fragment to the current body line."""
        if self._captures:
            self._captures[-1].append(fragment)
        else:
            self._current.append(fragment)

    def emit_line(self, fragment: str = "") -> None:
        """Append a fragment and finish the current body line."""
        self.emit(fragment)
        if self._captures:
            return
        text = "".join(self._current)
        self._current = []
        self._body.append(self.indent_unit * self._depth + text)

    def indent(self) -> None:
        """Open a nested block."""
        self._depth += 1

    def dedent(self) -> None:
        """Close a nested block."""
        if self._depth > 1:
            self._depth -= 1

    @contextmanager
    def capture(self) -> Iterator[list[str]]:
        """
        Redirect body fragments into a detached buffer.

        The yielded list receives every fragment emitted inside the
        ``with`` block; nothing reaches the body stream. The parser uses
        this to obtain the text of an expression it must repeat.

            with emitter.capture() as parts:
                parser.expression()
            text = "".join(parts)
        """
        buffer: list[str] = []
        self._captures.append(buffer)
        try:
            yield buffer
        finally:
            self._captures.pop()

    # =========================================================================
    # Statement Helpers
    # =========================================================================

    def emit_print_string(self, text: str) -> None:
        self.emit_line(f'printf("{escape_format_string(text)}\\n");')

    def begin_print_number(self, float_format: str = "%.2f") -> None:
        """Start a numeric PRINT; the caller emits the expression then end_print_number()."""
        self.emit(f'printf("{float_format}\\n", (float)(')

    def end_print_number(self) -> None:
        self.emit_line("));")

    def emit_input(self, name: str) -> None:
        """
        Read one float into name.

        A failed conversion sets the variable to 0 and discards the
        offending word so later INPUTs are not stuck on it.
        """
        target = c_name(name)
        self.emit_line(f'if (0 == scanf("%f", &{target})) {{')
        self.indent()
        self.emit_line(f"{target} = 0;")
        self.emit_line('scanf("%*s");')
        self.dedent()
        self.emit_line("}")

    def emit_declaration(self, name: str) -> None:
        self.emit_header(f"float {c_name(name)};")

    # =========================================================================
    # Serialization
    # =========================================================================

    @property
    def header(self) -> list[str]:
        return list(self._header)

    @property
    def body(self) -> list[str]:
        return list(self._body)

    def finalize(self) -> str:
        """
        Build the complete C translation unit.

        Returns:
            Prologue, header declarations, main() entry, body and
            epilogue joined into one newline-terminated string
        """
        lines: list[str] = []

        if self.banner:
            # A "*/" inside the banner would end the comment early
            text = self.banner.replace("*/", "* /")
            lines.append(f"/* {text} */")
        lines.extend(PROLOGUE)
        lines.append("")

        if self._header:
            lines.extend(self._header)
            lines.append("")

        lines.append(MAIN_ENTRY)
        lines.extend(self._body)
        lines.extend(self.indent_unit + line for line in EPILOGUE_BODY)
        lines.extend(EPILOGUE)

        return "\n".join(lines) + "\n"
