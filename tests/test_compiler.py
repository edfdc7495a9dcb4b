# =============================================================================
# test_compiler.py - End-to-End Compiler Tests
# =============================================================================
# Tests for the compiler driver: complete translation units, options,
# file handling and the bundled sample programs.
# =============================================================================

import shutil
import subprocess
from pathlib import Path

import pytest
from teeny_tiny import (
    CompilerOptions,
    CompileError,
    LexError,
    ParseError,
    TeenyTinyCompiler,
    compile_file,
    compile_teeny,
)
from teeny_tiny.compiler import (
    InvalidNumberError,
    UndeclaredVariableError,
    UnterminatedStringError,
    tokenize,
)

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"
GCC = shutil.which("gcc")


# =============================================================================
# Complete Program Tests
# =============================================================================

class TestCompletePrograms:
    """Whole programs compiled to C."""

    def test_let_and_print(self):
        assert compile_teeny("LET x = 5\nPRINT x\n") == (
            "/* Generated by ttc from <input> */\n"
            "#include <stdio.h>\n"
            "\n"
            "float tt_x;\n"
            "\n"
            "int main(void) {\n"
            "    tt_x = 5.0;\n"
            '    printf("%.2f\\n", (float)(tt_x));\n'
            "    return 0;\n"
            "}\n"
        )

    def test_print_string_has_no_declarations(self):
        output = compile_teeny('PRINT "Hi"\n')
        assert 'printf("Hi\\n");' in output
        assert "float " not in output

    def test_empty_program(self):
        output = compile_teeny("")
        assert "int main(void) {\n    return 0;\n}\n" in output

    def test_comment_only_program(self):
        output = compile_teeny("# nothing to do\n\n")
        assert "int main(void) {\n    return 0;\n}\n" in output

    def test_declarations_in_first_assignment_order(self):
        output = compile_teeny("INPUT b\nLET a = b\nLET b = a\n")
        assert "float tt_b;\nfloat tt_a;\n" in output

    def test_forward_goto(self):
        output = compile_teeny('GOTO end\nPRINT "never"\nLABEL end\n')
        assert "    goto tt_end;\n" in output
        assert "    tt_end:;\n" in output

    def test_chained_comparison(self):
        output = compile_teeny("LET a = 1\nIF 0 < a < 2 THEN\nPRINT a\nENDIF\n")
        assert "    if (0.0 < tt_a && tt_a < 2.0) {\n" in output

    def test_output_is_deterministic(self):
        source = (EXAMPLES_DIR / "minmax.teeny").read_text()
        assert compile_teeny(source) == compile_teeny(source)


# =============================================================================
# Error Propagation Tests
# =============================================================================

class TestErrors:
    """Errors reach the caller as their concrete types."""

    def test_unterminated_string(self):
        with pytest.raises(UnterminatedStringError) as exc_info:
            compile_teeny('PRINT "oops\n')
        assert exc_info.value.line == 1

    def test_invalid_number(self):
        with pytest.raises(InvalidNumberError):
            compile_teeny("LET x = 1.2.3\n")

    def test_lex_error_hierarchy(self):
        with pytest.raises(LexError):
            compile_teeny("LET x = 1 @ 2\n")

    def test_parse_error_hierarchy(self):
        with pytest.raises(ParseError):
            compile_teeny("PRINT\n")

    def test_error_names_file(self):
        with pytest.raises(UndeclaredVariableError) as exc_info:
            TeenyTinyCompiler().compile_source("PRINT y\n", "prog.teeny")
        assert str(exc_info.value).startswith("prog.teeny:1:7: error: undeclared variable 'y'")

    def test_all_errors_are_compile_errors(self):
        for source in ('PRINT "x\n', "LET = 1\n", "GOTO nowhere\n"):
            with pytest.raises(CompileError):
                compile_teeny(source)


# =============================================================================
# Options Tests
# =============================================================================

class TestOptions:
    """CompilerOptions effects on the generated C."""

    def test_no_banner(self):
        compiler = TeenyTinyCompiler(CompilerOptions(emit_comments=False))
        output = compiler.compile_source('PRINT "Hi"\n').output
        assert output.startswith("#include <stdio.h>\n")

    def test_banner_names_source(self):
        output = TeenyTinyCompiler().compile_source('PRINT "Hi"\n', "hi.teeny").output
        assert output.startswith("/* Generated by ttc from hi.teeny */\n")

    def test_banner_with_comment_terminator(self):
        """A "*/" in the filename must not close the banner comment."""
        output = TeenyTinyCompiler().compile_source('PRINT "Hi"\n', "odd*/name.teeny").output
        assert output.startswith("/* Generated by ttc from odd* /name.teeny */\n#include")

    def test_float_format(self):
        compiler = TeenyTinyCompiler(CompilerOptions(float_format="%g"))
        output = compiler.compile_source("PRINT 1\n").output
        assert 'printf("%g\\n", (float)(1.0));' in output

    def test_indent(self):
        compiler = TeenyTinyCompiler(CompilerOptions(indent="  "))
        output = compiler.compile_source("IF 1 < 2 THEN\nPRINT 1\nENDIF\n").output
        assert "  if (1.0 < 2.0) {\n" in output
        assert '    printf("%.2f\\n", (float)(1.0));\n' in output
        assert "  return 0;\n" in output


# =============================================================================
# Result Tests
# =============================================================================

class TestCompilerResult:
    """Metadata returned alongside the C."""

    def test_result_fields(self):
        result = TeenyTinyCompiler().compile_source(
            "LET b = 1\nINPUT a\nLABEL top\nGOTO top\n", "r.teeny",
        )
        assert result.success
        assert result.filename == "r.teeny"
        assert result.variables == ["b", "a"]
        assert result.labels == ["top"]
        assert result.warnings == []
        assert result.token_count > 0

    def test_unused_label_warning(self):
        result = TeenyTinyCompiler().compile_source("LABEL idle\n", "w.teeny")
        assert result.warnings == ["w.teeny:1:7: warning: label 'idle' is never used"]

    def test_compiler_is_reusable(self):
        """State from one program never leaks into the next."""
        compiler = TeenyTinyCompiler()
        compiler.compile_source("LET x = 1\nLABEL a\nGOTO a\n")
        with pytest.raises(UndeclaredVariableError):
            compiler.compile_source("PRINT x\n")
        result = compiler.compile_source("LABEL a\nGOTO a\n")
        assert result.variables == []

    def test_tokenize(self):
        tokens = tokenize("PRINT 1\n")
        assert [t.text for t in tokens[:2]] == ["PRINT", "1"]
        assert tokens[-1].kind.name == "EOF"


# =============================================================================
# File Tests
# =============================================================================

class TestFiles:
    """compile_file() and TeenyTinyCompiler.compile_file()."""

    def test_compile_file_writes_output(self, tmp_path):
        source = tmp_path / "hello.teeny"
        source.write_text('PRINT "hello"\n')
        target = tmp_path / "hello.c"

        output = compile_file(source, target)

        assert target.read_text() == output
        assert 'printf("hello\\n");' in output

    def test_compile_file_without_output_path(self, tmp_path):
        source = tmp_path / "hello.teeny"
        source.write_text('PRINT "hello"\n')
        compile_file(source)
        assert not (tmp_path / "hello.c").exists()

    def test_failed_compile_writes_nothing(self, tmp_path):
        source = tmp_path / "bad.teeny"
        source.write_text('PRINT "fine"\nPRINT "oops\n')
        target = tmp_path / "bad.c"

        with pytest.raises(UnterminatedStringError):
            compile_file(source, target)
        assert not target.exists()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TeenyTinyCompiler().compile_file(tmp_path / "absent.teeny")

    def test_file_errors_name_the_path(self, tmp_path):
        source = tmp_path / "typo.teeny"
        source.write_text("LET count = 1\nPRINT cuont\n")
        with pytest.raises(UndeclaredVariableError) as exc_info:
            TeenyTinyCompiler().compile_file(source)
        assert str(source) in str(exc_info.value)


# =============================================================================
# Sample Program Tests
# =============================================================================

class TestSamplePrograms:
    """Every bundled sample compiles cleanly."""

    @pytest.mark.parametrize(
        "path",
        sorted(EXAMPLES_DIR.glob("*.teeny")),
        ids=lambda p: p.name,
    )
    def test_sample_compiles(self, path):
        result = TeenyTinyCompiler().compile_file(path)
        assert result.success
        assert result.warnings == []
        assert result.output.endswith("    return 0;\n}\n")

    def test_factorial(self):
        output = compile_file(EXAMPLES_DIR / "factorial.teeny")
        assert "    while (tt_i <= tt_n) {\n        tt_f = tt_f * tt_i;\n" in output

    def test_statements_sample(self):
        output = compile_file(EXAMPLES_DIR / "statements.teeny")
        assert "    tt_x = -3.0;\n" in output
        assert "    tt_y = +4.0 * 2.0 - tt_x / 3.0;\n" in output
        assert "    if (0.0 <= tt_x && tt_x < tt_y) {\n" in output
        assert "    tt_finish:;\n" in output


# =============================================================================
# Generated Program Tests
# =============================================================================

def build_and_run(tmp_path: Path, source: str, stdin: str = "") -> str:
    """Compile source to C, build it with gcc and return what it prints."""
    c_file = tmp_path / "program.c"
    executable = tmp_path / "program"
    c_file.write_text(compile_teeny(source))

    build = subprocess.run(
        [GCC, "-std=c99", "-o", str(executable), str(c_file)],
        capture_output=True,
        text=True,
    )
    assert build.returncode == 0, f"gcc failed:\n{build.stderr}"

    run = subprocess.run(
        [str(executable)],
        input=stdin,
        capture_output=True,
        text=True,
        timeout=10,
    )
    assert run.returncode == 0
    return run.stdout


@pytest.mark.skipif(GCC is None, reason="gcc not available")
class TestGeneratedProgram:
    """Build the generated C with gcc and check what it prints."""

    def test_let_and_print(self, tmp_path):
        assert build_and_run(tmp_path, "LET x = 5\nPRINT x\n") == "5.00\n"

    def test_print_string(self, tmp_path):
        assert build_and_run(tmp_path, 'PRINT "Hi"\n') == "Hi\n"

    def test_division_is_floating_point(self, tmp_path):
        output = build_and_run(tmp_path, "PRINT 1 / 2\nLET x = 7 / 2\nPRINT x\nPRINT 1 / 3\n")
        assert output == "0.50\n3.50\n0.33\n"

    def test_large_products_do_not_overflow(self, tmp_path):
        assert build_and_run(tmp_path, "PRINT 100000 * 100000\n") == "10000000000.00\n"

    def test_leading_zeros_are_decimal(self, tmp_path):
        output = build_and_run(tmp_path, "LET x = 010\nPRINT x\nLET y = 09\nPRINT y\n")
        assert output == "10.00\n9.00\n"

    def test_string_printed_verbatim(self, tmp_path):
        source = 'PRINT "what??! 100% \\ done"\n'
        assert build_and_run(tmp_path, source) == "what??! 100% \\ done\n"

    def test_self_referencing_let(self, tmp_path):
        assert build_and_run(tmp_path, "LET x = x + 1\nPRINT x\n") == "1.00\n"

    def test_c_reserved_names(self, tmp_path):
        source = (
            "LET int = 2\n"
            "LET main = int * 3\n"
            "LET printf = main\n"
            "GOTO while\n"
            "PRINT 0\n"
            "LABEL while\n"
            "PRINT printf\n"
        )
        assert build_and_run(tmp_path, source) == "6.00\n"

    def test_input(self, tmp_path):
        output = build_and_run(tmp_path, "INPUT a\nPRINT a * 2\n", stdin="2.5\n")
        assert output == "5.00\n"

    def test_bad_input_reads_zero(self, tmp_path):
        """A word that is not a number yields 0 and is skipped."""
        source = "INPUT a\nINPUT b\nPRINT a\nPRINT b\n"
        assert build_and_run(tmp_path, source, stdin="oops 4\n") == "0.00\n4.00\n"

    def test_chained_comparison(self, tmp_path):
        source = (
            "LET a = 5\n"
            "IF 0 < a < 10 THEN\n"
            'PRINT "inside"\n'
            "ENDIF\n"
            "IF 0 < a < 3 THEN\n"
            'PRINT "low"\n'
            "ENDIF\n"
        )
        assert build_and_run(tmp_path, source) == "inside\n"

    def test_while_and_goto(self, tmp_path):
        source = (
            "LET i = 0\n"
            "LABEL top\n"
            "LET i = i + 1\n"
            "IF i < 3 THEN\n"
            "GOTO top\n"
            "ENDIF\n"
            "WHILE i > 0 REPEAT\n"
            "PRINT i\n"
            "LET i = i - 1\n"
            "ENDWHILE\n"
        )
        assert build_and_run(tmp_path, source) == "3.00\n2.00\n1.00\n"

    def test_factorial_sample(self, tmp_path):
        source = (EXAMPLES_DIR / "factorial.teeny").read_text()
        assert build_and_run(tmp_path, source, stdin="5\n") == \
            "Enter a number:\nFactorial:\n120.00\n"
