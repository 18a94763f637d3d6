"""
End-to-end tests for directive resolution.
"""

import textwrap

from condann.diagnostics import DiagnosticCollector
from condann.directives import resolve_tree, sweep_tree
from tests.infrastructure import parse, run, squash, transform

NESTED = """\
// #if START
// start
console.log('start');
// #endif
function func() {
  // debug outer
  // #if DEBUG
  // debug inner prev
  console.log('debug');
  // debug inner next
  // #endif
  return {
    // #if MODE === 'development'
    development: true,
    // #elseif MODE === 'production'
    production: true,
    // #else
    mode: 'unknown',
    // #endif
  };
}
"""


class TestStatements:

    def test_false_branch_removed(self):
        code = """\
        // #if DEBUG
        console.log('debug');
        // #endif
        run();
        """
        assert transform(code, DEBUG=False) == "run();\n"

    def test_true_branch_kept(self):
        code = """\
        // #if DEBUG
        console.log('debug');
        // #endif
        run();
        """
        assert transform(code, DEBUG=True) == "console.log('debug');\nrun();\n"

    def test_endif_after_last_statement(self):
        code = """\
        run();
        // #if DEBUG
        console.log('debug');
        // #endif
        """
        assert transform(code, DEBUG=False) == "run();\n"

    def test_consecutive_chains(self):
        code = """\
        // #if A
        a();
        // #endif
        // #if B
        b();
        // #endif
        """
        assert transform(code, A=False, B=True) == "b();\n"
        assert transform(code, A=True, B=False) == "a();\n"

    def test_multi_statement_branch(self):
        code = """\
        // #if A
        a1();
        a2();
        // #else
        b();
        // #endif
        """
        assert transform(code, A=True) == "a1();\na2();\n"
        assert transform(code, A=False) == "b();\n"


class TestLists:

    def test_array_element_removed(self):
        code = """\
        const list = [
          1,
          // #if false
          2,
          // #endif
          3,
        ];
        """
        assert transform(code) == "const list = [\n  1,\n  3,\n];\n"

    def test_inline_block_comments(self):
        assert transform("[1, /*#if false*/ 2 /*#endif*/, 3]") == "[1, 3]"

    def test_if_else_in_array(self):
        code = """\
        const list = [
          // #if DEBUG
          'debug',
          // #else
          'release',
          // #endif
        ];
        """
        assert transform(code, DEBUG=True) == "const list = [\n  'debug',\n];\n"
        assert transform(code, DEBUG=False) == "const list = [\n  'release',\n];\n"

    def test_empty_array_directives(self):
        code = """\
        const list = [
          // #if false
          // #endif
        ];
        """
        assert transform(code) == "const list = [];\n"

    def test_object_properties(self):
        code = """\
        const cfg = {
          // #if MODE === 'development'
          development: true,
          // #elseif MODE === 'production'
          production: true,
          // #else
          mode: 'unknown',
          // #endif
        };
        """
        assert transform(code, MODE="development") == "const cfg = {\n  development: true,\n};\n"
        assert transform(code, MODE="production") == "const cfg = {\n  production: true,\n};\n"
        assert transform(code, MODE="test") == "const cfg = {\n  mode: 'unknown',\n};\n"

    def test_call_arguments(self):
        code = """\
        init(
          base,
          // #if PLUGINS
          plugin,
          // #endif
        );
        """
        assert squash(transform(code, PLUGINS=False)) == "init( base, );"
        assert squash(transform(code, PLUGINS=True)) == "init( base, plugin, );"


class TestInnerComments:

    def test_directive_run_in_empty_arguments(self):
        result = run("foo(/* #if A */ /* #endif */);", A=True)
        assert result.text == "foo();"
        assert result.stats["inner_runs_removed"] == 1

    def test_several_runs_in_one_slot(self):
        result = run("foo(/* #if A */ /* #endif */ /* #if B */ /* #endif */);", A=True, B=False)
        assert result.text == "foo();"
        assert result.stats["inner_runs_removed"] == 2


class TestNesting:

    def test_original_nested_example(self):
        result = transform(NESTED, START=True, DEBUG=False, MODE="production")
        assert result == textwrap.dedent("""\
        // start
        console.log('start');
        function func() {
          // debug outer
          return {
            production: true,
          };
        }
        """)

    def test_nested_example_all_enabled(self):
        result = transform(NESTED, START=True, DEBUG=True, MODE="development")
        assert "#if" not in result and "#endif" not in result
        assert "// debug inner prev\n  console.log('debug');\n  // debug inner next\n" in result
        assert "development: true," in result
        assert "production" not in result

    def test_nested_inner_chain_in_removed_branch(self):
        code = """\
        // #if A
        const x = [
          // #if B
          1,
          // #endif
          2,
        ];
        // #endif
        """
        assert transform(code, A=True, B=False) == "const x = [\n  2,\n];\n"
        assert transform(code, A=False, B=True) == ""

    def test_typescript_source(self):
        code = """\
        export function level(): number {
          // #if STRICT
          return 2;
          // #else
          return 1;
          // #endif
        }
        """
        out = transform(code, ext="ts", STRICT=False)
        assert out == "export function level(): number {\n  return 1;\n}\n"


class TestFailureIsolation:

    def test_unbound_name_keeps_content(self):
        result = run("""\
        // #if MISSING
        foo();
        // #endif
        """)
        assert result.text == "foo();\n"
        assert len(result.diagnostics) == 1
        diag = result.diagnostics[0]
        assert diag.message == "MISSING is not defined"
        assert (diag.line, diag.column) == (1, 0)
        assert diag.filename == "input.js"
        assert result.stats["chains_with_errors"] == 1

    def test_one_diagnostic_per_failing_directive(self):
        result = run("""\
        // #if X
        a();
        // #elseif Y
        b();
        // #else
        c();
        // #endif
        """)
        assert [d.line for d in result.diagnostics] == [1, 3]
        assert result.text == "a();\nb();\nc();\n"

    def test_syntax_error_in_condition(self):
        result = run("// #if A ===\nfoo();\n// #endif\n", A=True)
        assert result.text == "foo();\n"
        assert "Unexpected end of expression" in result.diagnostics[0].message

    def test_missing_endif_drops_only_markers(self):
        code = """\
        const list = [
          1,
          // #if false
          2,
          3,
        ];
        """
        result = run(code)
        assert result.text == "const list = [\n  1,\n  2,\n  3,\n];\n"
        assert result.stats["chains_invalid"] == 1
        assert result.diagnostics == []

    def test_stray_elseif(self):
        code = """\
        // #elseif A
        a();
        // #endif
        b();
        """
        assert transform(code, A=False) == "a();\nb();\n"

    def test_failing_chain_does_not_affect_siblings(self):
        code = """\
        // #if MISSING
        a();
        // #endif
        // #if OFF
        b();
        // #endif
        c();
        """
        result = run(code, OFF=False)
        assert result.text == "a();\nc();\n"
        assert len(result.diagnostics) == 1


class TestProperties:

    def test_idempotent(self):
        once = transform(NESTED, START=False, DEBUG=True, MODE="test")
        twice = transform(once, START=False, DEBUG=True, MODE="test")
        assert once == twice

    def test_no_directive_markers_survive_valid_chains(self):
        out = transform(NESTED, START=False, DEBUG=False, MODE="x")
        for marker in ("#if", "#elseif", "#else", "#endif"):
            assert marker not in out

    def test_source_without_directives_is_untouched(self):
        code = "// plain\nconst a = [1, 2];\n"
        result = run(code)
        assert result.text == code
        assert not result.changed

    def test_elsewhere_is_not_a_directive(self):
        code = "// #elsewhere\na();\n"
        assert transform(code) == code


def test_resolve_tree_api():
    tree = parse("// #if A\na();\n// #endif\nb();\n")
    collector = DiagnosticCollector()
    stats = resolve_tree(tree.root, {"A": False}, collector)
    sweep_tree(tree.root)
    assert stats.chains_resolved == 1
    assert [n.text for n in tree.root.children] == ["b();"]
    assert tree.root.children[0].leading == []
    assert len(collector) == 0


def test_resolve_tree_reports_into_callers_empty_collector():
    tree = parse("// #if MISSING\na();\n// #endif\n")
    collector = DiagnosticCollector("given.js")
    assert len(collector) == 0
    resolve_tree(tree.root, {}, collector)
    (diag,) = collector
    assert diag.message == "MISSING is not defined"
    assert diag.filename == "given.js"
