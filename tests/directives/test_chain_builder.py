"""
Tests for chain building and structural validation.
"""

from condann.directives import DirectiveItem, DirectiveKind, NormalItem, build_chain, validate
from condann.directives.validation import mark_directives_removed
from tests.infrastructure import parse


def shape(chain):
    """Compact chain description: directive markers and node texts."""
    out = []
    for item in chain:
        if isinstance(item, DirectiveItem):
            out.append(item.kind.value)
        else:
            out.append(item.node.text)
    return out


class TestBuildChain:

    def test_simple_block(self):
        tree = parse("""\
        // #if A
        a();
        // #endif
        b();
        """)
        a, b = tree.root.children
        chain = build_chain(a)
        assert shape(chain) == ["#if", "a();", "#endif"]
        assert chain[-1].node is b

    def test_full_chain(self):
        tree = parse("""\
        // #if A
        a();
        // #elseif B
        b();
        // #else
        c();
        // #endif
        """)
        chain = build_chain(tree.root.children[0])
        assert shape(chain) == ["#if", "a();", "#elseif", "b();", "#else", "c();", "#endif"]

    def test_endif_in_trailing_of_last_sibling(self):
        tree = parse("""\
        // #if A
        a();
        // #endif
        """)
        (a,) = tree.root.children
        chain = build_chain(a)
        assert shape(chain) == ["#if", "a();", "#endif"]
        assert chain[-1].slot.value == "trailing"

    def test_multiple_nodes_in_branch(self):
        tree = parse("""\
        // #if A
        a1();
        a2();
        // #endif
        """)
        chain = build_chain(tree.root.children[0])
        assert shape(chain) == ["#if", "a1();", "a2();", "#endif"]

    def test_plain_leading_comments_give_empty_chain(self):
        tree = parse("""\
        // just a note
        a();
        """)
        assert build_chain(tree.root.children[0]) == []

    def test_unterminated_chain_runs_to_end_of_siblings(self):
        tree = parse("""\
        // #if A
        a();
        b();
        """)
        chain = build_chain(tree.root.children[0])
        assert shape(chain) == ["#if", "a();", "b();"]

    def test_shared_slots_are_cleared_while_advancing(self):
        tree = parse("""\
        x();
        // #if A
        a();
        // #endif
        b();
        """)
        x, a, b = tree.root.children
        build_chain(a)
        assert x.trailing == []
        assert a.trailing == []
        assert len(b.leading) == 1

    def test_directives_only_in_one_slot(self):
        tree = parse("""\
        // #if A
        // #endif
        a();
        """)
        chain = build_chain(tree.root.children[0])
        assert shape(chain) == ["#if", "#endif"]


class TestValidate:

    def build(self, code):
        tree = parse(code)
        return build_chain(tree.root.children[0])

    def test_valid_chain(self):
        chain = self.build("// #if A\na();\n// #else\nb();\n// #endif\n")
        assert validate(chain)

    def test_missing_endif(self):
        chain = self.build("// #if A\na();\nb();\n")
        assert not validate(chain)

    def test_missing_if(self):
        chain = self.build("// #elseif A\na();\n// #endif\n")
        assert not validate(chain)

    def test_nested_if_on_same_level(self):
        chain = self.build("// #if A\na();\n// #if B\nb();\n// #endif\n")
        assert shape(chain)[0] == "#if"
        assert not validate(chain)

    def test_empty_chain_is_invalid(self):
        assert not validate([])

    def test_mark_directives_removed_keeps_content(self):
        tree = parse("// #if A\na();\nb();\n")
        chain = build_chain(tree.root.children[0])
        mark_directives_removed(chain)
        assert chain[0].token.ignore
        assert all(not n.node.removed for n in chain if isinstance(n, NormalItem))
        assert chain[0].kind is DirectiveKind.IF
