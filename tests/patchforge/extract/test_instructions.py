import textwrap

from patchforge.apply import apply_edit
from patchforge.extract import iter_fenced_blocks, parse_edit_instructions
from patchforge.models import MatchStrategy


def test_parses_pairs_in_order():
    reply = textwrap.dedent("""
        Here are the changes.

        OLD:
        ```html
        <h1>Hello</h1>
        ```

        NEW:
        ```html
        <h1>Hello, world</h1>
        ```

        ---

        OLD:
        ```css
        body { color: red; }
        ```
        NEW:
        ```css
        body { color: blue; }
        ```
    """)
    edits = parse_edit_instructions(reply)

    assert [(e.old, e.new) for e in edits] == [
        ("<h1>Hello</h1>", "<h1>Hello, world</h1>"),
        ("body { color: red; }", "body { color: blue; }"),
    ]
    assert not any(e.applied for e in edits)


def test_reply_without_pairs_yields_nothing():
    assert parse_edit_instructions("Sorry, nothing to change.") == []
    assert parse_edit_instructions("") == []


def test_unmatched_old_is_dropped():
    reply = textwrap.dedent("""
        OLD:
        ```
        orphan
        ```

        OLD:
        ```
        kept old
        ```
        NEW:
        ```
        kept new
        ```
    """)
    edits = parse_edit_instructions(reply)
    assert [(e.old, e.new) for e in edits] == [("kept old", "kept new")]


def test_new_without_old_is_dropped():
    reply = textwrap.dedent("""
        NEW:
        ```
        stray
        ```
        OLD:
        ```
        a
        ```
        NEW:
        ```
        b
        ```
    """)
    edits = parse_edit_instructions(reply)
    assert [(e.old, e.new) for e in edits] == [("a", "b")]


def test_unlabelled_blocks_are_ignored():
    reply = textwrap.dedent("""
        Example:
        ```js
        const old = 1;
        ```

        OLD:
        ```js
        let x = 1;
        ```
        NEW:
        ```js
        let x = 2;
        ```
    """)
    edits = parse_edit_instructions(reply)
    assert len(edits) == 1
    assert edits[0].old == "let x = 1;"


def test_old_keeps_inner_indentation_verbatim():
    reply = (
        "OLD:\n```python\n\n    def f():\n        return 1\n\n```\n"
        "NEW:\n```python\n    def f():\n        return 2\n```\n"
    )
    edits = parse_edit_instructions(reply)
    assert edits[0].old == "def f():\n        return 1"
    assert edits[0].new == "def f():\n    return 2"


def test_indented_old_still_matches_exactly():
    reply = (
        "OLD:\n```py\n    def f(self):\n        return 1\n```\n"
        "NEW:\n```py\n    def f(self):\n        return 2\n```\n"
    )
    edit = parse_edit_instructions(reply)[0]
    assert edit.old == "def f(self):\n        return 1"

    content = "class A:\n\n    def f(self):\n        return 1\n\nz = 0\n"
    updated, match = apply_edit(content, edit.old, edit.new)
    assert match.strategy is MatchStrategy.EXACT
    assert updated == "class A:\n\n    def f(self):\n        return 2\n\nz = 0\n"


def test_fence_may_open_on_the_label_line():
    reply = "OLD: ```html\n<p>a</p>\n```\nNEW: ```html\n<p>b</p>\n```\n"
    edits = parse_edit_instructions(reply)
    assert [(e.old, e.new) for e in edits] == [("<p>a</p>", "<p>b</p>")]


def test_inline_fence_needs_a_label():
    reply = "See ```html``` below.\nOLD:\n```\nx\n```\nNEW:\n```\ny\n```\n"
    edits = parse_edit_instructions(reply)
    assert [(e.old, e.new) for e in edits] == [("x", "y")]


def test_labels_are_case_insensitive_and_may_be_emphasised():
    reply = "**Old:**\n```\nfoo\n```\n\n**New:**\n```\nbar\n```\n"
    edits = parse_edit_instructions(reply)
    assert [(e.old, e.new) for e in edits] == [("foo", "bar")]


def test_label_text_inside_code_does_not_count():
    reply = textwrap.dedent("""
        OLD:
        ```js
        const opts = { new: false };
        ```
        NEW:
        ```js
        const opts = { new: true };
        ```
    """)
    edits = parse_edit_instructions(reply)
    assert len(edits) == 1
    assert edits[0].new == "const opts = { new: true };"


def test_empty_old_block_is_dropped():
    reply = "OLD:\n```\n```\nNEW:\n```\nsomething\n```\n"
    assert parse_edit_instructions(reply) == []


def test_think_sections_are_ignored():
    reply = (
        "<think>OLD:\n```\nnot real\n```\nNEW:\n```\nnope\n```</think>\n"
        "OLD:\n```\nreal\n```\nNEW:\n```\nfixed\n```\n"
    )
    edits = parse_edit_instructions(reply)
    assert [(e.old, e.new) for e in edits] == [("real", "fixed")]


def test_tilde_fences_and_unclosed_block():
    text = "~~~\na\n~~~\n```\nunclosed"
    blocks = list(iter_fenced_blocks(text))
    assert [b[2] for b in blocks] == ["a\n"]
