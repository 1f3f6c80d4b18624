import textwrap

import pytest

from patchforge.apply.patch import apply_edit, apply_edits, patch_text
from patchforge.errors import PatchFailedError
from patchforge.match.segment import split_paragraphs
from patchforge.models.edits import Document, EditInstruction
from patchforge.models.match import MatchStrategy


def test_end_to_end_simple_paragraph_replacement():
    doc = Document("index.html", "Welcome to the site.\n\nClick here to continue.")
    edit = EditInstruction(old="Click here to continue.", new="Press the button to continue.")

    result = apply_edits([edit], [doc])

    assert split_paragraphs(result.documents["index.html"]).blocks == [
        "Welcome to the site.",
        "Press the button to continue.",
    ]
    assert edit.applied is True
    assert result.modified_paths == ["index.html"]
    assert result.pending == []


def test_identical_paragraph_is_replaced_exactly():
    content = "first\n\nsecond paragraph\nwith two lines\n\nthird"
    updated, match = apply_edit(content, "second paragraph\nwith two lines", "REPLACED")
    assert updated == "first\n\nREPLACED\n\nthird"
    assert match.strategy is MatchStrategy.EXACT


def test_already_applied_edit_fails_cleanly():
    content = "Welcome to the site.\n\nPress the button to continue."
    doc = Document("index.html", content)
    edit = EditInstruction(old="Click here to continue.", new="Press the button to continue.")

    result = apply_edits([edit], [doc])

    assert result.documents["index.html"] == content
    assert result.modified_paths == []
    assert result.pending == [edit]
    assert edit.applied is False


def test_unrelated_old_leaves_document_unchanged():
    content = "Welcome to the site.\n\nClick here to continue."
    edit = EditInstruction(old="Quarterly tax filings require notarised signatures", new="x")
    result = apply_edits([edit], [Document("a.txt", content)])
    assert result.documents["a.txt"] == content
    assert result.pending == [edit]


def test_replacement_takes_indentation_of_matched_paragraph():
    content = textwrap.dedent("""\
        class Greeter:

            def hello(self):
                return "hi"

            def bye(self):
                return "bye"
    """)
    new = 'def hello(self, name):\n    return f"hi {name}"'
    updated, _ = apply_edit(content, 'def hello(self):\n    return "hi"', new)

    lines = updated.splitlines()
    assert lines[2] == "    def hello(self, name):"
    assert lines[3] == '        return f"hi {name}"'
    assert lines[5] == "    def bye(self):"


def test_later_edit_sees_earlier_replacement():
    content = "Alpha section text.\n\nBeta section text."
    edits = [
        EditInstruction(old="Beta section text.", new="Beta rewritten.\n\nGamma added."),
        EditInstruction(old="Alpha section text.", new="Alpha rewritten."),
    ]
    result = apply_edits(edits, [Document("doc.md", content)])
    assert result.documents["doc.md"] == "Alpha rewritten.\n\nBeta rewritten.\n\nGamma added."
    assert all(e.applied for e in edits)


def test_edits_chain_within_one_document():
    content = "one\n\ntwo"
    edits = [
        EditInstruction(old="two", new="three"),
        EditInstruction(old="three", new="four"),
    ]
    result = apply_edits(edits, [Document("n.txt", content)])
    assert result.documents["n.txt"] == "one\n\nfour"


def test_edit_applies_to_first_matching_document_only():
    docs = [
        Document("a.html", "<p>Shared footer</p>"),
        Document("b.html", "<p>Shared footer</p>"),
    ]
    edit = EditInstruction(old="<p>Shared footer</p>", new="<p>New footer</p>")

    result = apply_edits([edit], docs)

    assert result.documents["a.html"] == "<p>New footer</p>"
    assert result.documents["b.html"] == "<p>Shared footer</p>"
    assert result.modified_paths == ["a.html"]


def test_already_applied_edits_are_skipped():
    edit = EditInstruction(old="a", new="b", applied=True)
    result = apply_edits([edit], [Document("x", "a")])
    assert result.documents["x"] == "a"
    assert result.pending == []


def test_failure_of_one_edit_does_not_block_others():
    content = "keep me\n\nchange me"
    edits = [
        EditInstruction(old="nothing like this exists anywhere", new="x"),
        EditInstruction(old="change me", new="changed"),
    ]
    result = apply_edits(edits, [Document("f", content)])
    assert result.documents["f"] == "keep me\n\nchanged"
    assert result.pending == [edits[0]]


def test_patch_text_applies_all_or_raises():
    text = patch_text("alpha\n\nbeta", [{"old": "alpha", "new": "ALPHA"}, {"old": "beta", "new": "BETA"}])
    assert text == "ALPHA\n\nBETA"

    with pytest.raises(PatchFailedError):
        patch_text("alpha\n\nbeta", [{"old": "completely unrelated words here", "new": "x"}])

    with pytest.raises(PatchFailedError):
        patch_text("a", [{"new": "x"}])


def test_editing_last_paragraph_keeps_final_newline():
    content = "import os\n\ndef f():\n    return 1\n"
    updated, _ = apply_edit(content, "def f():\n    return 1", "def f():\n    return 2")
    assert updated == "import os\n\ndef f():\n    return 2\n"
