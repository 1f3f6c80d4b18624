# conftest.py - pytest configuration
import pytest

from patchforge.store import ProjectStore


@pytest.fixture
def make_project(tmp_path):
    """Write {relative_path: content} under tmp_path and return a ProjectStore."""

    def _make(files, **store_kwargs):
        for rel, content in files.items():
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return ProjectStore(str(tmp_path), **store_kwargs)

    return _make


@pytest.fixture
def scripted_collaborator():
    """
    Build a collaborator that returns canned replies in order and records
    every prompt it receives. An Exception instance in the script is raised.
    """

    def _make(*replies):
        script = list(replies)
        prompts = []

        async def generate(prompt):
            prompts.append(prompt)
            reply = script.pop(0)
            if isinstance(reply, Exception):
                raise reply
            return reply

        generate.prompts = prompts
        return generate

    return _make
