import json
import os

import pytest

from line_locator.locator import LocateResult, find_line_numbers

BOUNDARY = os.path.join(os.sep, "srv", "workspace")


class FakeFilesystem:
    def __init__(self, content="", realpath_result=None, read_error=None):
        self.content = content
        self.realpath_result = realpath_result
        self.read_error = read_error
        self.realpath_calls = []
        self.read_calls = []

    def realpath(self, path):
        self.realpath_calls.append(path)
        if isinstance(self.realpath_result, Exception):
            raise self.realpath_result
        return self.realpath_result or path

    def read_text(self, path):
        self.read_calls.append(path)
        if self.read_error is not None:
            raise self.read_error
        return self.content


def _locate(file_path, snippet, filesystem):
    return find_line_numbers(
        file_path, snippet, filesystem=filesystem, boundary=BOUNDARY
    )


def test_finds_single_line_snippet():
    filesystem = FakeFilesystem("\n  const a = 1;\n  const b = 2;\n  const c = 3;\n")

    result = _locate("mock.ts", "const b = 2;", filesystem)

    assert result.to_dict() == {"startLine": 3, "endLine": 3}
    assert filesystem.read_calls == [os.path.join(BOUNDARY, "mock.ts")]


def test_finds_multi_line_snippet_with_different_indentation():
    content = "\n".join(
        [
            "",
            "      function myFunc() {",
            "        console.log('hello');",
            "        console.log('world');",
            "      }",
            "    ",
        ]
    )
    snippet = "\n        console.log('hello');\n        console.log('world');\n      "

    result = _locate("mock.ts", snippet, FakeFilesystem(content))

    assert result.to_dict() == {"startLine": 3, "endLine": 4}


def test_reports_missing_snippet():
    filesystem = FakeFilesystem("\n  const x = 10;\n  const y = 20;\n")

    result = _locate("mock.ts", "const z = 30;", filesystem)

    assert result.to_dict() == {"error": "Snippet was not found."}


@pytest.mark.parametrize("snippet", ["", "   ", "\n\t\n", "\ufeff", " \ufeff\n"])
def test_rejects_empty_snippet_without_touching_filesystem(snippet):
    filesystem = FakeFilesystem(realpath_result=AssertionError("no I/O expected"))

    result = _locate("../../etc/passwd", snippet, filesystem)

    assert result.to_dict() == {"error": "Snippet is empty."}
    assert filesystem.realpath_calls == []
    assert filesystem.read_calls == []


def test_propagates_resolution_failure_message():
    filesystem = FakeFilesystem(realpath_result=FileNotFoundError("File not found"))

    result = _locate("nonexistent.ts", "any", filesystem)

    assert result.to_dict() == {"error": "File not found"}


def test_rejects_traversal_outside_boundary():
    filesystem = FakeFilesystem("root:x:0:0")

    result = _locate("../../../../etc/passwd", "root:x:0:0", filesystem)

    assert result.to_dict() == {
        "error": "File path is outside of the current working directory."
    }
    assert filesystem.read_calls == []


def test_rejects_symlink_target_outside_boundary():
    filesystem = FakeFilesystem(
        "root:x:0:0", realpath_result=os.path.join(os.sep, "etc", "passwd")
    )

    result = _locate("symlink-to-etc-passwd", "any", filesystem)

    assert result.error == "File path is outside of the current working directory."
    assert filesystem.read_calls == []


def test_rejects_boundary_itself():
    result = _locate(".", "any", FakeFilesystem())

    assert result.error == "File path is outside of the current working directory."


def test_rejects_sibling_directory_sharing_boundary_prefix():
    filesystem = FakeFilesystem(realpath_result=BOUNDARY + "-evil" + os.sep + "a.py")

    result = _locate("a.py", "any", filesystem)

    assert result.error == "File path is outside of the current working directory."


def test_accepts_absolute_path_inside_boundary():
    filesystem = FakeFilesystem("x = 1\n")

    result = _locate(os.path.join(BOUNDARY, "pkg", "mod.py"), "x = 1", filesystem)

    assert result.to_dict() == {"startLine": 1, "endLine": 1}


def test_first_complete_occurrence_wins():
    filesystem = FakeFilesystem("x\ny\nx\nz\nx\nz\n")

    result = _locate("mock.py", "x\nz", filesystem)

    assert result.to_dict() == {"startLine": 3, "endLine": 4}


def test_snippet_running_past_end_of_file_is_not_found():
    result = _locate("mock.py", "b\nc", FakeFilesystem("a\nb"))

    assert result.error == "Snippet was not found."


def test_carriage_returns_are_absorbed_by_trimming():
    filesystem = FakeFilesystem("one\r\ntwo\r\nthree\r\n")

    result = _locate("mock.py", "two\r\nthree", filesystem)

    assert result.to_dict() == {"startLine": 2, "endLine": 3}


def test_internal_whitespace_must_match_exactly():
    result = _locate("mock.py", "a = 1", FakeFilesystem("a  =  1\n"))

    assert result.error == "Snippet was not found."


def test_read_failure_message_is_returned():
    error = IsADirectoryError(21, "Is a directory")
    filesystem = FakeFilesystem(read_error=error)

    result = _locate("pkg", "any", filesystem)

    assert result.error == str(error)


def test_unexpected_failure_returns_generic_message():
    filesystem = FakeFilesystem(read_error=RuntimeError("boom"))

    result = _locate("mock.py", "any", filesystem)

    assert result.error == "An unknown error occurred."


def test_repeated_calls_are_identical():
    filesystem = FakeFilesystem("a\nb\nc\n")

    first = _locate("mock.py", "b\nc", filesystem)
    second = _locate("mock.py", "b\nc", filesystem)

    assert first == second
    assert len(filesystem.read_calls) == 2


def test_locates_snippet_on_disk(tmp_path, monkeypatch):
    source = tmp_path / "src" / "handler.py"
    source.parent.mkdir()
    source.write_text(
        "def handle(request):\n    query = request.args['q']\n    run(query)\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    result = find_line_numbers(
        "src/handler.py", "query = request.args['q']\nrun(query)"
    )

    assert result.to_dict() == {"startLine": 2, "endLine": 3}


def test_rejects_real_symlink_escaping_working_directory(tmp_path, monkeypatch):
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    outside = tmp_path / "outside.txt"
    outside.write_text("secret\n", encoding="utf-8")
    os.symlink(outside, workspace / "link.txt")
    monkeypatch.chdir(workspace)

    result = find_line_numbers("link.txt", "secret")

    assert result.error == "File path is outside of the current working directory."


def test_follows_real_symlink_inside_working_directory(tmp_path, monkeypatch):
    target = tmp_path / "real.py"
    target.write_text("a = 1\nb = 2\n", encoding="utf-8")
    os.symlink(target, tmp_path / "alias.py")
    monkeypatch.chdir(tmp_path)

    result = find_line_numbers("alias.py", "b = 2")

    assert result.to_dict() == {"startLine": 2, "endLine": 2}


def test_missing_file_reports_os_error(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = find_line_numbers("missing.py", "anything")

    assert "No such file or directory" in result.error


def test_invalid_utf8_reports_decode_error(tmp_path, monkeypatch):
    (tmp_path / "blob.bin").write_bytes(b"\xff\xfe\xfa")
    monkeypatch.chdir(tmp_path)

    result = find_line_numbers("blob.bin", "anything")

    assert "can't decode" in result.error


def test_result_serializes_as_compact_json():
    result = LocateResult.found(3, 4)

    assert result.ok is True
    assert result.to_json() == '{"startLine":3,"endLine":4}'
    assert result.to_tool_result() == {
        "content": [{"type": "text", "text": '{"startLine":3,"endLine":4}'}]
    }


def test_failure_serializes_error_only():
    result = LocateResult.failure("Snippet is empty.")

    assert result.ok is False
    assert json.loads(result.to_json()) == {"error": "Snippet is empty."}


@pytest.mark.parametrize(
    "kwargs",
    [{}, {"start_line": 1, "end_line": 1, "error": "both"}, {"start_line": 1}],
)
def test_result_requires_exactly_one_form(kwargs):
    with pytest.raises(ValueError):
        LocateResult(**kwargs)


def test_finds_first_line_of_file_saved_with_bom():
    filesystem = FakeFilesystem("\ufeffimport os\nx = 1\n")

    result = _locate("a.py", "import os", filesystem)

    assert result.to_dict() == {"startLine": 1, "endLine": 1}


def test_finds_first_line_of_bom_file_on_disk(tmp_path, monkeypatch):
    (tmp_path / "bom.py").write_bytes(b"\xef\xbb\xbfimport os\nx = 1\n")
    monkeypatch.chdir(tmp_path)

    result = find_line_numbers("bom.py", "import os\nx = 1")

    assert result.to_dict() == {"startLine": 1, "endLine": 2}
