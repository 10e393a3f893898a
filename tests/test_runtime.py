from functions_deploy.runtime import PYTHON_MARKER_FILE, Runtime, detect_runtime


def test_python_marker_selects_python(tmp_path) -> None:
    (tmp_path / PYTHON_MARKER_FILE).write_text("", encoding="utf-8")
    (tmp_path / "package.json").write_text("{}", encoding="utf-8")

    assert detect_runtime(str(tmp_path)) is Runtime.PYTHON


def test_without_marker_is_always_node(tmp_path) -> None:
    # Go 프로젝트여도 main.py 가 없으면 Node 로 분류된다.
    (tmp_path / "go.mod").write_text("module x", encoding="utf-8")
    (tmp_path / "requirements.txt").write_text("flask", encoding="utf-8")

    assert detect_runtime(str(tmp_path)) is Runtime.NODE


def test_empty_directory_is_node(tmp_path) -> None:
    assert detect_runtime(str(tmp_path)) is Runtime.NODE


def test_marker_directory_does_not_count(tmp_path) -> None:
    (tmp_path / PYTHON_MARKER_FILE).mkdir()

    assert detect_runtime(str(tmp_path)) is Runtime.NODE
