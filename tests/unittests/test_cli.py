import json
import pytest
from pointy_studio.cli import main

POINTY = "a {\nx = 1\n}\n\nb {\ny = 2\n}\n\na -> b\n"


@pytest.fixture
def pipeline_json(tmp_path):
    path = tmp_path / "pipeline.json"
    path.write_text(
        json.dumps(
            {
                "config": {"name": "demo", "fields": []},
                "nodes": [
                    {
                        "id": "event-a",
                        "type": "event",
                        "position": {"x": 0, "y": 0},
                        "data": {"event": {"id": "event-a", "name": "a", "code": "x = 1"}},
                    },
                    {
                        "id": "event-b",
                        "type": "event",
                        "position": {"x": 0, "y": 0},
                        "data": {"event": {"id": "event-b", "name": "b", "code": "y = 2"}},
                    },
                ],
                "edges": [{"id": "a-b", "source": "event-a", "target": "event-b"}],
            }
        )
    )
    return path


def test_validate_clean_file(tmp_path, capsys):
    path = tmp_path / "code.py"
    path.write_text("if x:\n    y = 1\n")
    assert main(["validate", str(path)]) == 0
    assert capsys.readouterr().out == ""


def test_validate_reports_warnings(tmp_path, capsys):
    path = tmp_path / "code.py"
    path.write_text("if x:\ny = 1\n")
    assert main(["validate", str(path)]) == 1
    assert f"{path}: Line 2: Expected indentation" in capsys.readouterr().out


def test_compile_to_stdout(pipeline_json, capsys):
    assert main(["compile", str(pipeline_json)]) == 0
    assert capsys.readouterr().out == POINTY


def test_compile_to_file(pipeline_json, tmp_path):
    out = tmp_path / "out.pointy"
    assert main(["compile", str(pipeline_json), "-o", str(out)]) == 0
    assert out.read_text() == POINTY


def test_parse_with_config(pipeline_json, tmp_path):
    source = tmp_path / "in.pointy"
    source.write_text(POINTY)
    out = tmp_path / "out.json"

    assert (
        main(["parse", str(source), "--config", str(pipeline_json), "-o", str(out)])
        == 0
    )
    data = json.loads(out.read_text())
    assert data["config"]["name"] == "demo"
    assert [n["data"]["event"]["name"] for n in data["nodes"]] == ["a", "b"]
    assert data["edges"] == [{"id": "a-b", "source": "event-a", "target": "event-b"}]


def test_parse_without_config(tmp_path, capsys):
    source = tmp_path / "in.pointy"
    source.write_text("a {\n1\n}\na {\n2\n}\n")
    assert main(["parse", "--strict", str(source)]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["config"] is None
    assert data["nodes"][0]["data"]["event"]["code"] == "1"


def test_dot(pipeline_json, capsys):
    assert main(["dot", str(pipeline_json)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("digraph G {")
    assert '"event-a" -> "event-b"' in out


def test_invalid_json(tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text("{broken")
    assert main(["compile", str(path)]) == 2
    assert "error:" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main(["compile", str(tmp_path / "missing.json")]) == 2
    assert "error:" in capsys.readouterr().err


@pytest.mark.parametrize("command", ["validate", "compile", "parse", "dot"])
def test_file_that_is_not_utf8(tmp_path, capsys, command):
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"a {\nx = '\xff'\n}\n")
    assert main([command, str(path)]) == 2
    assert "error:" in capsys.readouterr().err


def test_command_is_required():
    with pytest.raises(SystemExit):
        main([])
