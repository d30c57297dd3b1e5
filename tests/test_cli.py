import pytest

from run_mediator import main as cli_main
from tests.conftest import SAMPLE_PAYLOAD


@pytest.fixture
def message_file(tmp_path):
    path = tmp_path / "message.xml"
    path.write_bytes(SAMPLE_PAYLOAD)
    return path


def write_config(tmp_path, body: str):
    path = tmp_path / "read_file.yaml"
    path.write_text("read_file:\n" + body, encoding="utf-8")
    return path


def test_cli_reads_file_into_message(tmp_path, message_file, xml_file, capsys):
    config = write_config(tmp_path, f"  fileName: {xml_file.as_uri()}\n  contentType: xml\n")

    exit_code = cli_main(["--config", str(config), str(message_file)])

    assert exit_code == 0
    captured = capsys.readouterr()
    assert "READ_FILE_RESPONSE: OK" in captured.out
    assert "inv:invoice" in captured.out


def test_cli_property_option(tmp_path, message_file, text_file, capsys):
    config = write_config(tmp_path, "  property: LETTER\n  contentType: text/plain\n")

    exit_code = cli_main([
        "--config", str(config), str(message_file), "--property", f"LETTER={text_file}",
    ])

    assert exit_code == 0
    assert "your order &lt;#42&gt;" in capsys.readouterr().out


def test_cli_reports_failed_outcome(tmp_path, message_file, capsys):
    config = write_config(tmp_path, "  fileName: http://example.com/in.xml\n  contentType: xml\n")

    exit_code = cli_main(["--config", str(config), str(message_file)])

    assert exit_code == 1
    assert "Unknown protocol: http" in capsys.readouterr().out


def test_cli_missing_config(tmp_path, message_file, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli_main(["--config", str(tmp_path / "nope.yaml"), str(message_file)])

    assert excinfo.value.code == 2
    assert "Config not found" in capsys.readouterr().err


def test_cli_bad_property(tmp_path, message_file, capsys):
    config = write_config(tmp_path, "  property: LETTER\n  contentType: text/plain\n")

    with pytest.raises(SystemExit):
        cli_main(["--config", str(config), str(message_file), "--property", "LETTER"])

    assert "NAME=VALUE" in capsys.readouterr().err
