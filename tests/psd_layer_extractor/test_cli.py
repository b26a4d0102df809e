import logging
import zipfile

import pytest

from psd_layer_extractor import cli, extractor
from psd_layer_extractor.exporter import EncodeError
from psd_layer_extractor.tree import Group, Root

from .utils import FakeHandle, make_layer

logger = logging.getLogger(__name__)


@pytest.fixture
def document(monkeypatch) -> Root:
    root = Root(
        [
            Group(
                "UI",
                [
                    make_layer("Button"),
                    make_layer("Label", visible=False),
                    make_layer("Broken", handle=FakeHandle(error=EncodeError("x"))),
                ],
            ),
            make_layer("Background"),
        ],
        size=(32, 32),
        color_mode="RGB",
    )

    def load_document(fp, **kwargs):
        return root

    monkeypatch.setattr(extractor, "load_document", load_document)
    monkeypatch.setattr(cli, "load_document", load_document)
    return root


def test_export(tmp_path, document) -> None:
    output_dir = tmp_path / "output"
    assert cli.main(["export", "input.psd", str(output_dir)]) is None
    assert sorted(p.name for p in output_dir.iterdir()) == [
        "Background.png",
        "UI_Button.png",
    ]


def test_export_zip(tmp_path, document) -> None:
    assert cli.main(["-v", "export", "input.psd", str(tmp_path), "--zip"]) is None
    with zipfile.ZipFile(tmp_path / "psd-layers.zip") as archive:
        assert archive.namelist() == ["UI_Button.png", "Background.png"]


def test_show(capsys, document) -> None:
    assert cli.main(["show", "input.psd"]) is None
    out = capsys.readouterr().out
    assert "UI/" in out
    assert "Button -> UI_Button.png" in out
    assert "Label (hidden)" in out


def test_missing_input(tmp_path) -> None:
    assert cli.main(["export", str(tmp_path / "missing.psd"), str(tmp_path)]) == 1


def test_missing_command() -> None:
    with pytest.raises(SystemExit):
        cli.parse_args([])


def test_export_logs_failure_once(tmp_path, document, caplog) -> None:
    with caplog.at_level(logging.INFO, logger="psd_layer_extractor"):
        assert cli.main(["export", "input.psd", str(tmp_path)]) is None
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "Broken" in warnings[0].getMessage()
