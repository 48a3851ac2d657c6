from pathlib import Path

import pytest

from certextract.main import main, setup_argparser


class TestArgParser:
    def test_convert_arguments(self) -> None:
        args = setup_argparser().parse_args(
            ["convert", "--format", "INSURANCE", "--patterns", "-o", "out", "a.pdf", "dir"]
        )
        assert args.command == "convert"
        assert args.format == "INSURANCE"
        assert args.patterns is True
        assert args.output_dir == Path("out")
        assert args.paths == [Path("a.pdf"), Path("dir")]
        assert args.persist is False
        assert args.engine is None

    def test_convert_engine_choice(self) -> None:
        args = setup_argparser().parse_args(
            ["convert", "--format", "INSURANCE", "--engine", "pymupdf", "a.pdf"]
        )
        assert args.engine == "pymupdf"

    def test_rejects_unknown_engine(self) -> None:
        with pytest.raises(SystemExit):
            setup_argparser().parse_args(
                ["convert", "--format", "INSURANCE", "--engine", "tesseract", "a.pdf"]
            )

    def test_import_arguments(self) -> None:
        args = setup_argparser().parse_args(["import", "--format", "TECH_REVIEW", "crt.xlsx"])
        assert args.command == "import"
        assert args.workbook == Path("crt.xlsx")

    def test_rejects_unknown_format(self) -> None:
        with pytest.raises(SystemExit):
            setup_argparser().parse_args(["convert", "--format", "UNKNOWN", "a.pdf"])

    def test_command_is_required(self) -> None:
        with pytest.raises(SystemExit):
            setup_argparser().parse_args([])


class TestMain:
    def test_convert_without_pdfs_fails(self, tmp_path: Path) -> None:
        (tmp_path / "notes.txt").write_text("hello")
        assert main(["convert", "--format", "INSURANCE", str(tmp_path / "notes.txt")]) == 1

    def test_import_missing_workbook_fails(self, tmp_path: Path) -> None:
        assert main(["import", "--format", "INSURANCE", str(tmp_path / "missing.xlsx")]) == 1
