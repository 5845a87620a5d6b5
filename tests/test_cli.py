import json
import pathlib

import pypdf
import pytest

import gtin_label_sheets.cli


#============================================
def run_main(argv: list[str]) -> int:
	"""
	Run the CLI and return its exit code.

	Args:
		argv: Argument list.

	Returns:
		Exit code.
	"""
	with pytest.raises(SystemExit) as excinfo:
		gtin_label_sheets.cli.main(argv)
	return excinfo.value.code


#============================================
def test_text_input_to_pdf(tmp_path: pathlib.Path, capsys) -> None:
	"""
	A text file becomes a PDF, a manifest and a rejection log.
	"""
	source = tmp_path / "codigos.txt"
	source.write_text("Martelo;7891234567895\nAlicate\t4006381333931\nRuim,123\n", encoding="utf-8")
	output_pdf = tmp_path / "out.pdf"
	code = run_main([str(source), "-o", str(output_pdf), "-p", "A4260", "-d"])
	assert code == 0
	assert len(pypdf.PdfReader(str(output_pdf)).pages) == 1

	manifest = json.loads((tmp_path / "out.pdf.json").read_text(encoding="utf-8"))
	assert manifest["total_labels"] == 2
	assert manifest["rejected_rows"] == 1
	assert manifest["layout"]["preset_name"] == "Pimaco A4260"
	assert (tmp_path / "rejected_rows.log").exists()

	captured = capsys.readouterr()
	assert "Preset: Pimaco A4260" in captured.out
	assert "codigos.txt: 2 imported, 1 invalid" in captured.out


#============================================
def test_nothing_valid_still_writes_pdf(tmp_path: pathlib.Path, capsys) -> None:
	"""
	Only rejected rows gives an empty document and a notice.
	"""
	source = tmp_path / "ruins.csv"
	source.write_text("A,1\nB,2\n", encoding="utf-8")
	output_pdf = tmp_path / "vazio.pdf"
	manifest_path = tmp_path / "vazio.json"
	code = run_main([str(source), "-o", str(output_pdf), "-m", str(manifest_path)])
	assert code == 0
	assert output_pdf.exists()
	assert json.loads(manifest_path.read_text(encoding="utf-8"))["labels"] == []
	assert "Nenhum código válido encontrado." in capsys.readouterr().out


#============================================
def test_template_and_logistics_kind(tmp_path: pathlib.Path) -> None:
	"""
	The template written by the CLI imports back through the CLI.
	"""
	template = tmp_path / "modelo.xlsx"
	assert run_main(["-t", str(template), "-k", "logistics"]) == 0
	assert template.exists()
	output_pdf = tmp_path / "caixas.pdf"
	assert run_main([str(template), "-k", "logistics", "-o", str(output_pdf), "-c", "1", "-r", "4"]) == 0
	manifest = json.loads((tmp_path / "caixas.pdf.json").read_text(encoding="utf-8"))
	assert manifest["labels"][0]["code"] == "17891234567892"
	assert manifest["labels"][0]["kind"] == "GTIN-14"


#============================================
def test_list_presets(capsys) -> None:
	"""
	The preset listing shows every model.
	"""
	assert run_main(["-L"]) == 0
	out = capsys.readouterr().out
	assert "A4260  3x7  63.5x38.1 mm  21 per sheet" in out
	assert "Caixas & Grandes" in out


#============================================
def test_errors_exit_with_code_two(tmp_path: pathlib.Path) -> None:
	"""
	Bad layouts, presets, kinds and sources stop with exit code 2.
	"""
	output_pdf = tmp_path / "nao.pdf"
	assert run_main(["-c", "0", "-o", str(output_pdf)]) == 2
	assert run_main(["-p", "A9999", "-o", str(output_pdf)]) == 2
	assert run_main(["-k", "upc", "-o", str(output_pdf)]) == 2
	assert run_main([str(tmp_path / "ausente.xlsx"), "-o", str(output_pdf)]) == 2
	assert not output_pdf.exists()
