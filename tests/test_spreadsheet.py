import pathlib

import openpyxl
import pytest

import gtin_label_sheets.errors
import gtin_label_sheets.gtin
import gtin_label_sheets.spreadsheet


RETAIL = gtin_label_sheets.gtin.CodeKind.RETAIL
LOGISTICS = gtin_label_sheets.gtin.CodeKind.LOGISTICS


#============================================
def test_template_imports_its_example_row(tmp_path: pathlib.Path) -> None:
	"""
	A freshly written template imports one valid item.
	"""
	for kind in (RETAIL, LOGISTICS):
		path = tmp_path / f"modelo-{kind.length}.xlsx"
		gtin_label_sheets.spreadsheet.write_template(path, kind)
		workbook = openpyxl.load_workbook(path)
		assert workbook.active.title == "Modelo"
		rows = gtin_label_sheets.spreadsheet.read_rows(path)
		assert list(rows[0]) == ["Descricao", "Codigo"]
		result = gtin_label_sheets.spreadsheet.load_source(path, kind)
		assert [item.code for item in result.accepted] == [kind.example_code]
		assert result.rejected_count == 0


#============================================
def test_numeric_cells_and_swapped_columns(tmp_path: pathlib.Path) -> None:
	"""
	Codes stored as numbers and in the first column still import.
	"""
	path = tmp_path / "produtos.xlsx"
	workbook = openpyxl.Workbook()
	sheet = workbook.active
	sheet.append(["Codigo", "Descricao"])
	sheet.append([7891234567895, "Martelo"])
	sheet.append(["4006381333931", "Alicate"])
	sheet.append(["123", "Invalido"])
	workbook.save(path)
	result = gtin_label_sheets.spreadsheet.load_source(path, RETAIL)
	assert [(item.description, item.code) for item in result.accepted] == [
		("Martelo", "7891234567895"),
		("Alicate", "4006381333931"),
	]
	assert result.rejected_count == 1


#============================================
def test_header_only_workbook_is_empty(tmp_path: pathlib.Path) -> None:
	"""
	A workbook without data rows is reported as empty.
	"""
	path = tmp_path / "vazio.xlsx"
	workbook = openpyxl.Workbook()
	workbook.active.append(["Descricao", "Codigo"])
	workbook.save(path)
	with pytest.raises(gtin_label_sheets.errors.SourceReadError, match="Arquivo vazio."):
		gtin_label_sheets.spreadsheet.read_rows(path)


#============================================
def test_unreadable_workbook(tmp_path: pathlib.Path) -> None:
	"""
	Corrupt or missing workbooks raise SourceReadError.
	"""
	path = tmp_path / "quebrado.xlsx"
	path.write_bytes(b"not a zip archive")
	with pytest.raises(gtin_label_sheets.errors.SourceReadError):
		gtin_label_sheets.spreadsheet.load_source(path, RETAIL)
	with pytest.raises(gtin_label_sheets.errors.SourceReadError):
		gtin_label_sheets.spreadsheet.load_source(tmp_path / "ausente.xlsx", RETAIL)
	with pytest.raises(gtin_label_sheets.errors.SourceReadError):
		gtin_label_sheets.spreadsheet.load_source(tmp_path / "ausente.txt", RETAIL)


#============================================
def test_text_source_with_bom(tmp_path: pathlib.Path) -> None:
	"""
	Delimited text files are read as UTF-8 with an optional BOM.
	"""
	path = tmp_path / "codigos.csv"
	path.write_text("Caixa Master;17891234567892\nCaixa;1\n", encoding="utf-8-sig")
	result = gtin_label_sheets.spreadsheet.load_source(path, LOGISTICS)
	assert [item.description for item in result.accepted] == ["Caixa Master"]
	assert result.rejected_count == 1
