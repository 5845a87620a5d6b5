"""
Spreadsheet and text file sources for bulk import.
"""

# Standard Library
import pathlib
import zipfile

# PIP3 modules
import openpyxl
import openpyxl.utils.exceptions

# local repo modules
import gtin_label_sheets as gls
import gtin_label_sheets.config
import gtin_label_sheets.errors
import gtin_label_sheets.gtin
import gtin_label_sheets.ingest


CodeKind = gls.gtin.CodeKind
BulkResult = gls.ingest.BulkResult
SourceReadError = gls.errors.SourceReadError

TEMPLATE_SHEET_NAME = gls.config.TEMPLATE_SHEET_NAME
TEMPLATE_HEADERS = gls.config.TEMPLATE_HEADERS
SPREADSHEET_SUFFIXES = (".xlsx", ".xlsm")


#============================================
def read_rows(path: pathlib.Path) -> list[list[object]]:
	"""
	Read every row of the first worksheet.

	Args:
		path: Workbook path.

	Returns:
		Rows of cell values, header included.
	"""
	try:
		workbook = openpyxl.load_workbook(filename=path, read_only=True, data_only=True)
	except (
		openpyxl.utils.exceptions.InvalidFileException,
		zipfile.BadZipFile,
		KeyError,
		OSError,
	) as error:
		raise SourceReadError(f"Erro ao ler arquivo: {path}") from error
	try:
		sheet = workbook.worksheets[0]
		rows = [list(row) for row in sheet.iter_rows(values_only=True)]
	finally:
		workbook.close()
	if len(rows) < 2:
		raise SourceReadError("Arquivo vazio.")
	return rows


#============================================
def write_template(path: pathlib.Path, kind: CodeKind) -> None:
	"""
	Write an import template with a header and one example row.

	Args:
		path: Output workbook path.
		kind: Code kind for the example row.
	"""
	workbook = openpyxl.Workbook()
	sheet = workbook.active
	sheet.title = TEMPLATE_SHEET_NAME
	sheet.append(list(TEMPLATE_HEADERS))
	sheet.append([kind.example_description, kind.example_code])
	workbook.save(path)
	print(f"Template written: {path}")


#============================================
def load_source(path: pathlib.Path, kind: CodeKind) -> BulkResult:
	"""
	Import a workbook or a delimited text file.

	Args:
		path: Source path.
		kind: Code kind.

	Returns:
		BulkResult.
	"""
	if path.suffix.lower() in SPREADSHEET_SUFFIXES:
		return gls.ingest.parse_rows(read_rows(path), kind)
	try:
		text = path.read_text(encoding="utf-8-sig")
	except (OSError, UnicodeDecodeError) as error:
		raise SourceReadError(f"Erro ao ler arquivo: {path}") from error
	return gls.ingest.parse_text(text, kind)
