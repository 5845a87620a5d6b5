"""
Row reconciliation and bulk import of description/code pairs.
"""

# Standard Library
import dataclasses
import pathlib
import re
from collections.abc import Iterable, Sequence

# local repo modules
import gtin_label_sheets as gls
import gtin_label_sheets.config
import gtin_label_sheets.errors
import gtin_label_sheets.gtin


CodeKind = gls.gtin.CodeKind
LabelItem = gls.gtin.LabelItem
LabelSheetError = gls.errors.LabelSheetError
InvalidChecksumError = gls.errors.InvalidChecksumError

REJECTION_LOG_NAME = gls.config.REJECTION_LOG_NAME

LINE_BREAK_PATTERN = re.compile(r"\r?\n")
FIELD_SEPARATOR_PATTERN = re.compile(r"[\t,;]+")


@dataclasses.dataclass(frozen=True)
class RejectedRow:
	line_number: int
	col_a: str
	col_b: str
	reason: str


@dataclasses.dataclass
class BulkResult:
	accepted: list[LabelItem] = dataclasses.field(default_factory=list)
	rejected: list[RejectedRow] = dataclasses.field(default_factory=list)

	@property
	def rejected_count(self) -> int:
		return len(self.rejected)


#============================================
def reconcile_row(col_a: str, col_b: str, kind: CodeKind) -> LabelItem:
	"""
	Decide which column holds the code and build an item.

	The second column is tried as the code first; when it fails the
	check digit test the first column is tried with the roles swapped.

	Args:
		col_a: First column text.
		col_b: Second column text.
		kind: Code kind.

	Returns:
		LabelItem.
	"""
	candidate = gls.gtin.strip_non_digits(col_b)
	if gls.gtin.is_valid(candidate, kind):
		return gls.gtin.make_item(col_a, candidate, kind)
	swapped = gls.gtin.strip_non_digits(col_a)
	if gls.gtin.is_valid(swapped, kind):
		return gls.gtin.make_item(col_b, swapped, kind)
	raise InvalidChecksumError(f"No valid {kind.value} code in row")


#============================================
def _collect_row(
	result: BulkResult,
	line_number: int,
	col_a: str,
	col_b: str,
	kind: CodeKind,
) -> None:
	try:
		item = reconcile_row(col_a, col_b, kind)
	except LabelSheetError as error:
		result.rejected.append(
			RejectedRow(
				line_number=line_number,
				col_a=col_a,
				col_b=col_b,
				reason=str(error),
			)
		)
		return
	result.accepted.append(item)


#============================================
def split_fields(line: str) -> list[str]:
	"""
	Split a pasted line on tab, comma or semicolon runs.

	Args:
		line: Input line.

	Returns:
		Non-empty parts in order.
	"""
	parts = FIELD_SEPARATOR_PATTERN.split(line)
	return [part for part in parts if part.strip()]


#============================================
def parse_text(raw: str, kind: CodeKind) -> BulkResult:
	"""
	Parse pasted text with one description/code pair per line.

	Args:
		raw: Text content.
		kind: Code kind.

	Returns:
		BulkResult with accepted items and rejected rows.
	"""
	result = BulkResult()
	for line_number, line in enumerate(LINE_BREAK_PATTERN.split(raw), start=1):
		if not line.strip():
			continue
		parts = split_fields(line)
		if len(parts) < 2:
			continue
		_collect_row(result, line_number, parts[0], parts[1], kind)
	return result


#============================================
def cell_to_text(value: object) -> str:
	"""
	Convert a spreadsheet cell value to stripped text.

	Whole floats are written without a fraction so numeric code cells
	keep their digits.

	Args:
		value: Cell value.

	Returns:
		Text value, empty for missing cells.
	"""
	if value is None:
		return ""
	if isinstance(value, float) and value.is_integer():
		return str(int(value))
	return str(value).strip()


#============================================
def parse_rows(rows: Iterable[Sequence[object]], kind: CodeKind) -> BulkResult:
	"""
	Parse tabular rows where the first row is a header.

	Args:
		rows: Cell rows.
		kind: Code kind.

	Returns:
		BulkResult with accepted items and rejected rows.
	"""
	result = BulkResult()
	for line_number, row in enumerate(rows, start=1):
		if line_number == 1:
			continue
		if not row:
			continue
		cells = [cell_to_text(value) for value in row]
		cells = [cell for cell in cells if cell]
		if len(cells) < 2:
			continue
		_collect_row(result, line_number, cells[0], cells[1], kind)
	return result


#============================================
def parse_bulk(raw: str | Iterable[Sequence[object]], kind: CodeKind) -> BulkResult:
	"""
	Parse either pasted text or tabular rows.

	Args:
		raw: Text or rows.
		kind: Code kind.

	Returns:
		BulkResult.
	"""
	if isinstance(raw, str):
		return parse_text(raw, kind)
	return parse_rows(raw, kind)


#============================================
def write_rejection_log(
	rejected: list[RejectedRow],
	output_path: pathlib.Path,
) -> pathlib.Path | None:
	"""
	Write rejected rows next to the output document.

	Args:
		rejected: Rejected rows.
		output_path: Output PDF path.

	Returns:
		Log path, or None when nothing was rejected.
	"""
	if not rejected:
		return None
	log_path = output_path.parent / REJECTION_LOG_NAME
	with open(log_path, "w", encoding="utf-8") as handle:
		handle.write("line\tcol_a\tcol_b\treason\n")
		for row in rejected:
			handle.write(f"{row.line_number}\t{row.col_a}\t{row.col_b}\t{row.reason}\n")
	print(f"Rejected row log written: {log_path}")
	return log_path
