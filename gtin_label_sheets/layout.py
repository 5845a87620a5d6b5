"""
Resolve a layout spec into concrete cell geometry.
"""

# local repo modules
import gtin_label_sheets as gls
import gtin_label_sheets.config
import gtin_label_sheets.errors


LayoutSpec = gls.config.LayoutSpec
ResolvedCell = gls.config.ResolvedCell
InvalidLayoutError = gls.errors.InvalidLayoutError

PAGE_WIDTH_MM = gls.config.PAGE_WIDTH_MM
PAGE_HEIGHT_MM = gls.config.PAGE_HEIGHT_MM


#============================================
def _value_or_zero(value: float | None) -> float:
	if value is None:
		return 0.0
	return float(value)


#============================================
def validate_grid(columns: int, rows: int) -> None:
	"""
	Reject grids without at least one column and one row.

	Args:
		columns: Column count.
		rows: Row count.
	"""
	if columns < 1 or rows < 1:
		raise InvalidLayoutError(
			f"Layout needs at least 1 column and 1 row (got {columns}x{rows})"
		)


#============================================
def resolve_cell_width(spec: LayoutSpec, margin_left: float, gap_x: float) -> float:
	"""
	Resolve the cell width.

	An explicit width wins. An explicit left margin switches to precise
	mode, which spreads the printable width across the columns. Otherwise
	the page width is divided evenly.

	Args:
		spec: Layout spec.
		margin_left: Resolved left margin.
		gap_x: Resolved horizontal gap.

	Returns:
		Cell width in mm.
	"""
	if spec.cell_width is not None:
		return float(spec.cell_width)
	if spec.margin_left is not None:
		printable = PAGE_WIDTH_MM - 2.0 * margin_left - gap_x * (spec.columns - 1)
		return printable / spec.columns
	return PAGE_WIDTH_MM / spec.columns


#============================================
def resolve_cell_height(spec: LayoutSpec) -> float:
	"""
	Resolve the cell height; precise mode does not derive it.

	Args:
		spec: Layout spec.

	Returns:
		Cell height in mm.
	"""
	if spec.cell_height is not None:
		return float(spec.cell_height)
	return PAGE_HEIGHT_MM / spec.rows


#============================================
def resolve_layout(spec: LayoutSpec) -> ResolvedCell:
	"""
	Resolve a layout spec into fully populated cell geometry.

	Args:
		spec: Layout spec.

	Returns:
		ResolvedCell in mm.
	"""
	validate_grid(spec.columns, spec.rows)
	margin_top = _value_or_zero(spec.margin_top)
	margin_left = _value_or_zero(spec.margin_left)
	gap_x = _value_or_zero(spec.gap_x)
	gap_y = _value_or_zero(spec.gap_y)
	width = resolve_cell_width(spec, margin_left, gap_x)
	height = resolve_cell_height(spec)
	if width <= 0.0 or height <= 0.0:
		raise InvalidLayoutError(
			f"Layout produces a non-positive cell size ({width:.2f} x {height:.2f} mm)"
		)
	return ResolvedCell(
		width=width,
		height=height,
		margin_top=margin_top,
		margin_left=margin_left,
		gap_x=gap_x,
		gap_y=gap_y,
	)
