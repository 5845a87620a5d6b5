"""
Row-major grid placement with page wraparound.
"""

# Standard Library
import dataclasses
from collections.abc import Sequence

# local repo modules
import gtin_label_sheets as gls
import gtin_label_sheets.config
import gtin_label_sheets.gtin
import gtin_label_sheets.layout


LayoutSpec = gls.config.LayoutSpec
ResolvedCell = gls.config.ResolvedCell
Placement = gls.config.Placement
LabelItem = gls.gtin.LabelItem

PAGE_WIDTH_MM = gls.config.PAGE_WIDTH_MM
PAGE_HEIGHT_MM = gls.config.PAGE_HEIGHT_MM


@dataclasses.dataclass(frozen=True)
class PreviewCell:
	slot: int
	left: float
	top: float
	width: float
	height: float
	item: LabelItem | None

	@property
	def slot_label(self) -> str:
		return str(self.slot + 1)


#============================================
def items_per_page(columns: int, rows: int) -> int:
	"""
	Compute sheet capacity.

	Args:
		columns: Column count.
		rows: Row count.

	Returns:
		Labels per page.
	"""
	gls.layout.validate_grid(columns, rows)
	return columns * rows


#============================================
def slot_origin(resolved: ResolvedCell, column: int, row: int) -> tuple[float, float]:
	"""
	Compute the top-left corner of a grid slot.

	Args:
		resolved: Resolved cell geometry.
		column: Column index.
		row: Row index.

	Returns:
		Tuple of (x, y) in mm from the top-left page corner.
	"""
	x = resolved.margin_left + column * (resolved.width + resolved.gap_x)
	y = resolved.margin_top + row * (resolved.height + resolved.gap_y)
	return (x, y)


#============================================
def place_items(
	items: Sequence[LabelItem],
	resolved: ResolvedCell,
	columns: int,
	rows: int,
) -> list[Placement]:
	"""
	Place items left-to-right, top-to-bottom, wrapping to new pages.

	Cells that fall outside the page are not clamped.

	Args:
		items: Ordered items.
		resolved: Resolved cell geometry.
		columns: Column count.
		rows: Row count.

	Returns:
		Placements in item order.
	"""
	capacity = items_per_page(columns, rows)
	placements: list[Placement] = []
	for index in range(len(items)):
		page = index // capacity
		slot = index % capacity
		column = slot % columns
		row = slot // columns
		x, y = slot_origin(resolved, column, row)
		placements.append(
			Placement(
				item_index=index,
				page=page,
				column=column,
				row=row,
				x=x,
				y=y,
				width=resolved.width,
				height=resolved.height,
			)
		)
	return placements


#============================================
def page_count(item_count: int, columns: int, rows: int) -> int:
	"""
	Count pages needed for a number of items.

	Args:
		item_count: Number of items.
		columns: Column count.
		rows: Row count.

	Returns:
		Page count, 0 for no items.
	"""
	capacity = items_per_page(columns, rows)
	return (item_count + capacity - 1) // capacity


#============================================
def preview_cells(spec: LayoutSpec, items: Sequence[LabelItem]) -> list[PreviewCell]:
	"""
	Build the first-page preview grid as percentages of the page.

	Args:
		spec: Layout spec.
		items: Ordered items; only the first page worth is shown.

	Returns:
		One PreviewCell per slot, empty slots carry item None.
	"""
	resolved = gls.layout.resolve_layout(spec)
	capacity = items_per_page(spec.columns, spec.rows)
	cells: list[PreviewCell] = []
	for slot in range(capacity):
		column = slot % spec.columns
		row = slot // spec.columns
		x, y = slot_origin(resolved, column, row)
		item = items[slot] if slot < len(items) else None
		cells.append(
			PreviewCell(
				slot=slot,
				left=x / PAGE_WIDTH_MM * 100.0,
				top=y / PAGE_HEIGHT_MM * 100.0,
				width=resolved.width / PAGE_WIDTH_MM * 100.0,
				height=resolved.height / PAGE_HEIGHT_MM * 100.0,
				item=item,
			)
		)
	return cells
